"""
Ledger Devices
**************

Application level access to the Algorand app on a Ledger device, with
device errors translated into :mod:`algolib.errors`.
"""

from functools import wraps
from typing import (
    Any,
    Callable,
    Union,
)

from .errors import (
    ActionCanceledError,
    BadArgumentError,
    DeviceConnectionError,
    DeviceFailureError,
    DeviceNotReadyError,
)
from .ledger_algorand.client import (
    AddressResponse,
    AppVersion,
    Client,
    SignResponse,
    TransportClient,
)
from .ledger_algorand.exception import DeviceException
from .ledger_algorand.response import LedgerError
from .ledger_algorand.signing_data import (
    StdSigData,
    StdSigDataResponse,
    StdSignMetadata,
)

import logging

SIMULATOR_PATH = 'tcp:127.0.0.1:9999'

bad_args = [
    LedgerError.WRONG_LENGTH,
    LedgerError.BAD_KEY_HANDLE,
    LedgerError.INVALID_P1P2,
    LedgerError.INSTRUCTION_NOT_SUPPORTED,
]

cancels = [
    LedgerError.CONDITIONS_NOT_SATISFIED,
    LedgerError.TRANSACTION_REJECTED,
]

def handle_chip_exception(e: DeviceException, func_name: str) -> None:
    if e.sw in bad_args:
        raise BadArgumentError(e.message, sw=e.sw) from e
    elif e.sw == LedgerError.UNKNOWN_ERROR:
        raise DeviceFailureError(e.message, sw=e.sw) from e
    elif e.sw == LedgerError.APP_DOES_NOT_SEEM_TO_BE_OPEN:
        raise DeviceNotReadyError('Algorand app is not open: {}'.format(e.message), sw=e.sw) from e
    elif e.sw in cancels:
        raise ActionCanceledError('{} canceled: {}'.format(func_name, e.message), sw=e.sw) from e
    else:
        raise e

def ledger_exception(f: Callable[..., Any]) -> Any:
    @wraps(f)
    def func(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except ValueError as e:
            raise BadArgumentError(str(e)) from e
        except DeviceException as e:
            handle_chip_exception(e, f.__name__)
        except OSError as e:
            raise DeviceConnectionError(str(e)) from e
    return func


class AlgorandLedgerClient(object):
    """Client for the Algorand app on a Ledger device or the Speculos emulator.

    :param path: ``tcp:<host>:<port>`` for the emulator, otherwise the HID path of the device
    """

    def __init__(self, path: str = SIMULATOR_PATH) -> None:
        self.path = path

        is_debug = logging.getLogger().getEffectiveLevel() == logging.DEBUG

        try:
            if path.startswith('tcp'):
                split_path = path.split(':')
                server = split_path[1]
                port = int(split_path[2])
                self.transport_client = TransportClient(interface="tcp", server=server, port=port, debug=is_debug)
            else:
                self.transport_client = TransportClient(interface="hid", debug=is_debug, hid_path=path.encode())
        except (IndexError, ValueError):
            raise BadArgumentError(f"Invalid device path: {path}")
        except OSError as e:
            raise DeviceConnectionError(f"Could not open {path}: {e}")

        self.client = Client(self.transport_client)

    @ledger_exception
    def get_version(self) -> AppVersion:
        return self.client.get_version()

    @ledger_exception
    def get_address_and_pubkey(self, account_id: int = 0, display: bool = False) -> AddressResponse:
        return self.client.get_address_and_pubkey(account_id, display)

    @ledger_exception
    def sign(self, account_id: int, message: Union[str, bytes]) -> SignResponse:
        """
        Sign a msgpack-encoded transaction.

        :param account_id: The account whose key signs
        :param message: The transaction bytes
        :return: The signature
        """
        return self.client.sign(account_id, message)

    @ledger_exception
    def sign_data(self, signing_data: StdSigData, metadata: StdSignMetadata) -> StdSigDataResponse:
        """
        Sign arbitrary data for an off-chain authentication request.

        :param signing_data: The request to sign
        :param metadata: Scope and encoding of the request data
        :return: The request echoed back with the signature
        """
        return self.client.sign_data(signing_data, metadata)

    def close(self) -> None:
        self.client.stop()
