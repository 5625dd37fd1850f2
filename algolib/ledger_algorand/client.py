import threading
import warnings
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Union

import semver

from .command_builder import (
    ALGORAND_PROFILE,
    DEFAULT_SIGN_DATA_PATH,
    AlgorandCommandBuilder,
    DeviceProfile,
    InsType,
    prepare_chunks_from_account_id,
    prepare_chunks_from_path,
    serialize_path,
)
from .exception import DeviceException
from .ledgercomm import Transport
from .response import ARBITRARY_SIGN_TABLES, GENERIC_TABLES, Success, classify
from .signing_data import StdSigData, StdSigDataResponse, StdSignMetadata, build_signing_payload
from .transfer import ApduException, ApduSender, ChunkTransfer, FlagScheme

PUBKEY_LEN = 32


class TransportClient:
    """:class:`~.transfer.ApduSender` over a HID device or the Speculos TCP server."""

    def __init__(self, interface: str = "tcp", server: str = "127.0.0.1", port: int = 9999, hid_path: Optional[bytes] = None, debug: bool = False):
        self.transport = Transport(interface, server, port, hid_path=hid_path, debug=debug)

    def send(self, cla: int, ins: int, p1: int, p2: int, data: bytes = b"") -> bytes:
        return self.transport.exchange(cla, ins, p1, p2, data)

    def stop(self) -> None:
        self.transport.close()


@dataclass(frozen=True)
class AppVersion:
    test_mode: bool
    version: semver.VersionInfo
    device_locked: bool
    target_id: str


@dataclass(frozen=True)
class AddressResponse:
    public_key: bytes
    address: str


@dataclass(frozen=True)
class SignResponse:
    signature: bytes


class Client:
    """Host side of the Algorand application.

    Every method holds the client lock for the whole operation, so the chunks
    of two signing requests never interleave on the transport.
    """

    def __init__(self, transport_client: ApduSender, profile: DeviceProfile = ALGORAND_PROFILE) -> None:
        self.transport_client = transport_client
        self.profile = profile
        self.builder = AlgorandCommandBuilder(profile)
        self._lock = threading.Lock()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

    def stop(self) -> None:
        """Stops the transport_client."""

        self.transport_client.stop()

    def _exchange(self, apdu: dict, tables: Sequence[Mapping[int, str]] = GENERIC_TABLES) -> bytes:
        try:
            raw = self.transport_client.send(**apdu)
        except ApduException as e:
            raise DeviceException(error_code=e.sw, ins=apdu["ins"], tables=tables) from e

        outcome = classify(raw, tables)
        if not isinstance(outcome, Success):
            raise DeviceException(error_code=outcome.sw, ins=apdu["ins"], message=outcome.message, tables=tables)

        return outcome.payload

    def get_version(self) -> AppVersion:
        """Queries the application for its version and the device state.

        Returns
        -------
        AppVersion
            Test mode flag, application version, device lock state and the
            target id of the device, as hex.
        """
        with self._lock:
            response = self._exchange(self.builder.get_version())

        # 2-byte version fields on newer applications
        width = 2 if len(response) >= 12 else 1
        if len(response) < 1 + 3 * width + 1:
            raise DeviceException(error_code=0x6700, ins=InsType.GET_VERSION,
                                  message="Invalid format returned by GET_VERSION")

        def field(i: int) -> int:
            start = 1 + i * width
            return int.from_bytes(response[start:start + width], byteorder="big")

        offset = 1 + 3 * width
        return AppVersion(
            test_mode=response[0] != 0,
            version=semver.VersionInfo(field(0), field(1), field(2)),
            device_locked=response[offset] != 0,
            target_id=response[offset + 1:offset + 5].hex(),
        )

    def _get_address(self, ins: InsType, account_id: int, require_confirmation: bool) -> AddressResponse:
        with self._lock:
            response = self._exchange(self.builder.get_address(account_id, require_confirmation, ins=ins))

        if len(response) < PUBKEY_LEN:
            raise DeviceException(error_code=0x6700, ins=ins,
                                  message=f"Invalid response length: {len(response)}")

        return AddressResponse(
            public_key=response[:PUBKEY_LEN],
            address=response[PUBKEY_LEN:].decode("ascii"),
        )

    def get_address_and_pubkey(self, account_id: int = 0, require_confirmation: bool = False) -> AddressResponse:
        """Gets the public key and address of an account, optionally shown on the device for confirmation."""
        return self._get_address(InsType.GET_ADDRESS, account_id, require_confirmation)

    def get_pubkey(self, account_id: int = 0, require_confirmation: bool = False) -> AddressResponse:
        """Deprecated, use :meth:`get_address_and_pubkey`."""
        warnings.warn("get_pubkey is deprecated, use get_address_and_pubkey", DeprecationWarning, stacklevel=2)
        return self._get_address(InsType.GET_PUBLIC_KEY, account_id, require_confirmation)

    def sign(self, account_id: int = 0, message: Union[str, bytes] = b"") -> SignResponse:
        """Signs a msgpack-encoded transaction with the key of `account_id`.

        Parameters
        ----------
        account_id : int
            Index of the account; 0 is the device default and is not sent.
        message : str | bytes
            The message to sign. Strings are UTF-8 encoded.

        Returns
        -------
        SignResponse
            The signature from the last response.
        """
        chunks = prepare_chunks_from_account_id(account_id, message, self.profile.chunk_size)
        transfer = ChunkTransfer(self.transport_client, InsType.SIGN_MSGPACK, FlagScheme.LEGACY,
                                 GENERIC_TABLES, self.profile)

        with self._lock:
            signature = transfer.run(chunks)

        return SignResponse(signature=signature)

    def sign_data(self, signing_data: StdSigData, metadata: StdSignMetadata) -> StdSigDataResponse:
        """Signs arbitrary data for an off-chain authentication request.

        The request is validated and encoded before anything is sent. The
        derivation path (``hd_path``, or ``m/44'/283'/0'/0/0``) goes alone in
        the first chunk.

        Parameters
        ----------
        signing_data : StdSigData
            The request to sign.
        metadata : StdSignMetadata
            Scope and encoding of ``signing_data.data``.

        Returns
        -------
        StdSigDataResponse
            The request echoed back with the signature.
        """
        payload = build_signing_payload(signing_data, metadata)
        path = serialize_path(signing_data.hd_path or DEFAULT_SIGN_DATA_PATH, self.profile.required_path_lengths)

        chunks = prepare_chunks_from_path(path, payload, self.profile.chunk_size)
        transfer = ChunkTransfer(self.transport_client, InsType.SIGN_ARBITRARY, FlagScheme.STRUCTURED,
                                 ARBITRARY_SIGN_TABLES, self.profile)

        with self._lock:
            signature = transfer.run(chunks)

        return StdSigDataResponse(
            data=signing_data.data,
            signer=signing_data.signer,
            domain=signing_data.domain,
            authentication_data=signing_data.authentication_data,
            request_id=signing_data.request_id,
            hd_path=signing_data.hd_path,
            signature=signature,
        )
