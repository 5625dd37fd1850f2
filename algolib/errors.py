"""
Errors and Error Codes
**********************

:class:`~algolib.ledger.AlgorandLedgerClient` methods raise a subclass of :class:`AlgoError`.
Each carries one of the negative error codes below and, when the failure came from
the Algorand app, the status word the device answered with (see :attr:`AlgoError.sw`).

Device statuses with no matching error here are raised as
:class:`~algolib.ledger_algorand.exception.DeviceException`.
"""

from typing import Optional

# Error codes
DEVICE_CONN_ERROR = -3 #: USB or emulator connection failed or was lost
BAD_ARGUMENT = -7 #: Request rejected before or by the device as malformed
DEVICE_NOT_READY = -12 #: The Algorand app is not open
UNKNOWN_ERROR = -13 #: The app reported an internal failure
ACTION_CANCELED = -14 #: The user refused the request on the device


class AlgoError(Exception):
    """
    Base exception of algolib.

    :param msg: The error message
    :param code: One of the error codes of this module
    :param sw: The device status word, if the device produced the error
    """
    def __init__(self, msg: str, code: int, sw: Optional[int] = None) -> None:
        Exception.__init__(self, msg)
        self.code = code
        self.msg = msg
        self.sw = sw

    def get_code(self) -> int:
        return self.code

    def get_msg(self) -> str:
        return self.msg

    def get_sw(self) -> Optional[int]:
        """
        The status word returned by the Algorand app, or None for errors raised on the host
        """
        return self.sw

    def __str__(self) -> str:
        if self.sw is None:
            return self.msg
        return "{} (0x{:04x})".format(self.msg, self.sw)


class DeviceNotReadyError(AlgoError):
    def __init__(self, msg: str, sw: Optional[int] = None):
        AlgoError.__init__(self, msg, DEVICE_NOT_READY, sw)


class BadArgumentError(AlgoError):
    """
    Invalid signing request, derivation path or APDU parameters
    """
    def __init__(self, msg: str, sw: Optional[int] = None):
        AlgoError.__init__(self, msg, BAD_ARGUMENT, sw)


class DeviceFailureError(AlgoError):
    def __init__(self, msg: str, sw: Optional[int] = None):
        AlgoError.__init__(self, msg, UNKNOWN_ERROR, sw)


class ActionCanceledError(AlgoError):
    """
    The transaction or data signing was rejected on the device
    """
    def __init__(self, msg: str, sw: Optional[int] = None):
        AlgoError.__init__(self, msg, ACTION_CANCELED, sw)


class DeviceConnectionError(AlgoError):
    def __init__(self, msg: str):
        AlgoError.__init__(self, msg, DEVICE_CONN_ERROR)
