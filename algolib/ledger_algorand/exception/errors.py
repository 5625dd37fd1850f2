from ..response import ArbitrarySignError as ArbitrarySignStatus
from ..response import ARBITRARY_SIGN_ERROR_DESCRIPTION, LedgerError
from .device_exception import DeviceException


class UnknownDeviceError(DeviceException):
    pass


class DenyError(DeviceException):
    pass


class ConditionsNotSatisfiedError(DeviceException):
    pass


class IncorrectDataError(DeviceException):
    pass


class BadKeyHandleError(DeviceException):
    pass


class WrongP1P2Error(DeviceException):
    pass


class WrongDataLengthError(DeviceException):
    pass


class InsNotSupportedError(DeviceException):
    pass


class AppNotOpenError(DeviceException):
    pass


class DeviceBusyError(DeviceException):
    pass


class ExecutionError(DeviceException):
    pass


# Domain, signer, scope or encoding checks refused by SIGN_ARBITRARY
class ArbitrarySignError(DeviceException):
    pass


DeviceException.exc.update({
    LedgerError.TRANSACTION_REJECTED: DenyError,
    LedgerError.CONDITIONS_NOT_SATISFIED: ConditionsNotSatisfiedError,
    LedgerError.DATA_IS_INVALID: IncorrectDataError,
    LedgerError.BAD_KEY_HANDLE: BadKeyHandleError,
    LedgerError.INVALID_P1P2: WrongP1P2Error,
    LedgerError.WRONG_LENGTH: WrongDataLengthError,
    LedgerError.INSTRUCTION_NOT_SUPPORTED: InsNotSupportedError,
    LedgerError.APP_DOES_NOT_SEEM_TO_BE_OPEN: AppNotOpenError,
    LedgerError.DEVICE_IS_BUSY: DeviceBusyError,
    LedgerError.EXECUTION_ERROR: ExecutionError,
})
DeviceException.table_exc.update({sw: (ARBITRARY_SIGN_ERROR_DESCRIPTION, ArbitrarySignError) for sw in ArbitrarySignStatus})
