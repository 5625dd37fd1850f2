from .device_exception import DeviceException
from .errors import (UnknownDeviceError,
                     DenyError,
                     ConditionsNotSatisfiedError,
                     IncorrectDataError,
                     BadKeyHandleError,
                     WrongP1P2Error,
                     WrongDataLengthError,
                     InsNotSupportedError,
                     AppNotOpenError,
                     DeviceBusyError,
                     ExecutionError,
                     ArbitrarySignError)

__all__ = [
    "DeviceException",
    "UnknownDeviceError",
    "DenyError",
    "ConditionsNotSatisfiedError",
    "IncorrectDataError",
    "BadKeyHandleError",
    "WrongP1P2Error",
    "WrongDataLengthError",
    "InsNotSupportedError",
    "AppNotOpenError",
    "DeviceBusyError",
    "ExecutionError",
    "ArbitrarySignError"
]
