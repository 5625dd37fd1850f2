import enum
from typing import Dict, Mapping, Optional, Sequence, Tuple, Union

from ..response import GENERIC_TABLES, error_description


class DeviceException(Exception):
    """A non-success status word returned by the device.

    Instantiating ``DeviceException`` directly returns the subclass registered
    for `error_code` in :attr:`exc`, or :class:`UnknownDeviceError`.
    Codes in :attr:`table_exc` only select their subclass when the table they
    belong to is one of `tables`.
    """

    exc: Dict[int, type] = {}
    table_exc: Dict[int, Tuple[Mapping[int, str], type]] = {}

    def __new__(cls,
                error_code: int,
                ins: Union[int, enum.IntEnum, None] = None,
                message: str = "",
                tables: Sequence[Mapping[int, str]] = GENERIC_TABLES) -> "DeviceException":
        if cls is DeviceException:
            from .errors import UnknownDeviceError
            cls = DeviceException.exc.get(error_code, UnknownDeviceError)
            if error_code in DeviceException.table_exc:
                table, scoped_cls = DeviceException.table_exc[error_code]
                if any(t is table for t in tables):
                    cls = scoped_cls
        return super().__new__(cls)

    def __init__(self,
                 error_code: int,
                 ins: Union[int, enum.IntEnum, None] = None,
                 message: str = "",
                 tables: Sequence[Mapping[int, str]] = GENERIC_TABLES) -> None:
        self.error_code = int(error_code)
        self.ins: Optional[Union[int, enum.IntEnum]] = ins
        self.message = message or error_description(self.error_code, tables)
        where = f"Error in {ins!r} command" if ins is not None else "Error in command"
        super().__init__(f"{where}: {self.message} (0x{self.error_code:04x})")

    @property
    def sw(self) -> int:
        return self.error_code
