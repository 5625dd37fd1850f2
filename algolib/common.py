"""
Common Classes and Utilities
****************************
"""

from enum import Enum, IntEnum


class ScopeType(IntEnum):
    """
    The scope of an arbitrary data signing request
    """
    UNKNOWN = -1 #: Reserved
    AUTH = 1 #: Authentication of an off-chain message

    def __str__(self) -> str:
        return str(self.name).lower()


class Encoding(Enum):
    """
    The encoding of the ``data`` field of an arbitrary data signing request.
    The value is the tag byte sent to the device.
    """
    BASE64 = 0x01 #: Standard base64

    def __str__(self) -> str:
        return str(self.name).lower()

    @staticmethod
    def parse(s: str) -> 'Encoding':
        for encoding in Encoding:
            if str(encoding) == s:
                return encoding
        raise ValueError(f"Unsupported encoding: {s!r}")
