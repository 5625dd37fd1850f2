import enum
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union


HARDENED = 0x80000000

# Used by sign_data when the request carries no hd_path
DEFAULT_SIGN_DATA_PATH = "m/44'/283'/0'/0/0"


@dataclass(frozen=True)
class DeviceProfile:
    """Constants of one device application.

    Attributes
    ----------
    cla : int
        Instruction class sent with every APDU.
    chunk_size : int
        Largest payload sent in a single chunk.
    required_path_lengths : Tuple[int, ...]
        Accepted number of components in a derivation path.
        Empty means any length.
    """
    cla: int = 0x80
    chunk_size: int = 250
    required_path_lengths: Tuple[int, ...] = (5,)


ALGORAND_PROFILE = DeviceProfile()


class InsType(enum.IntEnum):
    GET_VERSION = 0x00
    GET_PUBLIC_KEY = 0x03
    GET_ADDRESS = 0x04
    SIGN_MSGPACK = 0x08
    SIGN_ARBITRARY = 0x10

class AddressP1(enum.IntEnum):
    ONLY_RETRIEVE = 0x00
    SHOW_ADDRESS_IN_DEVICE = 0x01

class SignLegacyP1(enum.IntEnum):
    FIRST = 0x00
    FIRST_ACCOUNT_ID = 0x01
    MORE = 0x80

class SignArbitraryP1(enum.IntEnum):
    INIT = 0x00
    ADD = 0x01
    LAST = 0x02

class ChunkP2(enum.IntEnum):
    LAST_CHUNK = 0x00
    MORE_CHUNKS = 0x80


def split_chunks(data: bytes, chunk_len: int) -> List[bytes]:
    """Split `data` in consecutive slices of `chunk_len` bytes.

    The last slice holds the remainder. Empty `data` gives a single empty chunk.
    """
    if chunk_len <= 0:
        raise ValueError(f"Invalid chunk length: {chunk_len}")

    if not data:
        return [b""]

    return [data[offset: offset + chunk_len] for offset in range(0, len(data), chunk_len)]


def to_bytes(message: Union[str, bytes]) -> bytes:
    return message.encode() if isinstance(message, str) else bytes(message)


def prepare_chunks_from_account_id(
    account_id: Optional[int],
    message: Union[str, bytes],
    chunk_len: int = ALGORAND_PROFILE.chunk_size,
) -> List[bytes]:
    """Chunks for SIGN_MSGPACK.

    A non-zero `account_id` is sent as 4 big-endian bytes in front of the
    message, and split along with it. Account 0 is implicit on the device.
    """
    buffer = to_bytes(message)

    if account_id:
        if not 0 < account_id <= 0xFFFFFFFF:
            raise ValueError(f"Account id out of range: {account_id}")
        buffer = account_id.to_bytes(4, byteorder="big") + buffer

    return split_chunks(buffer, chunk_len)


def prepare_chunks_from_path(
    path: bytes,
    message: bytes,
    chunk_len: int = ALGORAND_PROFILE.chunk_size,
) -> List[bytes]:
    """Chunks for SIGN_ARBITRARY: the serialized path alone, then the message split on its own."""
    return [path] + split_chunks(message, chunk_len)


def serialize_path(path: str, required_lengths: Sequence[int] = ALGORAND_PROFILE.required_path_lengths) -> bytes:
    """Serialize a derivation path such as ``m/44'/283'/0'/0/0``.

    Each component is written as a little-endian uint32, hardened with ``'`` or ``h``.
    """
    if not isinstance(path, str):
        raise ValueError("Path should be a string (e.g \"m/44'/283'/0'/0/0\")")

    if not path.startswith("m/"):
        raise ValueError("Path should start with \"m/\" (e.g \"m/44'/283'/0'/0/0\")")

    components: List[str] = path.split("/")[1:]

    if required_lengths and len(components) not in required_lengths:
        raise ValueError(f"Invalid path length: {len(components)} (e.g \"m/44'/283'/0'/0/0\")")

    result = b""
    for component in components:
        value = 0
        if component.endswith(("'", "h")):
            value = HARDENED
            component = component[:-1]

        if not component.isdigit():
            raise ValueError(f"Invalid path: {component!r} is not a number (e.g \"m/44'/283'/0'/0/0\")")

        index = int(component)
        if index >= HARDENED:
            raise ValueError("Incorrect child value (bigger or equal to 0x80000000)")

        result += (value + index).to_bytes(4, byteorder="little")

    return result


class AlgorandCommandBuilder:
    """APDU command builder for the Algorand application."""

    def __init__(self, profile: DeviceProfile = ALGORAND_PROFILE) -> None:
        self.profile = profile

    def serialize(
        self,
        ins: Union[int, enum.IntEnum],
        p1: int = 0,
        p2: int = 0,
        cdata: bytes = b"",
    ) -> dict:
        """Serialize the whole APDU command (header + data).

        Parameters
        ----------
        ins : Union[int, IntEnum]
            Instruction code: INS (1 byte)
        p1 : int
            Instruction parameter 1: P1 (1 byte).
        p2 : int
            Instruction parameter 2: P2 (1 byte).
        cdata : bytes
            Bytes of command data.

        Returns
        -------
        dict
            Dictionary representing the APDU message.

        """

        return {"cla": self.profile.cla, "ins": ins, "p1": p1, "p2": p2, "data": cdata}

    def get_version(self):
        return self.serialize(ins=InsType.GET_VERSION)

    def get_address(self, account_id: int, display: bool = False, ins: InsType = InsType.GET_ADDRESS):
        if not 0 <= account_id <= 0xFFFFFFFF:
            raise ValueError(f"Account id out of range: {account_id}")

        return self.serialize(
            ins=ins,
            p1=AddressP1.SHOW_ADDRESS_IN_DEVICE if display else AddressP1.ONLY_RETRIEVE,
            cdata=account_id.to_bytes(4, byteorder="big"),
        )

    def sign_chunk(self, ins: InsType, p1: int, p2: int, chunk: bytes):
        return self.serialize(ins=ins, p1=p1, p2=p2, cdata=chunk)
