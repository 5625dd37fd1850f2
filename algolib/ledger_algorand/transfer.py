"""Chunk transfer: one APDU per chunk, strictly in order, final payload returned."""

import enum
import logging
from typing import List, Mapping, Optional, Sequence, Tuple

from typing_extensions import Protocol

from .command_builder import (
    ALGORAND_PROFILE,
    AlgorandCommandBuilder,
    ChunkP2,
    DeviceProfile,
    SignArbitraryP1,
    SignLegacyP1,
)
from .exception import DeviceException
from .response import (
    GENERIC_TABLES,
    ExpectedFailure,
    ResponseOutcome,
    Success,
    classify,
)

LOG = logging.getLogger(__name__)


class ApduSender(Protocol):
    def send(self, cla: int, ins: int, p1: int, p2: int, data: bytes = b"") -> bytes:
        """Exchange one APDU and return the raw response, status trailer included."""
        ...

    def stop(self) -> None:
        ...


class ApduException(Exception):
    """Raised by transports that check the status word themselves."""
    def __init__(self, sw: int, data: bytes) -> None:
        super().__init__(f"Exception: invalid status 0x{sw:x}")
        self.sw = sw
        self.data = data


class FlagScheme(enum.Enum):
    LEGACY = 1 #: FIRST_ACCOUNT_ID/MORE in p1, MORE_CHUNKS/LAST_CHUNK in p2
    STRUCTURED = 2 #: INIT/ADD/LAST in p1, p2 unused


def chunk_flags(scheme: FlagScheme, index: int, count: int) -> Tuple[int, int]:
    """Return (p1, p2) for chunk `index` of a sequence of `count` chunks."""
    if not 0 <= index < count:
        raise ValueError(f"Chunk index {index} out of range for {count} chunks")

    is_last = index == count - 1

    if scheme == FlagScheme.LEGACY:
        p1 = SignLegacyP1.FIRST_ACCOUNT_ID if index == 0 else SignLegacyP1.MORE
        p2 = ChunkP2.LAST_CHUNK if is_last else ChunkP2.MORE_CHUNKS
        return p1, p2

    if count < 2:
        raise ValueError("A structured transfer needs a leading chunk and at least one payload chunk")

    if index == 0:
        return SignArbitraryP1.INIT, 0
    return (SignArbitraryP1.LAST if is_last else SignArbitraryP1.ADD), 0


class ChunkTransfer:
    """Drives the chunks of one signing operation through `sender`.

    Parameters
    ----------
    sender : ApduSender
        Transport used for every exchange.
    ins : int
        Instruction code of every chunk.
    scheme : FlagScheme
        How p1/p2 are derived from the chunk position.
    tables : Sequence[Mapping[int, str]]
        Error description tables, highest priority first.
    profile : DeviceProfile
        Device constants (class byte).

    """

    def __init__(self,
                 sender: ApduSender,
                 ins: int,
                 scheme: FlagScheme,
                 tables: Sequence[Mapping[int, str]] = GENERIC_TABLES,
                 profile: DeviceProfile = ALGORAND_PROFILE) -> None:
        self.sender = sender
        self.ins = ins
        self.scheme = scheme
        self.tables = tables
        self.builder = AlgorandCommandBuilder(profile)

    def send_chunk(self, index: int, count: int, chunk: bytes, p1: Optional[int] = None) -> ResponseOutcome:
        """Send one chunk. `p1` overrides the flag derived from the position."""
        default_p1, p2 = chunk_flags(self.scheme, index, count)
        if p1 is None:
            p1 = default_p1

        LOG.debug("chunk %d/%d ins=0x%02x p1=0x%02x p2=0x%02x len=%d",
                  index + 1, count, self.ins, p1, p2, len(chunk))

        apdu = self.builder.sign_chunk(self.ins, p1, p2, chunk)
        try:
            raw = self.sender.send(**apdu)
        except ApduException as e:
            raise DeviceException(error_code=e.sw, ins=self.ins, tables=self.tables) from e

        return classify(raw, self.tables)

    def run(self, chunks: List[bytes]) -> bytes:
        """Send every chunk in order and return the payload of the last response.

        The first refused chunk aborts the whole transfer.
        """
        count = len(chunks)
        if count == 0:
            raise ValueError("Nothing to send")

        payload = b""
        for index, chunk in enumerate(chunks):
            outcome = self.send_chunk(index, count, chunk)

            if isinstance(outcome, Success):
                payload = outcome.payload
                continue

            if isinstance(outcome, ExpectedFailure) and index < count - 1:
                LOG.debug("chunk %d/%d: tolerated status 0x%04x (%s)",
                          index + 1, count, outcome.sw, outcome.message)
                payload = b""
                continue

            raise DeviceException(error_code=outcome.sw, ins=self.ins, message=outcome.message, tables=self.tables)

        return payload
