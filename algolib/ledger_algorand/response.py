"""Classification of raw device responses by their 2-byte status trailer."""

import enum
from dataclasses import dataclass
from typing import Dict, Mapping, Sequence, Union


class LedgerError(enum.IntEnum):
    U2F_UNKNOWN = 1
    U2F_BAD_REQUEST = 2
    U2F_CONFIGURATION_UNSUPPORTED = 3
    U2F_DEVICE_INELIGIBLE = 4
    U2F_TIMEOUT = 5
    TIMEOUT = 14
    NO_ERRORS = 0x9000
    DEVICE_IS_BUSY = 0x9001
    ERROR_DERIVING_KEYS = 0x6802
    EXECUTION_ERROR = 0x6400
    WRONG_LENGTH = 0x6700
    EMPTY_BUFFER = 0x6982
    OUTPUT_BUFFER_TOO_SMALL = 0x6983
    DATA_IS_INVALID = 0x6984
    CONDITIONS_NOT_SATISFIED = 0x6985
    TRANSACTION_REJECTED = 0x6986
    BAD_KEY_HANDLE = 0x6A80
    INVALID_P1P2 = 0x6B00
    INSTRUCTION_NOT_SUPPORTED = 0x6D00
    APP_DOES_NOT_SEEM_TO_BE_OPEN = 0x6E01
    UNKNOWN_ERROR = 0x6F00
    SIGN_VERIFY_ERROR = 0x6F01


class ArbitrarySignError(enum.IntEnum):
    INVALID_SCOPE = 0x6988
    FAILED_DECODING = 0x6989
    INVALID_SIGNER = 0x698A
    MISSING_DOMAIN = 0x698B
    MISSING_AUTHENTICATED_DATA = 0x698C
    BAD_JSON = 0x698D
    FAILED_DOMAIN_AUTH = 0x698E
    FAILED_HD_PATH = 0x698F


ERROR_DESCRIPTION: Dict[int, str] = {
    LedgerError.U2F_UNKNOWN: "U2F: Unknown",
    LedgerError.U2F_BAD_REQUEST: "U2F: Bad request",
    LedgerError.U2F_CONFIGURATION_UNSUPPORTED: "U2F: Configuration unsupported",
    LedgerError.U2F_DEVICE_INELIGIBLE: "U2F: Device Ineligible",
    LedgerError.U2F_TIMEOUT: "U2F: Timeout",
    LedgerError.TIMEOUT: "Timeout",
    LedgerError.NO_ERRORS: "No errors",
    LedgerError.DEVICE_IS_BUSY: "Device is busy",
    LedgerError.ERROR_DERIVING_KEYS: "Error deriving keys",
    LedgerError.EXECUTION_ERROR: "Execution Error",
    LedgerError.WRONG_LENGTH: "Wrong Length",
    LedgerError.EMPTY_BUFFER: "Empty Buffer",
    LedgerError.OUTPUT_BUFFER_TOO_SMALL: "Output buffer too small",
    LedgerError.DATA_IS_INVALID: "Data is invalid",
    LedgerError.CONDITIONS_NOT_SATISFIED: "Conditions not satisfied",
    LedgerError.TRANSACTION_REJECTED: "Transaction rejected",
    LedgerError.BAD_KEY_HANDLE: "Bad key handle",
    LedgerError.INVALID_P1P2: "Invalid P1/P2",
    LedgerError.INSTRUCTION_NOT_SUPPORTED: "Instruction not supported",
    LedgerError.APP_DOES_NOT_SEEM_TO_BE_OPEN: "App does not seem to be open",
    LedgerError.UNKNOWN_ERROR: "Unknown error",
    LedgerError.SIGN_VERIFY_ERROR: "Sign/verify error",
}

ARBITRARY_SIGN_ERROR_DESCRIPTION: Dict[int, str] = {
    ArbitrarySignError.INVALID_SCOPE: "Invalid Scope",
    ArbitrarySignError.FAILED_DECODING: "Failed decoding",
    ArbitrarySignError.INVALID_SIGNER: "Invalid Signer",
    ArbitrarySignError.MISSING_DOMAIN: "Missing Domain",
    ArbitrarySignError.MISSING_AUTHENTICATED_DATA: "Missing Authentication Data",
    ArbitrarySignError.BAD_JSON: "Bad JSON",
    ArbitrarySignError.FAILED_DOMAIN_AUTH: "Failed Domain Auth",
    ArbitrarySignError.FAILED_HD_PATH: "Failed HD Path",
}

# Description tables, highest priority first
GENERIC_TABLES: Sequence[Mapping[int, str]] = (ERROR_DESCRIPTION,)
ARBITRARY_SIGN_TABLES: Sequence[Mapping[int, str]] = (ARBITRARY_SIGN_ERROR_DESCRIPTION, ERROR_DESCRIPTION)

# Statuses a chunk transfer tolerates on any chunk but the last one
ALLOWED_MID_TRANSFER = frozenset([LedgerError.DATA_IS_INVALID, LedgerError.BAD_KEY_HANDLE])


@dataclass(frozen=True)
class Success:
    payload: bytes


@dataclass(frozen=True)
class ExpectedFailure:
    sw: int
    message: str


@dataclass(frozen=True)
class Error:
    sw: int
    message: str


ResponseOutcome = Union[Success, ExpectedFailure, Error]


def error_description(sw: int, tables: Sequence[Mapping[int, str]] = GENERIC_TABLES) -> str:
    for table in tables:
        if sw in table:
            return table[sw]
    return f"Unknown Status Code: 0x{sw:04x}"


def classify(raw: bytes, tables: Sequence[Mapping[int, str]] = GENERIC_TABLES) -> ResponseOutcome:
    """Split `raw` into payload and status word and map it to an outcome.

    The payload of a failed response, if any, is appended to the message as text.
    """
    if len(raw) < 2:
        return Error(LedgerError.EMPTY_BUFFER, error_description(LedgerError.EMPTY_BUFFER, tables))

    sw = int.from_bytes(raw[-2:], byteorder="big")
    payload = bytes(raw[:-2])

    if sw == LedgerError.NO_ERRORS:
        return Success(payload)

    message = error_description(sw, tables)
    if payload:
        message += " : " + payload.decode("ascii", errors="replace")

    if sw in ALLOWED_MID_TRANSFER:
        return ExpectedFailure(sw, message)

    return Error(sw, message)
