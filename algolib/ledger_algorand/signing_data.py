"""Arbitrary data signing requests and their flat field encoding."""

import base64
import binascii
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from ..common import Encoding, ScopeType


MAX_FIELD_LEN = 0xFFFF


@dataclass(frozen=True)
class Field:
    """One entry of the flat buffer. Length-prefixed fields get a 2-byte big-endian length."""
    value: bytes
    length_prefixed: bool = False


@dataclass(frozen=True)
class StdSigData:
    """An arbitrary data signing request.

    `data` is encoded as told by :class:`StdSignMetadata`; `request_id` is base64.
    """
    data: str
    signer: bytes
    domain: Optional[str] = None
    authentication_data: Optional[bytes] = None
    request_id: Optional[str] = None
    hd_path: Optional[str] = None


@dataclass(frozen=True)
class StdSignMetadata:
    scope: Union[ScopeType, int]
    encoding: str


@dataclass(frozen=True)
class StdSigDataResponse:
    """The request echoed back with the device signature."""
    data: str
    signer: bytes
    domain: Optional[str]
    authentication_data: Optional[bytes]
    request_id: Optional[str]
    hd_path: Optional[str]
    signature: bytes


def encode_fields(fields: Sequence[Field]) -> bytes:
    size = sum(len(f.value) + (2 if f.length_prefixed else 0) for f in fields)

    buffer = bytearray(size)
    offset = 0
    for f in fields:
        if f.length_prefixed:
            if len(f.value) > MAX_FIELD_LEN:
                raise ValueError(f"Field too long: {len(f.value)} bytes")
            buffer[offset:offset + 2] = len(f.value).to_bytes(2, byteorder="big")
            offset += 2
        buffer[offset:offset + len(f.value)] = f.value
        offset += len(f.value)

    return bytes(buffer)


def serialize_encoding(encoding: str) -> bytes:
    return bytes([Encoding.parse(encoding).value])


def decode_data(data: str, encoding: str) -> bytes:
    if Encoding.parse(encoding) == Encoding.BASE64:
        return _b64decode(data)
    raise ValueError("Failed decoding")


def _b64decode(s: str) -> bytes:
    try:
        return base64.b64decode(s, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Failed decoding: {e}") from e


def serialize_scope(scope: Union[ScopeType, int]) -> bytes:
    scope = int(scope)
    if not -1 <= scope <= 0xFF:
        raise ValueError(f"Invalid scope: {scope}")
    return bytes([scope & 0xFF])


def build_signing_payload(signing_data: StdSigData, metadata: StdSignMetadata) -> bytes:
    """Flatten a request into signer, scope, encoding, data, domain, request id, authentication data.

    Every validation happens here, before anything is sent to the device.
    """
    encoding_tag = serialize_encoding(metadata.encoding)
    decoded_data = decode_data(signing_data.data, metadata.encoding)

    signer = signing_data.signer
    signer = signer.encode() if isinstance(signer, str) else bytes(signer)

    domain = signing_data.domain.encode() if signing_data.domain else b""
    request_id = _b64decode(signing_data.request_id) if signing_data.request_id else b""
    auth_data = bytes(signing_data.authentication_data) if signing_data.authentication_data else b""

    return encode_fields([
        Field(signer),
        Field(serialize_scope(metadata.scope)),
        Field(encoding_tag),
        Field(decoded_data, length_prefixed=True),
        Field(domain, length_prefixed=True),
        Field(request_id, length_prefixed=True),
        Field(auth_data, length_prefixed=True),
    ])
