from __future__ import annotations
import hashlib
from typing import Union

DIGEST_SIZE = 32

BytesLike = Union[bytes, bytearray, memoryview, str]


def as_bytes(data: BytesLike) -> bytes:
    """Normalise leaf data to bytes; text is taken as UTF-8."""
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"data must be bytes-like or str, not {type(data).__name__}")


def digest(data: BytesLike) -> bytes:
    """SHA-256 of a byte buffer (32 bytes)."""
    return hashlib.sha256(as_bytes(data)).digest()


def to_hex(b: bytes) -> str:
    return b.hex()


def from_hex(s: str) -> bytes:
    """Decode a hex string to bytes with strict validation."""
    try:
        return bytes.fromhex(s.strip())
    except (ValueError, AttributeError) as e:
        raise ValueError("invalid hex") from e
