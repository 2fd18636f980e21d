from __future__ import annotations
import hashlib
from typing import Callable, Dict

from eth_utils import keccak, decode_hex, encode_hex, is_hex

Hasher = Callable[[bytes], bytes]

LEAF_ENCODINGS = ("text", "hex")


class InvalidRecordError(ValueError):
    """A record could not be turned into leaf bytes under the chosen encoding."""


def keccak256(data: bytes) -> bytes:
    return keccak(primitive=data)


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


HASHERS: Dict[str, Hasher] = {
    "keccak256": keccak256,
    "sha256": sha256,
}


def get_hasher(name: str) -> Hasher:
    """Resolve a hasher by its registered name (case-insensitive)."""
    try:
        return HASHERS[name.lower()]
    except KeyError:
        raise ValueError(
            f"unknown hash function {name!r}; choose one of {', '.join(HASHERS)}"
        ) from None


def H(b: bytes) -> str:
    """0x-prefixed lower-case hex of raw bytes."""
    return encode_hex(b)


def HD(s: str) -> bytes:
    """Decode 0x-prefixed (or bare) hex with strict validation."""
    if not isinstance(s, str) or not s or not is_hex(s):
        raise ValueError("invalid hex")
    try:
        return decode_hex(s)
    except Exception as e:
        raise ValueError("invalid hex") from e


def strip_record(record: str) -> str:
    return record.strip("\r\n")


def record_bytes(record: str, encoding: str = "text") -> bytes:
    """Bytes that get hashed for a record.

    ``text`` hashes the UTF-8 bytes of the trimmed record. ``hex`` decodes a
    hex literal such as ``0xEE86...50E5`` to its raw bytes first; an empty
    record is the empty byte string in both encodings.
    """
    rec = strip_record(record)
    if encoding == "text":
        return rec.encode("utf-8")
    if encoding == "hex":
        if not rec:
            return b""
        body = rec[2:] if rec[:2] in ("0x", "0X") else rec
        if len(body) % 2 or not is_hex(rec):
            raise InvalidRecordError(f"record is not a hex literal: {rec!r}")
        return decode_hex(rec)
    raise ValueError(
        f"unknown leaf encoding {encoding!r}; choose one of {', '.join(LEAF_ENCODINGS)}"
    )


def hash_leaf(record: str, hasher: Hasher = keccak256, encoding: str = "text") -> bytes:
    """Leaf hash of one raw record: a single application of ``hasher``."""
    return hasher(record_bytes(record, encoding))
