"""CBOR encoding of model objects stored in the Redis cache."""

from __future__ import annotations

from typing import Any, TypeVar

import cbor2

T = TypeVar("T")


class CodecError(ValueError):
    """Raised when a value cannot be encoded for, or decoded from, the cache."""


def encode(obj: Any) -> bytes:
    """Encode a model (anything with ``to_dict``) or a plain value as CBOR bytes."""
    to_dict = getattr(obj, "to_dict", None)
    payload = to_dict() if callable(to_dict) else obj
    try:
        return cbor2.dumps(payload)
    except cbor2.CBOREncodeError as exc:
        raise CodecError(f"Serialization Error: {exc}") from exc


def decode(cls: type[T], data: Any) -> T:
    """Decode CBOR bytes fetched from the cache into an instance of ``cls``."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise CodecError("Invalid Redis Value")
    try:
        payload = cbor2.loads(bytes(data))
        return cls.from_dict(payload)  # type: ignore[attr-defined]
    except (cbor2.CBORDecodeError, KeyError, TypeError, ValueError) as exc:
        raise CodecError(f"Deserialization Error: {exc}") from exc