"""Deterministic cache keys built from arbitrary call arguments."""

from __future__ import annotations

import base64
import contextvars
import dataclasses
import hashlib
import json
import math
from decimal import Decimal
from typing import Any

from .errors import EncodeError, KeyBuildError

__all__ = ["MAX_LEN", "build_key", "encode_value", "hash_bytes"]

MAX_LEN = 100
"""Keys longer than this many bytes are replaced by their SHA-256 digest."""


def hash_bytes(data: bytes) -> str:
    """Return the hex SHA-256 digest of ``data``."""
    return hashlib.sha256(data).hexdigest()


def build_key(value: Any) -> str:
    """Return a deterministic string key for ``value``.

    Raises :class:`KeyBuildError` if the value cannot be encoded.
    """
    try:
        encoded = encode_value(value)
    except EncodeError as exc:
        raise KeyBuildError(
            details={
                "operation": "building cache key",
                "value": value,
                "error": exc,
            }
        ) from exc
    raw = encoded.encode("utf-8")
    if len(raw) > MAX_LEN:
        return hash_bytes(raw)
    return encoded


def encode_value(value: Any) -> str:
    """Encode a single value as a key fragment."""
    if value is None:
        return "nil"
    if isinstance(value, contextvars.Context):
        return "context"
    if isinstance(value, bool):
        return "b:" + ("true" if value else "false")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return _encode_string("s:" + value)
    if _has_custom_str(value):
        return _encode_string("s:" + str(value))
    return _encode_complex(value)


def _encode_string(text: str) -> str:
    raw = text.encode("utf-8")
    if len(raw) > MAX_LEN:
        return hash_bytes(raw)
    return text


def _has_custom_str(value: Any) -> bool:
    if isinstance(value, (list, tuple, dict, bytes, bytearray)):
        return False
    if dataclasses.is_dataclass(value):
        return False
    return type(value).__str__ is not object.__str__


def _json_default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    raise TypeError(f"value of type {type(obj).__name__} is not JSON serialisable")


def _encode_complex(value: Any) -> str:
    try:
        text = json.dumps(
            value,
            default=_json_default,
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError, RecursionError) as exc:
        raise EncodeError(
            details={
                "operation": "encoding complex value to build cache key",
                "value": value,
                "error": exc,
            }
        ) from exc
    data = text.encode("utf-8")
    if isinstance(value, dict) or len(data) > MAX_LEN:
        return hash_bytes(data)
    return text


def _format_float(value: float) -> str:
    """Format a float in shortest form, switching to exponent notation
    when the decimal exponent is below -4 or at least 6."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    number = Decimal(repr(value)).normalize()
    sign, digits, exponent = number.as_tuple()
    if not any(digits):
        return "-0" if sign else "0"
    decimal_exp = len(digits) + exponent - 1
    if decimal_exp < -4 or decimal_exp >= 6:
        head = str(digits[0])
        tail = "".join(str(d) for d in digits[1:])
        mantissa = head + ("." + tail if tail else "")
        exp_sign = "-" if decimal_exp < 0 else "+"
        return f"{'-' if sign else ''}{mantissa}e{exp_sign}{abs(decimal_exp):02d}"
    return format(number, "f")