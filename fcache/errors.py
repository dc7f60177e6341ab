"""Structured errors raised by the caching layer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

__all__ = [
    "CacheError",
    "PanicError",
    "KeyBuildError",
    "EncodeError",
    "format_details",
]


def format_details(details: Mapping[str, Any]) -> str:
    """Render context fields as ``"key: value; "`` pairs in insertion order."""
    return "".join(f"{key}: {value}; " for key, value in details.items())


class CacheError(Exception):
    """Base error carrying a short message and optional context fields."""

    default_message = "cache error"

    def __init__(
        self,
        message: str | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        self.message = message if message is not None else self.default_message
        self.details = dict(details) if details is not None else None
        if self.details is None:
            text = f"[fcache error], [{self.message}]"
        else:
            text = (
                f"[fcache error], [{self.message}], "
                f"details: [{format_details(self.details)}]"
            )
        super().__init__(text)


class PanicError(CacheError):
    """The wrapped function failed with an unexpected exception."""

    default_message = "panic occurred in cached function"


class KeyBuildError(CacheError):
    """A cache key could not be built from the call argument."""

    default_message = "error building cache key"


class EncodeError(CacheError):
    """A value could not be serialised to JSON for use in a key."""

    default_message = "error marshalling to JSON"