"""Optional lifecycle hooks for cache events."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

__all__ = ["Hooks", "HookFunc", "ErrorHook"]

HookFunc = Callable[[Any], Any]
ErrorHook = Callable[[BaseException], Any]


@dataclass
class Hooks:
    """Callbacks fired on cache events; each receives the call argument.

    A hook signals a problem by raising; the exception is passed to
    ``log_error``. Failures inside ``log_error`` itself are swallowed.
    """

    on_set: HookFunc | None = None
    on_get: HookFunc | None = None
    on_execute: HookFunc | None = None
    on_done: HookFunc | None = None
    log_error: ErrorHook | None = None

    def run(self, fn: HookFunc | None, arg: Any) -> None:
        """Call ``fn(arg)``, routing any exception to :meth:`log`."""
        if fn is None:
            return
        try:
            fn(arg)
        except Exception as exc:
            self.log(exc)

    def log(self, err: BaseException) -> None:
        """Pass ``err`` to ``log_error`` if set, ignoring its own failures."""
        if self.log_error is None:
            return
        try:
            self.log_error(err)
        except Exception:
            pass