"""Memoising wrapper with in-flight deduplication, expiry and LRU limits."""

from __future__ import annotations

import functools
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Generic, TypeVar

from .hooks import Hooks
from .keygen import build_key
from .storage import (
    DEFAULT_CAPACITY,
    DEFAULT_CLEANUP_INTERVAL,
    Storage,
    _as_seconds,
)

__all__ = [
    "DEFAULT_TTL",
    "Config",
    "CachedFunction",
    "cached_function",
    "cached",
]

K = TypeVar("K")
V = TypeVar("V")

DEFAULT_TTL = 300.0


@dataclass
class Config:
    """Cache settings in seconds; non-positive values fall back to defaults."""

    ttl: float = DEFAULT_TTL
    capacity: int = DEFAULT_CAPACITY
    cleanup_interval: float = DEFAULT_CLEANUP_INTERVAL

    def __post_init__(self) -> None:
        self.ttl = _positive(self.ttl, DEFAULT_TTL)
        self.capacity = self.capacity if self.capacity > 0 else DEFAULT_CAPACITY
        self.cleanup_interval = _positive(
            self.cleanup_interval, DEFAULT_CLEANUP_INTERVAL
        )


def _positive(value: float | timedelta, default: float) -> float:
    seconds = _as_seconds(value)
    return seconds if seconds > 0 else default


@dataclass
class _InflightCall(Generic[V]):
    done: threading.Event = field(default_factory=threading.Event)
    value: Any = None
    error: BaseException | None = None

    def finish(self, value: V) -> None:
        self.value = value
        self.done.set()

    def fail(self, error: BaseException) -> None:
        self.error = error
        self.done.set()

    def result(self) -> V:
        self.done.wait()
        if self.error is not None:
            raise self.error
        return self.value


class CachedFunction(Generic[K, V]):
    """Callable that caches the results of a one-argument function.

    Concurrent calls with the same argument share a single execution.
    Exceptions raised by the function are not cached; they are passed to
    ``hooks.log_error`` and re-raised to the caller and to every waiter.
    """

    def __init__(
        self,
        fn: Callable[[K], V],
        config: Config | None = None,
        hooks: Hooks | None = None,
    ) -> None:
        self._fn = fn
        self.config = config if config is not None else Config()
        self.hooks = hooks if hooks is not None else Hooks()
        self._store: Storage[V] = Storage(
            self.config.ttl, self.config.capacity, self.config.cleanup_interval
        )
        self._lock = threading.Lock()
        self._inflight: dict[str, _InflightCall[V]] = {}
        functools.update_wrapper(self, fn)

    def __call__(self, arg: K) -> V:
        key = build_key(arg)

        try:
            value = self._store.get(key)
        except KeyError:
            pass
        else:
            self.hooks.run(self.hooks.on_get, arg)
            return value

        with self._lock:
            call = self._inflight.get(key)
            owner = call is None
            if call is None:
                call = _InflightCall()
                self._inflight[key] = call

        if not owner:
            return call.result()
        return self._execute(key, arg, call)

    def _execute(self, key: str, arg: K, call: _InflightCall[V]) -> V:
        self.hooks.run(self.hooks.on_execute, arg)
        try:
            value = self._fn(arg)
        except BaseException as exc:
            self.hooks.run(self.hooks.on_done, arg)
            with self._lock:
                del self._inflight[key]
            call.fail(exc)
            if isinstance(exc, Exception):
                self.hooks.log(exc)
            raise
        self.hooks.run(self.hooks.on_done, arg)

        with self._lock:
            self._store.set(key, value)
            del self._inflight[key]
        call.finish(value)
        self.hooks.run(self.hooks.on_set, arg)
        return value


def cached_function(
    fn: Callable[[K], V],
    config: Config | None = None,
    hooks: Hooks | None = None,
) -> CachedFunction[K, V]:
    """Wrap ``fn`` with caching; ``None`` selects default config and hooks."""
    return CachedFunction(fn, config, hooks)


def cached(
    config: Config | None = None,
    hooks: Hooks | None = None,
) -> Callable[[Callable[[K], V]], CachedFunction[K, V]]:
    """Decorator form of :func:`cached_function`."""

    def decorate(fn: Callable[[K], V]) -> CachedFunction[K, V]:
        return CachedFunction(fn, config, hooks)

    return decorate