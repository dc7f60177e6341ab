"""Thread-safe LRU storage with per-entry expiry and background cleanup."""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Generic, TypeVar

__all__ = [
    "DEFAULT_CAPACITY",
    "DEFAULT_CLEANUP_INTERVAL",
    "StorageItem",
    "Storage",
]

V = TypeVar("V")

DEFAULT_CAPACITY = 1000
DEFAULT_CLEANUP_INTERVAL = 60.0


def _as_seconds(value: float | timedelta) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


@dataclass
class StorageItem(Generic[V]):
    """A cached value and the monotonic time it was stored."""

    value: V
    timestamp: float = field(default_factory=time.monotonic)


class Storage(Generic[V]):
    """LRU mapping from string keys to values that expire after ``ttl`` seconds.

    Reading a key marks it most recently used. When more than ``capacity``
    entries are held, the least recently used one is dropped. While entries
    exist, a daemon thread removes expired ones every ``cleanup_interval``
    seconds; it stops once the storage is empty.
    """

    def __init__(
        self,
        ttl: float | timedelta,
        capacity: int = DEFAULT_CAPACITY,
        cleanup_interval: float | timedelta = DEFAULT_CLEANUP_INTERVAL,
    ) -> None:
        self.ttl = _as_seconds(ttl)
        self.capacity = capacity if capacity > 0 else DEFAULT_CAPACITY
        self.cleanup_interval = _as_seconds(cleanup_interval)
        if self.cleanup_interval <= 0:
            raise ValueError("cleanup interval must be positive")
        # Insertion order is usage order: the last item is the most recent.
        self._items: OrderedDict[str, StorageItem[V]] = OrderedDict()
        self._lock = threading.Lock()
        self._stop: threading.Event | None = None
        self._thread: threading.Thread | None = None

    def get(self, key: str) -> V:
        """Return the live value for ``key``; raise ``KeyError`` if absent or expired."""
        with self._lock:
            item = self._items[key]
            self._items.move_to_end(key)
            if self._expired(item, time.monotonic()):
                self._remove(key)
                raise KeyError(key)
            return item.value

    def set(self, key: str, value: V) -> None:
        """Store ``value`` under ``key`` as the most recently used entry."""
        with self._lock:
            self._items[key] = StorageItem(value)
            self._items.move_to_end(key)
            if len(self._items) > self.capacity:
                self._items.popitem(last=False)
            if self._thread is None:
                self._start_cleanup()

    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        with self._lock:
            self._remove(key)

    def cleanup_expired(self) -> int:
        """Remove every expired entry and return how many were removed."""
        now = time.monotonic()
        with self._lock:
            expired = [
                key for key, item in self._items.items() if self._expired(item, now)
            ]
            for key in expired:
                self._remove(key)
        return len(expired)

    def close(self) -> None:
        """Stop the background cleanup thread; stored entries are kept."""
        with self._lock:
            stop, thread = self._stop, self._thread
            self._stop = None
            self._thread = None
        if stop is not None:
            stop.set()
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            item = self._items.get(key)  # type: ignore[arg-type]
            return item is not None and not self._expired(item, time.monotonic())

    def _expired(self, item: StorageItem[V], now: float) -> bool:
        return now - item.timestamp > self.ttl

    def _remove(self, key: str) -> None:
        if self._items.pop(key, None) is not None and not self._items:
            self._stop_cleanup()

    def _start_cleanup(self) -> None:
        stop = threading.Event()
        thread = threading.Thread(
            target=self._cleanup_loop,
            args=(stop,),
            name="fcache-cleanup",
            daemon=True,
        )
        self._stop = stop
        self._thread = thread
        thread.start()

    def _stop_cleanup(self) -> None:
        if self._stop is not None:
            self._stop.set()
        self._stop = None
        self._thread = None

    def _cleanup_loop(self, stop: threading.Event) -> None:
        while not stop.wait(self.cleanup_interval):
            self.cleanup_expired()