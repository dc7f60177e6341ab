"""Thread-safe memoization for one-argument functions with deduplication, TTL expiry and LRU limits."""

__version__ = "0.1.0"