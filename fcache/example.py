"""Demonstration of caching a slow computation."""

from __future__ import annotations

import argparse
import time
from collections.abc import Sequence
from datetime import datetime

from .core import cached_function

__all__ = ["heavy_computation", "slow_func", "main"]


def heavy_computation(seconds: float) -> str:
    """Sleep for ``seconds`` and return a fixed result."""
    time.sleep(seconds)
    return "cached value"


def slow_func(ms: int) -> str:
    """Sleep for ``ms`` milliseconds and return a result naming the delay."""
    time.sleep(ms / 1000)
    return f"result {ms}"


def _now() -> str:
    return str(datetime.now().astimezone().replace(microsecond=0))


def main(argv: Sequence[str] | None = None) -> int:
    """Run the heavy computation twice, the second time from the cache."""
    parser = argparse.ArgumentParser(
        description="Show the effect of caching a slow computation."
    )
    parser.add_argument(
        "--seconds",
        type=float,
        default=2.0,
        help="duration of the computation (default: 2)",
    )
    args = parser.parse_args(argv)

    cached = cached_function(heavy_computation)
    print(f"[{_now()}] Starting heavy computation...")
    try:
        result = cached(args.seconds)
    except Exception as exc:
        print("Error:", exc)
        return 1
    print(f"[{_now()}] Heavy computation completed, result - {result}.")

    print(f"[{_now()}] Starting cached heavy computation...")
    try:
        result = cached(args.seconds)
    except Exception as exc:
        print("Error:", exc)
        return 1
    print(f"[{_now()}] Heavy computation completed, result cached - {result}.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())