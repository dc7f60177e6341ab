# fcache

A thread-safe caching layer for expensive or long-running functions that take one argument.

Wrapping a function with fcache gives you:

- **Memoization**: a call with an argument already seen returns the stored result.
- **In-flight deduplication**: a call that arrives while the same argument is still being
  computed waits for that computation and gets its result (or its exception). The function
  does not run a second time.
- **Expiry**: each entry lives for a configurable time to live. The default is 300 seconds.
- **Capacity limit**: at most a configurable number of entries are kept. The default is 1000.
  When the limit is passed, the least recently used entry is evicted.
- **Background cleanup**: while entries are stored, a daemon thread removes expired ones at a
  configurable interval (default 60 seconds). It stops when the cache becomes empty.
- **Hooks**: optional callbacks for instrumentation, such as logging and metrics.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Usage

Wrap a function with `fcache.core.cached_function`:

```python
import time

from fcache.core import cached_function


def slow_square(n):
    time.sleep(2)
    return n * n


fast_square = cached_function(slow_square)

fast_square(12)  # runs slow_square
fast_square(12)  # served from the cache
```

Or use `fcache.core.cached` as a decorator:

```python
from fcache.core import Config, cached


@cached(Config(ttl=60, capacity=100))
def lookup(user_id):
    ...
```

Both return a `fcache.core.CachedFunction`, which can also be built directly with
`CachedFunction(fn, config, hooks)`. It carries the wrapped function's name and docstring.
Passing `None` (or nothing) for `config` or `hooks` selects the defaults.

### Configuration

`fcache.core.Config` has three fields:

- `ttl`: time to live of an entry, in seconds (default `300.0`);
- `capacity`: maximum number of entries (default `1000`);
- `cleanup_interval`: seconds between sweeps that remove expired entries (default `60.0`).

`ttl` and `cleanup_interval` also accept a `datetime.timedelta`. Any value that is zero or
negative is replaced by its default.

### Cache keys

The argument is turned into a string key by `fcache.keygen.build_key`:

- `None`, booleans, integers and floats are encoded directly.
- Strings, and objects that define their own `__str__`, are encoded from their text.
- Lists, tuples, dicts, dataclass instances and bytes are encoded as compact JSON with
  sorted keys. Dicts are always replaced by the SHA-256 digest of their JSON.
- Any key longer than 100 bytes (UTF-8) is replaced by its SHA-256 hex digest
  (`fcache.keygen.hash_bytes`).

If an argument cannot be encoded, `fcache.errors.KeyBuildError` is raised. Its message holds
the failing value and the underlying `fcache.errors.EncodeError`.

### Errors

If the wrapped function raises, the exception reaches the caller, and every caller waiting on
the same argument receives the same exception. Results of failed calls are not cached, so the
next call runs the function again.

The error classes in `fcache.errors` all derive from `CacheError`, which takes a message and
an optional mapping of context fields shown in its text.

### Hooks

`fcache.hooks.Hooks` is a dataclass of optional callbacks, each called with the argument:

- `on_get`: after a cache hit;
- `on_execute`: before the function runs;
- `on_done`: after the function returns or raises;
- `on_set`: after a result is stored.

`log_error` receives exceptions raised by the wrapped function and by the other hooks. An
exception raised by a hook is passed to `log_error` instead of reaching the caller; an
exception raised by `log_error` itself is ignored.

### Storage

`fcache.storage.Storage(ttl, capacity, cleanup_interval)` is the LRU store used underneath
and can be used on its own. `get` returns a live value or raises `KeyError`; `set`, `delete`
and `cleanup_expired` do what their names say; `len()` and `in` work on it; `close` stops the
cleanup thread while keeping the entries.

## Example program

```
fcache-example
```

It runs a two-second computation twice; the second call returns at once from the cache.
Use `--seconds` to change the duration.

## What it does not do

- Only functions of a single argument are supported; pass a tuple to cache on several values.
- The cache is held in memory only; nothing is persisted.
- `CachedFunction` has no method to clear or invalidate entries; they leave only by expiry or
  eviction.