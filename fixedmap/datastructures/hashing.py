from __future__ import annotations

# djb2 state is kept to the width of a 64-bit unsigned long.
_SEED = 5381
_MASK = 0xFFFFFFFFFFFFFFFF


def djb2(key: str) -> int:
    """Hash *key* with djb2 (``h = h * 33 + c``) over its UTF-8 bytes.

    The accumulator wraps at 64 bits, so results are stable across
    interpreters and platforms.
    """
    if not isinstance(key, str):
        raise TypeError(f"key must be str, not {type(key).__name__}")
    h = _SEED
    for c in key.encode("utf-8"):
        h = ((h << 5) + h + c) & _MASK
    return h


def bucket_index(key: str, capacity: int) -> int:
    """Bucket slot for *key* in a table of *capacity* buckets."""
    if capacity < 1:
        raise ValueError("capacity must be >= 1")
    return djb2(key) % capacity
