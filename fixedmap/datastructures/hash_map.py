from __future__ import annotations
import logging
from typing import Iterator, Optional, Tuple

from .hashing import bucket_index, djb2
from .linked_list import (
    Bucket,
    Entry,
    create_entry,
    destroy_entry,
    populate_entry,
    replace_entry_value,
)

logger = logging.getLogger(__name__)


class HashMap:
    """A fixed-capacity separate-chaining hash table of ``str`` to ``str``.

    Design notes:
    - The bucket count is set at construction and never changes; there is
      no resize, so chains simply grow as the load factor rises.
    - Keys are hashed with djb2 and reduced modulo the capacity.
    - New entries are appended at the tail of their bucket's chain.
    - Not thread-safe. Callers sharing a map between threads must hold
      their own lock around every call.
    """

    __slots__ = ("_cap", "_buckets", "_size")

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._cap: int = capacity
        self._buckets: Optional[list[Bucket]] = self._allocate_buckets(capacity)
        self._size: int = 0
        logger.debug("created map with %d buckets", capacity)

    # -----------------------------
    # Internal helpers
    # -----------------------------
    @staticmethod
    def _allocate_buckets(capacity: int) -> list[Bucket]:
        return [Bucket() for _ in range(capacity)]

    def _table(self) -> list[Bucket]:
        if self._buckets is None:
            raise RuntimeError("map has been destroyed")
        return self._buckets

    def _bucket_for(self, key: str) -> Bucket:
        return self._table()[self.index(key)]

    # -----------------------------
    # Hashing & indexing
    # -----------------------------
    @staticmethod
    def hash(key: str) -> int:
        """djb2 hash of *key*; see :func:`fixedmap.datastructures.hashing.djb2`."""
        return djb2(key)

    def index(self, key: str) -> int:
        """Bucket slot that *key* lives in."""
        return bucket_index(key, self._cap)

    # -----------------------------
    # Properties
    # -----------------------------
    @property
    def capacity(self) -> int:
        return self._cap

    @property
    def size(self) -> int:
        return self._size

    @property
    def load_factor(self) -> float:
        return self._size / self._cap

    @property
    def destroyed(self) -> bool:
        return self._buckets is None

    # -----------------------------
    # Entry access
    # -----------------------------
    def locate_entry(self, key: str) -> Optional[Entry]:
        """Return the entry stored under *key*, or None."""
        return self._bucket_for(key).locate(key)

    def entry_for_key(self, key: str) -> Optional[Entry]:
        """Return the entry for *key*, linking a new unpopulated one if absent.

        A new entry goes on the tail of the key's chain. An unpopulated entry
        already linked in that chain is handed out again instead, so a chain
        never holds more than one. Returns None only when the entry cannot
        be allocated. The caller is expected to populate a new entry straight
        away (``put`` does).
        """
        bucket = self._bucket_for(key)
        existing = bucket.locate(key)
        if existing is not None:
            return existing
        vacant = bucket.vacant()
        if vacant is not None:
            return vacant
        try:
            entry = create_entry()
        except MemoryError:
            logger.warning("allocation failed while creating entry for %r", key)
            return None
        bucket.append(entry)
        return entry

    # -----------------------------
    # Core operations
    # -----------------------------
    def put(self, key: str, value: str) -> bool:
        """Insert or replace the value for *key*. False on allocation failure."""
        if not isinstance(value, str):
            raise TypeError(f"value must be str, not {type(value).__name__}")
        entry = self.entry_for_key(key)
        if entry is None:
            return False
        if entry.populated:
            return replace_entry_value(entry, value)
        if not populate_entry(entry, key, value):
            # Drop the placeholder so the chain only holds live entries.
            self._bucket_for(key).discard(entry)
            destroy_entry(entry)
            return False
        self._size += 1
        return True

    def get(self, key: str) -> Tuple[bool, Optional[str]]:
        """Return ``(found, value)``; value is None when not found.

        Strings are immutable, so the value stays valid after later
        mutations of the map.
        """
        entry = self.locate_entry(key)
        if entry is None:
            return False, None
        return True, entry.value

    def contains(self, key: str) -> bool:
        """Check if key exists in the map."""
        return self.locate_entry(key) is not None

    def remove(self, key: str) -> bool:
        """Remove *key* if present; return True if an entry was removed."""
        entry = self._bucket_for(key).unlink(key)
        if entry is None:
            return False
        destroy_entry(entry)
        self._size -= 1
        return True

    # -----------------------------
    # Bulk operations
    # -----------------------------
    def clear_index(self, index: int) -> None:
        """Destroy every entry in bucket *index*."""
        table = self._table()
        if not 0 <= index < self._cap:
            raise IndexError(f"bucket index {index} out of range [0, {self._cap})")
        self._size -= table[index].clear()

    def clear(self) -> None:
        """Remove every entry; capacity is unchanged."""
        for i in range(self._cap):
            self.clear_index(i)
        logger.debug("cleared map (%d buckets)", self._cap)

    def destroy(self) -> None:
        """Clear the map and release its buckets. The map is unusable afterwards."""
        self.clear()
        self._buckets = None
        logger.debug("destroyed map")

    # -----------------------------
    # Iteration helpers
    # -----------------------------
    def slots(self) -> Iterator[Tuple[int, Bucket]]:
        """Yield ``(index, bucket)`` for every slot in order."""
        yield from enumerate(self._table())

    def items(self) -> Iterator[Tuple[str, str]]:
        for _, bucket in self.slots():
            for entry in bucket.entries():
                if entry.populated:
                    yield entry.key, entry.value  # type: ignore[misc]

    def keys(self) -> Iterator[str]:
        for k, _ in self.items():
            yield k

    def values(self) -> Iterator[str]:
        for _, v in self.items():
            yield v

    # -----------------------------
    # Standard magic methods
    # -----------------------------
    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __iter__(self) -> Iterator[str]:
        return self.keys()

    def __repr__(self) -> str:  # pragma: no cover - trivial
        if self.destroyed:
            return f"HashMap(capacity={self._cap}, destroyed)"
        pairs = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"HashMap(capacity={self._cap}, {{{pairs}}})"


def create(capacity: int) -> Optional[HashMap]:
    """Build a map, returning None instead of raising on allocation failure."""
    try:
        return HashMap(capacity)
    except MemoryError:
        logger.warning("allocation failed while creating map of %d buckets", capacity)
        return None
