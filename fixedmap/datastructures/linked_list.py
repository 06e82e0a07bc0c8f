from __future__ import annotations
import logging
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


class Entry:
    """A node in a bucket chain holding one (key, value) pair.

    A fresh entry has ``key is None``; that is the "unpopulated" state
    produced by :func:`create_entry` and filled in by :func:`populate_entry`.
    """

    __slots__ = ("key", "value", "next")

    def __init__(self) -> None:
        self.key: Optional[str] = None
        self.value: Optional[str] = None
        self.next: Optional[Entry] = None

    @property
    def populated(self) -> bool:
        return self.key is not None

    def __repr__(self) -> str:  # pragma: no cover - trivial
        if not self.populated:
            return "Entry(<unpopulated>)"
        return f"Entry({self.key!r}: {self.value!r})"


def _own(text: str, what: str) -> str:
    """Return an owned copy of *text*.

    ``str`` is immutable, so the copy only has to drop any subclass the
    caller passed in; the entry never aliases mutable caller state.
    """
    if not isinstance(text, str):
        raise TypeError(f"{what} must be str, not {type(text).__name__}")
    return str(text)


def create_entry() -> Entry:
    """Allocate an unpopulated entry (no key, no value, no successor)."""
    return Entry()


def populate_entry(entry: Entry, key: str, value: str) -> bool:
    """Copy *key* and *value* into a fresh entry.

    Returns False on allocation failure; the entry is then left
    unpopulated and may still be destroyed safely.
    """
    if entry.populated:
        raise ValueError("entry is already populated")
    try:
        owned_key = _own(key, "key")
        owned_value = _own(value, "value")
    except MemoryError:
        logger.warning("allocation failed while populating entry for %r", key)
        return False
    entry.key = owned_key
    entry.value = owned_value
    return True


def replace_entry_value(entry: Entry, value: str) -> bool:
    """Swap the value of a populated entry; the old value is kept on failure."""
    if not entry.populated:
        raise ValueError("cannot replace the value of an unpopulated entry")
    try:
        owned_value = _own(value, "value")
    except MemoryError:
        logger.warning("allocation failed while replacing value for %r", entry.key)
        return False
    entry.value = owned_value
    return True


def destroy_entry(entry: Entry) -> None:
    """Release the entry's key and value.

    Chain linkage is the caller's business: unlink the entry first.
    """
    entry.key = None
    entry.value = None
    entry.next = None


class Bucket:
    """One slot of the table: the head of a singly-linked chain of entries.

    New entries go on the tail. Lookups, unlinking and clearing are linear
    scans from the head.
    """

    __slots__ = ("head",)

    def __init__(self) -> None:
        self.head: Optional[Entry] = None

    @property
    def is_empty(self) -> bool:
        return self.head is None

    def locate(self, key: str) -> Optional[Entry]:
        """Return the entry whose key equals *key*, or None."""
        n = self.head
        while n:
            if n.key == key:
                return n
            n = n.next
        return None

    def vacant(self) -> Optional[Entry]:
        """Return the first unpopulated entry in the chain, or None."""
        n = self.head
        while n:
            if not n.populated:
                return n
            n = n.next
        return None

    def tail(self) -> Optional[Entry]:
        """Return the last entry in the chain (None if empty)."""
        n = self.head
        if n is None:
            return None
        while n.next:
            n = n.next
        return n

    def append(self, entry: Entry) -> None:
        """Link *entry* at the tail, or make it the head of an empty chain."""
        last = self.tail()
        if last is None:
            self.head = entry
        else:
            last.next = entry

    def unlink(self, key: str) -> Optional[Entry]:
        """Detach the entry with *key* and return it; None if absent."""
        prev: Optional[Entry] = None
        cur = self.head
        while cur:
            if cur.key == key:
                self._skip(prev, cur)
                return cur
            prev, cur = cur, cur.next
        return None

    def discard(self, entry: Entry) -> bool:
        """Detach *entry* (matched by identity); True if it was linked here."""
        prev: Optional[Entry] = None
        cur = self.head
        while cur:
            if cur is entry:
                self._skip(prev, cur)
                return True
            prev, cur = cur, cur.next
        return False

    def _skip(self, prev: Optional[Entry], cur: Entry) -> None:
        if prev:
            prev.next = cur.next
        else:
            self.head = cur.next
        cur.next = None

    def clear(self) -> int:
        """Destroy every entry in the chain and empty it.

        Returns the number of populated entries destroyed; placeholders
        are dropped without being counted.
        """
        removed = 0
        n = self.head
        while n:
            nxt = n.next
            if n.populated:
                removed += 1
            destroy_entry(n)
            n = nxt
        self.head = None
        return removed

    def entries(self) -> Iterator[Entry]:
        """Yield entries in chain order."""
        n = self.head
        while n:
            yield n
            n = n.next

    def __len__(self) -> int:
        return sum(1 for _ in self.entries())
