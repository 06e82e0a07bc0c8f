"""
Diagnostic output for a HashMap.

Walks the map's slots and chains without mutating anything and renders a
listing of every bucket:

    Slot: 0
     * key: a, value: test
    Slot: 1
     Empty
"""

import sys
from typing import List, Optional, TextIO

from .datastructures import HashMap


def format_dump(hm: HashMap) -> str:
    """Return the slot-by-slot listing of *hm* as a string."""
    lines: List[str] = []
    for i, bucket in hm.slots():
        lines.append(f"Slot: {i}")
        if bucket.is_empty:
            lines.append(" Empty")
            continue
        for entry in bucket.entries():
            if entry.populated:
                lines.append(f" * key: {entry.key}, value: {entry.value}")
            else:
                lines.append(" * <unpopulated>")
    return "\n".join(lines) + "\n"


def dump(hm: HashMap, stream: Optional[TextIO] = None) -> None:
    """Write :func:`format_dump` output to *stream* (stdout by default)."""
    (stream or sys.stdout).write(format_dump(hm))


def summary(hm: HashMap) -> str:
    """One-line occupancy summary: buckets in use, longest chain, load factor."""
    lengths = [len(bucket) for _, bucket in hm.slots()]
    used = sum(1 for n in lengths if n)
    return (
        f"capacity={hm.capacity} size={hm.size} used_buckets={used} "
        f"longest_chain={max(lengths)} load_factor={hm.load_factor:.2f}"
    )
