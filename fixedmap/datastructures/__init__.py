from .hashing import bucket_index, djb2
from .linked_list import (
    Bucket,
    Entry,
    create_entry,
    destroy_entry,
    populate_entry,
    replace_entry_value,
)
from .hash_map import HashMap, create
from .dictionary import Dictionary

__all__ = [
    "djb2",
    "bucket_index",
    "Entry",
    "Bucket",
    "create_entry",
    "populate_entry",
    "replace_entry_value",
    "destroy_entry",
    "HashMap",
    "create",
    "Dictionary",
]
