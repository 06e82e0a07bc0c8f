"""fixedmap: a fixed-capacity, separate-chaining string hash map."""

from .datastructures import Dictionary, HashMap, create, djb2

__all__ = ["HashMap", "Dictionary", "create", "djb2"]
__version__ = "0.1.0"
