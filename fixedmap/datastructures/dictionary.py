from __future__ import annotations
from typing import Iterable, Iterator, Mapping, Optional, Tuple, Union

from ..config import DEFAULT_CAPACITY
from .hash_map import HashMap


class Dictionary:
    """A minimal mapping-like wrapper around :class:`HashMap`.

    Missing keys raise :class:`KeyError` here, where the underlying map
    reports them as a ``False`` result.
    """

    __slots__ = ("_map",)

    def __init__(
        self,
        it: Optional[Union[Mapping[str, str], Iterable[Tuple[str, str]]]] = None,
        capacity: int = DEFAULT_CAPACITY,
        **kwargs: str,
    ) -> None:
        self._map: HashMap = HashMap(capacity)
        if it is not None:
            # Accept dict-like or iterable of pairs
            if hasattr(it, "items"):
                for k, v in it.items():  # type: ignore[union-attr]
                    self[k] = v
            else:
                for k, v in it:
                    self[k] = v
        for k, v in kwargs.items():
            self[k] = v

    @property
    def capacity(self) -> int:
        return self._map.capacity

    def __setitem__(self, key: str, value: str) -> None:
        if not self._map.put(key, value):
            raise MemoryError(f"could not store value for {key!r}")

    def __getitem__(self, key: str) -> str:
        found, val = self._map.get(key)
        if not found:
            raise KeyError(key)
        return val  # type: ignore[return-value]

    def __delitem__(self, key: str) -> None:
        if not self._map.remove(key):
            raise KeyError(key)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        found, val = self._map.get(key)
        return val if found else default

    def __contains__(self, key: object) -> bool:
        return key in self._map

    def keys(self) -> list[str]:
        return list(self._map.keys())

    def values(self) -> list[str]:
        return list(self._map.values())

    def items(self) -> list[Tuple[str, str]]:
        return list(self._map.items())

    def clear(self) -> None:
        self._map.clear()

    def __len__(self) -> int:
        return len(self._map)

    def to_py(self) -> dict[str, str]:
        """Convert to a native *dict*."""
        return dict(self._map.items())

    def __iter__(self) -> Iterator[str]:
        return iter(self._map.keys())

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Dictionary({self.to_py()!r})"
