"""Insert-if-absent collections keyed by a derived identity."""

from __future__ import annotations

from typing import Callable, Generic, Hashable, Iterable, Iterator, TypeVar

from patextract.extraction.models import ApplicationRef

T = TypeVar("T")


class KeyedCollection(Generic[T]):
    """Ordered collection rejecting items whose key is already present."""

    def __init__(self, key: Callable[[T], Hashable], items: Iterable[T] = ()) -> None:
        self._key = key
        self._items: list[T] = []
        self._keys: set[Hashable] = set()
        self.extend(items)

    def contains_key(self, key: Hashable) -> bool:
        return key in self._keys

    def add(self, item: T) -> bool:
        """Append *item* unless its key is taken; return whether it was added."""

        key = self._key(item)
        if key in self._keys:
            return False
        self._keys.add(key)
        self._items.append(item)
        return True

    def extend(self, items: Iterable[T]) -> int:
        return sum(1 for item in items if self.add(item))

    def to_list(self) -> list[T]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)


def application_key(ref: ApplicationRef) -> str:
    # Exact match: no case folding or zero stripping.
    return ref.application_number


def application_collection(items: Iterable[ApplicationRef] = ()) -> KeyedCollection[ApplicationRef]:
    return KeyedCollection(application_key, items)
