from typing import Generic, Iterable, Iterator, Optional, TypeVar

from sortedcontainers import SortedDict

T = TypeVar("T")


class MultiSet(Generic[T]):
    """Sorted collection that may hold repeated elements.

    Each distinct value is stored once in a SortedDict together with its
    number of occurrences, so iteration is ascending and membership, insertion
    and removal are O(log n).
    """

    def __init__(self, values: Optional[Iterable[T]] = None):
        self.freq = SortedDict()
        self.size = 0
        if values is not None:
            for value in values:
                self.add(value)

    def add(self, value: T) -> None:
        self.freq[value] = self.freq.get(value, 0) + 1
        self.size += 1

    insert = add

    def remove(self, value: T) -> bool:
        """Removes one occurrence of ``value``.

        Returns True if it was present, False otherwise.
        """
        count = self.freq.get(value)
        if count is None:
            return False
        if count == 1:
            del self.freq[value]
        else:
            self.freq[value] = count - 1
        self.size -= 1
        return True

    def count(self, value: T) -> int:
        return self.freq.get(value, 0)

    def __contains__(self, value) -> bool:
        return value in self.freq

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[T]:
        for value, count in self.freq.items():
            for _ in range(count):
                yield value

    def __reversed__(self) -> Iterator[T]:
        for value in reversed(self.freq):
            for _ in range(self.freq[value]):
                yield value

    def __repr__(self) -> str:
        return f"MultiSet({list(self)!r})"
