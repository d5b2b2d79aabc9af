from typing import Callable, Generic, Iterator, List, Optional, Tuple, TypeVar, Union

from rangetree.log import logger

T = TypeVar("T")


def _check_int(name: str, value) -> None:
    # bool is an int subclass, but tree[True] is almost certainly a bug
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int: {value!r}")


class SegmentTree(Generic[T]):
    """Range aggregate tree over positions [1, n].

    Values are combined with ``op``, which must be associative, and
    ``default`` must be its identity: ``op(x, default) == x`` for every value
    the tree will ever hold. ``default`` doubles as the "nothing pending"
    marker for deferred range updates, so a wrong identity silently corrupts
    results. Neither property is checked here; see ``Operator.check``.

    With ``lazy=False`` only point updates are supported and no deferred
    state is kept. With ``lazy=True`` ``update_range`` folds a value into a
    whole range in O(log n). A range update is applied once per covered
    subtree, not once per position, so range queries are only correct when
    ``op`` is also idempotent and commutative (max, min, gcd, set union).
    With sum, ``update_range(1, 4, 1)`` adds 1 to the total, not 4. This is
    not checked either.
    """

    def __init__(self, n: int, default: T, op: Callable[[T, T], T], lazy: bool = False):
        _check_int("n", n)
        if n < 1:
            raise ValueError(f"Size must be positive: {n}")
        self.n = n
        self.default = default
        self.op = op
        self.cell: List[T] = [default] * (4 * n)
        self.pending: Optional[List[T]] = [default] * (4 * n) if lazy else None
        logger.debug("Created %s tree of size %d", "lazy" if lazy else "eager", n)

    @property
    def lazy(self) -> bool:
        return self.pending is not None

    def __len__(self) -> int:
        return self.n

    def _check_range(self, lo: int, hi: int) -> None:
        _check_int("lo", lo)
        _check_int("hi", hi)
        if not 1 <= lo <= hi <= self.n:
            logger.debug("Rejected range [%d, %d] for size %d", lo, hi, self.n)
            raise IndexError(f"Range [{lo}, {hi}] is not within [1, {self.n}]")

    def _push(self, k: int, start: int, end: int) -> None:
        pending = self.pending
        value = pending[k]
        if value == self.default:
            return
        op = self.op
        self.cell[k] = op(self.cell[k], value)
        if start != end:
            left = k << 1
            pending[left] = op(pending[left], value)
            pending[left | 1] = op(pending[left | 1], value)
        pending[k] = self.default

    def _update(self, k: int, start: int, end: int, lo: int, hi: int, v: T) -> None:
        if hi < start or end < lo:
            return
        if lo <= start and end <= hi:
            if self.pending is None:
                # Only ever reached at a leaf, since lo == hi
                self.cell[k] = self.op(self.cell[k], v)
            else:
                self.pending[k] = self.op(self.pending[k], v)
                self._push(k, start, end)
            return
        if self.pending is not None:
            self._push(k, start, end)
        mid = (start + end) >> 1
        self._update(k << 1, start, mid, lo, hi, v)
        self._update(k << 1 | 1, mid + 1, end, lo, hi, v)
        self.cell[k] = self.op(self.cell[k << 1], self.cell[k << 1 | 1])

    def _query(self, k: int, start: int, end: int, lo: int, hi: int) -> T:
        if hi < start or end < lo:
            return self.default
        if self.pending is not None:
            self._push(k, start, end)
        if lo <= start and end <= hi:
            return self.cell[k]
        mid = (start + end) >> 1
        left = self._query(k << 1, start, mid, lo, hi)
        right = self._query(k << 1 | 1, mid + 1, end, lo, hi)
        return self.op(left, right)

    def update(self, i: int, v: T) -> None:
        """Combines ``v`` into position ``i``."""
        self._check_range(i, i)
        self._update(1, 1, self.n, i, i, v)

    def update_range(self, lo: int, hi: int, v: T) -> None:
        """Combines ``v`` into every position in ``[lo, hi]``.

        Requires a lazy tree unless ``lo == hi``, and an idempotent,
        commutative ``op``; otherwise aggregates over the range are wrong.
        """
        if self.pending is None and lo != hi:
            raise ValueError("update_range() requires a lazy tree")
        self._check_range(lo, hi)
        self._update(1, 1, self.n, lo, hi, v)

    insert = update
    insert_range = update_range

    def query(self, lo: int, hi: int) -> T:
        """Folds the values in ``[lo, hi]``; positions outside [1, n] are ignored."""
        _check_int("lo", lo)
        _check_int("hi", hi)
        if lo > hi:
            return self.default
        return self._query(1, 1, self.n, lo, hi)

    def _key2range(self, key: Union[int, slice]) -> Tuple[int, int]:
        if isinstance(key, int) and not isinstance(key, bool):
            return key, key
        elif isinstance(key, slice):
            if key.step is not None and key.step != 1:
                raise ValueError(f"Step must be 1: {key.step}")
            start = 1 if key.start is None else key.start
            stop = self.n + 1 if key.stop is None else key.stop
            return start, stop - 1
        else:
            raise TypeError("Index must be either an int or a slice")

    def __getitem__(self, key: Union[int, slice]) -> T:
        lo, hi = self._key2range(key)
        return self.query(lo, hi)

    def __iter__(self) -> Iterator[T]:
        for i in range(1, self.n + 1):
            yield self.query(i, i)

    def __repr__(self) -> str:
        kind = "LazyTree" if self.lazy else "EagerTree"
        return f"<{kind} n={self.n} default={self.default!r}>"


class EagerTree(SegmentTree[T]):
    """Point-update tree: ``update`` and ``query`` only."""

    def __init__(self, n: int, default: T, op: Callable[[T, T], T]):
        super().__init__(n, default, op, lazy=False)


class LazyTree(SegmentTree[T]):
    """Range-update tree with deferred propagation."""

    def __init__(self, n: int, default: T, op: Callable[[T, T], T]):
        super().__init__(n, default, op, lazy=True)
