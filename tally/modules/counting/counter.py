"""
Counter (exact multiset counting)
- Counts recurring elements from an iterable, modelled on Python's collections.Counter
- Backing store is a plain dict element -> count, exposed as `counts` for direct manipulation
- Floor invariant: stored counts are always > 0; subtract prunes, operators only emit positives
- Multiset algebra: + (sum), - (floored difference), & (min), | (max); all operators are pure
"""

from typing import Any, Dict, Hashable, Iterable, Iterator, List, Optional, Tuple


class Counter:
    def __init__(self, iterable: Optional[Iterable[Hashable]] = None):
        # element -> occurrence count; public on purpose (escape hatch for lookups/manual edits)
        self.counts: Dict[Hashable, int] = {}
        if iterable is not None:
            self.update(iterable)

    @classmethod
    def new(cls) -> "Counter":
        """Create a new, empty Counter."""
        return cls()

    @classmethod
    def init(cls, iterable: Iterable[Hashable]) -> "Counter":
        """Create a new Counter initialized with the given iterable."""
        counter = cls()
        counter.update(iterable)
        return counter

    @classmethod
    def from_parallel(
        cls, items: Iterable[Any], produce=None, max_workers: Optional[int] = None, flatten: bool = False
    ) -> "Counter":
        """
        Build a Counter from elements produced concurrently by a worker pool.
        flatten=True when produce returns several elements per item (e.g. str.split).
        See modules/counting/parallel.py; counting itself stays single-threaded.
        """
        from tally.modules.counting.parallel import counter_from_parallel

        return counter_from_parallel(items, produce=produce, max_workers=max_workers, flatten=flatten)

    # -------------------------- Mutation -------------------------- #
    def update(self, iterable: Iterable[Hashable]) -> None:
        """Add one occurrence per element of the iterable (consumed lazily)."""
        counts = self.counts
        get = counts.get
        for elem in iterable:
            counts[elem] = get(elem, 0) + 1

    def subtract(self, iterable: Iterable[Hashable]) -> None:
        """
        Remove one occurrence per element of the iterable:
        - absent elements are ignored (no negative entries are created)
        - an entry reaching 0 is removed at once, so later occurrences of it are no-ops
        """
        counts = self.counts
        for elem in iterable:
            if elem not in counts:
                continue
            remaining = counts[elem] - 1
            if remaining <= 0:
                del counts[elem]
            else:
                counts[elem] = remaining

    # -------------------------- Query -------------------------- #
    def most_common(self, n: Optional[int] = None) -> List[Tuple[int, Hashable]]:
        """
        Return (count, element) pairs sorted from most to least common.

        Ties keep first-seen order (list.sort is stable over dict insertion order).
        Only positive entries are reported. `n` keeps the first n pairs.
        """
        pairs = [(c, elem) for elem, c in self.counts.items() if c > 0]
        pairs.sort(key=lambda p: p[0], reverse=True)
        if n is None:
            return pairs
        return pairs[: max(0, int(n))]

    def total(self) -> int:
        return sum(c for c in self.counts.values() if c > 0)

    def elements(self) -> Iterator[Hashable]:
        """Iterate over elements, each repeated as many times as its count."""
        for elem, c in self.counts.items():
            for _ in range(c):
                yield elem

    def items(self):
        return self.counts.items()

    def copy(self) -> "Counter":
        out = self.__class__()
        out.counts = dict(self.counts)
        return out

    def __getitem__(self, elem: Hashable) -> int:
        # missing elements count as 0; lookups never insert
        return self.counts.get(elem, 0)

    # membership, size and iteration see positive entries only, like most_common/total
    def __contains__(self, elem: Hashable) -> bool:
        return self.counts.get(elem, 0) > 0

    def __len__(self) -> int:
        return sum(1 for c in self.counts.values() if c > 0)

    def __iter__(self) -> Iterator[Hashable]:
        return (elem for elem, c in self.counts.items() if c > 0)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Counter):
            return NotImplemented
        return self._positive() == other._positive()

    def __repr__(self) -> str:
        if not len(self):
            return f"{self.__class__.__name__}()"
        body = ", ".join(f"{elem!r}: {c}" for c, elem in self.most_common())
        return f"{self.__class__.__name__}({{{body}}})"

    # -------------------------- Multiset algebra -------------------------- #
    def __add__(self, other: "Counter") -> "Counter":
        """Sum: out[x] == self[x] + other[x] over the union of keys."""
        if not isinstance(other, Counter):
            return NotImplemented
        merged = self._positive()
        for elem, c in other.counts.items():
            if c > 0:
                merged[elem] = merged.get(elem, 0) + c
        return self._from_counts(merged)

    def __sub__(self, other: "Counter") -> "Counter":
        """Difference keeping only positive values: out[x] == max(self[x] - other[x], 0)."""
        if not isinstance(other, Counter):
            return NotImplemented
        diff = {}
        for elem, c in self.counts.items():
            remaining = c - max(0, other[elem])
            if remaining > 0:
                diff[elem] = remaining
        return self._from_counts(diff)

    def __and__(self, other: "Counter") -> "Counter":
        """Intersection: out[x] == min(self[x], other[x]), only keys both sides hold."""
        if not isinstance(other, Counter):
            return NotImplemented
        common = {}
        for elem, c in self.counts.items():
            low = min(c, other[elem])
            if low > 0:
                common[elem] = low
        return self._from_counts(common)

    def __or__(self, other: "Counter") -> "Counter":
        """Union: out[x] == max(self[x], other[x]) over the union of keys."""
        if not isinstance(other, Counter):
            return NotImplemented
        union = self._positive()
        for elem, c in other.counts.items():
            if c > union.get(elem, 0):
                union[elem] = c
        return self._from_counts(union)

    # -------------------------- Helpers -------------------------- #
    def _positive(self) -> Dict[Hashable, int]:
        return {elem: c for elem, c in self.counts.items() if c > 0}

    def _from_counts(self, counts: Dict[Hashable, int]) -> "Counter":
        out = self.__class__()
        out.counts = counts
        return out
