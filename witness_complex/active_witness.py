"""witness_complex.active_witness

A witness seen through its nearest-landmark ranking.

The ranking comes from the search index as a lazy iterator. `ActiveWitness`
caches what it has pulled so far, so the recursive construction can rescan
any prefix of the ranking without touching the index again, and only pulls
a new entry (exactly one at a time) when a scan walks past the cache.

Cursor positions are plain ints: 0 is the nearest landmark.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List

from .schema import IdDistancePair


class ActiveWitness:

    def __init__(self, search_result: Iterable[IdDistancePair]):
        self._source = iter(search_result)
        self._cache: List[IdDistancePair] = []
        self._exhausted = False

    def __len__(self) -> int:
        return len(self._cache)

    def __repr__(self) -> str:
        state = "exhausted" if self._exhausted else "open"
        return f"ActiveWitness(cached={len(self._cache)}, {state})"

    @property
    def exhausted(self) -> bool:
        """True once the index reported there are no more landmarks."""
        return self._exhausted

    def begin(self) -> int:
        return 0

    def _expand(self) -> bool:
        if self._exhausted:
            return False
        try:
            lid, dist2 = next(self._source)
        except StopIteration:
            self._exhausted = True
            return False
        self._cache.append((int(lid), float(dist2)))
        return True

    def is_end(self, pos: int) -> bool:
        """True when no entry exists at `pos`, pulling from the index if needed."""
        while pos >= len(self._cache):
            if not self._expand():
                return True
        return False

    def entry(self, pos: int) -> IdDistancePair:
        if self.is_end(pos):
            raise IndexError(f"nearest-landmark ranking has no entry at position {pos}")
        return self._cache[pos]

    def iterate(self, pos: int = 0) -> Iterator[IdDistancePair]:
        """Entries from `pos` on, extending the cache lazily."""
        while not self.is_end(pos):
            yield self._cache[pos]
            pos += 1

    def cached(self) -> List[IdDistancePair]:
        """Copy of the entries pulled so far."""
        return list(self._cache)
