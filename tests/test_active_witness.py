import pytest

from witness_complex import ActiveWitness


class _CountingRanking:
    """Iterator over a fixed ranking that counts how often it is advanced."""

    def __init__(self, pairs):
        self._pairs = list(pairs)
        self.pulls = 0

    def __iter__(self):
        return self

    def __next__(self):
        if self.pulls >= len(self._pairs):
            raise StopIteration
        pair = self._pairs[self.pulls]
        self.pulls += 1
        return pair


_RANKING = [(3, 0.1), (0, 0.4), (2, 0.4), (1, 2.5)]


def test_expands_one_entry_at_a_time():
    src = _CountingRanking(_RANKING)
    aw = ActiveWitness(src)
    assert src.pulls == 0
    assert aw.entry(0) == (3, 0.1)
    assert src.pulls == 1
    assert aw.entry(2) == (2, 0.4)
    assert src.pulls == 3
    assert len(aw) == 3


def test_rescanning_a_prefix_is_free():
    src = _CountingRanking(_RANKING)
    aw = ActiveWitness(src)
    first = list(zip(range(3), aw.iterate()))
    assert src.pulls == 3
    again = list(zip(range(3), aw.iterate()))
    assert first == again
    assert src.pulls == 3


def test_end_of_ranking():
    aw = ActiveWitness(_CountingRanking(_RANKING))
    assert list(aw.iterate()) == _RANKING
    assert aw.exhausted
    assert aw.is_end(4)
    assert not aw.is_end(3)
    with pytest.raises(IndexError):
        aw.entry(4)


def test_iterate_from_position():
    aw = ActiveWitness(_CountingRanking(_RANKING))
    assert list(aw.iterate(2)) == _RANKING[2:]
    assert aw.begin() == 0


def test_empty_ranking():
    aw = ActiveWitness(iter([]))
    assert aw.is_end(aw.begin())
    assert aw.exhausted
    assert aw.cached() == []
