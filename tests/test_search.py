import numpy as np
import pytest

from witness_complex import BruteForceSearch, KdTreeSearch, make_search


def _make_landmarks(n=25, d=3, seed=0):
    rng = np.random.default_rng(seed)
    return rng.normal(size=(n, d))


def test_brute_force_orders_by_squared_distance():
    L = np.array([[0.0, 0.0], [3.0, 0.0], [1.0, 1.0]])
    pairs = list(BruteForceSearch(L).query_incremental_nearest_neighbors([0.0, 0.5]))
    assert [lid for lid, _ in pairs] == [0, 2, 1]
    assert pairs[0][1] == pytest.approx(0.25)
    assert pairs[1][1] == pytest.approx(1.25)
    assert pairs[2][1] == pytest.approx(9.25)


@pytest.mark.parametrize("initial_k", [1, 2, 8, 100])
def test_kd_tree_matches_brute_force(initial_k):
    L = _make_landmarks()
    q = np.array([0.1, -0.3, 0.2])
    kd = list(KdTreeSearch(L, initial_k=initial_k).query_incremental_nearest_neighbors(q))
    bf = list(BruteForceSearch(L).query_incremental_nearest_neighbors(q))
    assert [lid for lid, _ in kd] == [lid for lid, _ in bf]
    np.testing.assert_allclose([d for _, d in kd], [d for _, d in bf])
    assert len(kd) == len(L)


def test_ties_are_broken_by_landmark_id():
    L = np.array([[0.0, 1.0], [1.0, 0.0], [0.0, -1.0], [-1.0, 0.0]])
    for search in (BruteForceSearch(L), KdTreeSearch(L)):
        ids = [lid for lid, _ in search.query_incremental_nearest_neighbors([0.0, 0.0])]
        assert ids == [0, 1, 2, 3]


def test_kd_tree_is_lazy():
    L = _make_landmarks(n=50)
    it = KdTreeSearch(L, initial_k=1).query_incremental_nearest_neighbors(np.zeros(3))
    first = next(it)
    bf = next(BruteForceSearch(L).query_incremental_nearest_neighbors(np.zeros(3)))
    assert first[0] == bf[0]


def test_no_landmarks_means_immediate_exhaustion():
    for search in (BruteForceSearch(np.empty((0, 2))), KdTreeSearch(np.empty((0, 2)))):
        assert list(search.query_incremental_nearest_neighbors([0.0, 0.0])) == []


def test_make_search():
    L = _make_landmarks()
    assert isinstance(make_search(L, {"search": "kd_tree"}), KdTreeSearch)
    assert isinstance(make_search(L, {"search": "brute_force"}), BruteForceSearch)
    with pytest.raises(ValueError):
        make_search(L, {"search": "ball_tree"})


def test_rejects_malformed_landmarks():
    with pytest.raises(ValueError):
        BruteForceSearch(np.zeros((2, 2, 2)))
    with pytest.raises(ValueError):
        KdTreeSearch([[0.0, np.nan]])


class _SkewedTree:
    """Stands in for a cKDTree whose first batch misses the true nearest landmark."""

    def query(self, point, k):
        if k == 1:
            return 0.9, 0
        return np.array([0.9, 0.1]), np.array([0, 1])


def test_kd_tree_ranking_never_decreases_across_refills():
    L = np.array([[0.0, 0.0], [1.0, 0.0]])
    search = KdTreeSearch(L, initial_k=1)
    search._tree = _SkewedTree()
    pairs = list(search.query_incremental_nearest_neighbors([0.9, 0.0]))
    assert [lid for lid, _ in pairs] == [0, 1]
    assert pairs[0][1] == pytest.approx(0.81)
    assert pairs[1][1] >= pairs[0][1]
