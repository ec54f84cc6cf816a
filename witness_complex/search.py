"""witness_complex.search

Nearest-landmark search: the spatial index answering "which landmarks are
closest to this point, in order" one neighbour at a time.

Two indexes are provided:
- KdTreeSearch: scipy's cKDTree, queried in doubling batches
- BruteForceSearch: one numpy pass over all landmarks per query

Distances are always *squared* Euclidean distances, recomputed from the
coordinates so both indexes report identical values for identical inputs.

Tie-break: landmarks at equal squared distance are yielded by increasing
landmark id (for KdTreeSearch, within each batch; a tie straddling a batch
boundary keeps the tree's choice of which landmark came first).
The tree fills batches using its own distance arithmetic, which can differ
from the recomputed value in the last ulp; KdTreeSearch clamps every
yielded distance to the largest one yielded so far, so the ranking stays
non-decreasing.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional

import numpy as np
from numpy.typing import NDArray
from scipy.spatial import cKDTree

from .schema import IdDistancePair
from .utils import as_point_array


def _squared_distances(landmarks: NDArray[np.float64], point: NDArray[np.float64]) -> NDArray[np.float64]:
    diff = landmarks - point[None, :]
    return np.einsum("ij,ij->i", diff, diff)


class BruteForceSearch:
    """Exact ordering of all landmarks, computed once per query."""

    def __init__(self, landmarks: Any):
        self.landmarks = as_point_array(landmarks, "landmarks")

    def __len__(self) -> int:
        return int(self.landmarks.shape[0])

    def query_incremental_nearest_neighbors(self, point: Any) -> Iterator[IdDistancePair]:
        point = np.asarray(point, dtype=np.float64)
        return self._iterate(point)

    def _iterate(self, point: NDArray[np.float64]) -> Iterator[IdDistancePair]:
        if len(self) == 0:
            return
        sq = _squared_distances(self.landmarks, point)
        # stable sort keeps equal distances in landmark id order
        order = np.argsort(sq, kind="stable")
        for j in order:
            yield int(j), float(sq[j])


class KdTreeSearch:
    """Incremental k-nearest-neighbour queries over a cKDTree.

    Each refill re-queries the tree with twice as many neighbours and only
    yields the landmarks not produced yet, so a consumer that stops early
    never pays for the full ordering.
    """

    def __init__(self, landmarks: Any, leaf_size: int = 16, initial_k: int = 8):
        if int(initial_k) < 1:
            raise ValueError("initial_k must be >= 1")
        self.landmarks = as_point_array(landmarks, "landmarks")
        self.initial_k = int(initial_k)
        self._tree: Optional[cKDTree] = None
        if len(self) > 0:
            self._tree = cKDTree(self.landmarks, leafsize=int(leaf_size))

    def __len__(self) -> int:
        return int(self.landmarks.shape[0])

    def query_incremental_nearest_neighbors(self, point: Any) -> Iterator[IdDistancePair]:
        point = np.asarray(point, dtype=np.float64)
        return self._iterate(point)

    def _iterate(self, point: NDArray[np.float64]) -> Iterator[IdDistancePair]:
        n = len(self)
        if n == 0 or self._tree is None:
            return
        seen = set()
        last = 0.0
        k = min(self.initial_k, n)
        while True:
            _, idx = self._tree.query(point, k=k)
            idx = np.atleast_1d(idx).astype(np.intp)
            sq = _squared_distances(self.landmarks[idx], point)
            for j in np.lexsort((idx, sq)):
                lid = int(idx[j])
                if lid in seen:
                    continue
                seen.add(lid)
                # cKDTree picks the batch with its own arithmetic; never dip below what was yielded
                last = max(last, float(sq[j]))
                yield lid, last
            if k >= n:
                return
            k = min(2 * k, n)


def make_search(landmarks: Any, config: Optional[Dict[str, Any]] = None):
    """Build the search index named by `config["search"]`."""
    cfg = config or {}
    name = str(cfg.get("search", "kd_tree")).lower()
    if name == "kd_tree":
        return KdTreeSearch(
            landmarks,
            leaf_size=int(cfg.get("leaf_size", 16)),
            initial_k=int(cfg.get("initial_k", 8)),
        )
    if name == "brute_force":
        return BruteForceSearch(landmarks)
    raise ValueError(f"unknown search '{name}' (expected 'kd_tree' or 'brute_force')")
