"""
Witness Complex: Construction
=============================

This module handles:
1. Seeding the complex with one vertex per landmark
2. Growing simplices dimension by dimension, witness by witness
3. Filtration values (relaxation thresholds) and the facet check

A (weak) witness complex with squared relaxation alpha^2 contains the
simplex sigma when some witness w has every landmark of sigma within
alpha^2 of its k-th nearest landmark distance, in the relaxed sense below.
The filtration value of sigma is the smallest relaxation at which it shows
up, never below the values of its facets.

Construction order matters: dimension k is finished for *all* witnesses
before dimension k+1 starts, so the facet lookups of pass k+1 only ever see
simplices finalised by earlier passes.
"""

from __future__ import annotations

import math
import sys
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .active_witness import ActiveWitness
from .schema import LandmarkId, SimplicialComplexForWitness
from .search import make_search
from .utils import as_point_array, facets


def _report(message: str) -> None:
    print(f"[witness_complex] {message}", file=sys.stderr)


class WitnessComplex:
    """Constructs the (weak) witness complex of `witnesses` over `landmarks`.

    Parameters
    ----------
    landmarks : array-like, shape (nbL, d)
        Vertices of the complex. Landmark ids are positions in this range.
    witnesses : array-like, shape (nbW, d)
        Points that vouch for simplices. Their order does not matter.
    search : NearestLandmarkSearch, optional
        Index answering incremental nearest-landmark queries. Built from
        `config` (k-d tree by default) when omitted.
    config : dict, optional
        Only the search-related keys are read here.
    """

    def __init__(
        self,
        landmarks: Any,
        witnesses: Any,
        search=None,
        config: Optional[Dict[str, Any]] = None,
    ):
        self.landmarks: NDArray[np.float64] = as_point_array(landmarks, "landmarks")
        self.witnesses: NDArray[np.float64] = as_point_array(witnesses, "witnesses")
        if (
            self.landmarks.shape[0] > 0
            and self.witnesses.shape[0] > 0
            and self.landmarks.shape[1] != self.witnesses.shape[1]
        ):
            raise ValueError(
                f"landmarks live in dimension {self.landmarks.shape[1]} "
                f"but witnesses in dimension {self.witnesses.shape[1]}"
            )
        self.search = search if search is not None else make_search(self.landmarks, config)
        self.verbose = bool((config or {}).get("verbose", False))

    @property
    def num_landmarks(self) -> int:
        return int(self.landmarks.shape[0])

    @property
    def num_witnesses(self) -> int:
        return int(self.witnesses.shape[0])

    def get_point(self, vertex: LandmarkId) -> NDArray[np.float64]:
        """Coordinates of the landmark behind `vertex`."""
        return self.landmarks[vertex]

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def create_complex(
        self,
        complex: SimplicialComplexForWitness,
        max_alpha_square: float,
        limit_dimension: Optional[int] = None,
    ) -> bool:
        """Fill `complex` with the witness complex of relaxation `max_alpha_square`.

        Parameters
        ----------
        complex : SimplicialComplexForWitness
            Must be empty.
        max_alpha_square : float
            Squared relaxation, >= 0.
        limit_dimension : int, optional
            Highest simplex dimension to build (default: no limit).

        Returns
        -------
        False (and the complex untouched) when a precondition fails,
        True once construction completed.
        """
        if complex.num_vertices() > 0:
            _report("cannot create complex - complex is not empty.")
            return False
        if not max_alpha_square >= 0:
            _report("cannot create complex - squared relaxation parameter must be non-negative.")
            return False
        if limit_dimension is not None and not limit_dimension >= 0:
            _report("cannot create complex - limit dimension must be non-negative.")
            return False

        alpha2 = float(max_alpha_square)
        max_k = math.inf if limit_dimension is None else limit_dimension

        # Vertices first: a landmark is a vertex even if no witness ranks it first.
        for i in range(self.num_landmarks):
            complex.insert_simplex([i], 0.0)

        active_witnesses = [
            ActiveWitness(self.search.query_incremental_nearest_neighbors(w))
            for w in self.witnesses
        ]

        k = 1  # current dimension
        while active_witnesses and k <= max_k:
            simplex: List[LandmarkId] = []
            still_active: List[ActiveWitness] = []
            for aw in active_witnesses:
                ok = self._add_all_faces_of_dimension(
                    k, alpha2, math.inf, aw.begin(), simplex, complex, aw
                )
                assert not simplex, "simplex under construction not emptied by backtracking"
                if ok:
                    still_active.append(aw)
            if self.verbose:
                print(
                    f"[witness_complex] dimension {k}: "
                    f"{len(still_active)}/{len(active_witnesses)} witnesses stay active"
                )
            active_witnesses = still_active
            k += 1

        complex.set_dimension(k - 1)
        return True

    def _add_all_faces_of_dimension(
        self,
        dim: int,
        alpha2: float,
        norelax_dist2: float,
        curr_l: int,
        simplex: List[LandmarkId],
        sc: SimplicialComplexForWitness,
        aw: ActiveWitness,
    ) -> bool:
        """Insert every `dim`-extension of `simplex` this witness can vouch for.

        `simplex` is the prefix being grown (landmarks pushed nearest first) and
        `curr_l` the first ranking position still available to extend it.
        `norelax_dist2` is the distance of the first landmark skipped so far;
        landmarks farther than that plus alpha^2 are out of reach.

        Returns whether anything was inserted below this call, which decides
        whether the witness stays active for the next dimension.
        """
        if aw.is_end(curr_l):
            return False
        will_be_active = False
        l_it = curr_l
        if dim > 0:
            while not aw.is_end(l_it):
                lid, dist2 = aw.entry(l_it)
                if dist2 - alpha2 > norelax_dist2:
                    break
                simplex.append(lid)
                if sc.find(simplex) != sc.null_simplex():
                    will_be_active = self._add_all_faces_of_dimension(
                        dim - 1, alpha2, norelax_dist2, l_it + 1, simplex, sc, aw
                    ) or will_be_active
                assert simplex, "popping an empty simplex"
                simplex.pop()
                # the first omitted landmark fixes the no-relaxation distance
                if dist2 <= norelax_dist2:
                    norelax_dist2 = dist2
                will_be_active = self._add_all_faces_of_dimension(
                    dim, alpha2, norelax_dist2, l_it + 1, simplex, sc, aw
                ) or will_be_active
                l_it += 1
        else:
            while not aw.is_end(l_it):
                lid, dist2 = aw.entry(l_it)
                if dist2 - alpha2 > norelax_dist2:
                    break
                simplex.append(lid)
                # relaxation is 0 while nothing has been skipped (norelax is infinite)
                filtration_value = 0.0
                if dist2 > norelax_dist2:
                    filtration_value = dist2 - norelax_dist2
                ok, filtration_value = self._all_faces_in(simplex, filtration_value, sc)
                if ok:
                    will_be_active = True
                    sc.insert_simplex(simplex, filtration_value)
                assert simplex, "popping an empty simplex"
                simplex.pop()
                if dist2 < norelax_dist2:
                    norelax_dist2 = dist2
                l_it += 1
        return will_be_active

    def _all_faces_in(
        self,
        simplex: Sequence[LandmarkId],
        filtration_value: float,
        sc: SimplicialComplexForWitness,
    ) -> Tuple[bool, float]:
        """Check that every facet of `simplex` is already in `sc`.

        Returns (all present, filtration raised to the largest facet value).
        """
        for facet in facets(simplex):
            facet_sh = sc.find(facet)
            if facet_sh == sc.null_simplex():
                return False, filtration_value
            facet_value = sc.filtration(facet_sh)
            if facet_value > filtration_value:
                filtration_value = facet_value
        return True, filtration_value
