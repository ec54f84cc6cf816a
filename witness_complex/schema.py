"""witness_complex.schema

Lightweight data-model definitions used across the package.

We keep these as plain tuples / TypedDicts so that:
- complexes are JSON-serialisable with minimal fuss
- any simplicial complex container with the right methods can be the target

Vocabulary:
- landmarks are identified by their position in the landmark range (0..nbL-1)
- an id-distance pair is (landmark id, squared distance to the witness)
- a simplex is a tuple of strictly increasing landmark ids
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, Iterator, Optional, Protocol, Sequence, Tuple, TypedDict

import numpy as np
from numpy.typing import NDArray


LandmarkId = int
IdDistancePair = Tuple[LandmarkId, float]
Simplex = Tuple[LandmarkId, ...]
FilteredSimplex = Tuple[Simplex, float]
Config = Dict[str, Any]


class ComplexSummary(TypedDict, total=False):
    """Output of `analysis.summarise_complex`."""
    num_vertices: int
    num_simplices: int
    dimension: int
    simplices_by_dimension: Dict[int, int]
    max_filtration: float
    library_versions: Dict[str, str]
    config: Config


# ---------------------------------------------------------------------------
# Collaborator contracts
# ---------------------------------------------------------------------------

class NearestLandmarkSearch(Protocol):
    """Spatial index over the landmarks."""

    def query_incremental_nearest_neighbors(self, point: NDArray[np.float64]) -> Iterator[IdDistancePair]:
        """Id-distance pairs for `point`, nearest first, until the landmarks run out."""
        ...


class SimplicialComplexForWitness(Protocol):
    """What the witness complex builder needs from the complex it fills.

    `insert_simplex` must accept any vertex order and treat re-insertion of a
    present simplex as a no-op (apart from keeping the smaller filtration).
    """

    def num_vertices(self) -> int: ...

    def insert_simplex(self, vertices: Sequence[LandmarkId], filtration: float) -> Hashable: ...

    def find(self, vertices: Sequence[LandmarkId]) -> Optional[Hashable]: ...

    def null_simplex(self) -> Optional[Hashable]: ...

    def filtration(self, handle: Hashable) -> float: ...

    def set_dimension(self, dimension: int) -> None: ...
