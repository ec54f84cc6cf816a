"""witness_complex.simplex_tree

Filtered simplicial complexes the builder can fill.

- FilteredComplex: a plain dict {simplex: filtration}, no dependencies
- GudhiComplex: the same contract on top of a gudhi.SimplexTree

Both canonicalise simplices to sorted tuples, so the vertex order used by the
caller (the builder pushes landmarks nearest first) does not matter.

Re-inserting a present simplex never adds a second copy; its filtration value
becomes the smaller of the stored and the new value (a simplex appears at the
earliest relaxation any witness grants it).
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from .schema import FilteredSimplex, Simplex


def canonical_simplex(vertices: Iterable[int]) -> Simplex:
    simplex = tuple(sorted(int(v) for v in vertices))
    if not simplex:
        raise ValueError("a simplex needs at least one vertex")
    for a, b in zip(simplex, simplex[1:]):
        if a == b:
            raise ValueError(f"repeated vertex {a} in simplex {simplex}")
    return simplex


def _try_import_gudhi():
    try:
        import gudhi  # type: ignore
        return gudhi
    except ImportError as exc:
        raise ImportError(
            "gudhi is required for SimplexTree export; install it with `pip install gudhi`"
        ) from exc


class FilteredComplex:
    """In-memory filtered simplicial complex."""

    def __init__(self) -> None:
        self._filtration: Dict[Simplex, float] = {}
        self._num_vertices = 0
        self._dimension = -1
        self._upper_bound: Optional[int] = None

    # --- contract used by the builder ---

    def num_vertices(self) -> int:
        return self._num_vertices

    def insert_simplex(self, vertices: Sequence[int], filtration: float) -> Simplex:
        simplex = canonical_simplex(vertices)
        value = float(filtration)
        old = self._filtration.get(simplex)
        if old is None:
            self._filtration[simplex] = value
            if len(simplex) == 1:
                self._num_vertices += 1
            self._dimension = max(self._dimension, len(simplex) - 1)
        elif value < old:
            self._filtration[simplex] = value
        return simplex

    def find(self, vertices: Sequence[int]) -> Optional[Simplex]:
        simplex = tuple(sorted(int(v) for v in vertices))
        if simplex in self._filtration:
            return simplex
        return self.null_simplex()

    def null_simplex(self) -> None:
        return None

    def filtration(self, handle: Simplex) -> float:
        return self._filtration[handle]

    def set_dimension(self, dimension: int) -> None:
        """Record an upper bound on the dimension (the builder declares the last pass it ran)."""
        self._upper_bound = int(dimension)

    # --- inspection ---

    def dimension(self) -> int:
        """Highest dimension of a stored simplex (-1 for an empty complex)."""
        return self._dimension

    def upper_bound_dimension(self) -> int:
        if self._upper_bound is None:
            return self._dimension
        return max(self._upper_bound, self._dimension)

    def num_simplices(self) -> int:
        return len(self._filtration)

    def __len__(self) -> int:
        return len(self._filtration)

    def __contains__(self, vertices: Sequence[int]) -> bool:
        return self.find(vertices) is not None

    def simplices(self, dim: Optional[int] = None) -> Iterator[FilteredSimplex]:
        """(simplex, filtration) pairs, optionally restricted to one dimension."""
        for simplex, value in self._filtration.items():
            if dim is None or len(simplex) - 1 == dim:
                yield simplex, value

    def get_filtration(self) -> List[FilteredSimplex]:
        """All simplices ordered by (filtration, dimension, vertices): faces come first."""
        return sorted(self._filtration.items(), key=lambda item: (item[1], len(item[0]), item[0]))

    def to_simplex_tree(self):
        """Copy into a gudhi.SimplexTree (for persistence computations downstream)."""
        gudhi = _try_import_gudhi()
        st = gudhi.SimplexTree()
        for simplex, value in self.get_filtration():
            st.insert(list(simplex), filtration=value)
        return st


class GudhiComplex:
    """Builder contract on top of a gudhi.SimplexTree.

    Handles are canonical tuples. gudhi's own `insert` already keeps the
    minimum filtration of repeated insertions.
    """

    def __init__(self, simplex_tree=None) -> None:
        if simplex_tree is None:
            simplex_tree = _try_import_gudhi().SimplexTree()
        self.simplex_tree = simplex_tree
        self._upper_bound: Optional[int] = None

    def num_vertices(self) -> int:
        return int(self.simplex_tree.num_vertices())

    def insert_simplex(self, vertices: Sequence[int], filtration: float) -> Simplex:
        simplex = canonical_simplex(vertices)
        self.simplex_tree.insert(list(simplex), filtration=float(filtration))
        return simplex

    def find(self, vertices: Sequence[int]) -> Optional[Simplex]:
        simplex = tuple(sorted(int(v) for v in vertices))
        if self.simplex_tree.find(list(simplex)):
            return simplex
        return self.null_simplex()

    def null_simplex(self) -> None:
        return None

    def filtration(self, handle: Simplex) -> float:
        return float(self.simplex_tree.filtration(list(handle)))

    def set_dimension(self, dimension: int) -> None:
        self._upper_bound = int(dimension)

    def dimension(self) -> int:
        return int(self.simplex_tree.dimension())

    def upper_bound_dimension(self) -> int:
        if self._upper_bound is None:
            return int(self.simplex_tree.upper_bound_dimension())
        return max(self._upper_bound, self.dimension())

    def num_simplices(self) -> int:
        return int(self.simplex_tree.num_simplices())

    def simplices(self, dim: Optional[int] = None) -> Iterator[FilteredSimplex]:
        for simplex, value in self.simplex_tree.get_simplices():
            if dim is None or len(simplex) - 1 == dim:
                yield tuple(int(v) for v in simplex), float(value)

    def get_filtration(self) -> List[FilteredSimplex]:
        return [(tuple(int(v) for v in s), float(f)) for s, f in self.simplex_tree.get_filtration()]

    def to_simplex_tree(self):
        return self.simplex_tree
