"""witness_complex.utils

Small utilities used throughout the codebase.
"""

from __future__ import annotations

from typing import Any, Iterator, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray


def facets(simplex: Sequence[int]) -> Iterator[Tuple[int, ...]]:
    """Faces of codimension one, removing one vertex at a time (in position order)."""
    for skip in range(len(simplex)):
        yield tuple(v for i, v in enumerate(simplex) if i != skip)


def as_point_array(points: Any, name: str = "points") -> NDArray[np.float64]:
    """Validate a point range into a (N, d) float64 array.

    An empty range becomes a (0, d) array ((0, 0) when d is unknown).
    """
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return arr.reshape(0, arr.shape[-1] if arr.ndim == 2 else 0)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be a 2-D array of shape (N, d), got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} contains non-finite coordinates")
    return arr


def to_jsonable(obj: Any) -> Any:
    """Recursively convert numpy types into JSON-friendly python types."""
    if isinstance(obj, (str, int, float, bool)) or obj is None:
        return obj
    if isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, (np.floating,)):
        return float(obj)
    if isinstance(obj, (np.integer,)):
        return int(obj)
    # fall back to string
    return str(obj)
