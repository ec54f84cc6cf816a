"""witness_complex.io

Point clouds in, complexes out.

- load_points: text (whitespace or comma separated) or .npy point clouds
- complex_to_json / save_complex / load_complex: a complex as plain JSON,
  simplices listed in filtration order so reloading preserves closure
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import json

import numpy as np
from numpy.typing import NDArray

from .simplex_tree import FilteredComplex
from .utils import as_point_array, to_jsonable


def load_points(path: str | Path) -> NDArray[np.float64]:
    """Read a (N, d) point cloud; one point per line for text files."""
    path = Path(path)
    if path.suffix == ".npy":
        arr = np.load(path)
    else:
        text = path.read_text(encoding="utf-8")
        delimiter = "," if "," in text else None
        arr = np.loadtxt(path, delimiter=delimiter, ndmin=2)
    return as_point_array(arr, str(path))


def complex_to_dict(complex) -> Dict[str, Any]:
    return {
        "dimension": int(complex.dimension()),
        "upper_bound_dimension": int(complex.upper_bound_dimension()),
        "num_vertices": int(complex.num_vertices()),
        "simplices": [
            {"simplex": list(simplex), "filtration": value}
            for simplex, value in complex.get_filtration()
        ],
    }


def complex_to_json(complex, indent: int = 2) -> str:
    """Convert a complex to a JSON string."""
    return json.dumps(to_jsonable(complex_to_dict(complex)), indent=indent, ensure_ascii=False)


def save_complex(complex, path: str | Path, indent: int = 2) -> Path:
    """Save a complex to JSON on disk."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(complex_to_json(complex, indent=indent), encoding="utf-8")
    return path


def load_complex(path: str | Path) -> FilteredComplex:
    """Inverse of `save_complex`."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    complex = FilteredComplex()
    for entry in data.get("simplices", []):
        complex.insert_simplex(entry["simplex"], float(entry["filtration"]))
    if "upper_bound_dimension" in data:
        complex.set_dimension(int(data["upper_bound_dimension"]))
    elif "dimension" in data:
        complex.set_dimension(int(data["dimension"]))
    return complex
