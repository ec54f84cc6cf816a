"""witness_complex

Weak witness complexes: a filtered simplicial complex on a few landmarks,
certified by the nearest-landmark rankings of many witness points.

The public API is intentionally small:

- default_config
- WitnessComplex (create_complex)
- build_witness_complex, summarise_complex, print_complex_summary
- check_downward_closure, check_filtration_monotonicity
- FilteredComplex, GudhiComplex
- KdTreeSearch, BruteForceSearch
- load_points, save_complex, load_complex
"""

from .config import default_config
from .active_witness import ActiveWitness
from .search import BruteForceSearch, KdTreeSearch, make_search
from .simplex_tree import FilteredComplex, GudhiComplex
from .witness_complex import WitnessComplex
from .analysis import (
    build_witness_complex,
    check_downward_closure,
    check_filtration_monotonicity,
    print_complex_summary,
    summarise_complex,
)
from .io import complex_to_json, load_complex, load_points, save_complex

__all__ = [
    "default_config",
    "ActiveWitness",
    "BruteForceSearch",
    "KdTreeSearch",
    "make_search",
    "FilteredComplex",
    "GudhiComplex",
    "WitnessComplex",
    "build_witness_complex",
    "check_downward_closure",
    "check_filtration_monotonicity",
    "print_complex_summary",
    "summarise_complex",
    "complex_to_json",
    "load_complex",
    "load_points",
    "save_complex",
]
