"""witness_complex.analysis

High-level entry points:
- build_witness_complex: landmarks + witnesses + config -> filled complex
- summarise_complex / print_complex_summary: counts per dimension, provenance
- check_downward_closure / check_filtration_monotonicity: validity audits

This is the "make it run" module used by the examples and the CLI script.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, Union

from .config import get_library_versions, merge_config
from .schema import ComplexSummary, Simplex
from .simplex_tree import FilteredComplex
from .utils import facets
from .witness_complex import WitnessComplex


def build_witness_complex(
    landmarks: Any,
    witnesses: Any,
    *,
    config: Optional[Dict[str, Any]] = None,
    complex=None,
    search=None,
    verbose: bool = False,
):
    """Build the witness complex and return the filled complex.

    Parameters
    ----------
    landmarks, witnesses:
        Point ranges of shape (N, d).
    config:
        Overrides for `default_config()`.
    complex:
        Target complex (must be empty). A new `FilteredComplex` by default.
    search:
        Optional prebuilt nearest-landmark index (overrides `config["search"]`).
    verbose:
        Print basic progress.

    Raises
    ------
    ValueError if construction refused to run (non-empty complex, negative
    relaxation or negative dimension limit).
    """
    cfg = merge_config(config)
    if verbose:
        cfg["verbose"] = True

    if complex is None:
        complex = FilteredComplex()

    wc = WitnessComplex(landmarks, witnesses, search=search, config=cfg)
    if cfg["verbose"]:
        print(
            f"[witness_complex] {wc.num_landmarks} landmarks, {wc.num_witnesses} witnesses, "
            f"alpha^2={cfg['max_alpha_square']}, limit_dimension={cfg['limit_dimension']}"
        )

    ok = wc.create_complex(
        complex,
        float(cfg["max_alpha_square"]),
        limit_dimension=cfg["limit_dimension"],
    )
    if not ok:
        raise ValueError("witness complex construction failed its preconditions (see stderr)")

    if cfg["verbose"]:
        print_complex_summary(summarise_complex(complex, cfg))
    return complex


def summarise_complex(complex, config: Optional[Dict[str, Any]] = None) -> ComplexSummary:
    """Counts per dimension plus provenance."""
    by_dim: Dict[int, int] = {}
    max_filtration = 0.0
    num_simplices = 0
    for simplex, value in complex.simplices():
        d = len(simplex) - 1
        by_dim[d] = by_dim.get(d, 0) + 1
        max_filtration = max(max_filtration, float(value))
        num_simplices += 1

    summary: ComplexSummary = {
        "num_vertices": int(complex.num_vertices()),
        "num_simplices": num_simplices,
        "dimension": int(complex.dimension()),
        "simplices_by_dimension": dict(sorted(by_dim.items())),
        "max_filtration": max_filtration,
        "library_versions": get_library_versions(),
    }
    if config is not None:
        summary["config"] = dict(config)
    return summary


def print_complex_summary(summary: Union[ComplexSummary, Any]) -> None:
    """Pretty-print a lightweight summary (accepts a summary or a complex)."""
    if not isinstance(summary, dict):
        summary = summarise_complex(summary)
    print("Witness complex")
    print(f"  vertices:   {summary.get('num_vertices')}")
    print(f"  simplices:  {summary.get('num_simplices')}")
    print(f"  dimension:  {summary.get('dimension')}")
    for d, count in (summary.get("simplices_by_dimension") or {}).items():
        print(f"    dim {d}: {count}")
    print(f"  max filtration: {summary.get('max_filtration', 0.0):.4f}")


def check_downward_closure(complex) -> List[Simplex]:
    """Simplices with at least one facet missing from the complex (empty when closed)."""
    bad: List[Simplex] = []
    for simplex, _ in complex.simplices():
        if len(simplex) < 2:
            continue
        for facet in facets(simplex):
            if complex.find(facet) is None:
                bad.append(simplex)
                break
    return bad


def check_filtration_monotonicity(complex) -> List[Tuple[Simplex, Simplex]]:
    """(facet, simplex) pairs where the facet appears strictly later than the simplex."""
    bad: List[Tuple[Simplex, Simplex]] = []
    for simplex, value in complex.simplices():
        if len(simplex) < 2:
            continue
        for facet in facets(simplex):
            handle = complex.find(facet)
            if handle is not None and complex.filtration(handle) > value:
                bad.append((facet, simplex))
    return bad
