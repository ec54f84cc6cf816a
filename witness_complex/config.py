"""witness_complex.config

Centralised configuration + provenance helpers.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


def default_config() -> Dict[str, Any]:
    """Return a *copy* of the default configuration.

    The defaults build the strict (non-relaxed) weak witness complex:
    - squared relaxation alpha^2 = 0
    - no limit on the dimension of the produced simplices
    - nearest landmarks answered by a scipy k-d tree

    You can override any key in the returned dict.
    """
    return {
        # --- construction ---
        "max_alpha_square": 0.0,        # squared relaxation, same units as the squared distances
        "limit_dimension": None,        # None = no limit

        # --- nearest-landmark search ---
        "search": "kd_tree",            # "kd_tree" | "brute_force"
        "leaf_size": 16,                # cKDTree leafsize
        "initial_k": 8,                 # first incremental batch; doubles on every refill

        # --- output ---
        "verbose": False,
    }


def merge_config(overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Defaults updated with `overrides`. Unknown keys are rejected."""
    cfg = default_config()
    if overrides:
        unknown = sorted(set(overrides) - set(cfg))
        if unknown:
            raise ValueError(f"unknown configuration keys: {unknown}")
        cfg.update(overrides)
    return cfg


def get_library_versions() -> Dict[str, str]:
    """Collect versions of key libraries for provenance."""
    versions: Dict[str, str] = {}

    def _add(pkg: str) -> None:
        try:
            import importlib.metadata as md
            versions[pkg] = md.version(pkg)
        except Exception:
            pass

    for pkg in ["numpy", "scipy", "gudhi"]:
        _add(pkg)
    return versions
