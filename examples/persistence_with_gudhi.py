"""Hand the witness complex to gudhi for persistence

The witness_complex package only builds the filtered complex; persistence is
gudhi's job. Requires `pip install gudhi`.

Run:
    python examples/persistence_with_gudhi.py
"""

import numpy as np

from witness_complex import build_witness_complex


def main() -> None:
    rng = np.random.default_rng(1)
    theta = rng.uniform(0.0, 2.0 * np.pi, size=400)
    witnesses = np.stack([np.cos(theta), np.sin(theta)], axis=1)
    landmarks = witnesses[:20]

    complex = build_witness_complex(
        landmarks,
        witnesses,
        config={"max_alpha_square": 0.1, "limit_dimension": 2},
        verbose=True,
    )

    st = complex.to_simplex_tree()
    st.compute_persistence(homology_coeff_field=2, min_persistence=0.0)
    for dim, (birth, death) in st.persistence():
        print(f"  H{dim}: [{birth:.4f}, {death:.4f})")


if __name__ == "__main__":
    main()
