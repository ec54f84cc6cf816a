"""Witness complex of a noisy circle

Landmarks are every 25th sample of a noisy circle, witnesses are all samples.
With a small relaxation the complex is a cycle of edges; raising alpha^2
fills it in.

Run:
    python examples/circle_witness_complex.py
"""

import numpy as np

from witness_complex import build_witness_complex, check_downward_closure, default_config, print_complex_summary


def noisy_circle(n: int = 500, noise: float = 0.05, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    theta = rng.uniform(0.0, 2.0 * np.pi, size=n)
    pts = np.stack([np.cos(theta), np.sin(theta)], axis=1)
    return pts + rng.normal(scale=noise, size=pts.shape)


def main() -> None:
    witnesses = noisy_circle()
    landmarks = witnesses[::25]

    for alpha2 in (0.0, 0.05, 0.5):
        cfg = default_config()
        cfg["max_alpha_square"] = alpha2
        cfg["limit_dimension"] = 2

        complex = build_witness_complex(landmarks, witnesses, config=cfg)

        print("\n" + "=" * 72)
        print(f"alpha^2 = {alpha2}")
        print_complex_summary(complex)
        assert not check_downward_closure(complex)

        edges = sorted(complex.simplices(dim=1), key=lambda item: item[1])
        print("  earliest edges:")
        for simplex, value in edges[:5]:
            print(f"    {simplex}  f={value:.4f}")


if __name__ == "__main__":
    main()
