#!/usr/bin/env python3
"""
Witness Complex Builder
=======================

Build a witness complex from two point clouds and print its summary:

    python build_complex.py --landmarks L.txt --witnesses W.txt --alpha2 0.1 --max-dim 2

Point files hold one point per line (whitespace or comma separated), or are
.npy arrays. Use --output to save the complex as JSON.
"""

import argparse
import sys


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Build a (weak) witness complex.")
    parser.add_argument("--landmarks", required=True, help="landmark point file")
    parser.add_argument("--witnesses", required=True, help="witness point file")
    parser.add_argument("--alpha2", type=float, default=0.0, help="squared relaxation (default 0)")
    parser.add_argument("--max-dim", type=int, default=None, help="limit dimension (default: none)")
    parser.add_argument("--search", choices=["kd_tree", "brute_force"], default="kd_tree")
    parser.add_argument("--output", default=None, help="write the complex as JSON here")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    from witness_complex import build_witness_complex, load_points, print_complex_summary, save_complex

    args = parse_args(argv)
    landmarks = load_points(args.landmarks)
    witnesses = load_points(args.witnesses)

    config = {
        "max_alpha_square": args.alpha2,
        "limit_dimension": args.max_dim,
        "search": args.search,
    }
    try:
        complex = build_witness_complex(landmarks, witnesses, config=config, verbose=args.verbose)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if not args.verbose:
        print_complex_summary(complex)
    if args.output:
        path = save_complex(complex, args.output)
        print(f"\nSaved complex to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
