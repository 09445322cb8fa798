"""Shor example: factoring a small composite with period finding.

Run ``python examples/shor_factoring.py --N 15 --a 7 --seed 1`` to print the
register after every step of the circuit followed by one line per shot.
Shots marked with ``*`` produced a non-trivial factor.
"""

from __future__ import annotations

import argparse
from typing import List, Optional

import shorsim as ss


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--N", type=int, default=21, help="positive integer to factor")
    parser.add_argument("--t", type=int, default=4, help="precision bits")
    parser.add_argument("--shot", type=int, default=10, help="number of measurements")
    parser.add_argument("--a", type=int, default=None, help="coprime number of N")
    parser.add_argument("--seed", type=int, default=None, help="seed for measurements")
    parser.add_argument("--verbose", action="store_true", help="enable INFO logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the factoring circuit and print each stage and shot."""
    args = parse_args(argv)
    if args.verbose:
        ss.set_log_level("INFO")

    try:
        result = ss.factorize(args.N, a=args.a, t=args.t, shots=args.shot, seed=args.seed)
    except ValueError as exc:
        print(f"N={args.N}: {exc}")
        return 1

    if result.reason is not None:
        p, q = result.factors
        print(f"N={result.N} solved classically ({result.reason}). p={p}, q={q}.")
        return 0

    print(f"N={result.N}, a={result.a}, t={result.t}, shot={args.shot}, seed={args.seed}.\n")
    for title, reg in result.stages:
        ss.print_states(reg, result.control, result.target, title=title)

    for i, shot in enumerate(result.shots):
        mark = "*" if shot.found else " "
        line = (
            f"{mark} i={i:2d}: N={result.N}, a={result.a}. "
            f"s/r={shot.s:2d}/{shot.r:2d} ({shot.bits}={shot.phase:.3f})."
        )
        if not shot.rejected:
            line += f" p={shot.p}, q={shot.q}."
        print(line)

    if result.factors is None:
        print("\nNo non-trivial factor found.")
    else:
        p, q = result.factors
        print(f"\nN={result.N} = {p} x {q}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
