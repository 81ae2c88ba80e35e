#!/usr/bin/env python3
"""Time naive vs NTT polynomial multiplication to locate the dispatch threshold.

Run with: python profile_multiply.py --sizes 8 16 32 64 128 256
"""

import argparse
import random
import time
from typing import Dict, List, Optional, Sequence

from ntt_poly import FF, Polynomial, naive_multiply, ntt_multiply
from ntt_poly.polynomial import NAIVE_THRESHOLD

DEFAULT_SIZES = [4, 8, 16, 32, 48, 64, 96, 128, 256]


def _random_polynomial(size: int, rng: random.Random) -> Polynomial:
    return Polynomial([rng.randrange(FF.order) for _ in range(size)])


def compare_paths(
    sizes: Sequence[int],
    repeats: int = 3,
    seed: int = 0,
) -> Dict[int, Dict[str, float]]:
    """Best-of-repeats wall time of both multiplication paths for each operand size.

    Raises:
        AssertionError: If the two paths disagree on any product.
    """
    rng = random.Random(seed)
    results: Dict[int, Dict[str, float]] = {}
    for size in sizes:
        lhs = _random_polynomial(size, rng)
        rhs = _random_polynomial(size, rng)
        timings: Dict[str, List[float]] = {"naive": [], "ntt": []}
        for _ in range(repeats):
            start = time.perf_counter()
            naive = naive_multiply(lhs, rhs)
            timings["naive"].append(time.perf_counter() - start)

            start = time.perf_counter()
            fast = ntt_multiply(lhs, rhs)
            timings["ntt"].append(time.perf_counter() - start)

            assert naive == fast, f"Multiplication paths disagree at size {size}"
        results[size] = {name: min(values) for name, values in timings.items()}
    return results


def print_timings(results: Dict[int, Dict[str, float]]) -> None:
    """Print the timing table and the first size where the NTT wins."""
    print("\n" + "=" * 50)
    print("MULTIPLICATION PROFILE")
    print("=" * 50)
    print(f"\n{'Size':<8} {'Naive (ms)':<14} {'NTT (ms)':<14} {'Faster':<8}")
    print("-" * 50)
    crossover = None
    for size, row in sorted(results.items()):
        faster = "ntt" if row["ntt"] < row["naive"] else "naive"
        if faster == "ntt" and crossover is None:
            crossover = size
        print(f"{size:<8} {row['naive'] * 1e3:<14.3f} {row['ntt'] * 1e3:<14.3f} {faster:<8}")
    print("-" * 50)
    print(f"Current NAIVE_THRESHOLD: {NAIVE_THRESHOLD}")
    if crossover is None:
        print("NTT never faster in the measured range")
    else:
        print(f"NTT faster from size {crossover}")
    print("=" * 50)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--sizes", type=int, nargs="+", default=DEFAULT_SIZES,
                        help="operand sizes to time")
    parser.add_argument("--repeats", type=int, default=3, help="runs per size (best is kept)")
    parser.add_argument("--seed", type=int, default=0, help="RNG seed for the operands")
    args = parser.parse_args(argv)

    print(f"Profiling multiplication over GF({FF.order}) for sizes {args.sizes}...")
    results = compare_paths(args.sizes, repeats=args.repeats, seed=args.seed)
    print_timings(results)


if __name__ == "__main__":
    main()
