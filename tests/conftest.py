"""Shared fixtures for ntt_poly tests."""

import random
import sys
from pathlib import Path

import pytest

# Put the repository root on the path so the suite runs from a checkout
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from ntt_poly import FF, Polynomial  # noqa: E402


@pytest.fixture
def rng():
    """Deterministic RNG for reproducible tests."""
    return random.Random(42)


@pytest.fixture
def random_poly(rng):
    """Factory for random polynomials over FF, optionally with a fixed constant term."""
    def make(size, constant=None):
        coeffs = [rng.randrange(FF.order) for _ in range(size)]
        if constant is not None and size:
            coeffs[0] = constant
        return Polynomial(coeffs)
    return make
