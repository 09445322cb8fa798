"""Pytest configuration and shared fixtures for shorsim tests.

This module provides:
- Deterministic RNG fixtures for numpy
- A seeded random source for registers
"""

import os

import numpy as np
import pytest

from shorsim.rand import RandomSource


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def rand() -> RandomSource:
    """Seeded measurement source for registers."""
    return RandomSource(_seed())


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set the numpy global seed for reproducibility."""
    np.random.seed(_seed())
