"""
Random sources for measurement sampling.

A random source is any callable returning a float in ``[0, 1)``. Registers
receive one at construction and call it once per measurement whose
outcome is uncertain, so seeding the source makes a whole simulation
reproducible.
"""

from __future__ import annotations

import secrets
from typing import Callable, List, Optional

import numpy as np

RandFn = Callable[[], float]


class RandomSource:
    """
    Seedable uniform source backed by ``numpy.random.Generator``.

    Without a seed the generator is seeded from OS entropy. ``spawn``
    derives statistically independent children, deterministically when the
    parent was seeded, so repeated shots can each draw from their own
    stream.

    Example
    -------
    >>> src = RandomSource(seed=7)
    >>> 0.0 <= src() < 1.0
    True
    """

    def __init__(self, seed: Optional[int | np.random.SeedSequence] = None):
        if isinstance(seed, np.random.SeedSequence):
            self._seed_seq = seed
        else:
            self._seed_seq = np.random.SeedSequence(seed)
        self._rng = np.random.Generator(np.random.PCG64(self._seed_seq))

    @property
    def seed(self) -> Optional[int]:
        """The entropy the source was built from."""
        return self._seed_seq.entropy

    def __call__(self) -> float:
        return float(self._rng.random())

    def spawn(self, n: int) -> List["RandomSource"]:
        """Return ``n`` independent child sources."""
        if n < 0:
            raise ValueError(f"Cannot spawn a negative number of sources: {n}")
        return [RandomSource(child) for child in self._seed_seq.spawn(n)]

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed})"


class CryptoRandomSource:
    """Non-reproducible source drawing 53 random bits from ``secrets``."""

    def __call__(self) -> float:
        return secrets.randbits(53) / float(1 << 53)

    def spawn(self, n: int) -> List["CryptoRandomSource"]:
        return [CryptoRandomSource() for _ in range(n)]

    def __repr__(self) -> str:
        return "CryptoRandomSource()"


def crypto_rand() -> CryptoRandomSource:
    return CryptoRandomSource()


def spawn(rand: RandFn, n: int) -> List[RandFn]:
    """
    Derive ``n`` independent sources from ``rand``.

    Sources without a ``spawn`` method (plain functions) are reused as-is.
    """
    spawner = getattr(rand, "spawn", None)
    if spawner is None:
        return [rand] * n
    return spawner(n)


__all__ = ["CryptoRandomSource", "RandFn", "RandomSource", "crypto_rand", "spawn"]
