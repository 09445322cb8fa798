"""Integer helpers used to screen inputs before period finding."""

from __future__ import annotations

import math
from typing import Callable, Optional, Tuple

import numpy as np


def gcd(a: int, b: int) -> int:
    """Greatest common divisor (always non-negative)."""
    return math.gcd(a, b)


def is_even(n: int) -> bool:
    return n % 2 == 0


def is_odd(n: int) -> bool:
    return n % 2 == 1


def is_prime(n: int) -> bool:
    """Trial-division primality test."""
    if n < 2:
        return False
    if n < 4:
        return True
    if n % 2 == 0:
        return False
    for d in range(3, math.isqrt(n) + 1, 2):
        if n % d == 0:
            return False
    return True


def base_exp(n: int) -> Optional[Tuple[int, int]]:
    """
    Return ``(a, b)`` with ``a**b == n`` and ``b >= 2``, or ``None``.

    The smallest base is returned, e.g. ``base_exp(64) == (2, 6)``.
    """
    if n < 4:
        return None
    for b in range(n.bit_length(), 1, -1):
        a = round(n ** (1.0 / b))
        for candidate in (a - 1, a, a + 1):
            if candidate > 1 and candidate**b == n:
                return candidate, b
    return None


def mod_exp2(a: int, j: int, n: int) -> int:
    """Return ``a**(2**j) mod n`` by repeated squaring."""
    if j < 0:
        raise ValueError(f"j must be non-negative, got {j}")
    if n < 1:
        raise ValueError(f"modulus must be positive, got {n}")
    value = a % n
    for _ in range(j):
        value = (value * value) % n
    return value


def coprime(n: int, rand: Optional[Callable[[], float]] = None) -> int:
    """Pick a random ``1 < a < n`` with ``gcd(a, n) == 1``."""
    if n < 3:
        raise ValueError(f"No coprime 1 < a < n exists for n={n}")
    if rand is None:
        rng = np.random.default_rng()
        rand = rng.random
    while True:
        a = 2 + int(rand() * (n - 2))
        if gcd(a, n) == 1:
            return a


__all__ = [
    "base_exp",
    "coprime",
    "gcd",
    "is_even",
    "is_odd",
    "is_prime",
    "mod_exp2",
]
