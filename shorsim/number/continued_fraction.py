"""
Continued fractions for period extraction.

A measurement of the control register yields bits ``m`` whose binary
fraction approximates ``s / r``. The continued-fraction expansion of that
value, truncated once the remainder drops below ``eps``, has a convergent
whose denominator is the period candidate ``r``.
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from ..constants import CF_EPSILON


def binary_fraction(bits: Sequence[int]) -> float:
    """
    Interpret ``bits`` (most significant first) as ``0.b0 b1 b2 ...`` in base 2.

    >>> binary_fraction([1, 0, 1])
    0.625

    Raises:
        ValueError: If any entry is not 0 or 1.
    """
    value = 0.0
    for i, b in enumerate(bits):
        if b not in (0, 1):
            raise ValueError(f"bits must be 0 or 1, got {list(bits)}")
        if b:
            value += 0.5 ** (i + 1)
    return value


def continued_fraction(f: float, eps: float = CF_EPSILON) -> List[int]:
    """
    Return the partial quotients of ``f``.

    The integer part is taken as the next quotient and the expansion
    continues on the reciprocal of the fractional remainder until that
    remainder is smaller than ``eps``. Values below ``eps`` expand to
    ``[0]``.

    ``eps`` trades robustness against floating-point noise (larger) for
    the ability to resolve long expansions (smaller); the default suits
    control registers of a handful of qubits.

    >>> continued_fraction(0.8125)
    [0, 1, 4, 3]
    """
    if f < eps:
        return [0]

    quotients: List[int] = []
    r = f
    while True:
        t = math.trunc(r)
        quotients.append(int(t))
        diff = r - t
        if diff < eps:
            break
        r = 1.0 / diff
    return quotients


def convergent(cf: Sequence[int]) -> Tuple[int, int]:
    """
    Return the convergent ``(numerator, denominator)`` of the expansion ``cf``.

    >>> convergent([0, 1, 4, 3])
    (13, 16)
    """
    if not cf:
        raise ValueError("convergent needs at least one partial quotient.")
    if len(cf) == 1:
        return int(cf[0]), 1

    s, r = 1, int(cf[-1])
    for i in range(2, len(cf)):
        s, r = r, int(cf[-i]) * r + s
    s += int(cf[0]) * r
    return s, r


def approximate(cf: Sequence[int]) -> float:
    """Return the value ``s / r`` of the convergent of ``cf``."""
    s, r = convergent(cf)
    return s / r


__all__ = ["approximate", "binary_fraction", "continued_fraction", "convergent"]
