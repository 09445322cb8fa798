"""Number theory and continued fractions for period extraction."""

from .arithmetic import base_exp, coprime, gcd, is_even, is_odd, is_prime, mod_exp2
from .continued_fraction import (
    approximate,
    binary_fraction,
    continued_fraction,
    convergent,
)

__all__ = [
    "approximate",
    "base_exp",
    "binary_fraction",
    "continued_fraction",
    "convergent",
    "coprime",
    "gcd",
    "is_even",
    "is_odd",
    "is_prime",
    "mod_exp2",
]
