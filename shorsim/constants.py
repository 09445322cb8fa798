"""Numerical defaults shared across shorsim."""

from __future__ import annotations

# Entrywise tolerance for equality, unitarity and normalization checks.
ATOL: float = 1e-13

# Continued-fraction expansion stops once the fractional remainder drops
# below this value.
CF_EPSILON: float = 1e-3

# Amplitude components below this magnitude are reported as zero by
# Register.state().
DISPLAY_ATOL: float = 1e-13

__all__ = ["ATOL", "CF_EPSILON", "DISPLAY_ATOL"]
