"""Quantum algorithms."""

from .shor import Shot, ShorResult, factorize

__all__ = ["Shot", "ShorResult", "factorize"]
