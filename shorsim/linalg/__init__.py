"""Complex vector and matrix algebra backed by NumPy."""

from . import matrix, vector
from .matrix import Array

__all__ = ["Array", "matrix", "vector"]
