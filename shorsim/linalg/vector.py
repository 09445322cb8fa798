"""
Dense complex vectors.

Vectors are one-dimensional ``complex128`` arrays. Tensor products follow
the big-endian convention: the first operand occupies the most-significant
positions of the resulting index.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..constants import ATOL

Array = np.ndarray


def _as_vector(v: Sequence[complex] | Array) -> Array:
    v = np.asarray(v, dtype=complex)
    if v.ndim != 1:
        raise ValueError(f"Expected a one-dimensional vector, got shape {v.shape}.")
    return v


def new(*z: complex) -> Array:
    """Return the vector with entries ``z``."""

    if not z:
        raise ValueError("A vector needs at least one entry.")
    return np.array(z, dtype=complex)


def zero(dim: int) -> Array:
    """Return the all-zero vector of length ``dim``."""

    if dim < 1:
        raise ValueError(f"Vector dimension must be positive, got {dim}.")
    return np.zeros(dim, dtype=complex)


def tensor_product(*vectors: Array) -> Array:
    """Return ``v0 ⊗ v1 ⊗ ...`` evaluated left-to-right."""

    if not vectors:
        raise ValueError("Provide at least one vector to tensor_product.")
    result = np.array([1], dtype=complex)
    for v in vectors:
        result = np.kron(result, _as_vector(v))
    return result


def tensor_product_n(v: Array, n: int) -> Array:
    """Return the ``n``-fold tensor power of ``v``."""

    if n < 1:
        raise ValueError(f"Tensor power must be positive, got {n}.")
    return tensor_product(*([v] * n))


def inner_product(v: Array, w: Array) -> complex:
    """Return <v|w>, conjugate-linear in ``v``."""

    v, w = _as_vector(v), _as_vector(w)
    if v.shape != w.shape:
        raise ValueError(f"Dimension mismatch: {v.size} != {w.size}.")
    return complex(np.vdot(v, w))


def outer_product(v: Array, w: Array) -> Array:
    """Return the matrix |v><w|."""

    v, w = _as_vector(v), _as_vector(w)
    return np.outer(v, np.conjugate(w))


def norm(v: Array) -> float:
    """Return the Euclidean norm of ``v``."""

    v = _as_vector(v)
    return float(np.sqrt(np.vdot(v, v).real))


def is_unit(v: Array, atol: float = ATOL) -> bool:
    """Return True if ``v`` has unit norm within ``atol``."""

    return bool(abs(norm(v) - 1.0) <= atol)


def is_orthogonal(v: Array, w: Array, atol: float = ATOL) -> bool:
    """Return True if <v|w> vanishes within ``atol``."""

    return bool(abs(inner_product(v, w)) <= atol)


def equals(v: Array, w: Array, atol: float = ATOL) -> bool:
    """Entrywise comparison: every |v_i - w_i| must be at most ``atol``."""

    v = np.asarray(v, dtype=complex)
    w = np.asarray(w, dtype=complex)
    if v.shape != w.shape:
        return False
    return bool(np.all(np.abs(v - w) <= atol))


def apply(m: Array, v: Array) -> Array:
    """Return the matrix-vector product ``m @ v``."""

    m = np.asarray(m, dtype=complex)
    v = _as_vector(v)
    if m.ndim != 2 or m.shape[1] != v.size:
        raise ValueError(
            f"Cannot apply a {m.shape} matrix to a vector of length {v.size}."
        )
    return m @ v


__all__ = [
    "Array",
    "apply",
    "equals",
    "inner_product",
    "is_orthogonal",
    "is_unit",
    "new",
    "norm",
    "outer_product",
    "tensor_product",
    "tensor_product_n",
    "zero",
]
