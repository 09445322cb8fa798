"""
Dense complex matrices.

Matrices are two-dimensional ``complex128`` arrays. All functions are pure
and return new arrays. Shape mismatches are programmer errors and raise
``ValueError``; the ``is_*`` and ``equals`` predicates never raise.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from ..constants import ATOL

Array = np.ndarray


def as_matrix(m: Sequence[Sequence[complex]] | Array) -> Array:
    """Coerce ``m`` to a complex two-dimensional array or raise ``ValueError``."""
    m = np.asarray(m, dtype=complex)
    if m.ndim != 2:
        raise ValueError(f"Expected a two-dimensional matrix, got shape {m.shape}.")
    return m


def as_square(m: Sequence[Sequence[complex]] | Array) -> Array:
    m = as_matrix(m)
    if m.shape[0] != m.shape[1]:
        raise ValueError(f"Expected a square matrix, got shape {m.shape}.")
    return m


def new(*rows: Sequence[complex]) -> Array:
    """Return the matrix whose rows are ``rows``."""

    if not rows:
        raise ValueError("A matrix needs at least one row.")
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise ValueError("All rows must have the same length.")
    return np.array(rows, dtype=complex)


def identity(dim: int) -> Array:
    """Return the ``dim`` x ``dim`` identity."""

    if dim < 1:
        raise ValueError(f"Matrix dimension must be positive, got {dim}.")
    return np.eye(dim, dtype=complex)


def dimension(m: Array) -> Tuple[int, int]:
    """Return ``(rows, columns)``."""

    rows, cols = as_matrix(m).shape
    return rows, cols


def is_square(m: Array) -> bool:
    m = np.asarray(m)
    return m.ndim == 2 and m.shape[0] == m.shape[1]


def tensor_product(*matrices: Array) -> Array:
    """Return the Kronecker product ``m0 ⊗ m1 ⊗ ...`` evaluated left-to-right."""

    if not matrices:
        raise ValueError("Provide at least one matrix to tensor_product.")
    result = np.array([[1]], dtype=complex)
    for m in matrices:
        result = np.kron(result, as_matrix(m))
    return result


def tensor_product_n(m: Array, n: int) -> Array:
    """Return the ``n``-fold tensor power of ``m``."""

    if n < 1:
        raise ValueError(f"Tensor power must be positive, got {n}.")
    return tensor_product(*([m] * n))


def apply(*matrices: Array) -> Array:
    """
    Compose gates sequentially.

    ``apply(a, b, c)`` is the operator that applies ``a`` first, then ``b``,
    then ``c``, i.e. the matrix product ``c @ b @ a``.
    """

    if not matrices:
        raise ValueError("Provide at least one matrix to apply.")
    result = as_square(matrices[0])
    for m in matrices[1:]:
        m = as_square(m)
        if m.shape != result.shape:
            raise ValueError(f"Dimension mismatch: {result.shape} vs {m.shape}.")
        result = m @ result
    return result


def dagger(m: Array) -> Array:
    """Return the conjugate transpose."""

    return np.conjugate(as_matrix(m)).T.copy()


def trace(m: Array) -> complex:
    return complex(np.trace(as_square(m)))


def inverse(m: Array, atol: float = ATOL) -> Array:
    """
    Return the inverse of a square matrix.

    Raises
    ------
    ValueError
        If the determinant is numerically zero.
    """

    m = as_square(m)
    if abs(np.linalg.det(m)) <= atol:
        raise ValueError("Matrix is singular and cannot be inverted.")
    try:
        return np.linalg.inv(m)
    except np.linalg.LinAlgError as exc:
        raise ValueError("Matrix is singular and cannot be inverted.") from exc


def equals(a: Array, b: Array, atol: float = ATOL) -> bool:
    """Entrywise comparison: every |a_ij - b_ij| must be at most ``atol``."""

    a = np.asarray(a, dtype=complex)
    b = np.asarray(b, dtype=complex)
    if a.shape != b.shape:
        return False
    return bool(np.all(np.abs(a - b) <= atol))


def is_unitary(m: Array, atol: float = ATOL) -> bool:
    """Return True if ``m @ m^dagger`` equals the identity within ``atol``."""

    if not is_square(m):
        return False
    m = np.asarray(m, dtype=complex)
    return equals(m @ np.conjugate(m).T, np.eye(m.shape[0]), atol=atol)


def is_hermitian(m: Array, atol: float = ATOL) -> bool:
    """Return True if ``m`` equals its conjugate transpose within ``atol``."""

    if not is_square(m):
        return False
    m = np.asarray(m, dtype=complex)
    return equals(m, np.conjugate(m).T, atol=atol)


__all__ = [
    "Array",
    "apply",
    "as_matrix",
    "as_square",
    "dagger",
    "dimension",
    "equals",
    "identity",
    "inverse",
    "is_hermitian",
    "is_square",
    "is_unitary",
    "new",
    "tensor_product",
    "tensor_product_n",
    "trace",
]
