"""Diagnostic helpers for state vectors and operators."""

from __future__ import annotations

import numpy as np

from ..constants import ATOL
from ..linalg import matrix

Array = np.ndarray


def state_norm(state: Array) -> float:
    """
    Return the L2 norm sqrt(<psi|psi>) of a state vector.

    Raises
    ------
    ValueError
        If ``state`` is not one-dimensional.
    """
    state = np.asarray(state, dtype=complex)
    if state.ndim != 1:
        raise ValueError("state_norm expects a one-dimensional vector.")
    return float(np.sqrt(np.vdot(state, state).real))


def assert_normalized(state: Array, atol: float = ATOL) -> None:
    """
    Raise unless ``state`` has unit norm within ``atol``.

    Parameters
    ----------
    state:
        Complex state vector.
    atol:
        Absolute tolerance for |sum |a_i|^2 - 1|.

    Raises
    ------
    ValueError
        If the norm is non-finite or differs from one by more than ``atol``.
    """
    norm = state_norm(state)
    if not np.isfinite(norm):
        raise ValueError("State norm is not finite.")
    if abs(norm**2 - 1.0) > atol:
        raise ValueError(
            f"State is not normalized within tolerance {atol}. "
            f"Squared norm found: {norm**2!r}"
        )


def is_hermitian(mat: Array, atol: float = ATOL) -> bool:
    """Return True if ``mat`` equals its conjugate transpose within ``atol``."""
    return matrix.is_hermitian(mat, atol=atol)


def assert_hermitian(mat: Array, atol: float = ATOL) -> None:
    """Raise ``ValueError`` unless ``mat`` is hermitian within ``atol``."""
    if not matrix.is_hermitian(mat, atol=atol):
        raise ValueError(f"Matrix is not Hermitian within tolerance {atol}.")


def assert_unitary(mat: Array, atol: float = ATOL) -> None:
    """Raise ``ValueError`` unless ``mat`` is unitary within ``atol``."""
    if not matrix.is_unitary(mat, atol=atol):
        raise ValueError(f"Matrix is not unitary within tolerance {atol}.")


def fidelity(state_a: Array, state_b: Array) -> float:
    """
    Fidelity |<psi|phi>|^2 between two pure states.

    Raises
    ------
    ValueError
        If the states have different shapes.
    """
    state_a = np.asarray(state_a, dtype=complex)
    state_b = np.asarray(state_b, dtype=complex)
    if state_a.shape != state_b.shape:
        raise ValueError("fidelity expects states with the same shape.")
    return float(abs(np.vdot(state_a, state_b)) ** 2)


def trace_distance(state_a: Array, state_b: Array) -> float:
    """Trace distance sqrt(1 - F) between two pure states."""
    f = fidelity(state_a, state_b)
    return float(np.sqrt(max(0.0, 1.0 - f)))


__all__ = [
    "assert_hermitian",
    "assert_normalized",
    "assert_unitary",
    "fidelity",
    "is_hermitian",
    "state_norm",
    "trace_distance",
]
