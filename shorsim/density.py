"""Density matrices of mixed states.

A :class:`DensityMatrix` accumulates an ensemble ``sum_i p_i |psi_i><psi_i|``
of pure states. The memory cost is ``4^n`` complex entries, so it is meant
for the small registers used when checking circuits by hand.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .constants import ATOL
from .linalg import matrix, vector
from .linalg.matrix import Array


def _amplitudes(state) -> Array:
    # Registers expose their vector through amplitudes().
    if hasattr(state, "amplitudes"):
        return state.amplitudes()
    return np.asarray(state, dtype=complex)


class DensityMatrix:
    """
    Mixture of pure states.

    Example
    -------
    >>> rho = DensityMatrix().add(0.1, [1, 0]).add(0.9, [0, 1])
    >>> round(rho.purity(), 2)
    0.82
    """

    def __init__(self, data: Optional[Array] = None):
        self._data = None if data is None else matrix.as_square(data).copy()

    @classmethod
    def from_state(cls, state) -> "DensityMatrix":
        """Density matrix ``|psi><psi|`` of a pure state or register."""
        return cls().add(1.0, state)

    @property
    def data(self) -> Array:
        if self._data is None:
            raise ValueError("Density matrix is empty; add a state first.")
        return self._data

    @property
    def n_qubits(self) -> int:
        return self.data.shape[0].bit_length() - 1

    def add(self, p: float, state) -> "DensityMatrix":
        """Add ``p |state><state|`` to the mixture and return ``self``."""
        if p < 0 or p > 1:
            raise ValueError(f"Probability must be in [0, 1], got {p}")
        psi = _amplitudes(state)
        if psi.ndim != 1:
            raise ValueError(f"Expected a state vector, got shape {psi.shape}")

        term = p * vector.outer_product(psi, psi)
        if self._data is None:
            self._data = term
        elif self._data.shape != term.shape:
            raise ValueError(
                f"State of dimension {psi.size} does not match density matrix "
                f"of dimension {self._data.shape[0]}"
            )
        else:
            self._data = self._data + term
        return self

    def trace(self) -> complex:
        return matrix.trace(self.data)

    def squared(self) -> Array:
        """The matrix product ``rho @ rho``."""
        return self.data @ self.data

    def purity(self) -> float:
        """``Tr(rho^2)``: 1 for a pure state, ``1/d`` for the maximally mixed one."""
        return float(matrix.trace(self.squared()).real)

    def expected_value(self, observable: Array, atol: float = ATOL) -> complex:
        """``Tr(rho O)`` for a hermitian observable ``O``."""
        observable = np.asarray(observable, dtype=complex)
        if not matrix.is_hermitian(observable, atol=atol):
            raise ValueError("Observable must be hermitian.")
        if observable.shape != self.data.shape:
            raise ValueError(
                f"Observable shape {observable.shape} does not match "
                f"density matrix shape {self.data.shape}"
            )
        return matrix.trace(self.data @ observable)

    def partial_trace(self, index: int) -> "DensityMatrix":
        """Trace out qubit ``index``, returning the reduced density matrix."""
        n = self.n_qubits
        if index < 0 or index >= n:
            raise ValueError(f"qubit index {index} out of range [0, {n})")

        tensor = self.data.reshape([2] * (2 * n))
        reduced = np.trace(tensor, axis1=index, axis2=n + index)
        dim = 1 << (n - 1)
        return DensityMatrix(reduced.reshape(dim, dim))

    def __repr__(self) -> str:
        if self._data is None:
            return "DensityMatrix(empty)"
        return f"DensityMatrix(n_qubits={self.n_qubits})"


__all__ = ["DensityMatrix"]
