"""Standard quantum gates as NumPy arrays.

All gates follow the textbook definitions with qubit 0 as the most
significant bit of a basis index. Fixed single-qubit gates accept an
optional ``n_qubits`` and then return the tensor power, so ``H(3)`` is
``H ⊗ H ⊗ H``. Multi-qubit gates take the total qubit count ``n`` first,
followed by qubit indices in ``[0, n)``.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..linalg import matrix
from ..linalg.matrix import Array

_P1 = np.array([[0, 0], [0, 1]], dtype=complex)


def _power(gate: Array, n_qubits: int) -> Array:
    if n_qubits == 1:
        return gate
    return matrix.tensor_product_n(gate, n_qubits)


def I(n_qubits: int = 1) -> Array:  # noqa: E743, N802
    """Identity gate."""
    return np.eye(1 << n_qubits, dtype=complex)


def X(n_qubits: int = 1) -> Array:  # noqa: N802
    """Pauli-X (NOT) gate."""
    return _power(np.array([[0, 1], [1, 0]], dtype=complex), n_qubits)


def Y(n_qubits: int = 1) -> Array:  # noqa: N802
    """Pauli-Y gate."""
    return _power(np.array([[0, -1j], [1j, 0]], dtype=complex), n_qubits)


def Z(n_qubits: int = 1) -> Array:  # noqa: N802
    """Pauli-Z gate."""
    return _power(np.array([[1, 0], [0, -1]], dtype=complex), n_qubits)


def H(n_qubits: int = 1) -> Array:  # noqa: N802
    """Hadamard gate."""
    return _power(np.array([[1, 1], [1, -1]], dtype=complex) / np.sqrt(2), n_qubits)


def S(n_qubits: int = 1) -> Array:  # noqa: N802
    """S (phase) gate."""
    return _power(np.array([[1, 0], [0, 1j]], dtype=complex), n_qubits)


def T(n_qubits: int = 1) -> Array:  # noqa: N802
    """T (pi/8) gate."""
    return _power(
        np.array([[1, 0], [0, np.exp(1j * np.pi / 4)]], dtype=complex), n_qubits
    )


def RX(theta: float) -> Array:  # noqa: N802
    """Rotation about the X axis by ``theta``."""
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return np.array([[c, -1j * s], [-1j * s, c]], dtype=complex)


def RY(theta: float) -> Array:  # noqa: N802
    """Rotation about the Y axis by ``theta``."""
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return np.array([[c, -s], [s, c]], dtype=complex)


def RZ(theta: float) -> Array:  # noqa: N802
    """Rotation about the Z axis by ``theta``."""
    return np.array(
        [[np.exp(-0.5j * theta), 0], [0, np.exp(0.5j * theta)]], dtype=complex
    )


def U(alpha: float, beta: float, gamma: float, delta: float) -> Array:  # noqa: N802
    """General single-qubit unitary ``e^{i alpha} RZ(beta) RY(gamma) RZ(delta)``.

    Every single-qubit unitary can be written in this form.
    """
    return np.exp(1j * alpha) * (RZ(beta) @ RY(gamma) @ RZ(delta))


def R(k: int) -> Array:  # noqa: N802
    """Phase rotation ``diag(1, exp(2 pi i / 2^k))`` used by the QFT."""
    return np.array([[1, 0], [0, np.exp(2j * np.pi / (1 << k))]], dtype=complex)


def _check_qubits(n: int, controls: Sequence[int], targets: Sequence[int]) -> None:
    if n < 1:
        raise ValueError(f"Number of qubits must be positive, got {n}.")
    indices = list(controls) + list(targets)
    for q in indices:
        if q < 0 or q >= n:
            raise ValueError(f"qubit index {q} out of range [0, {n})")
    if len(set(indices)) != len(indices):
        raise ValueError(
            f"Control and target qubits must be distinct, got controls={list(controls)}, "
            f"targets={list(targets)}"
        )


def embed(gate: Array, n: int, qubits: Sequence[int]) -> Array:
    """
    Lift ``gate`` acting on ``qubits`` to the full ``n``-qubit space.

    ``qubits`` are sorted first, so the gate's own qubit ordering follows
    qubit index, not call order. Untouched qubits receive the identity.
    """

    gate = np.asarray(gate, dtype=complex)
    targets = sorted(qubits)
    _check_qubits(n, [], targets)
    k = len(targets)
    if k == 0:
        raise ValueError("embed needs at least one target qubit.")
    if gate.shape != (1 << k, 1 << k):
        raise ValueError(
            f"Gate shape {gate.shape} incompatible with {k} target qubit(s)."
        )

    if targets == list(range(targets[0], targets[0] + k)):
        return matrix.tensor_product(I(targets[0]), gate, I(n - targets[-1] - 1))

    rest = [q for q in range(n) if q not in targets]
    full = np.kron(gate, np.eye(1 << len(rest), dtype=complex))
    inverse_perm = list(np.argsort(targets + rest))
    axes = inverse_perm + [n + p for p in inverse_perm]
    restored = np.transpose(full.reshape([2] * (2 * n)), axes)
    return restored.reshape(1 << n, 1 << n)


def controlled(gate: Array, n: int, controls: Sequence[int], target: int) -> Array:
    """
    Apply single-qubit ``gate`` to ``target`` iff every control is |1>.

    Built as ``I + |1..1><1..1|_controls ⊗ (gate - I)_target`` with the
    identity on the remaining qubits, for any number of controls.
    """

    gate = np.asarray(gate, dtype=complex)
    if gate.shape != (2, 2):
        raise ValueError(f"controlled expects a (2, 2) gate, got {gate.shape}")
    _check_qubits(n, controls, [target])

    control_set = set(controls)
    factors = []
    for q in range(n):
        if q in control_set:
            factors.append(_P1)
        elif q == target:
            factors.append(gate - I())
        else:
            factors.append(I())
    return I(n) + matrix.tensor_product(*factors)


def controlled_not(n: int, controls: Sequence[int], target: int) -> Array:
    return controlled(X(), n, controls, target)


def controlled_z(n: int, controls: Sequence[int], target: int) -> Array:
    return controlled(Z(), n, controls, target)


def controlled_r(n: int, controls: Sequence[int], target: int, k: int) -> Array:
    return controlled(R(k), n, controls, target)


def controlled_swap(n: int, controls: Sequence[int], t0: int, t1: int) -> Array:
    """Swap ``t0`` and ``t1`` iff every control is |1>."""

    _check_qubits(n, controls, [t0, t1])
    outer = controlled_not(n, [t1], t0)
    return matrix.apply(outer, controlled_not(n, list(controls) + [t0], t1), outer)


def CNOT(n: int = 2, c: int = 0, t: int = 1) -> Array:  # noqa: N802
    """CNOT gate with control ``c`` and target ``t`` in an ``n``-qubit space."""
    return controlled_not(n, [c], t)


def CZ(n: int = 2, c: int = 0, t: int = 1) -> Array:  # noqa: N802
    """Controlled-Z gate."""
    return controlled_z(n, [c], t)


def CR(n: int, c: int, t: int, k: int) -> Array:  # noqa: N802
    """Controlled phase rotation ``R(k)``."""
    return controlled_r(n, [c], t, k)


def toffoli(n: int = 3, c0: int = 0, c1: int = 1, t: int = 2) -> Array:
    """Doubly controlled NOT (CCNOT)."""
    return controlled_not(n, [c0, c1], t)


def fredkin(n: int = 3, c: int = 0, t0: int = 1, t1: int = 2) -> Array:
    """Controlled swap (CSWAP)."""
    return controlled_swap(n, [c], t0, t1)


def swap(n: int = 2, i: int = 0, j: int = 1) -> Array:
    """Swap qubits ``i`` and ``j``; they need not be adjacent."""
    return controlled_swap(n, [], i, j)


def qft(n: int, with_swaps: bool = False) -> Array:
    """
    Return the ``n``-qubit Quantum Fourier Transform matrix.

    Built from a Hadamard on each qubit followed by controlled ``R(k)``
    rotations from every later qubit. Without the final swaps the output
    is bit-reversed; with them the matrix equals the DFT matrix.
    """

    if n < 1:
        raise ValueError(f"Number of qubits must be positive, got {n}.")
    steps = []
    for i in range(n):
        steps.append(embed(H(), n, [i]))
        for j in range(i + 1, n):
            steps.append(CR(n, j, i, j - i + 1))
    if with_swaps:
        steps.extend(swap(n, i, n - 1 - i) for i in range(n // 2))
    return matrix.apply(*steps)


def inverse_qft(n: int, with_swaps: bool = False) -> Array:
    """Return the inverse QFT, the conjugate transpose of :func:`qft`."""
    return matrix.dagger(qft(n, with_swaps=with_swaps))


__all__ = [
    "CNOT",
    "CR",
    "CZ",
    "H",
    "I",
    "R",
    "RX",
    "RY",
    "RZ",
    "S",
    "T",
    "U",
    "X",
    "Y",
    "Z",
    "controlled",
    "controlled_not",
    "controlled_r",
    "controlled_swap",
    "controlled_z",
    "embed",
    "fredkin",
    "inverse_qft",
    "qft",
    "swap",
    "toffoli",
]
