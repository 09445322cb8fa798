"""
Dense state-vector register.

A :class:`Register` owns the joint amplitude vector of every qubit it has
allocated. The amplitude at index ``i`` belongs to the basis state whose
binary representation, qubit 0 first, equals ``i``. Allocation grows the
vector by a tensor product, gates left-multiply it and measurement
collapses it; the dimension never shrinks.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

import numpy as np

from . import gates
from .constants import ATOL, DISPLAY_ATOL
from .diagnostics import check_state
from .gates import modexp
from .linalg import matrix, vector
from .linalg.matrix import Array
from .logging import get_logger
from .rand import RandomSource

logger = get_logger(__name__)


@dataclass(frozen=True)
class Qubit:
    """Handle to one qubit of a register, identified by its bit position."""

    index: int

    def __repr__(self) -> str:
        return f"Qubit({self.index})"


def index_of(*qubits: Qubit) -> List[int]:
    return [q.index for q in qubits]


@dataclass
class State:
    """One non-zero basis state as seen through a selection of sub-registers."""

    amplitude: complex
    probability: float
    index: List[int] = field(default_factory=list)
    binary: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"{self.binary}{self.index}"
            f"({self.amplitude.real: .4f}{self.amplitude.imag: .4f}i): "
            f"{self.probability:.4f}"
        )


class Register:
    """
    Qubit register simulated as one dense complex amplitude vector.

    Parameters
    ----------
    rand:
        Random source returning floats in [0, 1), called once per measurement
        with an uncertain outcome. Defaults to a :class:`RandomSource`.
    seed:
        Seed for the default random source. Ignored when ``rand`` is given.

    Example
    -------
    >>> reg = Register(seed=1)
    >>> q0, q1 = reg.zero(), reg.zero()
    >>> _ = reg.h(q0).cnot(q0, q1)
    >>> reg.measure(q0) == reg.measure(q1)
    True
    """

    def __init__(
        self,
        rand: Optional[Callable[[], float]] = None,
        seed: Optional[int] = None,
    ):
        self._rand = rand if rand is not None else RandomSource(seed)
        self._state: Optional[Array] = None

    # ------------------------------------------------------------------
    # allocation and read-only views
    # ------------------------------------------------------------------
    @property
    def n_qubits(self) -> int:
        if self._state is None:
            return 0
        return self._state.size.bit_length() - 1

    @property
    def rand(self) -> Callable[[], float]:
        return self._rand

    def allocate(self, z0: complex = 1.0, z1: complex = 0.0) -> Qubit:
        """
        Append a qubit in state ``z0|0> + z1|1>`` and return its handle.

        Raises
        ------
        ValueError
            If the amplitude pair does not have unit norm.
        """
        qb = vector.new(z0, z1)
        if not vector.is_unit(qb, atol=ATOL):
            raise ValueError(
                f"Qubit amplitudes must be normalized, got ({z0}, {z1}) "
                f"with norm {vector.norm(qb)!r}"
            )
        if self._state is None:
            self._state = qb
        else:
            self._state = vector.tensor_product(self._state, qb)

        logger.debug("allocated qubit %d", self.n_qubits - 1)
        self._check("allocate")
        return Qubit(self.n_qubits - 1)

    def zero(self) -> Qubit:
        return self.allocate(1, 0)

    def one(self) -> Qubit:
        return self.allocate(0, 1)

    def zero_with(self, n: int) -> List[Qubit]:
        return [self.zero() for _ in range(n)]

    def one_with(self, n: int) -> List[Qubit]:
        return [self.one() for _ in range(n)]

    def zero_log2(self, N: int) -> List[Qubit]:
        """Allocate ``floor(log2(N)) + 1`` zero qubits, enough to hold ``N``."""
        if N < 1:
            raise ValueError(f"N must be positive, got {N}")
        return self.zero_with(N.bit_length())

    def amplitudes(self) -> Array:
        """Copy of the amplitude vector."""
        return self._require_state().copy()

    def probabilities(self) -> Array:
        """Born-rule probabilities ``|a_i|^2`` of every basis state."""
        return np.abs(self._require_state()) ** 2

    def _require_state(self) -> Array:
        if self._state is None:
            raise ValueError("Register has no qubits allocated.")
        return self._state

    def _indices(self, qubits: Sequence[Qubit]) -> List[int]:
        n = self.n_qubits
        indices = []
        for q in qubits:
            if not isinstance(q, Qubit):
                raise TypeError(f"Expected a Qubit handle, got {type(q).__name__}")
            if q.index < 0 or q.index >= n:
                raise ValueError(f"qubit index {q.index} out of range [0, {n})")
            indices.append(q.index)
        return indices

    def _check(self, operation: str) -> None:
        check_state(self._state, operation)

    # ------------------------------------------------------------------
    # gate application
    # ------------------------------------------------------------------
    def apply(self, gate: Array, *qubits: Qubit) -> "Register":
        """
        Apply ``gate`` to ``qubits`` (or, with none listed, to the whole register).

        The gate is lifted to the register dimension with identities on the
        untouched qubits; its own qubit order follows qubit index.

        Raises
        ------
        ValueError
            If the gate dimension is not ``2**len(qubits)`` (``2**n_qubits``
            when no qubits are listed) or a qubit is out of range.
        """
        state = self._require_state()
        gate = np.asarray(gate, dtype=complex)
        n = self.n_qubits
        if qubits:
            full = gates.embed(gate, n, self._indices(qubits))
        else:
            if gate.shape != (state.size, state.size):
                raise ValueError(
                    f"Gate shape {gate.shape} incompatible with {n}-qubit register."
                )
            full = gate

        self._state = full @ state
        self._check("apply")
        return self

    def _apply_each(self, gate: Array, qubits: Sequence[Qubit]) -> "Register":
        if not qubits:
            raise ValueError("At least one qubit must be given.")
        targets = set(self._indices(qubits))
        factors = [gate if i in targets else gates.I() for i in range(self.n_qubits)]
        return self.apply(matrix.tensor_product(*factors))

    def i(self, *qubits: Qubit) -> "Register":
        return self._apply_each(gates.I(), qubits)

    def h(self, *qubits: Qubit) -> "Register":
        return self._apply_each(gates.H(), qubits)

    def x(self, *qubits: Qubit) -> "Register":
        return self._apply_each(gates.X(), qubits)

    def y(self, *qubits: Qubit) -> "Register":
        return self._apply_each(gates.Y(), qubits)

    def z(self, *qubits: Qubit) -> "Register":
        return self._apply_each(gates.Z(), qubits)

    def s(self, *qubits: Qubit) -> "Register":
        return self._apply_each(gates.S(), qubits)

    def t(self, *qubits: Qubit) -> "Register":
        return self._apply_each(gates.T(), qubits)

    def u(
        self, alpha: float, beta: float, gamma: float, delta: float, *qubits: Qubit
    ) -> "Register":
        return self._apply_each(gates.U(alpha, beta, gamma, delta), qubits)

    def rx(self, theta: float, *qubits: Qubit) -> "Register":
        return self._apply_each(gates.RX(theta), qubits)

    def ry(self, theta: float, *qubits: Qubit) -> "Register":
        return self._apply_each(gates.RY(theta), qubits)

    def rz(self, theta: float, *qubits: Qubit) -> "Register":
        return self._apply_each(gates.RZ(theta), qubits)

    def controlled(
        self, gate: Array, controls: Sequence[Qubit], target: Qubit
    ) -> "Register":
        """Apply single-qubit ``gate`` to ``target`` iff all ``controls`` are |1>."""
        self._require_state()
        g = gates.controlled(
            gate, self.n_qubits, self._indices(controls), self._indices([target])[0]
        )
        return self.apply(g)

    def controlled_not(self, controls: Sequence[Qubit], target: Qubit) -> "Register":
        return self.controlled(gates.X(), controls, target)

    def cnot(self, control: Qubit, target: Qubit) -> "Register":
        return self.controlled_not([control], target)

    def ccnot(self, control0: Qubit, control1: Qubit, target: Qubit) -> "Register":
        return self.controlled_not([control0, control1], target)

    def cccnot(
        self, control0: Qubit, control1: Qubit, control2: Qubit, target: Qubit
    ) -> "Register":
        return self.controlled_not([control0, control1, control2], target)

    toffoli = ccnot

    def controlled_z(self, controls: Sequence[Qubit], target: Qubit) -> "Register":
        return self.controlled(gates.Z(), controls, target)

    def cz(self, control: Qubit, target: Qubit) -> "Register":
        return self.controlled_z([control], target)

    def ccz(self, control0: Qubit, control1: Qubit, target: Qubit) -> "Register":
        return self.controlled_z([control0, control1], target)

    def controlled_r(
        self, controls: Sequence[Qubit], target: Qubit, k: int
    ) -> "Register":
        return self.controlled(gates.R(k), controls, target)

    def cr(self, control: Qubit, target: Qubit, k: int) -> "Register":
        return self.controlled_r([control], target, k)

    def inverse_cr(self, control: Qubit, target: Qubit, k: int) -> "Register":
        return self.controlled(matrix.dagger(gates.R(k)), [control], target)

    def condition_x(self, condition: bool, *qubits: Qubit) -> "Register":
        """Apply X to ``qubits`` when a classical ``condition`` holds."""
        if condition:
            return self.x(*qubits)
        return self

    def condition_z(self, condition: bool, *qubits: Qubit) -> "Register":
        if condition:
            return self.z(*qubits)
        return self

    def swap(self, *qubits: Qubit) -> "Register":
        """Reverse the order of ``qubits`` by swapping them pairwise from the ends."""
        indices = self._indices(qubits)
        n = self.n_qubits
        for k in range(len(indices) // 2):
            self.apply(gates.swap(n, indices[k], indices[-1 - k]))
        return self

    def qft(self, *qubits: Qubit) -> "Register":
        """Quantum Fourier transform on ``qubits`` without the final swaps."""
        for i, target in enumerate(qubits):
            self.h(target)
            for j in range(i + 1, len(qubits)):
                self.cr(qubits[j], target, j - i + 1)
        return self

    def inverse_qft(self, *qubits: Qubit) -> "Register":
        """Inverse of :meth:`qft`: the same gates reversed and conjugated."""
        for i in reversed(range(len(qubits))):
            for j in reversed(range(i + 1, len(qubits))):
                self.inverse_cr(qubits[j], qubits[i], j - i + 1)
            self.h(qubits[i])
        return self

    inv_qft = inverse_qft

    def controlled_mod_exp2(
        self, a: int, j: int, N: int, control: Qubit, target: Sequence[Qubit]
    ) -> "Register":
        """Multiply ``target`` by ``a^(2^j) mod N`` when ``control`` is |1>."""
        self._require_state()
        g = modexp.cmodexp2(
            self.n_qubits,
            a,
            j,
            N,
            self._indices([control])[0],
            self._indices(target),
        )
        return self.apply(g)

    def cmodexp2(
        self, a: int, N: int, control: Sequence[Qubit], target: Sequence[Qubit]
    ) -> "Register":
        """Controlled ``a^x mod N`` where ``control[j]`` carries weight ``2^j`` of x."""
        for j, c in enumerate(control):
            self.controlled_mod_exp2(a, j, N, c, target)
        return self

    # ------------------------------------------------------------------
    # measurement
    # ------------------------------------------------------------------
    def measure(self, qubit: Qubit) -> int:
        """
        Measure ``qubit`` in the computational basis and collapse the state.

        With ``p0`` the probability of reading 0, a draw ``r`` from the random
        source gives 0 if ``r < p0`` and 1 otherwise. Amplitudes that disagree
        with the outcome are zeroed and the rest divided by
        ``sqrt(p_outcome)``. Outcomes with probability one are returned
        without drawing.
        """
        state = self._require_state()
        index = self._indices([qubit])[0]
        n = self.n_qubits

        bit = 1 << (n - 1 - index)
        is_one = (np.arange(state.size) & bit) != 0
        probs = np.abs(state) ** 2
        p0 = float(probs[~is_one].sum())
        p1 = float(probs[is_one].sum())

        if p1 == 0.0:
            outcome = 0
        elif p0 == 0.0:
            outcome = 1
        else:
            outcome = 0 if self._rand() < p0 else 1

        p = p0 if outcome == 0 else p1
        collapsed = np.where(is_one if outcome == 0 else ~is_one, 0, state)
        self._state = collapsed / np.sqrt(p)

        logger.debug("measured qubit %d -> %d (p0=%.6f)", index, outcome, p0)
        self._check("measure")
        return outcome

    def measure_as_binary(self, *qubits: Qubit) -> List[int]:
        """Measure ``qubits`` in order (all qubits when none given)."""
        if not qubits:
            qubits = tuple(Qubit(i) for i in range(self.n_qubits))
        return [self.measure(q) for q in qubits]

    def binary_string(self, *qubits: Qubit) -> str:
        return "".join(str(b) for b in self.measure_as_binary(*qubits))

    def measure_as_int(self, *qubits: Qubit) -> int:
        """Measure ``qubits`` and read them as an integer, first qubit most significant."""
        return int(self.binary_string(*qubits), 2)

    # ------------------------------------------------------------------
    # snapshots
    # ------------------------------------------------------------------
    def clone(self, rand: Optional[Callable[[], float]] = None) -> "Register":
        """
        Independent deep copy of the register.

        The random source is copied along with the amplitudes unless ``rand``
        supplies a replacement.
        """
        other = Register.__new__(Register)
        other._rand = rand if rand is not None else copy.deepcopy(self._rand)
        other._state = None if self._state is None else self._state.copy()
        return other

    def state(self, *registers: Sequence[Qubit]) -> List[State]:
        """
        Non-zero basis states with their readout in each sub-register.

        Each entry of ``registers`` is a list of qubits; the basis index is
        read through it as a binary number. With no registers the whole
        register is used. Real or imaginary parts smaller than 1e-13 are
        reported as zero.
        """
        state = self._require_state()
        n = self.n_qubits
        if not registers:
            registers = (tuple(Qubit(i) for i in range(n)),)
        selections = []
        for reg in registers:
            if not reg:
                raise ValueError("Sub-registers must contain at least one qubit.")
            selections.append(self._indices(reg))

        result = []
        for i, a in enumerate(state):
            re = 0.0 if abs(a.real) < DISPLAY_ATOL else float(a.real)
            im = 0.0 if abs(a.imag) < DISPLAY_ATOL else float(a.imag)
            amp = complex(re, im)
            if amp == 0:
                continue

            bits = format(i, f"0{n}b")
            s = State(amplitude=amp, probability=abs(amp) ** 2)
            for selection in selections:
                sub = "".join(bits[q] for q in selection)
                s.index.append(int(sub, 2))
                s.binary.append(sub)
            result.append(s)
        return result

    def __repr__(self) -> str:
        return f"Register(n_qubits={self.n_qubits}, rand={self._rand!r})"

    def __str__(self) -> str:
        if self._state is None:
            return "[]"
        return str(self._state)


__all__ = ["Qubit", "Register", "State", "index_of"]
