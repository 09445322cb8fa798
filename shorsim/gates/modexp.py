"""
Controlled modular exponentiation from reversible primitives.

Shor's algorithm needs, for every control qubit ``j`` of the exponent
register, the gate

    |c>|x>  ->  |c>|a^(2^j) * x mod N>     if c = 1 and x < N
    |c>|x>  ->  |c>|x>                     otherwise.

The gate is synthesized as a circuit of multi-controlled NOT and
controlled-swap primitives. Each primitive is a permutation of basis
states, so the circuit is folded into one permutation by tracking where
every basis index goes and the permutation matrix is written once.

Multiplications that merely rotate bit positions (``2^s mod 2^b - 1``)
become a few controlled swaps. Any other multiplier ``m`` is built out of
place on work qubits:

1. flag ``g = control AND x < N``;
2. for every weight ``w`` of ``x``, add ``m * 2^w mod N`` into an
   accumulator, controlled on ``g`` and bit ``w`` of ``x``;
3. swap ``x`` with the accumulator, controlled on ``g``;
4. clear the accumulator by adding ``N - m^-1 * 2^w mod N`` per weight;
5. clear ``g``.

Every modular addition is a constant adder followed by a comparison with
``N`` and a conditional subtraction, so the circuit has ``O(b^3)``
primitives for a ``b``-qubit target. Work qubits take indices from ``n``
upwards, start in |0> and are returned to |0>; they never enter the
register's state vector.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..linalg import matrix
from ..linalg.matrix import Array
from ..logging import get_logger
from ..number import gcd, mod_exp2
from . import standard

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReversibleGate:
    """A NOT (``kind="not"``) or SWAP (``kind="swap"``) gated on ``controls``.

    A NOT has one target, a SWAP two. With no controls the primitive acts
    unconditionally.
    """

    kind: str
    controls: Tuple[int, ...]
    targets: Tuple[int, ...]

    def __post_init__(self) -> None:
        expected = {"not": 1, "swap": 2}
        if self.kind not in expected:
            raise ValueError(f"Unknown reversible gate kind {self.kind!r}")
        if len(self.targets) != expected[self.kind]:
            raise ValueError(
                f"{self.kind} gate needs {expected[self.kind]} target(s), "
                f"got {self.targets}"
            )

    @property
    def qubits(self) -> Tuple[int, ...]:
        return self.controls + self.targets

    def matrix(self, n: int) -> Array:
        """Dense ``2^n`` x ``2^n`` matrix of the primitive."""
        if self.kind == "not":
            return standard.controlled_not(n, self.controls, self.targets[0])
        return standard.controlled_swap(n, self.controls, *self.targets)

    def permute(self, indices: Array, width: int) -> Array:
        """Map every basis index of a ``width``-qubit space through the primitive."""
        for q in self.qubits:
            if q < 0 or q >= width:
                raise ValueError(f"qubit index {q} out of range [0, {width})")

        cmask = 0
        for c in self.controls:
            cmask |= _bit(c, width)
        active = (indices & cmask) == cmask

        if self.kind == "not":
            return indices ^ np.where(active, _bit(self.targets[0], width), 0)

        b0, b1 = _bit(self.targets[0], width), _bit(self.targets[1], width)
        differ = ((indices & b0) == 0) != ((indices & b1) == 0)
        return indices ^ np.where(active & differ, b0 | b1, 0)


def _bit(qubit: int, width: int) -> int:
    return 1 << (width - 1 - qubit)


def _width(circuit: Sequence[ReversibleGate], n: int) -> int:
    return max([n] + [q + 1 for g in circuit for q in g.qubits])


def compose(circuit: Sequence[ReversibleGate], n: int) -> Array:
    """
    Fold ``circuit`` into its permutation matrix on ``n`` qubits.

    Primitives act in list order. Qubits with index ``>= n`` are work qubits:
    they start in |0> and must end in |0> for every input, otherwise
    ``ValueError`` is raised. Column ``i`` of the result has its single one
    in the row of the basis state that ``i`` is mapped to.
    """
    width = _width(circuit, n)
    work = width - n
    dim = 1 << n

    images = np.arange(dim, dtype=np.int64) << work
    for g in circuit:
        images = g.permute(images, width)

    if np.any(images & ((1 << work) - 1)):
        raise ValueError("Circuit leaves work qubits outside |0>.")

    result = np.zeros((dim, dim), dtype=complex)
    result[images >> work, np.arange(dim)] = 1.0
    return result


def circuit_matrix(circuit: Sequence[ReversibleGate], n: int) -> Array:
    """
    Multiply the dense matrices of ``circuit``; agrees with :func:`compose`.

    Work qubits are included in the product and then projected onto |0>, so
    this is only practical for a handful of qubits in total.
    """
    width = _width(circuit, n)
    if not circuit:
        return standard.I(n)
    full = matrix.apply(*(g.matrix(width) for g in circuit))
    keep = np.arange(1 << n) << (width - n)
    return full[np.ix_(keep, keep)]


def _not(target: int, controls: Sequence[int] = ()) -> ReversibleGate:
    return ReversibleGate("not", tuple(controls), (target,))


def _inverse(circuit: Sequence[ReversibleGate]) -> List[ReversibleGate]:
    # every primitive is an involution
    return list(reversed(circuit))


def _add_constant(
    k: int, reg: Sequence[int], controls: Sequence[int] = ()
) -> List[ReversibleGate]:
    """``reg += k mod 2^len(reg)`` when all ``controls`` are set; ``reg[0]`` is the MSB."""
    width = len(reg)
    k %= 1 << width
    gates: List[ReversibleGate] = []
    for i in range(width):
        if not k >> i & 1:
            continue
        # add 2^i: bit w flips iff bits i..w-1 are all set
        for w in range(width - 1, i - 1, -1):
            carry = [reg[width - 1 - v] for v in range(i, w)]
            gates.append(_not(reg[width - 1 - w], list(controls) + carry))
    return gates


def _compare(
    K: int, reg: Sequence[int], ext: int, flag: int, controls: Sequence[int] = ()
) -> List[ReversibleGate]:
    """``flag ^= (reg < K)`` when all ``controls`` are set.

    ``ext`` is a work qubit in |0> used as the borrow bit; it is restored.
    """
    widened = [ext] + list(reg)
    subtract = _inverse(_add_constant(K, widened))
    return subtract + [_not(flag, list(controls) + [ext])] + _add_constant(K, widened)


def _modular_add(
    k: int,
    N: int,
    acc: Sequence[int],
    ext: int,
    flag: int,
    controls: Sequence[int],
) -> List[ReversibleGate]:
    """``acc = (acc + k) mod N`` for ``acc < N`` when all ``controls`` are set.

    ``acc`` needs one bit of headroom above ``N``. ``ext`` and ``flag`` are
    work qubits in |0> and are restored.
    """
    k %= N
    if k == 0:
        return []
    gates = _add_constant(k, acc, controls)
    # flag = controls AND acc >= N
    gates += _compare(N, acc, ext, flag, controls)
    gates.append(_not(flag, controls))
    gates += _inverse(_add_constant(N, acc, [flag]))
    # the sum wrapped exactly when the result is below k
    gates += _compare(k, acc, ext, flag, controls)
    return gates


def _bit_rotation(multiplier: int, N: int, width: int) -> Optional[Dict[int, int]]:
    """Weight map when ``x -> multiplier * x mod N`` only rotates bits, else None."""
    if N != (1 << width) - 1 or multiplier & (multiplier - 1):
        return None
    shift = multiplier.bit_length() - 1
    return {w: (w + shift) % width for w in range(width)}


def _swap_network(
    mapping: Dict[int, int], control: int, target: Sequence[int]
) -> List[ReversibleGate]:
    width = len(target)
    want = [0] * width
    for w, image in mapping.items():
        want[image] = w

    current = list(range(width))
    gates: List[ReversibleGate] = []
    for pos in range(width):
        if current[pos] == want[pos]:
            continue
        other = current.index(want[pos])
        current[pos], current[other] = current[other], current[pos]
        gates.append(
            ReversibleGate(
                "swap", (control,), (target[width - 1 - pos], target[width - 1 - other])
            )
        )
    return gates


def multiplier_circuit(
    multiplier: int,
    N: int,
    control: int,
    target: Sequence[int],
    work: Optional[int] = None,
) -> List[ReversibleGate]:
    """
    Primitives for ``|x> -> |multiplier * x mod N>`` controlled by ``control``.

    ``target[0]`` holds the most significant bit of ``x``. Values ``x >= N``
    are left unchanged. A multiplier of 1 gives an empty circuit. Work
    qubits are numbered consecutively from ``work``, which defaults to one
    past the highest qubit in use.
    """
    target = list(target)
    width = len(target)
    if gcd(multiplier, N) != 1:
        raise ValueError(f"multiplier={multiplier} must be coprime to N={N}")
    if (1 << width) < N:
        raise ValueError(
            f"target register of {width} qubits cannot hold values below N={N}"
        )

    multiplier %= N
    if multiplier == 1:
        return []

    mapping = _bit_rotation(multiplier, N, width)
    if mapping is not None:
        return _swap_network(mapping, control, target)

    if work is None:
        work = max([control] + target) + 1
    acc = list(range(work, work + width + 1))
    ext, flag, gate = work + width + 1, work + width + 2, work + width + 3

    def qubit(w: int) -> int:
        return target[width - 1 - w]

    inverse = pow(multiplier, -1, N)
    guard = _compare(N, target, ext, gate, [control])

    gates = list(guard)
    for w in range(width):
        gates += _modular_add(
            multiplier * (1 << w), N, acc, ext, flag, [gate, qubit(w)]
        )
    for i, q in enumerate(target):
        gates.append(ReversibleGate("swap", (gate,), (q, acc[i + 1])))
    for w in range(width):
        gates += _modular_add(
            N - inverse * (1 << w) % N, N, acc, ext, flag, [gate, qubit(w)]
        )
    gates += guard
    return gates


def cmodexp2_circuit(
    n: int, a: int, j: int, N: int, control: int, target: Sequence[int]
) -> List[ReversibleGate]:
    """Primitives of the controlled ``a^(2^j) mod N`` multiplication."""
    if N < 2:
        raise ValueError(f"N must be at least 2, got {N}")
    if j < 0:
        raise ValueError(f"j must be non-negative, got {j}")
    if gcd(a, N) != 1:
        raise ValueError(f"a={a} must be coprime to N={N}")
    target = list(target)
    if not target:
        raise ValueError("target register must not be empty")
    for q in [control] + target:
        if q < 0 or q >= n:
            raise ValueError(f"qubit index {q} out of range [0, {n})")
    if control in target or len(set(target)) != len(target):
        raise ValueError(
            f"control {control} and target {target} must be distinct qubits"
        )

    multiplier = mod_exp2(a, j, N)
    circuit = multiplier_circuit(multiplier, N, control, target, work=n)
    logger.debug(
        "controlled x%d mod %d (a=%d, j=%d): %d primitives, %d work qubits",
        multiplier,
        N,
        a,
        j,
        len(circuit),
        _width(circuit, n) - n,
    )
    return circuit


def cmodexp2(n: int, a: int, j: int, N: int, control: int, target: Sequence[int]) -> Array:
    """
    Unitary of the controlled ``a^(2^j) mod N`` multiplication on ``n`` qubits.

    The result is a permutation matrix: multiplication on target values
    below ``N`` when ``control`` is |1>, identity elsewhere.
    """
    return compose(cmodexp2_circuit(n, a, j, N, control, target), n)


__all__ = [
    "ReversibleGate",
    "circuit_matrix",
    "cmodexp2",
    "cmodexp2_circuit",
    "compose",
    "multiplier_circuit",
]
