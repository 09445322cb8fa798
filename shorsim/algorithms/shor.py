"""Shor's factoring algorithm on the dense state-vector simulator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..logging import get_logger
from ..number import (
    base_exp,
    binary_fraction,
    continued_fraction,
    convergent,
    coprime,
    gcd,
    is_even,
    is_odd,
    is_prime,
)
from ..rand import RandomSource
from ..register import Qubit, Register

logger = get_logger(__name__)


@dataclass
class Shot:
    """One readout of the control register and the factors it implies."""

    bits: List[int]
    phase: float
    s: int
    r: int
    p: Optional[int] = None
    q: Optional[int] = None
    found: bool = False

    @property
    def rejected(self) -> bool:
        """True when ``r`` is unusable (odd, or ``a^(r/2) = -1 mod N``)."""
        return self.p is None


@dataclass
class ShorResult:
    """
    Outcome of :func:`factorize`.

    ``factors`` is the first non-trivial pair ``(p, N // p)`` with ``p``
    the smaller factor, or ``None`` when every shot failed. ``reason``
    names the classical shortcut taken when no circuit was simulated.
    ``stages`` holds register snapshots after each step of the circuit.
    """

    N: int
    a: Optional[int]
    t: int
    factors: Optional[Tuple[int, int]] = None
    shots: List[Shot] = field(default_factory=list)
    reason: Optional[str] = None
    stages: List[Tuple[str, Register]] = field(default_factory=list)
    control: List[Qubit] = field(default_factory=list)
    target: List[Qubit] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.factors is not None


def _pair(p: int, N: int) -> Tuple[int, int]:
    q = N // p
    return (p, q) if p <= q else (q, p)


def _evaluate(bits: List[int], a: int, N: int) -> Shot:
    phase = binary_fraction(bits)
    s, r = convergent(continued_fraction(phase))
    shot = Shot(bits=bits, phase=phase, s=s, r=r)

    if r == 0 or is_odd(r):
        return shot
    ar2 = pow(a, r // 2, N)
    if ar2 == N - 1:
        return shot

    shot.p = gcd(ar2 - 1, N)
    shot.q = gcd(ar2 + 1, N)
    shot.found = any(1 < f < N and N % f == 0 for f in (shot.p, shot.q))
    return shot


def factorize(
    N: int,
    a: Optional[int] = None,
    t: int = 4,
    shots: int = 10,
    seed: Optional[int] = None,
) -> ShorResult:
    """
    Factor ``N`` with Shor's period-finding circuit.

    Parameters
    ----------
    N:
        Integer to factor, at least 2 and not prime.
    a:
        Base coprime to ``N`` with ``1 < a < N``. Chosen at random when
        omitted.
    t:
        Width of the control register (precision of the phase estimate).
    shots:
        Number of independent readouts of the control register.
    seed:
        Seed for every random choice, making the run reproducible.

    Returns
    -------
    ShorResult
        Even numbers, perfect powers and bases sharing a factor with ``N``
        are answered classically without simulating the circuit.

    Raises
    ------
    ValueError
        If ``N < 2``, ``N`` is prime, ``a`` is outside ``(1, N)``, or
        ``t``/``shots`` is not positive.
    """
    if N < 2:
        raise ValueError(f"N must be greater than 1, got N={N}")
    if is_prime(N):
        raise ValueError(f"N={N} is prime")
    if t < 1:
        raise ValueError(f"t must be positive, got t={t}")
    if shots < 1:
        raise ValueError(f"shots must be positive, got shots={shots}")

    if is_even(N):
        logger.info("N=%d is even: p=2, q=%d", N, N // 2)
        return ShorResult(N=N, a=a, t=t, factors=(2, N // 2), reason="even")

    power = base_exp(N)
    if power is not None:
        base, exp = power
        logger.info("N=%d is %d^%d", N, base, exp)
        return ShorResult(N=N, a=a, t=t, factors=_pair(base, N), reason="power")

    source = RandomSource(seed)
    if a is None:
        a = coprime(N, source)
    if a < 2 or a > N - 1:
        raise ValueError(f"a must satisfy 1 < a < N, got N={N}, a={a}")

    g = gcd(N, a)
    if g != 1:
        logger.info("a=%d shares the factor %d with N=%d", a, g, N)
        return ShorResult(N=N, a=a, t=t, factors=_pair(g, N), reason="gcd")

    result = ShorResult(N=N, a=a, t=t)
    reg = Register(rand=source)
    r0 = reg.zero_with(t)
    r1 = reg.zero_log2(N)
    result.control, result.target = r0, r1
    logger.info("N=%d, a=%d, t=%d, shots=%d, qubits=%d", N, a, t, shots, reg.n_qubits)

    reg.x(r1[-1])
    result.stages.append(("initial state", reg.clone()))

    reg.h(*r0)
    result.stages.append(("create superposition", reg.clone()))

    reg.cmodexp2(a, N, r0, r1)
    result.stages.append(("apply controlled-U", reg.clone()))

    reg.inverse_qft(*r0)
    result.stages.append(("apply inverse QFT", reg.clone()))

    reg.measure_as_binary(*r1)
    result.stages.append(("measure target register", reg.clone()))

    for i, rand in enumerate(source.spawn(shots)):
        bits = reg.clone(rand=rand).measure_as_binary(*r0)
        shot = _evaluate(bits, a, N)
        result.shots.append(shot)
        logger.info(
            "shot %d: s/r=%d/%d (%s=%.3f), p=%s, q=%s%s",
            i,
            shot.s,
            shot.r,
            bits,
            shot.phase,
            shot.p,
            shot.q,
            " *" if shot.found else "",
        )

        if shot.found and result.factors is None:
            f = next(f for f in (shot.p, shot.q) if 1 < f < N and N % f == 0)
            result.factors = _pair(f, N)

    return result


__all__ = ["Shot", "ShorResult", "factorize"]
