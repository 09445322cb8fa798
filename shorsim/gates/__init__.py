"""Quantum gate library."""

from . import modexp
from .modexp import cmodexp2
from .standard import (
    CNOT,
    CR,
    CZ,
    RX,
    RY,
    RZ,
    H,
    I,
    R,
    S,
    T,
    U,
    X,
    Y,
    Z,
    controlled,
    controlled_not,
    controlled_r,
    controlled_swap,
    controlled_z,
    embed,
    fredkin,
    inverse_qft,
    qft,
    swap,
    toffoli,
)

__all__ = [
    "I",
    "X",
    "Y",
    "Z",
    "H",
    "S",
    "T",
    "U",
    "R",
    "RX",
    "RY",
    "RZ",
    "CNOT",
    "CZ",
    "CR",
    "toffoli",
    "fredkin",
    "swap",
    "controlled",
    "controlled_not",
    "controlled_z",
    "controlled_r",
    "controlled_swap",
    "embed",
    "qft",
    "inverse_qft",
    "cmodexp2",
    "modexp",
]
