"""shorsim - a dense state-vector quantum simulator with Shor's algorithm."""

__version__ = "0.1.0"

# Algorithms
from .algorithms import ShorResult, Shot, factorize

# Density matrices
from .density import DensityMatrix

# Diagnostics
from .diagnostics import (
    assert_hermitian,
    assert_normalized,
    assert_unitary,
    debug_context,
    fidelity,
    is_debug_enabled,
    set_debug_enabled,
    state_norm,
    trace_distance,
)

# Gates
from .gates import (
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
    cmodexp2,
    controlled,
    embed,
    fredkin,
    inverse_qft,
    qft,
    swap,
    toffoli,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Number theory
from .number import (
    binary_fraction,
    continued_fraction,
    convergent,
)

# Random sources
from .rand import CryptoRandomSource, RandomSource, crypto_rand

# Simulator
from .register import Qubit, Register, State

# Presentation
from .viz import format_state, print_states

__all__ = [
    "__version__",
    # Simulator
    "Qubit",
    "Register",
    "State",
    # Gates
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
    "embed",
    "qft",
    "inverse_qft",
    "cmodexp2",
    # Number theory
    "binary_fraction",
    "continued_fraction",
    "convergent",
    # Random sources
    "RandomSource",
    "CryptoRandomSource",
    "crypto_rand",
    # Density matrices
    "DensityMatrix",
    # Diagnostics
    "state_norm",
    "assert_normalized",
    "assert_hermitian",
    "assert_unitary",
    "fidelity",
    "trace_distance",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Algorithms
    "factorize",
    "ShorResult",
    "Shot",
    # Presentation
    "format_state",
    "print_states",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
