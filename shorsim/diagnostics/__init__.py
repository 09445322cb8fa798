"""Diagnostics and debugging utilities for shorsim."""

from .core import (
    assert_hermitian,
    assert_normalized,
    assert_unitary,
    fidelity,
    is_hermitian,
    state_norm,
    trace_distance,
)
from .debug_mode import (
    DebugSettings,
    check_state,
    debug_context,
    debug_settings,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "state_norm",
    "assert_normalized",
    "is_hermitian",
    "assert_hermitian",
    "assert_unitary",
    "fidelity",
    "trace_distance",
    "DebugSettings",
    "check_state",
    "debug_settings",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
