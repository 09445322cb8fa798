"""
Debug mode for register simulation.

With debug mode on, every register mutation (allocation, gate application,
measurement) re-checks that the state vector still has unit norm, using a
looser tolerance than the algebra helpers because errors accumulate over a
circuit. The switch and tolerance start from the environment:

* ``SHORSIM_DEBUG``: ``1``/``true``/``yes``/``on`` enables the checks;
* ``SHORSIM_DEBUG_ATOL``: tolerance on ``|sum |a_i|^2 - 1|`` (default 1e-10).
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator, Optional

from ..linalg.matrix import Array
from .core import assert_normalized

_DEBUG_ENV_VAR = "SHORSIM_DEBUG"
_ATOL_ENV_VAR = "SHORSIM_DEBUG_ATOL"
DEFAULT_DEBUG_ATOL = 1e-10


@dataclass(frozen=True)
class DebugSettings:
    enabled: bool = False
    atol: float = DEFAULT_DEBUG_ATOL


def _from_env() -> DebugSettings:
    enabled = os.getenv(_DEBUG_ENV_VAR, "0").lower() in ("1", "true", "yes", "on")
    raw = os.getenv(_ATOL_ENV_VAR)
    try:
        atol = DEFAULT_DEBUG_ATOL if raw is None else float(raw)
    except ValueError:
        raise ValueError(f"{_ATOL_ENV_VAR}={raw!r} is not a number") from None
    return DebugSettings(enabled=enabled, atol=atol)


_settings: DebugSettings = _from_env()


def _validated(settings: DebugSettings) -> DebugSettings:
    if not settings.atol > 0:
        raise ValueError(f"Debug tolerance must be positive, got {settings.atol}")
    return settings


def debug_settings() -> DebugSettings:
    """Current switch and tolerance."""
    return _settings


def is_debug_enabled() -> bool:
    return _settings.enabled


def set_debug_enabled(enabled: bool, atol: Optional[float] = None) -> None:
    """Globally enable or disable debug mode, optionally changing the tolerance."""
    global _settings
    changes = {"enabled": bool(enabled)}
    if atol is not None:
        changes["atol"] = float(atol)
    _settings = _validated(replace(_settings, **changes))


@contextmanager
def debug_context(enabled: bool = True, atol: Optional[float] = None) -> Iterator[None]:
    """
    Temporarily switch debug mode (and its tolerance).

    Example
    -------
    >>> with debug_context(True):
    ...     reg.h(q0)  # norm is verified after the gate
    """
    global _settings
    prev = _settings
    set_debug_enabled(enabled, atol)
    try:
        yield
    finally:
        _settings = prev


def check_state(state: Array, operation: str) -> None:
    """
    Verify ``state`` has unit norm when debug mode is on; no-op otherwise.

    Raises
    ------
    ValueError
        Naming ``operation`` when the norm is off by more than the debug
        tolerance or is not finite.
    """
    if not _settings.enabled:
        return
    try:
        assert_normalized(state, atol=_settings.atol)
    except ValueError as exc:
        raise ValueError(f"after {operation}: {exc}") from exc
