"""Text rendering of register states.

These helpers are read-only: they project a register through
:meth:`~shorsim.register.Register.state` and never change it.
"""

from __future__ import annotations

import sys
from typing import IO, Optional, Sequence

from ..register import Qubit, Register, State

BAR_WIDTH = 32


def format_state(state: State) -> str:
    """
    Render one basis state as ``[binary...][index...]( re im i): prob``.

    >>> format_state(State(amplitude=1 + 0j, probability=1.0, index=[1], binary=["01"]))
    "['01'][1]( 1.0000 0.0000i): 1.0000"
    """
    return str(state)


def print_states(
    register: Register,
    *registers: Sequence[Qubit],
    title: Optional[str] = None,
    file: Optional[IO[str]] = None,
) -> None:
    """
    Print every non-zero basis state of ``register`` with a probability bar.

    Bars are scaled so the most probable basis state fills ``BAR_WIDTH``
    columns. This is a utility function for human-readable output, so it
    uses print() intentionally.

    Parameters
    ----------
    register:
        Register to display.
    *registers:
        Sub-registers to read each basis state through.
    title:
        Optional heading printed first.
    file:
        File-like object to write to. If None, writes to sys.stdout.
    """
    if file is None:
        file = sys.stdout

    if title is not None:
        print(title, file=file)

    peak = float(register.probabilities().max())
    for s in register.state(*registers):
        width = int(s.probability / peak * BAR_WIDTH) if peak > 0 else 0
        print(f"{format_state(s)}: {'*' * width}", file=file)

    print(file=file)


__all__ = ["BAR_WIDTH", "format_state", "print_states"]
