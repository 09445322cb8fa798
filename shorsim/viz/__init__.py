"""Text rendering of register states.

This module provides:
- Single-state formatting
- Probability bar listings for whole registers
"""

from .summary import BAR_WIDTH, format_state, print_states

__all__ = ["BAR_WIDTH", "format_state", "print_states"]
