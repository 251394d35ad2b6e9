"""Engine package exposing the board, state and action surfaces."""

from . import rules  # re-export for convenience

__all__ = ["rules"]
