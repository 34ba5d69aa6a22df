# -*- coding: utf-8 -*-
"""
Explicit-state puzzle session functions and the ``FlaskSort`` controller built on them.
"""

from .session import (
    FlaskSnapshot,
    PuzzleSession,
    apply_win,
    new_puzzle,
    record_win,
    reset,
    select_flask,
    set_difficulty,
    set_grouped_moves,
    undo,
)
from .flasksort import FlaskSort

__all__ = [
    "PuzzleSession",
    "FlaskSnapshot",
    "new_puzzle",
    "select_flask",
    "undo",
    "reset",
    "set_difficulty",
    "set_grouped_moves",
    "record_win",
    "apply_win",
    "FlaskSort",
]
