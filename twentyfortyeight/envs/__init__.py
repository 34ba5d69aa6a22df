# -*- coding: utf-8 -*-
"""
Explicit-state 2048 session functions and the ``TwentyFortyEight`` controller built on them.
"""

from .session import GameSession, Snapshot, elapsed_score, move, new_game, reset, start, undo
from .twentyfortyeight import TwentyFortyEight

__all__ = [
    "GameSession",
    "Snapshot",
    "new_game",
    "start",
    "move",
    "undo",
    "reset",
    "elapsed_score",
    "TwentyFortyEight",
]
