# -*- coding: utf-8 -*-
"""
Click-reflex game: hit the moving target to score.
"""

from .game import ClickConfig, ClickMaster, ClickSession, click, end, new_session, reset_score, start

__all__ = [
    "ClickConfig",
    "ClickSession",
    "new_session",
    "start",
    "end",
    "click",
    "reset_score",
    "ClickMaster",
]
