# -*- coding: utf-8 -*-
"""
Flask model and pour rules of the colour-sort puzzle.
"""

from .flask import Flask, UnknownFlaskError
from .pour import (
    can_pour,
    color_histogram,
    expected_histogram,
    fill_flasks,
    find_flask,
    is_win_state,
    moving_count,
    pour,
)

__all__ = [
    "Flask",
    "UnknownFlaskError",
    "fill_flasks",
    "find_flask",
    "moving_count",
    "can_pour",
    "pour",
    "is_win_state",
    "color_histogram",
    "expected_histogram",
]
