# -*- coding: utf-8 -*-
"""
Pure board functions of the 2048 grid engine.

It includes functions for checking legal and illegal moves, sliding and merging tiles, spawning
new tiles, detecting a win or the end of the game, and building the tile view of a board.
"""

from .gameboard import (
    TILE_SPAWN_PROBS,
    empty_board,
    empty_cells,
    fill_cells,
    has_won,
    is_done,
    latent_state,
    merge_column,
    slide_and_merge,
    spawn_tile,
)
from .gamemove import ACTIONS, Direction, legal_actions, legal_actions_mask, parse_direction
from .tiles import Tile, build_tiles

__all__ = [
    "ACTIONS",
    "Direction",
    "parse_direction",
    "legal_actions",
    "legal_actions_mask",
    "TILE_SPAWN_PROBS",
    "merge_column",
    "slide_and_merge",
    "latent_state",
    "empty_board",
    "empty_cells",
    "spawn_tile",
    "fill_cells",
    "has_won",
    "is_done",
    "Tile",
    "build_tiles",
]
