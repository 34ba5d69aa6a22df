"""
Core functionality of the 2048 grid engine: sliding, merging, spawning and end-of-game checks.

Boards are 2D ``int64`` arrays where 0 marks an empty cell. None of these functions modify their
input; every transition returns a new array.
"""

import logging

from numpy import all as np_all
from numpy import any as np_any
from numpy import argwhere, array_equal, int64, ndarray, rot90, zeros, zeros_like
from numpy.random import Generator

from twentyfortyeight.core.gamemove import Direction

# ##>: Module logger.
_logger = logging.getLogger(__name__)

# ##>: Tile spawn probabilities for 2048 game (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}


def merge_column(column: ndarray) -> tuple[int, ndarray, ndarray]:
    """
    Compact a line toward its start, merging adjacent equal values.

    Parameters
    ----------
    column : ndarray
        A 1D array representing one row or column of the game board.

    Returns
    -------
    score : int
        The sum of the merged values.
    merged_column : ndarray
        The line after compaction, padded with zeros to its original length.
    merged_mask : ndarray
        Boolean array, True where a cell of ``merged_column`` was produced by a merge.

    Notes
    -----
    - Zeros (empty cells) are ignored and removed before merging.
    - Merging is not chained: a tile produced by a merge is never merged again in the same call.
    """
    non_zero = column[column != 0]
    result = zeros_like(column)
    merged_mask = zeros(len(column), dtype=bool)
    score = 0

    # ##: Scan left to right, consuming one or two source values per output cell.
    i, position = 0, 0
    while i < len(non_zero):
        if i + 1 < len(non_zero) and non_zero[i] == non_zero[i + 1]:
            merged = non_zero[i] * 2
            result[position] = merged
            merged_mask[position] = True
            score += int(merged)
            i += 2
        else:
            result[position] = non_zero[i]
            i += 1
        position += 1

    return score, result, merged_mask


def slide_and_merge(board: ndarray) -> tuple[int, ndarray, ndarray]:
    """
    Slide the game board to the left and merge adjacent cells.

    Parameters
    ----------
    board : ndarray
        The game board represented as a 2D NumPy array.

    Returns
    -------
    score : int
        The total score obtained from all merges.
    updated_board : ndarray
        The board after sliding and merging.
    merged_mask : ndarray
        Boolean array of the board shape, True on cells produced by a merge.

    Notes
    -----
    For other directions, rotate the board before calling this function.
    """
    result = zeros_like(board)
    merged_mask = zeros(board.shape, dtype=bool)
    score = 0

    for i, row in enumerate(board):
        score_row, result[i], merged_mask[i] = merge_column(row)
        score += score_row

    return score, result, merged_mask


def latent_state(state: ndarray, action: Direction | int) -> tuple[ndarray, int, ndarray, bool]:
    """
    Apply a move without adding a new tile.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.
    action : Direction or int
        The direction to apply (0: left, 1: up, 2: right, 3: down).

    Returns
    -------
    new_state : ndarray
        The board after the move.
    score_gained : int
        The sum of the values produced by merges.
    merged_mask : ndarray
        Boolean array of the board shape, True on cells produced by a merge.
    moved : bool
        True if any cell changed or any merge happened.

    Notes
    -----
    Right, up and down are computed as a left move of the rotated board, which is the same as
    reversing each line before compaction and restoring it afterwards.
    """
    rotated_board = rot90(state, k=int(action))
    score, updated_board, merged_mask = slide_and_merge(rotated_board)
    new_state = rot90(updated_board, k=-int(action)).copy()
    merged_mask = rot90(merged_mask, k=-int(action)).copy()
    moved = not array_equal(new_state, state) or score > 0
    return new_state, score, merged_mask, moved


def empty_cells(state: ndarray) -> list[tuple[int, int]]:
    """Return the (row, col) positions of the empty cells in row-major order."""
    return [(int(row), int(col)) for row, col in argwhere(state == 0)]


def spawn_tile(
    state: ndarray, rng: Generator, spawn_probs: dict[int, float] | None = None
) -> tuple[ndarray, tuple[int, int] | None]:
    """
    Place one new tile on a uniformly chosen empty cell.

    Parameters
    ----------
    state : ndarray
        The current state of the game board. Not modified.
    rng : Generator
        Random source for the cell and the value.
    spawn_probs : dict[int, float], optional
        Probability of each tile value (default is ``TILE_SPAWN_PROBS``).

    Returns
    -------
    new_state : ndarray
        A copy of the board with the tile added, or the board itself when it is full.
    cell : tuple[int, int] or None
        Position of the new tile, None when no empty cell remained.
    """
    cells = empty_cells(state)
    if not cells:
        return state, None

    probs = spawn_probs or TILE_SPAWN_PROBS
    cell = cells[int(rng.integers(len(cells)))]
    value = int(rng.choice(list(probs), p=list(probs.values())))

    new_state = state.copy()
    new_state[cell] = value
    _logger.debug('Spawned %d at %s', value, cell)
    return new_state, cell


def fill_cells(
    state: ndarray, number_tile: int, rng: Generator, spawn_probs: dict[int, float] | None = None
) -> tuple[ndarray, list[tuple[int, int]]]:
    """
    Spawn several tiles one after the other.

    Parameters
    ----------
    state : ndarray
        The current state of the game board. Not modified.
    number_tile : int
        Number of new tiles to add.
    rng : Generator
        Random source.
    spawn_probs : dict[int, float], optional
        Probability of each tile value.

    Returns
    -------
    new_state : ndarray
        The board with the new tiles.
    cells : list[tuple[int, int]]
        Positions of the new tiles in spawn order. Shorter than ``number_tile`` when the board ran
        out of empty cells.
    """
    cells = []
    for _ in range(number_tile):
        state, cell = spawn_tile(state, rng, spawn_probs)
        if cell is None:
            break
        cells.append(cell)
    return state, cells


def empty_board(size: int = 4) -> ndarray:
    """Return a ``size x size`` board with no tile."""
    return zeros((size, size), dtype=int64)


def has_won(state: ndarray, win_tile: int = 2048) -> bool:
    """Check if any tile has reached ``win_tile``."""
    return bool(np_any(state >= win_tile))


def is_done(state: ndarray) -> bool:
    """
    Check if the game has ended by determining if any moves are possible.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    bool
        True if the game is over (no moves possible), False otherwise.

    Notes
    -----
    The game is over when there are no empty cells AND no adjacent cells have the same value.
    """
    return bool(
        np_all(state != 0) and not np_any(state[:-1] == state[1:]) and not np_any(state[:, :-1] == state[:, 1:])
    )
