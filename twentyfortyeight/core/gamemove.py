"""
Move utilities for the 2048 grid engine: directions and legal move detection.
"""

from enum import IntEnum

from numpy import ndarray, rot90


class Direction(IntEnum):
    """
    Move directions.

    The value is the number of counter-clockwise quarter turns that bring the direction to "left",
    so a move is always computed as a left compaction of the rotated board.
    """

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3


# ##: All Actions.
ACTIONS = {'left': Direction.LEFT, 'up': Direction.UP, 'right': Direction.RIGHT, 'down': Direction.DOWN}


def parse_direction(direction: Direction | int | str) -> Direction:
    """
    Convert a direction name, index or member to a ``Direction``.

    Parameters
    ----------
    direction : Direction, int or str
        ``'left'``, ``'up'``, ``'right'``, ``'down'`` (case-insensitive), 0-3, or a member.

    Returns
    -------
    Direction
        The matching direction.

    Raises
    ------
    ValueError
        If the value names no direction.
    """
    if isinstance(direction, str):
        try:
            return ACTIONS[direction.lower()]
        except KeyError:
            raise ValueError(f'Unknown direction: {direction!r}') from None
    return Direction(direction)


def _can_slide_left(board: ndarray) -> bool:
    """Check if a left move changes a board: an empty cell before a tile, or an adjacent equal pair."""
    before, after = board[:, :-1], board[:, 1:]
    gap = (before == 0) & (after != 0)
    pair = (before != 0) & (before == after)
    return bool(gap.any() or pair.any())


def legal_actions_mask(state: ndarray) -> dict[Direction, bool]:
    """
    Check every direction for an effect on the board.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    dict[Direction, bool]
        True for each direction whose move would slide or merge a tile.

    Notes
    -----
    Each direction is checked as a left move of the board rotated by the direction value, the same
    rotation ``latent_state`` applies.
    """
    return {direction: _can_slide_left(rot90(state, k=int(direction))) for direction in Direction}


def legal_actions(state: ndarray) -> list[Direction]:
    """
    Directions that would change the board.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    list[Direction]
        Accepted directions, in (left, up, right, down) order.
    """
    mask = legal_actions_mask(state)
    return [direction for direction in Direction if mask[direction]]
