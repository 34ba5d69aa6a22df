"""
Tile view of a 2048 board.

The board array is the source of truth for the rules; tiles are the identity layer handed to the
renderer. They are rebuilt with fresh ids after every accepted move so that "new" and "merged"
hints never leak from one move to the next.
"""

from dataclasses import dataclass

from numpy import ndarray


@dataclass(frozen=True)
class Tile:
    """
    A single occupied cell.

    Attributes
    ----------
    id : int
        Unique, monotonically increasing identifier.
    value : int
        Tile value, a power of two >= 2.
    row : int
        Row index on the board.
    col : int
        Column index on the board.
    is_new : bool
        True for a freshly spawned tile or a tile produced by a merge in the last move.
    merged_from : tuple[int, ...] or None
        Ids of the tiles this one was merged from, when known.
    """

    id: int
    value: int
    row: int
    col: int
    is_new: bool = False
    merged_from: tuple[int, ...] | None = None


def build_tiles(board: ndarray, new_mask: ndarray | None, next_id: int) -> tuple[tuple[Tile, ...], int]:
    """
    Create one tile per occupied cell, in row-major order.

    Parameters
    ----------
    board : ndarray
        The game board, 0 for empty cells.
    new_mask : ndarray or None
        Boolean array of the board shape marking cells whose tile is flagged ``is_new``.
    next_id : int
        First id to hand out.

    Returns
    -------
    tiles : tuple[Tile, ...]
        The tiles of the board.
    next_id : int
        The next unused id.
    """
    tiles = []
    rows, cols = board.shape
    for row in range(rows):
        for col in range(cols):
            value = int(board[row, col])
            if value == 0:
                continue
            is_new = bool(new_mask[row, col]) if new_mask is not None else False
            tiles.append(Tile(id=next_id, value=value, row=row, col=col, is_new=is_new))
            next_id += 1
    return tuple(tiles), next_id
