"""
Rules of the flask colour-sort puzzle: dealing a puzzle, pouring and detecting a win.

Any flask with room accepts a pour, whatever its top colour. Only the capacity limits a move.
"""

from collections import Counter
from collections.abc import Sequence

from numpy.random import Generator

from flasksort.config import PALETTE, Difficulty, PuzzleLayout, layout_for
from flasksort.core.flask import Flask, UnknownFlaskError


def fill_flasks(difficulty: Difficulty | str, rng: Generator) -> tuple[Flask, ...]:
    """
    Deal a shuffled puzzle.

    Parameters
    ----------
    difficulty : Difficulty or str
        The difficulty, which sets the dimensions of the puzzle.
    rng : Generator
        Random source for the shuffle.

    Returns
    -------
    tuple[Flask, ...]
        The flasks, ids ``0 .. total_flasks - 1``.

    Notes
    -----
    - The pool holds exactly ``pieces_per_color`` units of each of the first ``num_colors``
      palette colours.
    - After a uniform shuffle the units are dealt round-robin, one at a time, so flask sizes differ
      by at most one and no flask starts full.
    """
    layout = layout_for(difficulty)
    pool = [color for color in PALETTE[: layout.num_colors] for _ in range(layout.pieces_per_color)]
    order = rng.permutation(len(pool))
    shuffled = [pool[index] for index in order]

    return tuple(
        Flask(id=index, colors=tuple(shuffled[index :: layout.total_flasks]), capacity=layout.capacity)
        for index in range(layout.total_flasks)
    )


def find_flask(flasks: Sequence[Flask], flask_id: int) -> Flask:
    """
    Look up a flask by id.

    Raises
    ------
    UnknownFlaskError
        If no flask has that id.
    """
    for flask in flasks:
        if flask.id == flask_id:
            return flask
    raise UnknownFlaskError(flask_id)


def moving_count(source: Flask, grouped: bool) -> int:
    """
    Number of units a pour from ``source`` moves.

    Parameters
    ----------
    source : Flask
        The flask poured from.
    grouped : bool
        Whether the whole top run of one colour moves at once.

    Returns
    -------
    int
        0 for an empty flask, the top run length in grouped mode, 1 otherwise.
    """
    if source.is_empty:
        return 0
    return source.top_run() if grouped else 1


def can_pour(source: Flask, target: Flask, grouped: bool) -> bool:
    """
    Check if a pour from ``source`` into ``target`` is legal.

    The source must hold a unit and the target must have room for every unit that moves. In single
    mode this reduces to the target not being full.
    """
    count = moving_count(source, grouped)
    return count > 0 and not target.is_full and count <= target.free_space


def pour(flasks: Sequence[Flask], source_id: int, target_id: int, grouped: bool) -> tuple[Flask, ...] | None:
    """
    Pour the top unit (or top run) of one flask into another.

    Parameters
    ----------
    flasks : Sequence[Flask]
        The current flasks.
    source_id : int
        Id of the flask poured from.
    target_id : int
        Id of the flask poured into.
    grouped : bool
        Whether the whole top run moves.

    Returns
    -------
    tuple[Flask, ...] or None
        The flasks after the pour, None when the pour is not legal.

    Raises
    ------
    UnknownFlaskError
        If either id is not in ``flasks``.
    """
    source = find_flask(flasks, source_id)
    target = find_flask(flasks, target_id)
    if source_id == target_id or not can_pour(source, target, grouped):
        return None

    units, source = source.take(moving_count(source, grouped))
    target = target.add(units)
    replaced = {source.id: source, target.id: target}
    return tuple(replaced.get(flask.id, flask) for flask in flasks)


def is_win_state(flasks: Sequence[Flask]) -> bool:
    """Check if every flask is empty or full with a single colour."""
    return all(flask.is_solved for flask in flasks)


def color_histogram(flasks: Sequence[Flask]) -> Counter:
    """Count the units of each colour across all flasks."""
    return Counter(color for flask in flasks for color in flask.colors)


def expected_histogram(layout: PuzzleLayout) -> Counter:
    """Unit count of each colour in a freshly dealt puzzle of ``layout``."""
    return Counter({color: layout.pieces_per_color for color in PALETTE[: layout.num_colors]})
