"""
Explicit-state colour-sort puzzle session.

Every action is a function ``(session, ...) -> session``. Ineffective actions return the same
session object; referencing a flask that does not exist raises ``UnknownFlaskError``.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from numpy.random import Generator

from arcadekit.history import pop, push
from arcadekit.phase import GamePhase
from flasksort.config import Difficulty
from flasksort.core.flask import Flask
from flasksort.core.pour import fill_flasks, find_flask, is_win_state, pour

# ##>: Module logger.
_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlaskSnapshot:
    """Pre-pour state saved for undo."""

    flasks: tuple[Flask, ...]
    move_count: int


@dataclass(frozen=True)
class PuzzleSession:
    """
    Complete state of a colour-sort puzzle.

    Attributes
    ----------
    flasks : tuple[Flask, ...]
        The flasks, in display order.
    difficulty : Difficulty
        Preset the puzzle was dealt with.
    selected_flask_id : int or None
        Flask picked by the first click of a pour.
    move_count : int
        Number of committed pours.
    is_won : bool
        Every flask is empty or full with a single colour.
    best_moves_by_difficulty : Mapping[Difficulty, int]
        Fewest moves of a win per difficulty; a missing entry means no win yet.
    grouped_moves_enabled : bool
        Pours move the whole top run of a colour.
    history : tuple[FlaskSnapshot, ...]
        Undo stack, most recent last.
    """

    flasks: tuple[Flask, ...]
    difficulty: Difficulty = Difficulty.NORMAL
    selected_flask_id: int | None = None
    move_count: int = 0
    is_won: bool = False
    best_moves_by_difficulty: Mapping[Difficulty, int] = field(default_factory=dict)
    grouped_moves_enabled: bool = False
    history: tuple[FlaskSnapshot, ...] = ()

    @property
    def phase(self) -> GamePhase:
        """Lifecycle phase derived from the state."""
        if self.is_won:
            return GamePhase.WON
        if self.move_count or self.history:
            return GamePhase.PLAYING
        return GamePhase.NOT_STARTED

    @property
    def best_moves(self) -> int | None:
        """Best move count of the current difficulty, None before the first win."""
        return self.best_moves_by_difficulty.get(self.difficulty)

    def flask(self, flask_id: int) -> Flask:
        """Return the flask with ``flask_id``, raising ``UnknownFlaskError`` if absent."""
        return find_flask(self.flasks, flask_id)


def new_puzzle(
    difficulty: Difficulty | str,
    rng: Generator,
    best_moves_by_difficulty: Mapping[Difficulty | str, int] | None = None,
    grouped_moves_enabled: bool = False,
) -> PuzzleSession:
    """
    Deal a new puzzle.

    Parameters
    ----------
    difficulty : Difficulty or str
        The difficulty of the puzzle.
    rng : Generator
        Random source for the shuffle.
    best_moves_by_difficulty : Mapping, optional
        Previously persisted best move counts.
    grouped_moves_enabled : bool, optional
        Previously persisted grouped-move preference (default is False).

    Returns
    -------
    PuzzleSession
        A session with no move, no history and nothing selected.
    """
    difficulty = Difficulty.parse(difficulty)
    best = {Difficulty.parse(key): int(value) for key, value in (best_moves_by_difficulty or {}).items()}
    return PuzzleSession(
        flasks=fill_flasks(difficulty, rng),
        difficulty=difficulty,
        best_moves_by_difficulty=best,
        grouped_moves_enabled=grouped_moves_enabled,
    )


def select_flask(session: PuzzleSession, flask_id: int) -> PuzzleSession:
    """
    Handle a click on a flask (two-click pour protocol).

    Parameters
    ----------
    session : PuzzleSession
        The current session.
    flask_id : int
        The clicked flask.

    Returns
    -------
    PuzzleSession
        The new session.

    Raises
    ------
    UnknownFlaskError
        If ``flask_id`` is not in the puzzle.

    Notes
    -----
    - With nothing selected the click selects the flask.
    - A click on the selected flask deselects it.
    - Otherwise the selected flask is poured into the clicked one. When the source is empty, the
      target is full, or (grouped mode) the top run does not fit, nothing moves and the selection
      slides to the clicked flask.
    - A committed pour saves a snapshot, adds one move, clears the selection and refreshes the win
      flag.
    - A won puzzle is final: every later click returns the same session, so no pour can scramble
      the solution or change the recorded move count. The win is only left through ``undo``,
      ``reset`` or ``set_difficulty``. Pouring on after a win, with the win flag recomputed on
      each pour, is deliberately not supported.
    """
    session.flask(flask_id)
    if session.is_won:
        return session

    selected = session.selected_flask_id
    if selected is None:
        return replace(session, selected_flask_id=flask_id)
    if selected == flask_id:
        return replace(session, selected_flask_id=None)

    flasks = pour(session.flasks, selected, flask_id, session.grouped_moves_enabled)
    if flasks is None:
        _logger.debug('Pour %d -> %d rejected, selecting %d', selected, flask_id, flask_id)
        return replace(session, selected_flask_id=flask_id)

    history = push(session.history, FlaskSnapshot(flasks=session.flasks, move_count=session.move_count))
    is_won = is_win_state(flasks)
    if is_won:
        _logger.info('Puzzle %s solved in %d moves', session.difficulty.value, session.move_count + 1)

    return replace(
        session,
        flasks=flasks,
        selected_flask_id=None,
        move_count=session.move_count + 1,
        is_won=is_won,
        history=history,
    )


def undo(session: PuzzleSession) -> PuzzleSession:
    """
    Take back the last pour.

    Restores the flasks and move count, clears the selection and the win flag. No-op without history.
    """
    snapshot, history = pop(session.history)
    if snapshot is None:
        return session
    return replace(
        session,
        flasks=snapshot.flasks,
        move_count=snapshot.move_count,
        history=history,
        selected_flask_id=None,
        is_won=False,
    )


def reset(session: PuzzleSession, rng: Generator) -> PuzzleSession:
    """Deal a new puzzle of the same difficulty, keeping best moves and the grouped preference."""
    return new_puzzle(
        session.difficulty,
        rng,
        best_moves_by_difficulty=session.best_moves_by_difficulty,
        grouped_moves_enabled=session.grouped_moves_enabled,
    )


def set_difficulty(session: PuzzleSession, difficulty: Difficulty | str, rng: Generator) -> PuzzleSession:
    """Switch difficulty and deal a new puzzle for it."""
    difficulty = Difficulty.parse(difficulty)
    return new_puzzle(
        difficulty,
        rng,
        best_moves_by_difficulty=session.best_moves_by_difficulty,
        grouped_moves_enabled=session.grouped_moves_enabled,
    )


def set_grouped_moves(session: PuzzleSession, enabled: bool) -> PuzzleSession:
    """Turn grouped pours on or off for the following pours."""
    if session.grouped_moves_enabled == enabled:
        return session
    return replace(session, grouped_moves_enabled=bool(enabled))


def record_win(
    best_moves_by_difficulty: Mapping[Difficulty, int], difficulty: Difficulty | str, moves: int
) -> tuple[dict[Difficulty, int], bool]:
    """
    Keep the lowest winning move count of a difficulty.

    Parameters
    ----------
    best_moves_by_difficulty : Mapping[Difficulty, int]
        Current best move counts; a missing difficulty counts as infinite.
    difficulty : Difficulty or str
        Difficulty of the won puzzle.
    moves : int
        Moves of the win.

    Returns
    -------
    best : dict[Difficulty, int]
        The updated best move counts.
    improved : bool
        True when ``moves`` beat the stored best and should be persisted.
    """
    difficulty = Difficulty.parse(difficulty)
    best = dict(best_moves_by_difficulty)
    current = best.get(difficulty)
    if current is not None and moves >= current:
        return best, False
    best[difficulty] = moves
    return best, True


def apply_win(session: PuzzleSession) -> tuple[PuzzleSession, bool]:
    """
    Record the move count of a won session in its best moves.

    Returns
    -------
    session : PuzzleSession
        The session with updated best moves (the same object when nothing improved).
    improved : bool
        True when a new best was recorded.
    """
    if not session.is_won:
        return session, False
    best, improved = record_win(session.best_moves_by_difficulty, session.difficulty, session.move_count)
    if not improved:
        return session, False
    return replace(session, best_moves_by_difficulty=best), True
