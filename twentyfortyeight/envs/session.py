"""
Explicit-state 2048 session.

Every action is a function ``(session, ...) -> session``. Rejected actions (a move without effect, a
move after game over, an undo with no history) return the very same session object, so callers can
detect them with ``is``. Randomness and wall-clock time are always passed in.
"""

import logging
from dataclasses import dataclass, field, replace

from numpy import ndarray
from numpy.random import Generator

from arcadekit.history import pop, push
from arcadekit.phase import GamePhase
from twentyfortyeight.config import GridConfig, default_config
from twentyfortyeight.core.gameboard import empty_board, fill_cells, has_won, is_done, latent_state, spawn_tile
from twentyfortyeight.core.gamemove import Direction, parse_direction
from twentyfortyeight.core.tiles import Tile, build_tiles

# ##>: Module logger.
_logger = logging.getLogger(__name__)


def _frozen(board: ndarray) -> ndarray:
    board.setflags(write=False)
    return board


@dataclass(frozen=True, eq=False)
class Snapshot:
    """Pre-move state saved for undo."""

    grid: ndarray
    tiles: tuple[Tile, ...]
    score: int


@dataclass(frozen=True, eq=False)
class GameSession:
    """
    Complete state of a 2048 game.

    Attributes
    ----------
    grid : ndarray
        Read-only board, 0 for empty cells.
    tiles : tuple[Tile, ...]
        One tile per occupied cell.
    score : int
        Elapsed seconds since the start plus the undo penalty, refreshed on every accepted move.
    best_score : int
        Highest score seen, carried across resets.
    is_game_over : bool
        No empty cell and no adjacent equal pair.
    is_game_won : bool
        A tile reached the win tile at some point of this game.
    game_started : bool
        The player started the game.
    history : tuple[Snapshot, ...]
        Undo stack, most recent last.
    start_time : float or None
        Wall-clock time of the start, in seconds.
    undo_count : int
        Number of undos in this game.
    next_tile_id : int
        Next unused tile id.
    config : GridConfig
        Rules of this game.
    """

    grid: ndarray
    tiles: tuple[Tile, ...]
    score: int = 0
    best_score: int = 0
    is_game_over: bool = False
    is_game_won: bool = False
    game_started: bool = False
    history: tuple[Snapshot, ...] = ()
    start_time: float | None = None
    undo_count: int = 0
    next_tile_id: int = 1
    config: GridConfig = field(default_factory=default_config)

    @property
    def phase(self) -> GamePhase:
        """Lifecycle phase derived from the flags."""
        if self.is_game_over:
            return GamePhase.OVER
        if self.is_game_won:
            return GamePhase.WON
        if self.game_started:
            return GamePhase.PLAYING
        return GamePhase.NOT_STARTED

    @property
    def can_undo(self) -> bool:
        return bool(self.history)


def _spawn(
    grid: ndarray, tiles: tuple[Tile, ...], next_id: int, rng: Generator, config: GridConfig
) -> tuple[ndarray, tuple[Tile, ...], int]:
    """Spawn one tile and append it to the tile list."""
    grid, cell = spawn_tile(grid, rng, config.spawn_probs)
    if cell is None:
        return grid, tiles, next_id
    row, col = cell
    tile = Tile(id=next_id, value=int(grid[row, col]), row=row, col=col, is_new=True)
    return grid, (*tiles, tile), next_id + 1


def elapsed_score(session: GameSession, now: float) -> int:
    """
    Compute the time-based score.

    Parameters
    ----------
    session : GameSession
        The current session.
    now : float
        Current wall-clock time, in seconds.

    Returns
    -------
    int
        Whole seconds since ``start_time`` (0 when the clock never started) plus the undo penalty.
    """
    elapsed = 0
    if session.start_time is not None:
        elapsed = max(0, int(now - session.start_time))
    return elapsed + session.undo_count * session.config.undo_penalty


def new_game(rng: Generator, best_score: int = 0, config: GridConfig | None = None) -> GameSession:
    """
    Create a game with the starting tiles, not yet started.

    Parameters
    ----------
    rng : Generator
        Random source for the starting tiles.
    best_score : int, optional
        Previously persisted best score (default is 0).
    config : GridConfig, optional
        Rules of the game (default is ``default_config()``).

    Returns
    -------
    GameSession
        The new session.
    """
    config = config or default_config()
    grid, cells = fill_cells(empty_board(config.size), config.start_tiles, rng, config.spawn_probs)
    tiles = tuple(
        Tile(id=index, value=int(grid[row, col]), row=row, col=col, is_new=True)
        for index, (row, col) in enumerate(cells, start=1)
    )

    return GameSession(
        grid=_frozen(grid),
        tiles=tiles,
        best_score=best_score,
        next_tile_id=len(tiles) + 1,
        config=config,
    )


def start(session: GameSession, now: float) -> GameSession:
    """
    Mark the game as started and start the clock if it is not running yet.

    The board is never reseeded; calling it again keeps the original start time.
    """
    start_time = session.start_time if session.start_time is not None else now
    if session.game_started and start_time == session.start_time:
        return session
    return replace(session, game_started=True, start_time=start_time)


def move(session: GameSession, direction: Direction | int | str, rng: Generator, now: float) -> GameSession:
    """
    Apply a directional move.

    Parameters
    ----------
    session : GameSession
        The current session.
    direction : Direction, int or str
        The direction to apply.
    rng : Generator
        Random source for the spawned tile.
    now : float
        Current wall-clock time, in seconds, for the score.

    Returns
    -------
    GameSession
        The session after the move, or ``session`` itself when the move was rejected.

    Notes
    -----
    - A move is rejected when the game is over or when no cell changes and nothing merges.
    - On an accepted move the pre-move grid, tiles and score are pushed on the history, the tiles
      are rebuilt with fresh ids, one tile is spawned (if a cell is free), and the score, best
      score, win and game-over flags are refreshed.
    """
    direction = parse_direction(direction)
    if session.is_game_over:
        _logger.debug('Move %s ignored: game over', direction.name)
        return session

    grid, score_gained, merged_mask, moved = latent_state(session.grid, direction)
    if not moved:
        _logger.debug('Move %s ignored: nothing to slide or merge', direction.name)
        return session

    config = session.config
    history = push(session.history, Snapshot(grid=session.grid, tiles=session.tiles, score=session.score))

    # ##: Rebuild tiles then spawn.
    tiles, next_id = build_tiles(grid, merged_mask, session.next_tile_id)
    grid, tiles, next_id = _spawn(grid, tiles, next_id, rng, config)

    score = elapsed_score(session, now)
    best_score = max(session.best_score, score)
    is_game_won = session.is_game_won or has_won(grid, config.win_tile)
    is_game_over = is_done(grid)

    _logger.debug('Move %s accepted, merges worth %d', direction.name, score_gained)
    if is_game_won and not session.is_game_won:
        _logger.info('Reached %d', config.win_tile)
    if is_game_over:
        _logger.info('Game over with score %d', score)

    return replace(
        session,
        grid=_frozen(grid),
        tiles=tiles,
        score=score,
        best_score=best_score,
        is_game_won=is_game_won,
        is_game_over=is_game_over,
        history=history,
        next_tile_id=next_id,
    )


def undo(session: GameSession) -> GameSession:
    """
    Restore the grid, tiles and score saved before the last accepted move.

    Every undo adds one to ``undo_count`` and clears the game-over flag. The win flag is left as it
    is, so an undo never takes back a win.
    """
    if not session.can_undo:
        return session
    snapshot, history = pop(session.history)
    return replace(
        session,
        grid=snapshot.grid,
        tiles=snapshot.tiles,
        score=snapshot.score,
        history=history,
        undo_count=session.undo_count + 1,
        is_game_over=False,
    )


def reset(session: GameSession, rng: Generator, now: float) -> GameSession:
    """
    Start over with new tiles, keeping only the best score.

    The reset game is started and its clock runs from ``now``.
    """
    fresh = new_game(rng, best_score=session.best_score, config=session.config)
    return replace(fresh, game_started=True, start_time=now)
