"""Stateful 2048 controller for a presentation layer."""

import logging
import time
from typing import Callable

from numpy.random import Generator, default_rng

from arcadekit.storage import KeyValueStore, MemoryStore
from twentyfortyeight.config import GridConfig, default_config
from twentyfortyeight.core.gamemove import ACTIONS, Direction, legal_actions
from twentyfortyeight.envs import session as engine
from twentyfortyeight.envs.session import GameSession

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class TwentyFortyEight:
    """
    2048 game.

    This class owns the current ``GameSession`` together with its collaborators: the random source,
    the clock and the store where the best score is kept. Each action delegates to the pure session
    functions and returns the resulting session.
    """

    # ##: All Actions.
    ACTIONS = ACTIONS

    def __init__(
        self,
        store: KeyValueStore | None = None,
        seed: int | None = None,
        rng: Generator | None = None,
        clock: Callable[[], float] = time.time,
        config: GridConfig | None = None,
    ):
        """
        Initialize the game with a fresh board.

        Parameters
        ----------
        store : KeyValueStore, optional
            Where the best score is loaded from and saved to (default is an in-memory store).
        seed : int, optional
            Seed of the random source, ignored when ``rng`` is given.
        rng : Generator, optional
            Random source for tile spawns.
        clock : callable, optional
            Returns the wall-clock time in seconds (default is ``time.time``).
        config : GridConfig, optional
            Rules of the game.
        """
        self.config = config or default_config()
        self._store = store if store is not None else MemoryStore()
        self._rng = rng if rng is not None else default_rng(seed)
        self._clock = clock
        self._state = engine.new_game(self._rng, best_score=self._load_best_score(), config=self.config)

    def _load_best_score(self) -> int:
        stored = self._store.load(self.config.best_score_key)
        if stored is None:
            return 0
        try:
            return max(0, int(stored))
        except ValueError:
            _logger.warning('Ignoring stored best score %r', stored)
            return 0

    def _commit(self, state: GameSession) -> GameSession:
        if state.best_score > self._state.best_score:
            _logger.info('New best score %d', state.best_score)
            self._store.save(self.config.best_score_key, str(state.best_score))
        self._state = state
        return state

    @property
    def state(self) -> GameSession:
        """The current session."""
        return self._state

    @property
    def is_finished(self) -> bool:
        return self._state.is_game_over

    @property
    def legal_moves(self) -> list[Direction]:
        """Directions a move would currently accept, empty once the game is over."""
        if self._state.is_game_over:
            return []
        return legal_actions(self._state.grid)

    @property
    def can_undo(self) -> bool:
        return self._state.can_undo

    def start(self) -> GameSession:
        """Start the game and its clock."""
        return self._commit(engine.start(self._state, now=self._clock()))

    def move(self, direction: Direction | int | str) -> GameSession:
        """Apply a move in the given direction."""
        return self._commit(engine.move(self._state, direction, rng=self._rng, now=self._clock()))

    def undo(self) -> GameSession:
        """Take back the last accepted move."""
        return self._commit(engine.undo(self._state))

    def reset(self) -> GameSession:
        """Start a new game, keeping the best score."""
        return self._commit(engine.reset(self._state, rng=self._rng, now=self._clock()))

    def render(self) -> str:
        """
        Render the board as text, one row per line and ``.`` for empty cells.

        Returns
        -------
        str
            The board.
        """
        rows = self._state.grid.tolist()
        return '\n'.join(' \t'.join(str(value) if value else '.' for value in row) for row in rows)
