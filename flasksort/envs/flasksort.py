"""Stateful colour-sort controller for a presentation layer."""

import json
import logging

from numpy.random import Generator, default_rng

from arcadekit.storage import KeyValueStore, MemoryStore
from flasksort.config import BEST_MOVES_KEY, DEFAULT_DIFFICULTY, DIFFICULTY_KEY, GROUPED_MOVES_KEY, Difficulty
from flasksort.envs import session as engine
from flasksort.envs.session import PuzzleSession

# ##>: Module logger.
_logger = logging.getLogger(__name__)


def _as_move_count(value) -> int | None:
    """Return a stored move count as an int, None unless it is a non-negative whole number."""
    # ##>: JSON booleans decode as ints; Infinity and NaN decode as floats.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    return int(value) if value >= 0 else None


class FlaskSort:
    """
    Colour-sort puzzle.

    Owns the current ``PuzzleSession``, the random source and the store holding the preferences
    (difficulty, grouped moves) and the best move count of each difficulty. Preferences are read once
    at construction and written back whenever they change; a win that beats the stored best is
    recorded and saved on the pour that completes the puzzle.
    """

    def __init__(self, store: KeyValueStore | None = None, seed: int | None = None, rng: Generator | None = None):
        """
        Initialize the puzzle from the stored preferences.

        Parameters
        ----------
        store : KeyValueStore, optional
            Where preferences and best move counts live (default is an in-memory store).
        seed : int, optional
            Seed of the random source, ignored when ``rng`` is given.
        rng : Generator, optional
            Random source for the shuffles.
        """
        self._store = store if store is not None else MemoryStore()
        self._rng = rng if rng is not None else default_rng(seed)
        self._state = engine.new_puzzle(
            self._load_difficulty(),
            self._rng,
            best_moves_by_difficulty=self._load_best_moves(),
            grouped_moves_enabled=self._load_grouped_moves(),
        )

    def _load_difficulty(self) -> Difficulty:
        stored = self._store.load(DIFFICULTY_KEY)
        if stored is None:
            return DEFAULT_DIFFICULTY
        try:
            return Difficulty.parse(stored)
        except ValueError:
            _logger.warning('Ignoring stored difficulty %r', stored)
            return DEFAULT_DIFFICULTY

    def _load_grouped_moves(self) -> bool:
        return self._store.load(GROUPED_MOVES_KEY) == 'true'

    def _load_best_moves(self) -> dict[Difficulty, int]:
        stored = self._store.load(BEST_MOVES_KEY)
        if stored is None:
            return {}
        try:
            document = json.loads(stored)
        except ValueError:
            _logger.warning('Ignoring unreadable best moves %r', stored)
            return {}
        if not isinstance(document, dict):
            _logger.warning('Ignoring best moves %r: expected an object', stored)
            return {}

        best = {}
        for key, value in document.items():
            # ##>: Unset entries may have been saved as null.
            if value is None:
                continue
            moves = _as_move_count(value)
            try:
                difficulty = Difficulty.parse(key)
            except ValueError:
                moves = None
            if moves is None:
                _logger.warning('Ignoring best moves entry %r: %r', key, value)
                continue
            best[difficulty] = moves
        return best

    def _save_best_moves(self) -> None:
        document = {difficulty.value: moves for difficulty, moves in self._state.best_moves_by_difficulty.items()}
        self._store.save(BEST_MOVES_KEY, json.dumps(document, sort_keys=True))

    @property
    def state(self) -> PuzzleSession:
        """The current session."""
        return self._state

    @property
    def is_finished(self) -> bool:
        return self._state.is_won

    def select_flask(self, flask_id: int) -> PuzzleSession:
        """Click a flask; a win beating the stored best is saved."""
        state = engine.select_flask(self._state, flask_id)
        state, improved = engine.apply_win(state) if state is not self._state else (state, False)
        self._state = state
        if improved:
            _logger.info('New best for %s: %d moves', state.difficulty.value, state.move_count)
            self._save_best_moves()
        return state

    def undo(self) -> PuzzleSession:
        """Take back the last pour."""
        self._state = engine.undo(self._state)
        return self._state

    def new_puzzle(self) -> PuzzleSession:
        """Deal a new puzzle of the current difficulty."""
        self._state = engine.reset(self._state, self._rng)
        return self._state

    def set_difficulty(self, difficulty: Difficulty | str) -> PuzzleSession:
        """Switch difficulty, save the preference and deal a new puzzle."""
        self._state = engine.set_difficulty(self._state, difficulty, self._rng)
        self._store.save(DIFFICULTY_KEY, self._state.difficulty.value)
        return self._state

    def set_grouped_moves(self, enabled: bool) -> PuzzleSession:
        """Turn grouped pours on or off and save the preference."""
        self._state = engine.set_grouped_moves(self._state, enabled)
        self._store.save(GROUPED_MOVES_KEY, 'true' if self._state.grouped_moves_enabled else 'false')
        return self._state
