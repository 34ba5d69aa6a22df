"""
Click-reflex game engine.

A single circular target sits on a fixed-size canvas. While the game runs, a click inside the target
scores and moves the target to a random spot. Sessions are immutable; each action returns a new one.
"""

import logging
import math
from dataclasses import dataclass, field, replace

from numpy.random import Generator, default_rng

from arcadekit.phase import GamePhase

# ##>: Module logger.
_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClickConfig:
    """
    Canvas and scoring.

    Attributes
    ----------
    width : int
        Canvas width in pixels.
    height : int
        Canvas height in pixels.
    radius : float
        Target radius; a click scores when strictly closer than this to the centre.
    points : int
        Score added per hit.
    """

    width: int = 800
    height: int = 600
    radius: float = 20.0
    points: int = 10

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2


@dataclass(frozen=True)
class ClickSession:
    """State of the click game."""

    score: int = 0
    is_running: bool = False
    target: tuple[float, float] = (400.0, 300.0)
    hits: int = 0
    ended: bool = False
    config: ClickConfig = field(default_factory=ClickConfig)

    @property
    def phase(self) -> GamePhase:
        if self.is_running:
            return GamePhase.PLAYING
        return GamePhase.OVER if self.ended else GamePhase.NOT_STARTED


def new_session(config: ClickConfig | None = None) -> ClickSession:
    """Create a stopped game with the target at the canvas centre."""
    config = config or ClickConfig()
    return ClickSession(target=config.center, config=config)


def start(session: ClickSession) -> ClickSession:
    """Run the game from a zero score with the target back at the centre."""
    if session.is_running:
        return session
    return replace(session, is_running=True, ended=False, score=0, hits=0, target=session.config.center)


def end(session: ClickSession) -> ClickSession:
    """Stop the game, keeping the final score."""
    if not session.is_running:
        return session
    _logger.info('Click game ended with score %d', session.score)
    return replace(session, is_running=False, ended=True)


def reset_score(session: ClickSession) -> ClickSession:
    return replace(session, score=0, hits=0)


def is_hit(session: ClickSession, x: float, y: float) -> bool:
    """Check if a click at (x, y) lands inside the target."""
    target_x, target_y = session.target
    return math.hypot(x - target_x, y - target_y) < session.config.radius


def random_target(config: ClickConfig, rng: Generator) -> tuple[float, float]:
    """Pick a target position keeping the whole target on the canvas."""
    margin = config.radius
    x = float(rng.random() * (config.width - 2 * margin) + margin)
    y = float(rng.random() * (config.height - 2 * margin) + margin)
    return x, y


def click(session: ClickSession, x: float, y: float, rng: Generator) -> ClickSession:
    """
    Handle a click on the canvas.

    Parameters
    ----------
    session : ClickSession
        The current session.
    x, y : float
        Click position in canvas pixels.
    rng : Generator
        Random source for the next target position.

    Returns
    -------
    ClickSession
        The new session; the same object for a miss or when the game is not running.
    """
    if not session.is_running or not is_hit(session, x, y):
        return session
    return replace(
        session,
        score=session.score + session.config.points,
        hits=session.hits + 1,
        target=random_target(session.config, rng),
    )


class ClickMaster:
    """Stateful click game holding the current session and the random source."""

    def __init__(self, seed: int | None = None, rng: Generator | None = None, config: ClickConfig | None = None):
        self._rng = rng if rng is not None else default_rng(seed)
        self._state = new_session(config)

    @property
    def state(self) -> ClickSession:
        return self._state

    def start(self) -> ClickSession:
        self._state = start(self._state)
        return self._state

    def end(self) -> ClickSession:
        self._state = end(self._state)
        return self._state

    def click(self, x: float, y: float) -> ClickSession:
        self._state = click(self._state, x, y, self._rng)
        return self._state
