"""
Configuration for the 2048 grid engine.

Defaults follow the browser game: a 4x4 grid, two starting tiles, a win at 2048 and a ten second
penalty per undo in the time-based score.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GridConfig:
    """
    Configuration of a 2048 game.

    Attributes
    ----------
    size : int
        Side of the square grid.
    win_tile : int
        Tile value that wins the game.
    start_tiles : int
        Number of tiles spawned on a new or reset game.
    undo_penalty : int
        Seconds added to the score for every undo.
    spawn_probs : dict[int, float]
        Probability of each spawned tile value.
    best_score_key : str
        Key of the best score in the persistence store.
    """

    size: int = 4
    win_tile: int = 2048
    start_tiles: int = 2
    undo_penalty: int = 10
    spawn_probs: dict[int, float] = field(default_factory=lambda: {2: 0.9, 4: 0.1})
    best_score_key: str = 'game2048_bestScore'

    def __post_init__(self):
        if self.size < 2:
            raise ValueError(f'size must be >= 2, got {self.size}')
        if abs(sum(self.spawn_probs.values()) - 1.0) > 1e-9:
            raise ValueError(f'spawn_probs must sum to 1, got {self.spawn_probs}')


def default_config() -> GridConfig:
    """Return the configuration of the standard 4x4 game."""
    return GridConfig()
