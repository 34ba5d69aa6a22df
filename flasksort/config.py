"""
Configuration for the flask colour-sort puzzle.

A difficulty only sets the number of flasks; every other dimension of the puzzle is derived from it.
"""

from dataclasses import dataclass
from enum import Enum


class Difficulty(str, Enum):
    """Named puzzle presets."""

    EASY = 'easy'
    NORMAL = 'normal'
    HARD = 'hard'
    EXPERT = 'expert'

    @classmethod
    def parse(cls, value: 'Difficulty | str') -> 'Difficulty':
        """
        Convert a difficulty name to a member.

        Raises
        ------
        ValueError
            If the name is not a difficulty.
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f'Unknown difficulty: {value!r}') from None


# ##>: Number of flasks per difficulty.
FLASKS_BY_DIFFICULTY: dict[Difficulty, int] = {
    Difficulty.EASY: 4,
    Difficulty.NORMAL: 6,
    Difficulty.HARD: 8,
    Difficulty.EXPERT: 10,
}

DEFAULT_DIFFICULTY = Difficulty.NORMAL

# ##>: Colour tokens, the first ``num_colors`` are used by a puzzle.
PALETTE: tuple[str, ...] = (
    '#FF6B6B',
    '#4ECDC4',
    '#45B7D1',
    '#FFA07A',
    '#98D8C8',
    '#F7DC6F',
    '#BB8FCE',
    '#85C1E2',
    '#F8B88B',
    '#A3CB38',
    '#52B788',
    '#FF006E',
    '#FFBE0B',
    '#3A86FF',
    '#FB5607',
)

# ##>: Persistence keys.
BEST_MOVES_KEY = 'colorGame_bestScores'
DIFFICULTY_KEY = 'colorGame_difficulty'
GROUPED_MOVES_KEY = 'colorGame_groupedMoves'


@dataclass(frozen=True)
class PuzzleLayout:
    """
    Dimensions of a puzzle.

    Attributes
    ----------
    total_flasks : int
        Number of flasks.
    capacity : int
        Units each flask holds, one more than the number of flasks.
    num_colors : int
        Distinct colours, one less than the number of flasks (at least 2).
    pieces_per_color : int
        Units of each colour, equal to the capacity so that a sorted colour fills one flask.
    """

    total_flasks: int
    capacity: int
    num_colors: int
    pieces_per_color: int

    @property
    def total_pieces(self) -> int:
        return self.num_colors * self.pieces_per_color


def layout_for(difficulty: Difficulty | str) -> PuzzleLayout:
    """
    Derive the puzzle dimensions of a difficulty.

    Parameters
    ----------
    difficulty : Difficulty or str
        The difficulty.

    Returns
    -------
    PuzzleLayout
        Flask count, capacity, colour count and units per colour.
    """
    total_flasks = FLASKS_BY_DIFFICULTY[Difficulty.parse(difficulty)]
    return PuzzleLayout(
        total_flasks=total_flasks,
        capacity=total_flasks + 1,
        num_colors=max(2, total_flasks - 1),
        pieces_per_color=total_flasks + 1,
    )
