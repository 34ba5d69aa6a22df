"""Flask model: a bounded stack of colour units."""

from collections.abc import Iterable
from dataclasses import dataclass


class UnknownFlaskError(LookupError):
    """Raised when an action references a flask id that is not in the puzzle."""

    def __init__(self, flask_id: int):
        super().__init__(f'Unknown flask id: {flask_id}')
        self.flask_id = flask_id


@dataclass(frozen=True)
class Flask:
    """
    A flask of colour units.

    Attributes
    ----------
    id : int
        Identifier, unique within a puzzle.
    colors : tuple[str, ...]
        Colour tokens from bottom to top; the top is the last element.
    capacity : int
        Maximum number of units.
    """

    id: int
    colors: tuple[str, ...]
    capacity: int

    def __post_init__(self):
        if len(self.colors) > self.capacity:
            raise ValueError(f'Flask {self.id} holds {len(self.colors)} units, capacity is {self.capacity}')

    @property
    def top(self) -> str | None:
        """Colour on top, None when empty."""
        return self.colors[-1] if self.colors else None

    @property
    def is_empty(self) -> bool:
        return not self.colors

    @property
    def is_full(self) -> bool:
        return len(self.colors) >= self.capacity

    @property
    def free_space(self) -> int:
        return self.capacity - len(self.colors)

    @property
    def is_solved(self) -> bool:
        """Empty, or full with a single colour."""
        if self.is_empty:
            return True
        return self.is_full and all(color == self.colors[0] for color in self.colors)

    def top_run(self) -> int:
        """Length of the contiguous run of the top colour."""
        count = 0
        for color in reversed(self.colors):
            if color != self.top:
                break
            count += 1
        return count

    def take(self, count: int) -> tuple[tuple[str, ...], 'Flask']:
        """Return the ``count`` top units and the flask without them."""
        split = len(self.colors) - count
        return self.colors[split:], Flask(id=self.id, colors=self.colors[:split], capacity=self.capacity)

    def add(self, units: Iterable[str]) -> 'Flask':
        """Return the flask with ``units`` stacked on top, in order."""
        return Flask(id=self.id, colors=self.colors + tuple(units), capacity=self.capacity)
