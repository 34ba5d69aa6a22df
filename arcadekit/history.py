"""
Immutable undo history shared by the grid and flask engines.

A history is a plain tuple of snapshots, the most recent one last. Every operation returns a new
tuple so that a history stored inside a frozen state object is never modified in place.
"""

from typing import TypeVar

T = TypeVar('T')

# ##>: Type alias, snapshots are pushed and popped at the end of the tuple.
History = tuple


def push(history: tuple[T, ...], snapshot: T) -> tuple[T, ...]:
    """
    Append a snapshot on top of the history.

    Parameters
    ----------
    history : tuple
        The current history, oldest snapshot first.
    snapshot : T
        The snapshot to save.

    Returns
    -------
    tuple
        A new history ending with ``snapshot``.
    """
    return (*history, snapshot)


def pop(history: tuple[T, ...]) -> tuple[T | None, tuple[T, ...]]:
    """
    Remove the most recent snapshot.

    Parameters
    ----------
    history : tuple
        The current history.

    Returns
    -------
    snapshot : T or None
        The most recent snapshot, None when the history is empty.
    remaining : tuple
        The history without that snapshot (the same tuple when it was empty).
    """
    if not history:
        return None, history
    return history[-1], history[:-1]

