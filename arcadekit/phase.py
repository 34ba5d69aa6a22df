"""Lifecycle phases shared by the engines."""

from enum import Enum


class GamePhase(str, Enum):
    """
    High-level phase of a game session.

    NOT_STARTED: session created, no accepted action yet.
    PLAYING: at least one accepted action, neither won nor over.
    WON: the win condition holds.
    OVER: no legal action remains.
    """

    NOT_STARTED = 'not_started'
    PLAYING = 'playing'
    WON = 'won'
    OVER = 'over'
