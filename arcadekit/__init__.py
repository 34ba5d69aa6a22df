# -*- coding: utf-8 -*-
"""
Shared building blocks for the arcade game engines.

It includes the undo history stack, the game phase enumeration, the key-value persistence
collaborator used by the controllers and a helper to configure console logging.
"""

from .history import History, pop, push
from .logs import setup_logging
from .phase import GamePhase
from .storage import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "History",
    "push",
    "pop",
    "GamePhase",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "setup_logging",
]
