"""
Key-value persistence collaborators.

The engines never perform I/O. Controllers read previously saved preferences and best scores through
a ``KeyValueStore`` and write them back when they change. Values are always strings, like the browser
local storage the games were first written against.
"""

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

# ##>: Module logger.
_logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal string key-value store."""

    def load(self, key: str) -> str | None:
        """Return the value saved under ``key``, None if nothing was saved."""

    def save(self, key: str, value: str) -> None:
        """Save ``value`` under ``key``, replacing any previous value."""


class MemoryStore:
    """
    In-memory store, lost when the process exits.

    Parameters
    ----------
    initial : dict, optional
        Values to start with.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> str | None:
        return self._values.get(key)

    def save(self, key: str, value: str) -> None:
        self._values[key] = str(value)

    def __contains__(self, key: str) -> bool:
        return key in self._values


class JsonFileStore:
    """
    Store backed by a single JSON document on disk.

    The whole document is rewritten on every save. A missing file is an empty store; a document that
    cannot be read or decoded is logged and treated as empty.

    Parameters
    ----------
    path : str or Path
        Location of the JSON document. Parent directories are created on first save.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as error:
            _logger.warning('Ignoring unreadable store %s: %s', self.path, error)
            return {}
        if not isinstance(document, dict):
            _logger.warning('Ignoring store %s: expected a JSON object', self.path)
            return {}
        return {str(key): str(value) for key, value in document.items()}

    def load(self, key: str) -> str | None:
        return self._read().get(key)

    def save(self, key: str, value: str) -> None:
        document = self._read()
        document[key] = str(value)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(document, indent=2, sort_keys=True), encoding='utf-8')
