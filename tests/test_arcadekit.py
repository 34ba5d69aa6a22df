"""
Tests for the shared history, phase and storage helpers.
"""

import json
import tempfile
from pathlib import Path
from unittest import TestCase, main

from arcadekit.history import pop, push
from arcadekit.phase import GamePhase
from arcadekit.storage import JsonFileStore, KeyValueStore, MemoryStore


class TestHistory(TestCase):
    """Test the tuple undo history."""

    def test_push_and_pop(self):
        """Snapshots come back most recent first."""
        history = push(push((), 'a'), 'b')
        self.assertEqual(history, ('a', 'b'))

        snapshot, history = pop(history)
        self.assertEqual(snapshot, 'b')
        self.assertEqual(history, ('a',))

    def test_pop_empty(self):
        """Popping an empty history gives None."""
        self.assertEqual(pop(()), (None, ()))

    def test_push_does_not_modify(self):
        """Push returns a new tuple."""
        history = ('a',)
        push(history, 'b')
        self.assertEqual(history, ('a',))

    def test_phase_values(self):
        """Phases compare equal to their names."""
        self.assertEqual(GamePhase.WON, 'won')
        self.assertEqual(GamePhase('over'), GamePhase.OVER)


class TestMemoryStore(TestCase):
    """Test the in-memory store."""

    def test_load_and_save(self):
        """Saved values are returned as strings."""
        store = MemoryStore({'a': '1'})
        self.assertEqual(store.load('a'), '1')
        self.assertIsNone(store.load('b'))

        store.save('b', 7)
        self.assertEqual(store.load('b'), '7')
        self.assertIn('b', store)
        self.assertIsInstance(store, KeyValueStore)


class TestJsonFileStore(TestCase):
    """Test the JSON file store."""

    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.path = Path(self.directory.name) / 'nested' / 'arcade.json'

    def tearDown(self):
        self.directory.cleanup()

    def test_missing_file_is_empty(self):
        """A missing file loads nothing."""
        self.assertIsNone(JsonFileStore(self.path).load('game2048_bestScore'))

    def test_values_survive_a_new_instance(self):
        """Values are written to disk and read back by another store."""
        JsonFileStore(self.path).save('game2048_bestScore', '120')
        JsonFileStore(self.path).save('colorGame_difficulty', 'hard')

        store = JsonFileStore(self.path)
        self.assertEqual(store.load('game2048_bestScore'), '120')
        self.assertEqual(store.load('colorGame_difficulty'), 'hard')
        self.assertEqual(
            json.loads(self.path.read_text(encoding='utf-8')),
            {'colorGame_difficulty': 'hard', 'game2048_bestScore': '120'},
        )

    def test_corrupt_file_is_ignored(self):
        """An unreadable document is logged and replaced on the next save."""
        self.path.parent.mkdir(parents=True)
        self.path.write_text('{broken', encoding='utf-8')
        store = JsonFileStore(self.path)

        with self.assertLogs('arcadekit.storage', level='WARNING'):
            self.assertIsNone(store.load('colorGame_groupedMoves'))
        with self.assertLogs('arcadekit.storage', level='WARNING'):
            store.save('colorGame_groupedMoves', 'true')
        self.assertEqual(store.load('colorGame_groupedMoves'), 'true')

    def test_non_object_document_is_ignored(self):
        """A JSON document that is not an object reads as empty."""
        self.path.parent.mkdir(parents=True)
        self.path.write_text('[1, 2, 3]', encoding='utf-8')
        with self.assertLogs('arcadekit.storage', level='WARNING'):
            self.assertIsNone(JsonFileStore(self.path).load('a'))


if __name__ == '__main__':
    main()
