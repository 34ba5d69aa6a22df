"""
Tests for the explicit-state 2048 session.

Tests cover move acceptance and rejection, tile rebuilding, time-based scoring, win and game over
flags, undo and reset.
"""

from dataclasses import replace
from unittest import TestCase, main

import numpy as np

from arcadekit.phase import GamePhase
from twentyfortyeight.core.gameboard import empty_board, fill_cells, latent_state
from twentyfortyeight.core.gamemove import Direction
from twentyfortyeight.core.tiles import build_tiles
from twentyfortyeight.envs.session import GameSession, Snapshot, elapsed_score, move, new_game, reset, start, undo

LOCKED = [[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]]


def make_session(board, **kwargs) -> GameSession:
    """Build a session on a given board."""
    grid = np.array(board, dtype=np.int64)
    tiles, next_id = build_tiles(grid, None, next_id=1)
    return GameSession(grid=grid, tiles=tiles, next_tile_id=next_id, **kwargs)


class TestNewGame(TestCase):
    """Test session creation and start."""

    def test_new_game_has_two_tiles(self):
        """A new game holds two tiles of value 2 or 4 and is not started."""
        session = new_game(np.random.default_rng(3), best_score=12)

        self.assertEqual(np.count_nonzero(session.grid), 2)
        self.assertTrue(np.all(np.isin(session.grid[session.grid != 0], [2, 4])))
        self.assertEqual(len(session.tiles), 2)
        self.assertEqual([tile.id for tile in session.tiles], [1, 2])
        self.assertEqual(session.next_tile_id, 3)
        self.assertEqual(session.best_score, 12)
        self.assertEqual(session.score, 0)
        self.assertFalse(session.game_started)
        self.assertIsNone(session.start_time)
        self.assertIs(session.phase, GamePhase.NOT_STARTED)

    def test_starting_tiles_follow_spawn_order(self):
        """Starting tiles are new and numbered in the order the cells were filled."""
        session = new_game(np.random.default_rng(21))
        board, cells = fill_cells(empty_board(), 2, np.random.default_rng(21))

        np.testing.assert_array_equal(session.grid, board)
        self.assertEqual([(tile.row, tile.col) for tile in session.tiles], cells)
        self.assertTrue(all(tile.is_new for tile in session.tiles))

    def test_grid_is_read_only(self):
        """Session grids cannot be written in place."""
        session = new_game(np.random.default_rng(3))
        with self.assertRaises(ValueError):
            session.grid[0, 0] = 8

    def test_start_sets_clock_once(self):
        """Start records the first start time only."""
        session = new_game(np.random.default_rng(3))
        started = start(session, now=100.0)

        self.assertTrue(started.game_started)
        self.assertEqual(started.start_time, 100.0)
        self.assertIs(started.phase, GamePhase.PLAYING)
        np.testing.assert_array_equal(started.grid, session.grid)

        # ##>: Starting again keeps the original time and returns the same session.
        self.assertIs(start(started, now=250.0), started)


class TestMove(TestCase):
    """Test directional moves."""

    def setUp(self):
        self.rng = np.random.default_rng(11)

    def test_merge_left_scenario(self):
        """Two 2s merge into a 4 at the left edge and one tile spawns elsewhere."""
        session = make_session([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        _, score_gained, _, _ = latent_state(session.grid, Direction.LEFT)
        moved = move(session, 'left', self.rng, now=0.0)

        self.assertEqual(score_gained, 4)
        self.assertEqual(moved.grid[0, 0], 4)
        self.assertEqual(np.count_nonzero(moved.grid), 2)

        # ##>: The spawned tile is the only other tile and it is new.
        spawned = [tile for tile in moved.tiles if (tile.row, tile.col) != (0, 0)]
        self.assertEqual(len(spawned), 1)
        self.assertIn(spawned[0].value, (2, 4))
        self.assertTrue(spawned[0].is_new)

        # ##>: The merged tile is flagged new as well.
        merged = [tile for tile in moved.tiles if (tile.row, tile.col) == (0, 0)]
        self.assertTrue(merged[0].is_new)

    def test_slid_tiles_are_not_new(self):
        """Tiles that only slide keep is_new False and get fresh ids."""
        session = make_session([[0, 2, 0, 4], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        moved = move(session, Direction.LEFT, self.rng, now=0.0)

        slid = {(tile.row, tile.col): tile for tile in moved.tiles if not tile.is_new}
        self.assertEqual(set(slid), {(0, 0), (0, 1)})
        self.assertEqual({tile.value for tile in slid.values()}, {2, 4})
        old_ids = {tile.id for tile in session.tiles}
        self.assertTrue(all(tile.id not in old_ids for tile in moved.tiles))

    def test_rejected_move_returns_same_session(self):
        """A move without effect is rejected and repeating it changes nothing."""
        session = make_session([[2, 0, 0, 0], [4, 0, 0, 0], [8, 0, 0, 0], [16, 0, 0, 0]])
        first = move(session, 'left', self.rng, now=5.0)
        second = move(first, 'left', self.rng, now=6.0)

        self.assertIs(first, session)
        self.assertIs(second, session)
        self.assertEqual(session.history, ())

    def test_history_records_pre_move_state(self):
        """An accepted move pushes the grid, tiles and score it replaced."""
        session = make_session([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]], score=3)
        moved = move(session, 'left', self.rng, now=0.0)

        self.assertEqual(len(moved.history), 1)
        snapshot = moved.history[0]
        np.testing.assert_array_equal(snapshot.grid, session.grid)
        self.assertIs(snapshot.tiles, session.tiles)
        self.assertEqual(snapshot.score, 3)

    def test_score_is_time_based(self):
        """Score is whole elapsed seconds plus ten per undo."""
        session = make_session(
            [[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]],
            start_time=100.0,
            undo_count=2,
            best_score=5,
        )
        moved = move(session, 'left', self.rng, now=107.9)

        self.assertEqual(moved.score, 27)
        self.assertEqual(moved.best_score, 27)

    def test_best_score_never_decreases(self):
        """A lower score keeps the previous best."""
        session = make_session([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]], best_score=500)
        moved = move(session, 'left', self.rng, now=0.0)
        self.assertEqual(moved.score, 0)
        self.assertEqual(moved.best_score, 500)

    def test_score_without_clock(self):
        """Before start the elapsed part of the score is zero."""
        session = make_session(LOCKED, undo_count=1)
        self.assertEqual(elapsed_score(session, now=1e9), 10)

    def test_reaching_2048_wins_and_stays_won(self):
        """The win flag is set by a 2048 tile and survives later moves."""
        session = make_session([[1024, 1024, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]], game_started=True)
        won = move(session, 'left', self.rng, now=0.0)
        self.assertTrue(won.is_game_won)
        self.assertIs(won.phase, GamePhase.WON)

        later = won
        for direction in ('right', 'down', 'left', 'up'):
            later = move(later, direction, self.rng, now=0.0)
        self.assertTrue(later.is_game_won)

    def test_move_can_end_the_game(self):
        """A move that leaves no legal move sets the game-over flag."""
        board = [[0, 2, 4, 8], [16, 32, 64, 128], [2, 4, 8, 16], [32, 64, 128, 256]]
        session = make_session(board, game_started=True)
        over = move(session, 'left', self.rng, now=0.0)

        self.assertEqual(np.count_nonzero(over.grid), 16)
        self.assertTrue(over.is_game_over)
        self.assertIs(over.phase, GamePhase.OVER)

    def test_game_over_rejects_every_move(self):
        """No direction is accepted once the game is over."""
        session = make_session(LOCKED, is_game_over=True)
        for direction in Direction:
            self.assertIs(move(session, direction, self.rng, now=0.0), session)

    def test_random_play_invariants(self):
        """Random play keeps the tile view consistent with the grid."""
        rng = np.random.default_rng(2024)
        session = start(new_game(rng), now=0.0)

        for step in range(300):
            direction = Direction(int(rng.integers(4)))
            before = session
            session = move(session, direction, rng, now=float(step))
            if session is before:
                continue

            grid = session.grid
            values = grid[grid != 0]
            positions = {(tile.row, tile.col) for tile in session.tiles}

            # ##>: Tile count, positions and values mirror the grid.
            self.assertEqual(len(session.tiles), np.count_nonzero(grid))
            self.assertEqual(len(positions), len(session.tiles))
            self.assertTrue(np.all((values & (values - 1)) == 0))

            # ##>: Value never disappears and at most one tile spawns.
            self.assertGreaterEqual(int(grid.sum()), int(before.grid.sum()))
            pre_spawn, _, _, _ = latent_state(before.grid, direction)
            self.assertLessEqual(np.count_nonzero(grid) - np.count_nonzero(pre_spawn), 1)
            self.assertIn(int(grid.sum() - pre_spawn.sum()), (0, 2, 4))

            if session.is_game_over:
                break


class TestUndoAndReset(TestCase):
    """Test undo and reset."""

    def setUp(self):
        self.rng = np.random.default_rng(5)

    def test_undo_restores_previous_state(self):
        """Undo restores grid, tiles and score and counts the undo."""
        session = make_session([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]], score=4)
        moved = move(session, 'left', self.rng, now=0.0)
        undone = undo(moved)

        np.testing.assert_array_equal(undone.grid, session.grid)
        self.assertIs(undone.tiles, session.tiles)
        self.assertEqual(undone.score, 4)
        self.assertEqual(undone.undo_count, 1)
        self.assertEqual(undone.history, ())

    def test_undo_without_history(self):
        """Undo with an empty history is a no-op."""
        session = make_session([[2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        self.assertIs(undo(session), session)

    def test_undo_clears_game_over_and_keeps_win(self):
        """Undo always leaves the game playable and never takes back a win."""
        board = [[0, 2, 4, 8], [16, 32, 64, 128], [2, 4, 8, 16], [32, 64, 128, 256]]
        over = move(make_session(board, is_game_won=True), 'left', self.rng, now=0.0)
        undone = undo(over)

        self.assertTrue(over.is_game_over)
        self.assertFalse(undone.is_game_over)
        self.assertTrue(undone.is_game_won)

    def test_each_undo_counts_once(self):
        """Two moves then two undos count two undos."""
        session = start(new_game(self.rng), now=0.0)
        for direction in ('left', 'right', 'up', 'down'):
            session = move(session, direction, self.rng, now=0.0)
        depth = len(session.history)
        self.assertGreaterEqual(depth, 2)

        session = undo(undo(session))
        self.assertEqual(session.undo_count, 2)
        self.assertEqual(len(session.history), depth - 2)

    def test_reset_keeps_best_score(self):
        """Reset deals a started game and keeps only the best score."""
        session = make_session(LOCKED, score=40, best_score=90, undo_count=3, is_game_over=True)
        session = replace(session, history=(Snapshot(grid=session.grid, tiles=session.tiles, score=20),))
        fresh = reset(session, self.rng, now=42.0)

        self.assertEqual(np.count_nonzero(fresh.grid), 2)
        self.assertEqual(fresh.best_score, 90)
        self.assertEqual(fresh.score, 0)
        self.assertEqual(fresh.undo_count, 0)
        self.assertEqual(fresh.history, ())
        self.assertTrue(fresh.game_started)
        self.assertEqual(fresh.start_time, 42.0)
        self.assertFalse(fresh.is_game_over)
        self.assertFalse(fresh.is_game_won)


if __name__ == '__main__':
    main()
