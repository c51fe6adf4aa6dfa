"""
Unit tests for BoardFactory.

Tests mine placement and neighbor counts against a brute-force reference.
"""
import random

import pytest
from minefield import Board, BoardConfig, BoardFactory, Difficulty


def reference_count(board: Board, row: int, col: int) -> int:
    """Count mines around (row, col) by scanning the whole grid."""
    count = 0
    for other_row, other_col in board.positions():
        if (other_row, other_col) == (row, col):
            continue
        if abs(other_row - row) <= 1 and abs(other_col - col) <= 1:
            count += board.get_cell(other_row, other_col).is_mine
    return count


# ============================================================================
# Mine Placement Tests
# ============================================================================

class TestMinePlacement:
    """Test mine counts and board state after creation."""

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_exact_mine_count(self, difficulty: Difficulty) -> None:
        board = BoardFactory(random.Random(7)).create(difficulty)
        config = difficulty.config
        mines = len(board.mine_positions())
        assert mines == config.mines
        assert config.total_cells - mines == config.safe_cells

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_board_matches_difficulty(self, difficulty: Difficulty) -> None:
        board = BoardFactory().create(difficulty)
        assert (board.rows, board.cols) == (
            difficulty.config.rows, difficulty.config.cols
        )

    def test_new_board_all_hidden_and_unmarked(self) -> None:
        board = BoardFactory().create(Difficulty.BEGINNER)
        assert board.revealed_count == 0
        assert board.flag_count == 0

    def test_accepts_explicit_config(self) -> None:
        board = BoardFactory().create(BoardConfig(3, 3, 8))
        assert len(board.mine_positions()) == 8

    def test_seed_reproduces_layout(self) -> None:
        factory = BoardFactory()
        factory.seed(42)
        first = factory.create(Difficulty.EXPERT).mine_positions()
        factory.seed(42)
        second = factory.create(Difficulty.EXPERT).mine_positions()
        assert first == second


# ============================================================================
# Neighbor Count Tests
# ============================================================================

class TestNeighborCounts:
    """Test precomputed neighbor counts."""

    @pytest.mark.parametrize("seed", range(20))
    def test_small_board_matches_reference(self, seed: int) -> None:
        """3x3 with one mine, every placement over many seeds."""
        board = BoardFactory(random.Random(seed)).create(BoardConfig(3, 3, 1))
        for row, col in board.positions():
            cell = board.get_cell(row, col)
            if not cell.is_mine:
                assert cell.neighbor_mines == reference_count(board, row, col)

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_preset_board_matches_reference(self, difficulty: Difficulty) -> None:
        board = BoardFactory(random.Random(3)).create(difficulty)
        for row, col in board.positions():
            cell = board.get_cell(row, col)
            if not cell.is_mine:
                assert cell.neighbor_mines == reference_count(board, row, col)
