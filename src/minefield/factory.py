"""
Board factory for Minesweeper.

Builds fresh boards: an empty grid, randomly placed mines, and the
precomputed neighbor counts.
"""
import logging
import random
from typing import Optional, Union

from .board import Board, BoardConfig, Difficulty

logger = logging.getLogger(__name__)


# ============================================================================
# Board Factory
# ============================================================================

class BoardFactory:
    """
    Creates randomly mined boards.

    Mines are placed by rejection sampling over every cell of the grid,
    so each cell is equally likely to hold a mine. The first click is not
    protected: a new game may open on a mine.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        """
        Initialize the factory.

        Args:
            rng: Random source for mine placement (default: unseeded).
        """
        self.rng = rng or random.Random()

    def seed(self, value: Optional[int]) -> None:
        """Reseed the random source for reproducible layouts."""
        self.rng.seed(value)

    def create(self, difficulty: Union[Difficulty, BoardConfig]) -> Board:
        """
        Build a new board.

        Args:
            difficulty: Preset or explicit configuration.

        Returns:
            Board with all mines placed and neighbor counts computed.
        """
        config = (
            difficulty.config if isinstance(difficulty, Difficulty)
            else difficulty
        )
        board = Board.empty(config)
        self._place_mines(board)
        board.compute_neighbor_counts()
        logger.debug(
            "Created %dx%d board with %d mines",
            config.rows, config.cols, config.mines,
        )
        return board

    def _place_mines(self, board: Board) -> None:
        """Pick random cells until the configured number hold mines."""
        placed = 0
        while placed < board.config.mines:
            row = self.rng.randrange(board.config.rows)
            col = self.rng.randrange(board.config.cols)
            cell = board.get_cell(row, col)
            if not cell.is_mine:
                cell.is_mine = True
                placed += 1
