"""
Board module for Minesweeper.

Defines board dimensions, the three difficulty presets, and the grid of
cells that every rule in the engine reads and mutates.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell

Position = Tuple[int, int]


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Dimensions and mine count of a board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mines: Total mines to place.
    """

    rows: int = 9
    cols: int = 9
    mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.rows * self.cols - 1
        if self.mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        """Number of cells that must be revealed to win."""
        return self.total_cells - self.mines


class Difficulty(Enum):
    """Preset board sizes, valued by their lowercase names."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"

    @property
    def config(self) -> BoardConfig:
        return _PRESETS[self]

    @property
    def label(self) -> str:
        """Human readable name, e.g. ``Beginner``."""
        return self.value.capitalize()

    @property
    def rank(self) -> int:
        """Ordering used when sorting scores by difficulty."""
        return _RANKS[self]

    @classmethod
    def parse(cls, name: str) -> "Difficulty":
        """
        Look up a difficulty by name, ignoring case.

        Raises:
            ValueError: If ``name`` is not a known difficulty.
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(
                f"Unknown difficulty {name!r} (expected one of: {choices})"
            ) from None


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(16, 30, 99)

_PRESETS = {
    Difficulty.BEGINNER: BEGINNER,
    Difficulty.INTERMEDIATE: INTERMEDIATE,
    Difficulty.EXPERT: EXPERT,
}

_RANKS = {
    Difficulty.BEGINNER: 1,
    Difficulty.INTERMEDIATE: 2,
    Difficulty.EXPERT: 3,
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    A fixed-size grid of cells. Mine layout and neighbor counts are set
    once when the board is built and never change afterwards; reveal and
    marking state is mutated in place by the rule functions.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Create the grid of cells if none was supplied."""
        if not self._grid:
            self._grid = [
                [Cell() for _ in range(self.config.cols)]
                for _ in range(self.config.rows)
            ]

    # ========================================================================
    # Construction (Low-level)
    # ========================================================================

    @classmethod
    def empty(cls, config: BoardConfig) -> "Board":
        """Create a board with no mines placed."""
        return cls(config)

    @classmethod
    def with_mines(
        cls, config: BoardConfig, mines: Iterable[Position]
    ) -> "Board":
        """
        Create a board with mines at fixed positions.

        Neighbor counts are computed for every non-mine cell. ``config``
        must not declare a different mine count than the positions given.

        Args:
            config: Board dimensions.
            mines: (row, col) positions of the mines.

        Raises:
            ValueError: On out-of-bounds positions or a count mismatch.
        """
        board = cls(config)
        placed = set(mines)
        for row, col in placed:
            if not board.is_valid_position(row, col):
                raise ValueError(f"Mine position out of bounds: {(row, col)}")
            board._grid[row][col].is_mine = True
        if len(placed) != config.mines:
            raise ValueError(
                f"Expected {config.mines} mines, got {len(placed)}"
            )
        board.compute_neighbor_counts()
        return board

    def compute_neighbor_counts(self) -> None:
        """Store the neighboring mine count on every non-mine cell."""
        for row, col in self.positions():
            cell = self._grid[row][col]
            if not cell.is_mine:
                cell.neighbor_mines = self._count_adjacent_mines(row, col)

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-bounds neighbors, in
            row-major order.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    def count_adjacent_flags(self, row: int, col: int) -> int:
        """Count flagged cells adjacent to position."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_flagged:
                count += 1
        return count

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def positions(self) -> Iterator[Position]:
        """Iterate over every (row, col) in row-major order."""
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                yield row, col

    def cells(self) -> Iterator[Cell]:
        for row in self._grid:
            yield from row

    def mine_positions(self) -> List[Position]:
        return [
            (row, col) for row, col in self.positions()
            if self._grid[row][col].is_mine
        ]

    @property
    def revealed_count(self) -> int:
        """Number of revealed cells, mines included."""
        return sum(1 for cell in self.cells() if cell.is_revealed)

    @property
    def flag_count(self) -> int:
        return sum(1 for cell in self.cells() if cell.is_flagged)

    def clear_new_flags(self) -> None:
        """Drop the reveal-animation marker from every cell."""
        for cell in self.cells():
            cell.is_new = False

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                -3 = question-marked
                0-8 = revealed with neighbor count
                9 = revealed mine
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for row, col in self.positions():
            obs[row, col] = self._grid[row][col].to_observation()
        return obs

