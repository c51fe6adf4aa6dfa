"""
Cell module for Minesweeper.

Represents individual cells on the game board: their content (mine or
neighbor count), whether they are revealed, and the player's marking.
"""
from dataclasses import dataclass

from .marking import Marking


# ============================================================================
# Observation Codes
# ============================================================================

OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_QUESTION = -3
OBS_MINE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        is_mine: Whether this cell contains a mine.
        neighbor_mines: Count of mines in neighboring cells (0-8).
        is_revealed: Whether the cell has been uncovered. Never reverts.
        marking: Player annotation, always NONE once revealed.
        is_new: Set on reveal so the presentation layer can animate it.
    """

    is_mine: bool = False
    neighbor_mines: int = 0
    is_revealed: bool = False
    marking: Marking = Marking.NONE
    is_new: bool = False

    def reveal(self) -> bool:
        """
        Reveal this cell, clearing any question mark.

        Returns:
            True if cell was revealed, False if already revealed or
            flagged.
        """
        if self.is_revealed or self.marking == Marking.FLAG:
            return False
        self.is_revealed = True
        self.marking = Marking.NONE
        self.is_new = True
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is still covered."""
        return not self.is_revealed

    @property
    def is_flagged(self) -> bool:
        """Check if cell carries a flag."""
        return self.marking == Marking.FLAG

    @property
    def is_questioned(self) -> bool:
        """Check if cell carries a question mark."""
        return self.marking == Marking.QUESTION

    def to_observation(self) -> int:
        """
        Convert cell to an integer code for agents and renderers.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            -3: Question-marked cell
            0-8: Revealed cell with neighbor mine count
            9: Revealed mine (game over state)
        """
        if not self.is_revealed:
            if self.marking == Marking.FLAG:
                return OBS_FLAGGED
            if self.marking == Marking.QUESTION:
                return OBS_QUESTION
            return OBS_HIDDEN
        if self.is_mine:
            return OBS_MINE
        return self.neighbor_mines
