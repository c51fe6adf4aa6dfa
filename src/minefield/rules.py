"""
Win and loss rules for Minesweeper.

Classifies a board after each player action and applies the cosmetic
end-of-game changes: every mine shown on a loss, every mine flagged on a
win.
"""
from enum import Enum, auto

from .board import Board
from .marking import Marking


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.IN_PROGRESS


# ============================================================================
# Terminal Transitions
# ============================================================================

def reveal_all_mines(board: Board) -> None:
    """Uncover every mine. Markings, including flags on mines, are kept."""
    for cell in board.cells():
        if cell.is_mine:
            cell.is_revealed = True


def flag_all_mines(board: Board) -> None:
    """Mark every mine with a flag."""
    for cell in board.cells():
        if cell.is_mine:
            cell.marking = Marking.FLAG


def is_cleared(board: Board, mines: int) -> bool:
    """
    Check the win predicate.

    The game is won when the number of revealed cells equals the number
    of non-mine cells. Flags play no part.
    """
    return board.revealed_count == board.config.total_cells - mines


def evaluate(board: Board, mines: int, exploded: bool = False) -> GameStatus:
    """
    Classify the board after an action.

    Args:
        board: Board to inspect. Mutated on a terminal result.
        mines: Mine count of the game's difficulty.
        exploded: True if the action just exposed a mine.

    Returns:
        LOST if ``exploded`` (all mines are revealed), WON if every safe
        cell is revealed (all mines are flagged), IN_PROGRESS otherwise.
    """
    if exploded:
        reveal_all_mines(board)
        return GameStatus.LOST
    if is_cleared(board, mines):
        flag_all_mines(board)
        return GameStatus.WON
    return GameStatus.IN_PROGRESS
