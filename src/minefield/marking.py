"""
Marking module for Minesweeper.

Players annotate hidden cells with a flag or a question mark. Right-click
cycles through the three states in a fixed order.
"""
from enum import Enum
from typing import TYPE_CHECKING, Dict

if TYPE_CHECKING:
    from .cell import Cell


# ============================================================================
# Constants
# ============================================================================

class Marking(Enum):
    """Player annotation on a hidden cell."""

    NONE = "none"
    FLAG = "flag"
    QUESTION = "question"


_NEXT_MARKING: Dict[Marking, Marking] = {
    Marking.NONE: Marking.FLAG,
    Marking.FLAG: Marking.QUESTION,
    Marking.QUESTION: Marking.NONE,
}


# ============================================================================
# Marking Cycle
# ============================================================================

def next_marking(marking: Marking) -> Marking:
    """Return the marking that follows ``marking`` in the cycle."""
    return _NEXT_MARKING[marking]


def cycle(cell: "Cell") -> bool:
    """
    Advance a cell's marking: none -> flag -> question -> none.

    Args:
        cell: Cell to annotate.

    Returns:
        True if the marking changed, False if the cell is revealed.
    """
    if cell.is_revealed:
        return False
    cell.marking = next_marking(cell.marking)
    return True
