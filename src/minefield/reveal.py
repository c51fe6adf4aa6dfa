"""
Reveal rules for Minesweeper.

Implements the flood-fill reveal of a single cell and the chord reveal of
a numbered cell's neighbors. Both mutate the board in place; neither
decides whether the game is won or lost.
"""
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

from .board import Board, Position


# ============================================================================
# Result Types
# ============================================================================

@dataclass(frozen=True)
class ChordResult:
    """
    Outcome of a chord reveal.

    Attributes:
        revealed: Positions uncovered by this chord, in reveal order.
        mine_hit: First unflagged mine among the neighbors, if any.
        highlight: Unrevealed neighbors to flash when the cell does not
            have enough flags around it. Empty otherwise.
    """

    revealed: List[Position] = field(default_factory=list)
    mine_hit: Optional[Position] = None
    highlight: FrozenSet[Position] = frozenset()


# ============================================================================
# Flood Reveal
# ============================================================================

def flood_reveal(board: Board, row: int, col: int) -> List[Position]:
    """
    Reveal a cell and cascade through its zero-count region.

    Every revealed cell with no neighboring mines reveals its neighbors in
    turn, so the whole connected zero region and its numbered border are
    uncovered. Flagged cells stop the cascade. A mine target is revealed
    without propagating; callers check ``is_mine`` first.

    Args:
        board: Board to mutate.
        row: Row index of the target.
        col: Column index of the target.

    Returns:
        Newly revealed positions in reveal order. Empty if the target is
        out of bounds, already revealed, or flagged.
    """
    revealed: List[Position] = []
    pending: List[Position] = [(row, col)]

    while pending:
        current_row, current_col = pending.pop()
        cell = board.get_cell(current_row, current_col)
        if cell is None or not cell.reveal():
            continue
        revealed.append((current_row, current_col))

        if cell.is_mine or cell.neighbor_mines != 0:
            continue
        for neighbor_row, neighbor_col in board.neighbors(
            current_row, current_col
        ):
            neighbor = board.get_cell(neighbor_row, neighbor_col)
            if neighbor.is_hidden and not neighbor.is_flagged:
                pending.append((neighbor_row, neighbor_col))

    return revealed


# ============================================================================
# Chord Reveal
# ============================================================================

def _is_chordable(board: Board, row: int, col: int) -> bool:
    cell = board.get_cell(row, col)
    return (
        cell is not None
        and cell.is_revealed
        and not cell.is_mine
        and cell.neighbor_mines > 0
    )


def chord_reveal(board: Board, row: int, col: int) -> ChordResult:
    """
    Reveal the neighbors of a numbered cell once enough flags surround it.

    With exactly as many flagged neighbors as the cell's number, every
    neighbor that is neither revealed nor flagged is flood-revealed. An
    unflagged mine among them is not revealed here; it is reported in
    ``mine_hit`` after all safe neighbors have been uncovered, and the
    caller turns it into a loss.

    With fewer flags than the number, nothing is revealed and the
    unrevealed neighbors are returned as ``highlight``. With more flags,
    nothing happens.

    Args:
        board: Board to mutate.
        row: Row index of a revealed numbered cell.
        col: Column index of a revealed numbered cell.

    Returns:
        ChordResult describing what happened.
    """
    if not _is_chordable(board, row, col):
        return ChordResult()

    cell = board.get_cell(row, col)
    flags = board.count_adjacent_flags(row, col)

    if flags < cell.neighbor_mines:
        unrevealed = frozenset(
            (r, c) for r, c in board.neighbors(row, col)
            if board.get_cell(r, c).is_hidden
        )
        return ChordResult(highlight=unrevealed)
    if flags > cell.neighbor_mines:
        return ChordResult()

    revealed: List[Position] = []
    mine_hit: Optional[Position] = None
    for neighbor_row, neighbor_col in board.neighbors(row, col):
        neighbor = board.get_cell(neighbor_row, neighbor_col)
        if neighbor.is_revealed or neighbor.is_flagged:
            continue
        if neighbor.is_mine:
            if mine_hit is None:
                mine_hit = (neighbor_row, neighbor_col)
            continue
        revealed.extend(flood_reveal(board, neighbor_row, neighbor_col))

    return ChordResult(revealed=revealed, mine_hit=mine_hit)


def preview_chord(board: Board, row: int, col: int) -> FrozenSet[Position]:
    """
    Cells a chord on (row, col) would reveal right now, without mutating.

    Only non-empty when the flagged neighbors already match the number.
    """
    if not _is_chordable(board, row, col):
        return frozenset()
    cell = board.get_cell(row, col)
    if board.count_adjacent_flags(row, col) != cell.neighbor_mines:
        return frozenset()
    return frozenset(
        (r, c) for r, c in board.neighbors(row, col)
        if board.get_cell(r, c).is_hidden
        and not board.get_cell(r, c).is_flagged
    )
