"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Iterable, List, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import (
    Board,
    BoardConfig,
    BoardFactory,
    Cell,
    Difficulty,
    GameClock,
    GameController,
    GameSettings,
    ScoreHistory,
)


# ============================================================================
# Test Doubles
# ============================================================================

class FakeTime:
    """Manually advanced time source for clocks."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FixedBoardFactory(BoardFactory):
    """Factory that always deals the same mine layout."""

    def __init__(self, mines: Iterable[Tuple[int, int]]) -> None:
        super().__init__()
        self.mines: List[Tuple[int, int]] = list(mines)

    def create(self, difficulty):
        config = (
            difficulty.config if isinstance(difficulty, Difficulty)
            else difficulty
        )
        return Board.with_mines(config, self.mines)


# Ten mines spread over a beginner board
BEGINNER_MINES = [
    (0, 1), (0, 4), (0, 7),
    (2, 2), (2, 6),
    (4, 0), (4, 4), (4, 8),
    (6, 2), (6, 6),
]


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def small_board() -> Board:
    """A 3x3 board with a single mine in the top-left corner."""
    return Board.with_mines(BoardConfig(3, 3, 1), [(0, 0)])


@pytest.fixture
def empty_board() -> Board:
    """A board with no mines for cascade testing."""
    return Board.empty(BoardConfig(5, 5, 0))


@pytest.fixture
def wall_board() -> Board:
    """A 5x5 board whose middle column is all mines."""
    return Board.with_mines(
        BoardConfig(5, 5, 5), [(row, 2) for row in range(5)]
    )


@pytest.fixture
def beginner_board() -> Board:
    """A beginner board with a known mine layout."""
    return Board.with_mines(Difficulty.BEGINNER.config, BEGINNER_MINES)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Controller Fixtures
# ============================================================================

@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def history() -> ScoreHistory:
    """In-memory score history."""
    return ScoreHistory()


@pytest.fixture
def controller(fake_time: FakeTime, history: ScoreHistory) -> GameController:
    """Beginner game on the known layout with a manual clock."""
    return GameController(
        Difficulty.BEGINNER,
        factory=FixedBoardFactory(BEGINNER_MINES),
        scores=history,
        settings=GameSettings(),
        clock=GameClock(fake_time),
    )


@pytest.fixture
def beginner_mines() -> List[Tuple[int, int]]:
    return list(BEGINNER_MINES)


@pytest.fixture
def make_controller(fake_time: FakeTime, history: ScoreHistory):
    """Build a beginner controller dealing a given mine layout."""
    def _make(mines: Iterable[Tuple[int, int]]) -> GameController:
        return GameController(
            Difficulty.BEGINNER,
            factory=FixedBoardFactory(mines),
            scores=history,
            settings=GameSettings(),
            clock=GameClock(fake_time),
        )
    return _make
