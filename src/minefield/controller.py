"""
Game controller for Minesweeper.

Owns the board and game status for one game at a time, applies player
actions through the reveal and marking rules, classifies the result, and
publishes the new state to any listeners.
"""
import logging
import random
from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Optional

from .board import Board, Difficulty, Position
from .clock import GameClock
from .factory import BoardFactory
from .marking import cycle
from .reveal import chord_reveal, flood_reveal, preview_chord
from .rules import GameStatus, evaluate
from .scores import Score, ScoreHistory
from .settings import GameSettings

logger = logging.getLogger(__name__)


# ============================================================================
# Snapshot
# ============================================================================

@dataclass(frozen=True)
class GameSnapshot:
    """
    State published after every action.

    Attributes:
        board: The live board (not a copy).
        status: Game status after the action.
        highlight: Cells to flash for a chord without enough flags.
        elapsed_seconds: Time on the game clock.
        score: The score recorded by this action, set only on the win.
    """

    board: Board
    status: GameStatus
    highlight: FrozenSet[Position] = frozenset()
    elapsed_seconds: float = 0.0
    score: Optional[Score] = None


Listener = Callable[[GameSnapshot], None]


# ============================================================================
# Game Controller
# ============================================================================

class GameController:
    """
    State machine over a single game.

    Invalid actions (out of bounds, finished game, flagged target) leave
    everything unchanged and return the current snapshot. They never raise.
    """

    def __init__(
        self,
        difficulty: Optional[Difficulty] = None,
        factory: Optional[BoardFactory] = None,
        scores: Optional[ScoreHistory] = None,
        settings: Optional[GameSettings] = None,
        clock: Optional[GameClock] = None,
    ) -> None:
        """
        Initialize the controller and start a first game.

        Args:
            difficulty: Preset for the first game (default from settings).
            factory: Board source (default: seeded from settings).
            scores: History that receives a score on every win.
            settings: Timing and default configuration.
            clock: Game clock (default: monotonic wall clock).
        """
        self.settings = settings or GameSettings()
        self.factory = factory or BoardFactory(random.Random(self.settings.seed))
        self.scores = scores
        self.clock = clock or GameClock()
        self._listeners: List[Listener] = []

        self._difficulty = difficulty or self.settings.difficulty
        self._board: Board = Board.empty(self._difficulty.config)
        self._status = GameStatus.IN_PROGRESS
        self._highlight: FrozenSet[Position] = frozenset()
        self._highlight_expires_at = 0.0
        self.last_score: Optional[Score] = None

        self.start(self._difficulty)

    # ========================================================================
    # Listeners
    # ========================================================================

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback for published snapshots.

        Returns:
            Function that unregisters the callback.
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _publish(self, score: Optional[Score] = None) -> GameSnapshot:
        snapshot = self.snapshot(score)
        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot

    # ========================================================================
    # Player Actions
    # ========================================================================

    def start(self, difficulty: Optional[Difficulty] = None) -> GameSnapshot:
        """
        Discard the current game and deal a new board.

        Args:
            difficulty: New preset, or None to replay the current one.
        """
        if difficulty is not None:
            self._difficulty = difficulty
        self._board = self.factory.create(self._difficulty)
        self._status = GameStatus.IN_PROGRESS
        self.clock.reset()
        self._clear_highlight()
        self.last_score = None
        logger.info("New %s game", self._difficulty.value)
        return self._publish()

    def reveal(self, row: int, col: int) -> GameSnapshot:
        """
        Reveal a cell, cascading through empty regions.

        Revealing an already revealed cell is treated as a chord.
        """
        self._clear_highlight()
        if not self._accepts(row, col):
            return self.snapshot()
        cell = self._board.get_cell(row, col)
        if cell.is_flagged:
            return self.snapshot()
        if cell.is_revealed:
            return self.chord(row, col)

        self.clock.start()
        logger.debug("Reveal (%d, %d)", row, col)
        if cell.is_mine:
            return self._finish(exploded=True)
        flood_reveal(self._board, row, col)
        return self._finish()

    def chord(self, row: int, col: int) -> GameSnapshot:
        """
        Reveal the unflagged neighbors of a revealed number.

        Without enough flags around the number, the snapshot carries the
        cells to highlight and the board is untouched.
        """
        self._clear_highlight()
        if not self._accepts(row, col):
            return self.snapshot()
        cell = self._board.get_cell(row, col)
        if not cell.is_revealed or cell.neighbor_mines == 0:
            return self.snapshot()

        self.clock.start()
        logger.debug("Chord (%d, %d)", row, col)
        result = chord_reveal(self._board, row, col)
        if result.mine_hit is not None:
            return self._finish(exploded=True)
        if result.highlight:
            self._set_highlight(result.highlight)
            return self._publish()
        if not result.revealed:
            return self.snapshot()
        return self._finish()

    def mark(self, row: int, col: int) -> GameSnapshot:
        """Cycle the marking of a hidden cell: none, flag, question."""
        self._clear_highlight()
        if not self._accepts(row, col):
            return self.snapshot()
        cell = self._board.get_cell(row, col)
        if cell.is_revealed:
            return self.snapshot()

        self.clock.start()
        cycle(cell)
        logger.debug("Mark (%d, %d) -> %s", row, col, cell.marking.value)
        return self._finish()

    def preview_chord(self, row: int, col: int) -> FrozenSet[Position]:
        """Cells a chord on (row, col) would reveal. Never mutates."""
        if self._status.is_terminal:
            return frozenset()
        return preview_chord(self._board, row, col)

    # ========================================================================
    # Action Helpers
    # ========================================================================

    def _accepts(self, row: int, col: int) -> bool:
        """Check the game is running and the position is on the board."""
        if self._status.is_terminal:
            return False
        return self._board.is_valid_position(row, col)

    def _finish(self, exploded: bool = False) -> GameSnapshot:
        """Classify the board once and publish the result."""
        status = evaluate(self._board, self._difficulty.config.mines, exploded)
        if not status.is_terminal:
            return self._publish()

        self._status = status
        self.clock.stop()
        if status is GameStatus.LOST:
            logger.info("Game lost after %.2fs", self.clock.elapsed)
            return self._publish()

        score = Score.create(self._difficulty, self.clock.elapsed)
        self.last_score = score
        if self.scores is not None:
            try:
                self.scores.append(score)
            except OSError:
                logger.exception("Could not save score")
        logger.info("Game won in %.2fs", score.elapsed_seconds)
        return self._publish(score)

    def _set_highlight(self, cells: FrozenSet[Position]) -> None:
        self._highlight = cells
        self._highlight_expires_at = self.clock.now() + self.settings.highlight_duration

    def _clear_highlight(self) -> None:
        self._highlight = frozenset()

    # ========================================================================
    # State Accessors
    # ========================================================================

    def snapshot(self, score: Optional[Score] = None) -> GameSnapshot:
        return GameSnapshot(
            board=self._board,
            status=self._status,
            highlight=self.highlight,
            elapsed_seconds=self.elapsed_seconds,
            score=score,
        )

    @property
    def board(self) -> Board:
        return self._board

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def elapsed_seconds(self) -> float:
        return self.clock.elapsed

    @property
    def highlight(self) -> FrozenSet[Position]:
        """Insufficient-flag cells, empty once the highlight has expired."""
        if self._highlight and self.clock.now() >= self._highlight_expires_at:
            self._clear_highlight()
        return self._highlight

    @property
    def flag_count(self) -> int:
        return self._board.flag_count

    @property
    def mines_remaining(self) -> int:
        """Mines minus flags placed, as shown on the flag counter."""
        return self._difficulty.config.mines - self._board.flag_count
