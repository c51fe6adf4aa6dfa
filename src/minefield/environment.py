"""
Gymnasium environment wrapper for Minesweeper.

Exposes a GameController through the standard RL interface so automated
players can drive the engine, and provides the text renderer shared with
the command line.
"""
from typing import Any, Dict, Iterable, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, Difficulty, Position
from .cell import OBS_FLAGGED, OBS_HIDDEN, OBS_MINE, OBS_QUESTION
from .controller import GameController
from .rules import GameStatus


# ============================================================================
# Text Rendering
# ============================================================================

_SYMBOLS = {
    OBS_HIDDEN: ".",
    OBS_FLAGGED: "F",
    OBS_QUESTION: "?",
    OBS_MINE: "*",
    0: " ",
}


def render_ansi(board: Board, highlight: Iterable[Position] = ()) -> str:
    """
    Render board as ASCII text with row and column indices.

    Highlighted hidden cells are drawn as ``!``.
    """
    marked = set(highlight)
    obs = board.get_observation()
    header = "    " + " ".join(f"{col % 10}" for col in range(board.cols))
    lines = [header]

    for row in range(board.rows):
        symbols = []
        for col in range(board.cols):
            val = int(obs[row, col])
            if (row, col) in marked and val < 0:
                symbols.append("!")
            else:
                symbols.append(_SYMBOLS.get(val, str(val)))
        lines.append(f"{row:>2}  " + " ".join(symbols))

    return "\n".join(lines)


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - -3 = question-marked cell
        - 0-8 = revealed cell with neighbor mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size rows * cols.
        Action i reveals the cell at (i // cols, i % cols). Revealing a
        revealed number chords it.

    Rewards:
        - +1 for revealing at least one safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action that changed nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.BEGINNER,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            difficulty: Board preset (default: beginner).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.difficulty = difficulty
        self.config = difficulty.config
        self.controller = GameController(difficulty)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=OBS_QUESTION,
            high=OBS_MINE,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )

        # One action per cell
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for the mine layout.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.controller.factory.seed(seed)
        self.controller.start(self.difficulty)
        self._steps = 0

        return self.controller.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (row * cols + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        before = self.controller.board.revealed_count
        snapshot = self.controller.reveal(row, col)
        reward = self._calculate_reward(snapshot.status, before)

        observation = snapshot.board.get_observation()
        terminated = snapshot.status.is_terminal

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return int(action) // self.config.cols, int(action) % self.config.cols

    def _calculate_reward(self, status: GameStatus, revealed_before: int) -> float:
        if status is GameStatus.WON:
            return 10.0
        if status is GameStatus.LOST:
            return -10.0
        if self.controller.board.revealed_count > revealed_before:
            return 1.0
        return -0.1

    def _get_info(self) -> Dict[str, Any]:
        board = self.controller.board
        return {
            "steps": self._steps,
            "revealed": board.revealed_count,
            "total_safe": self.config.safe_cells,
            "game_state": self.controller.status.name,
            "flags": board.flag_count,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        text = render_ansi(self.controller.board, self.controller.highlight)
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that can change the board.

        Returns:
            Boolean array where True = hidden, unflagged cell.
        """
        obs = self.controller.board.get_observation().flatten()
        return (obs == OBS_HIDDEN) | (obs == OBS_QUESTION)
