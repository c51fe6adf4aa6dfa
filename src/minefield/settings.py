"""
Configuration for Minesweeper games.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .board import Difficulty


def default_scores_path() -> Path:
    return Path.home() / ".minefield" / "scores.json"


# ============================================================================
# Game Settings
# ============================================================================

@dataclass
class GameSettings:
    """Settings shared by the controller and the front ends."""

    # Game settings
    difficulty: Difficulty = Difficulty.BEGINNER
    seed: Optional[int] = None

    # Presentation timing (seconds)
    highlight_duration: float = 0.2

    # Storage
    scores_path: Path = field(default_factory=default_scores_path)

    @classmethod
    def from_env(cls) -> "GameSettings":
        """
        Build settings from ``MINEFIELD_*`` environment variables.

        Raises:
            ValueError: If a variable holds an invalid value.
        """
        settings = cls()

        difficulty = os.getenv("MINEFIELD_DIFFICULTY")
        if difficulty:
            settings.difficulty = Difficulty.parse(difficulty)

        scores_path = os.getenv("MINEFIELD_SCORES_PATH")
        if scores_path:
            settings.scores_path = Path(scores_path).expanduser()

        seed = os.getenv("MINEFIELD_SEED")
        if seed:
            try:
                settings.seed = int(seed)
            except ValueError:
                raise ValueError(f"MINEFIELD_SEED must be an integer, got {seed!r}") from None

        return settings
