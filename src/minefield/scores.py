"""
Score history for Minesweeper.

Keeps the list of won games, persists it as JSON, and provides the
sorting and formatting used by the records table.
"""
import json
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .board import Difficulty

logger = logging.getLogger(__name__)


# ============================================================================
# Score Record
# ============================================================================

@dataclass(frozen=True)
class Score:
    """
    A single won game.

    Attributes:
        id: Unique identifier.
        timestamp: When the game was won (UTC).
        elapsed_seconds: Time taken, rounded to 2 decimals.
        difficulty: Difficulty the game was played at.
    """

    id: str
    timestamp: datetime
    elapsed_seconds: float
    difficulty: Difficulty

    @classmethod
    def create(
        cls,
        difficulty: Difficulty,
        elapsed_seconds: float,
        timestamp: Optional[datetime] = None,
    ) -> "Score":
        """Record a win that just happened."""
        return cls(
            id=uuid.uuid4().hex,
            timestamp=timestamp or datetime.now(timezone.utc),
            elapsed_seconds=round(elapsed_seconds, 2),
            difficulty=difficulty,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.timestamp.isoformat(),
            "time": self.elapsed_seconds,
            "difficulty": self.difficulty.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Score":
        """
        Rebuild a score from its stored form.

        Raises:
            KeyError, TypeError, ValueError: If the record is malformed.
        """
        date = data["date"]
        # JavaScript toISOString() ends in Z, which fromisoformat rejects before 3.11
        if date.endswith("Z"):
            date = date[:-1] + "+00:00"
        timestamp = datetime.fromisoformat(date)
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return cls(
            id=str(data["id"]),
            timestamp=timestamp,
            elapsed_seconds=round(float(data["time"]), 2),
            difficulty=Difficulty(data["difficulty"]),
        )


# ============================================================================
# Sorting
# ============================================================================

class SortField(Enum):
    DATE = "date"
    TIME = "time"
    DIFFICULTY = "difficulty"


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


_SORT_KEYS = {
    SortField.DATE: lambda score: score.timestamp,
    SortField.TIME: lambda score: score.elapsed_seconds,
    SortField.DIFFICULTY: lambda score: score.difficulty.rank,
}


def toggle_sort(
    current_field: SortField,
    current_direction: SortDirection,
    field: SortField,
) -> Tuple[SortField, SortDirection]:
    """
    Work out the new ordering after a column header is chosen.

    Choosing the current column flips the direction; choosing another
    column sorts by it ascending.
    """
    if field == current_field:
        flipped = (
            SortDirection.DESC if current_direction == SortDirection.ASC
            else SortDirection.ASC
        )
        return field, flipped
    return field, SortDirection.ASC


# ============================================================================
# Formatting
# ============================================================================

def format_elapsed(seconds: float) -> str:
    """Format a duration as ``12.34s``."""
    return f"{seconds:.2f}s"


def format_date(timestamp: datetime) -> str:
    """Format a timestamp in local time as ``MM/DD/YYYY, HH:MM``."""
    return timestamp.astimezone().strftime("%m/%d/%Y, %H:%M")


def format_difficulty(difficulty: Difficulty) -> str:
    return difficulty.label


# ============================================================================
# Score History
# ============================================================================

class ScoreHistory:
    """
    Append-only list of scores, optionally backed by a JSON file.

    Loading never fails: a missing, unreadable, or malformed file gives an
    empty history. Writing errors propagate.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        """
        Initialize the history.

        Args:
            path: JSON file to load from and save to. None keeps the
                history in memory only.
        """
        self.path = Path(path) if path is not None else None
        self._scores: List[Score] = []

    def __len__(self) -> int:
        return len(self._scores)

    def __iter__(self) -> Iterator[Score]:
        return iter(self._scores)

    # ========================================================================
    # Persistence
    # ========================================================================

    def load(self) -> "ScoreHistory":
        """Replace the in-memory list with the stored one."""
        self._scores = self._read()
        return self

    def _read(self) -> List[Score]:
        if self.path is None or not self.path.exists():
            return []
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as error:
            logger.warning("Ignoring unreadable score file %s: %s", self.path, error)
            return []
        if not isinstance(payload, list):
            logger.warning("Ignoring score file %s: expected a list", self.path)
            return []

        scores = []
        for record in payload:
            try:
                scores.append(Score.from_dict(record))
            except (KeyError, TypeError, ValueError) as error:
                logger.warning("Skipping malformed score record %r: %s", record, error)
        return scores

    def save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps([score.to_dict() for score in self._scores], indent=2),
            encoding="utf-8",
        )

    # ========================================================================
    # Mutation
    # ========================================================================

    def append(self, score: Score) -> None:
        """Add a score and persist the history."""
        self._scores.append(score)
        logger.info(
            "Recorded %s win in %s",
            score.difficulty.value, format_elapsed(score.elapsed_seconds),
        )
        self.save()

    def clear(self) -> None:
        """Delete every record."""
        self._scores = []
        self.save()

    # ========================================================================
    # Queries
    # ========================================================================

    def sorted(
        self,
        field: SortField = SortField.DATE,
        direction: SortDirection = SortDirection.DESC,
    ) -> List[Score]:
        """Return the scores ordered by ``field`` without changing storage."""
        return sorted(
            self._scores,
            key=_SORT_KEYS[field],
            reverse=direction == SortDirection.DESC,
        )
