"""
Unit tests for the score history.

Tests score records, JSON persistence, fail-open loading, sorting and
formatting.
"""
import json
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from minefield import Difficulty, Score, ScoreHistory, SortDirection, SortField
from minefield.scores import (
    format_date,
    format_difficulty,
    format_elapsed,
    toggle_sort,
)

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_score(seconds: float, difficulty: Difficulty, days: int) -> Score:
    return Score.create(difficulty, seconds, BASE_TIME + timedelta(days=days))


@pytest.fixture
def scores_path(tmp_path: Path) -> Path:
    return tmp_path / "records" / "scores.json"


@pytest.fixture
def filled_history() -> ScoreHistory:
    history = ScoreHistory()
    history.append(make_score(40.5, Difficulty.EXPERT, 0))
    history.append(make_score(12.25, Difficulty.BEGINNER, 2))
    history.append(make_score(30.0, Difficulty.INTERMEDIATE, 1))
    return history


# ============================================================================
# Score Record Tests
# ============================================================================

class TestScore:
    """Test creation and serialization of a score."""

    def test_elapsed_rounded_to_two_decimals(self) -> None:
        score = Score.create(Difficulty.BEGINNER, 9.87654)
        assert score.elapsed_seconds == 9.88

    def test_ids_are_unique(self) -> None:
        first = Score.create(Difficulty.BEGINNER, 1.0)
        second = Score.create(Difficulty.BEGINNER, 1.0)
        assert first.id != second.id

    def test_dict_uses_storage_keys(self) -> None:
        score = make_score(12.5, Difficulty.EXPERT, 0)
        data = score.to_dict()
        assert set(data) == {"id", "date", "time", "difficulty"}
        assert data["difficulty"] == "expert"
        assert Score.from_dict(data) == score

    def test_naive_dates_read_as_utc(self) -> None:
        score = Score.from_dict(
            {"id": "1", "date": "2024-05-01T12:00:00", "time": 3, "difficulty": "beginner"}
        )
        assert score.timestamp == BASE_TIME

    def test_javascript_dates_parse(self) -> None:
        """Dates written by ``toISOString()`` carry a Z suffix."""
        score = Score.from_dict(
            {"id": "1", "date": "2024-05-01T12:00:00.000Z", "time": 3, "difficulty": "beginner"}
        )
        assert score.timestamp == BASE_TIME


# ============================================================================
# Persistence Tests
# ============================================================================

class TestPersistence:
    """Test saving and fail-open loading."""

    def test_append_persists(self, scores_path: Path) -> None:
        history = ScoreHistory(scores_path)
        score = make_score(20.0, Difficulty.BEGINNER, 0)
        history.append(score)

        reloaded = ScoreHistory(scores_path).load()
        assert list(reloaded) == [score]

    def test_missing_file_is_empty(self, scores_path: Path) -> None:
        assert len(ScoreHistory(scores_path).load()) == 0

    def test_invalid_json_is_empty(self, scores_path: Path) -> None:
        scores_path.parent.mkdir(parents=True)
        scores_path.write_text("{not json", encoding="utf-8")
        assert len(ScoreHistory(scores_path).load()) == 0

    def test_non_list_payload_is_empty(self, scores_path: Path) -> None:
        scores_path.parent.mkdir(parents=True)
        scores_path.write_text('{"id": "1"}', encoding="utf-8")
        assert len(ScoreHistory(scores_path).load()) == 0

    def test_malformed_records_are_skipped(self, scores_path: Path) -> None:
        good = make_score(5.0, Difficulty.EXPERT, 0).to_dict()
        scores_path.parent.mkdir(parents=True)
        scores_path.write_text(
            json.dumps([good, {"id": "2"}, "junk", {**good, "difficulty": "hard"}]),
            encoding="utf-8",
        )
        history = ScoreHistory(scores_path).load()
        assert [score.id for score in history] == [good["id"]]

    def test_clear_empties_file(self, scores_path: Path) -> None:
        history = ScoreHistory(scores_path)
        history.append(make_score(5.0, Difficulty.BEGINNER, 0))
        history.clear()
        assert json.loads(scores_path.read_text(encoding="utf-8")) == []
        assert len(ScoreHistory(scores_path).load()) == 0

    def test_in_memory_history_writes_nothing(self, tmp_path: Path) -> None:
        history = ScoreHistory()
        history.append(make_score(5.0, Difficulty.BEGINNER, 0))
        assert len(history) == 1
        assert list(tmp_path.iterdir()) == []


# ============================================================================
# Sorting Tests
# ============================================================================

class TestSorting:
    """Test ordering of the records table."""

    def test_default_is_newest_first(self, filled_history: ScoreHistory) -> None:
        days = [score.timestamp.day for score in filled_history.sorted()]
        assert days == [3, 2, 1]

    def test_sort_by_time_ascending(self, filled_history: ScoreHistory) -> None:
        ordered = filled_history.sorted(SortField.TIME, SortDirection.ASC)
        assert [s.elapsed_seconds for s in ordered] == [12.25, 30.0, 40.5]

    def test_sort_by_difficulty_descending(
        self, filled_history: ScoreHistory
    ) -> None:
        ordered = filled_history.sorted(SortField.DIFFICULTY, SortDirection.DESC)
        assert [s.difficulty for s in ordered] == [
            Difficulty.EXPERT, Difficulty.INTERMEDIATE, Difficulty.BEGINNER
        ]

    def test_sorting_does_not_reorder_storage(
        self, filled_history: ScoreHistory
    ) -> None:
        filled_history.sorted(SortField.TIME, SortDirection.ASC)
        assert [s.elapsed_seconds for s in filled_history] == [40.5, 12.25, 30.0]

    def test_toggle_same_field_flips(self) -> None:
        assert toggle_sort(SortField.TIME, SortDirection.ASC, SortField.TIME) == (
            SortField.TIME, SortDirection.DESC
        )

    def test_toggle_other_field_sorts_ascending(self) -> None:
        assert toggle_sort(SortField.DATE, SortDirection.DESC, SortField.TIME) == (
            SortField.TIME, SortDirection.ASC
        )


# ============================================================================
# Formatting Tests
# ============================================================================

class TestFormatting:

    def test_format_elapsed(self) -> None:
        assert format_elapsed(7.5) == "7.50s"

    def test_format_difficulty(self) -> None:
        assert format_difficulty(Difficulty.INTERMEDIATE) == "Intermediate"

    def test_format_date_shape(self) -> None:
        assert re.fullmatch(r"\d\d/\d\d/\d{4}, \d\d:\d\d", format_date(BASE_TIME))
