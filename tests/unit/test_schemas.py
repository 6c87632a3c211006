"""Tests for core schemas: users, verdicts, suggestions, workload summaries."""

import pytest
from pydantic import ValidationError

from hta_directory.core.schemas import (
    AssignmentOutcome,
    AssignmentRecord,
    EligibilityVerdict,
    Suggestion,
    User,
    WorkloadSummary,
)


def _record(**overrides: object) -> AssignmentRecord:
    defaults: dict[str, object] = {
        "id": "a1",
        "user_id": "u1",
        "course_offering_id": "o1",
        "course_id": "c1",
        "course_number": "6.1010",
        "semester": "Fall 2024",
        "year": 2024,
        "season": "fall",
    }
    defaults.update(overrides)
    return AssignmentRecord(**defaults)  # type: ignore[arg-type]


class TestUser:
    def test_full_name(self) -> None:
        u = User(id="u1", first_name="Ada", last_name="Lovelace")
        assert u.full_name == "Ada Lovelace"

    def test_default_role_is_head_ta(self) -> None:
        assert User(id="u1", first_name="A", last_name="B").is_head_ta is True

    def test_admin_not_head_ta(self) -> None:
        assert User(id="u1", first_name="A", last_name="B", role="admin").is_head_ta is False


class TestAssignmentRecord:
    def test_hours_nullable(self) -> None:
        assert _record().hours_per_week is None

    def test_season_validated(self) -> None:
        with pytest.raises(ValidationError):
            _record(season="winter")

    def test_frozen(self) -> None:
        r = _record()
        with pytest.raises(ValidationError):
            r.hours_per_week = 5  # type: ignore[misc]


class TestWorkloadSummary:
    def test_empty(self) -> None:
        w = WorkloadSummary(user_id="u1")
        assert w.total_hours_per_week == 0
        assert w.course_count == 0

    def test_course_count(self) -> None:
        w = WorkloadSummary(user_id="u1", total_hours_per_week=20,
                            assignments=[_record(id="a1"), _record(id="a2")])
        assert w.course_count == 2


class TestSuggestion:
    def test_score_bounds(self) -> None:
        with pytest.raises(ValidationError):
            Suggestion(user_id="u", user_name="U", course_offering_id="o",
                       course_number="1", score=101.0, suggested_hours=10, max_hours=20)


class TestAssignmentOutcome:
    def test_created_flag(self) -> None:
        verdict = EligibilityVerdict(can_assign=True, max_hours=20)
        assert AssignmentOutcome(verdict=verdict).created is False
        assert AssignmentOutcome(verdict=verdict, assignment=_record()).created is True
