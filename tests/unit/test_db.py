"""Tests for the database layer and the SQLite store."""

import sqlite3
from pathlib import Path

from hta_directory.core.db import (
    get_assignment,
    get_course_offering,
    get_user,
    init_db,
    insert_professor,
    list_assignments_for_offering,
    list_assignments_for_user,
    list_prior_assignments_for_course,
    list_users_by_role,
)
from hta_directory.store.sqlite import SQLiteAssignmentStore


class TestInitDb:
    def test_creates_tables(self, db: sqlite3.Connection) -> None:
        tables = {
            row[0]
            for row in db.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            ).fetchall()
        }
        assert {"users", "professors", "courses", "course_offerings", "ta_assignments"} <= tables

    def test_idempotent(self, tmp_path: Path) -> None:
        p = tmp_path / "double.db"
        init_db(p).close()
        init_db(p).close()

    def test_creates_parent_dir(self, tmp_path: Path) -> None:
        p = tmp_path / "nested" / "dir" / "x.db"
        init_db(p).close()
        assert p.exists()


class TestUsers:
    def test_get_user(self, db, seed) -> None:  # type: ignore[no-untyped-def]
        seed.user("alice", grad_year=2020)
        user = get_user(db, "alice")
        assert user is not None
        assert user.grad_year == 2020
        assert user.role == "head_ta"

    def test_get_missing_user(self, db) -> None:  # type: ignore[no-untyped-def]
        assert get_user(db, "ghost") is None

    def test_list_by_role_in_insertion_order(self, db, seed) -> None:  # type: ignore[no-untyped-def]
        seed.user("zed")
        seed.user("admin1", role="admin")
        seed.user("amy")
        assert [u.id for u in list_users_by_role(db, "head_ta")] == ["zed", "amy"]


class TestOfferings:
    def test_semester_string_derived(self, db, seed) -> None:  # type: ignore[no-untyped-def]
        seed.offering("o1", "6.1010", 2025, "spring")
        offering = get_course_offering(db, "o1")
        assert offering is not None
        assert offering.semester == "Spring 2025"
        assert offering.course_number == "6.1010"
        assert offering.professor_name is None

    def test_professor_name_joined(self, db, seed) -> None:  # type: ignore[no-untyped-def]
        pid = insert_professor(db, "Grace", "Hopper", "grace@example.edu")
        seed.offering("o1", "6.1010", professor_id=pid)
        offering = get_course_offering(db, "o1")
        assert offering is not None
        assert offering.professor_name == "Grace Hopper"


class TestAssignments:
    def test_duplicate_ignored(self, db, seed) -> None:  # type: ignore[no-untyped-def]
        seed.user("alice")
        seed.offering("o1", "6.1010")
        assert seed.assign("alice", "o1") is not None
        assert seed.assign("alice", "o1") is None
        assert db.execute("SELECT COUNT(*) FROM ta_assignments").fetchone()[0] == 1

    def test_null_hours_stored(self, db, seed) -> None:  # type: ignore[no-untyped-def]
        seed.user("alice")
        seed.offering("o1", "6.1010")
        seed.assign("alice", "o1", hours=None)
        record = get_assignment(db, "alice", "o1")
        assert record is not None
        assert record.hours_per_week is None
        assert record.semester == "Fall 2024"

    def test_semester_filter(self, db, seed) -> None:  # type: ignore[no-untyped-def]
        seed.user("alice")
        seed.offering("f24", "6.1010", 2024, "fall")
        seed.offering("s25", "6.1020", 2025, "spring")
        seed.assign("alice", "f24")
        seed.assign("alice", "s25")
        assert len(list_assignments_for_user(db, "alice")) == 2
        only_fall = list_assignments_for_user(db, "alice", 2024, "fall")
        assert [a.course_offering_id for a in only_fall] == ["f24"]

    def test_filter_needs_both_year_and_season(self, db, seed) -> None:  # type: ignore[no-untyped-def]
        seed.user("alice")
        seed.offering("f24", "6.1010", 2024, "fall")
        seed.offering("s25", "6.1020", 2025, "spring")
        seed.assign("alice", "f24")
        seed.assign("alice", "s25")
        assert len(list_assignments_for_user(db, "alice", 2024, None)) == 2

    def test_for_offering(self, db, seed) -> None:  # type: ignore[no-untyped-def]
        seed.user("bob")
        seed.user("alice")
        seed.offering("o1", "6.1010")
        seed.assign("bob", "o1")
        seed.assign("alice", "o1")
        assert [a.user_id for a in list_assignments_for_offering(db, "o1")] == ["alice", "bob"]

    def test_prior_assignments_exclude_target(self, db, seed) -> None:  # type: ignore[no-untyped-def]
        seed.user("alice")
        seed.offering("old", "6.1010", 2023, "fall")
        seed.offering("new", "6.1010", 2024, "fall")
        seed.offering("other", "18.01", 2023, "fall")
        seed.assign("alice", "old")
        seed.assign("alice", "new")
        seed.assign("alice", "other")
        course_id = seed.course("6.1010")
        prior = list_prior_assignments_for_course(db, "alice", course_id, exclude_offering_id="new")
        assert [a.course_offering_id for a in prior] == ["old"]
        everything = list_prior_assignments_for_course(db, "alice", course_id)
        assert {a.course_offering_id for a in everything} == {"old", "new"}


class TestSQLiteAssignmentStore:
    def test_create_assignment_returns_record(self, store: SQLiteAssignmentStore, seed) -> None:  # type: ignore[no-untyped-def]
        seed.user("alice")
        seed.offering("o1", "6.1010")
        record = store.create_assignment("alice", "o1", 12)
        assert record is not None
        assert record.hours_per_week == 12
        assert record.course_number == "6.1010"

    def test_create_duplicate_returns_none(self, store: SQLiteAssignmentStore, seed) -> None:  # type: ignore[no-untyped-def]
        seed.user("alice")
        seed.offering("o1", "6.1010")
        store.create_assignment("alice", "o1", 10)
        assert store.create_assignment("alice", "o1", 10) is None

    def test_list_head_tas_skips_admins(self, store: SQLiteAssignmentStore, seed) -> None:  # type: ignore[no-untyped-def]
        seed.user("alice")
        seed.user("root", role="admin")
        assert [u.id for u in store.list_head_tas()] == ["alice"]
