"""Shared fixtures: a fresh SQLite store per test plus small seeding helpers."""

import sqlite3

import pytest

from hta_directory.core.db import (
    init_db,
    insert_assignment,
    insert_course,
    insert_course_offering,
    insert_user,
)
from hta_directory.store.sqlite import SQLiteAssignmentStore


@pytest.fixture
def db(tmp_path) -> sqlite3.Connection:  # type: ignore[no-untyped-def]
    conn = init_db(tmp_path / "test.db")
    yield conn
    conn.close()


@pytest.fixture
def store(db: sqlite3.Connection) -> SQLiteAssignmentStore:
    return SQLiteAssignmentStore(db)


class Seeder:
    """Inserts rows with readable IDs so tests can refer to them directly."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        self._courses: dict[str, str] = {}

    def user(
        self,
        user_id: str,
        *,
        role: str = "head_ta",
        grad_year: int | None = None,
        first_name: str | None = None,
        last_name: str = "Tester",
    ) -> str:
        return insert_user(
            self.conn,
            first_name=first_name or user_id.capitalize(),
            last_name=last_name,
            email=f"{user_id}@example.edu",
            role=role,
            grad_year=grad_year,
            user_id=user_id,
        )

    def course(self, course_number: str, course_name: str = "") -> str:
        if course_number not in self._courses:
            self._courses[course_number] = insert_course(
                self.conn,
                course_number,
                course_name or f"Course {course_number}",
                course_id=f"course-{course_number}",
            )
        return self._courses[course_number]

    def offering(
        self,
        offering_id: str,
        course_number: str,
        year: int = 2024,
        season: str = "fall",
        **kw: object,
    ) -> str:
        course_id = self.course(course_number)
        return insert_course_offering(
            self.conn, course_id, year, season,  # type: ignore[arg-type]
            offering_id=offering_id, **kw,  # type: ignore[arg-type]
        )

    def assign(self, user_id: str, offering_id: str, hours: int | None = 10) -> str | None:
        return insert_assignment(self.conn, user_id, offering_id, hours)


@pytest.fixture
def seed(db: sqlite3.Connection) -> Seeder:
    return Seeder(db)
