"""SQLite database layer for users, course offerings and TA assignments."""

import sqlite3
import uuid
from datetime import datetime
from pathlib import Path

from hta_directory.core.schemas import (
    HEAD_TA_ROLE,
    AssignmentRecord,
    CourseOffering,
    User,
)
from hta_directory.core.semester import Season, format_semester

_USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id          TEXT PRIMARY KEY,
    email       TEXT NOT NULL UNIQUE,
    first_name  TEXT NOT NULL,
    last_name   TEXT NOT NULL,
    grad_year   INTEGER,
    role        TEXT NOT NULL DEFAULT 'head_ta',
    created_at  TEXT NOT NULL
);
"""

_PROFESSORS_TABLE = """
CREATE TABLE IF NOT EXISTS professors (
    id          TEXT PRIMARY KEY,
    first_name  TEXT NOT NULL,
    last_name   TEXT NOT NULL,
    email       TEXT NOT NULL UNIQUE,
    created_at  TEXT NOT NULL
);
"""

_COURSES_TABLE = """
CREATE TABLE IF NOT EXISTS courses (
    id              TEXT PRIMARY KEY,
    course_number   TEXT NOT NULL UNIQUE,
    course_name     TEXT NOT NULL,
    created_at      TEXT NOT NULL
);
"""

_OFFERINGS_TABLE = """
CREATE TABLE IF NOT EXISTS course_offerings (
    id              TEXT PRIMARY KEY,
    course_id       TEXT NOT NULL REFERENCES courses(id),
    professor_id    TEXT REFERENCES professors(id),
    semester        TEXT NOT NULL,
    year            INTEGER NOT NULL,
    season          TEXT NOT NULL,
    created_at      TEXT NOT NULL
);
"""

_ASSIGNMENTS_TABLE = """
CREATE TABLE IF NOT EXISTS ta_assignments (
    id                  TEXT PRIMARY KEY,
    user_id             TEXT NOT NULL REFERENCES users(id),
    course_offering_id  TEXT NOT NULL REFERENCES course_offerings(id),
    hours_per_week      INTEGER,
    responsibilities    TEXT,
    created_at          TEXT NOT NULL,
    UNIQUE(user_id, course_offering_id)
);
"""

_ASSIGNMENT_SELECT = """
SELECT a.id, a.user_id, a.course_offering_id, a.hours_per_week,
       c.id AS course_id, c.course_number, c.course_name,
       o.semester, o.year, o.season
FROM ta_assignments a
JOIN course_offerings o ON a.course_offering_id = o.id
JOIN courses c ON o.course_id = c.id
"""

_OFFERING_SELECT = """
SELECT o.id, o.course_id, o.professor_id, o.semester, o.year, o.season,
       o.created_at, c.course_number, c.course_name,
       p.first_name || ' ' || p.last_name AS professor_name
FROM course_offerings o
JOIN courses c ON o.course_id = c.id
LEFT JOIN professors p ON o.professor_id = p.id
"""


def init_db(path: str | Path) -> sqlite3.Connection:
    """Create the database and tables, returning a connection."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    conn.execute("PRAGMA journal_mode=WAL")
    for ddl in (
        _USERS_TABLE,
        _PROFESSORS_TABLE,
        _COURSES_TABLE,
        _OFFERINGS_TABLE,
        _ASSIGNMENTS_TABLE,
    ):
        conn.execute(ddl)
    conn.commit()
    return conn


def _new_id() -> str:
    return uuid.uuid4().hex


# ---------------------------------------------------------------------------
# Row mapping
# ---------------------------------------------------------------------------


def _to_user(row: sqlite3.Row) -> User:
    return User(
        id=row["id"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        role=row["role"],
        grad_year=row["grad_year"],
    )


def _to_offering(row: sqlite3.Row) -> CourseOffering:
    return CourseOffering(
        id=row["id"],
        course_id=row["course_id"],
        course_number=row["course_number"],
        course_name=row["course_name"],
        professor_id=row["professor_id"],
        professor_name=row["professor_name"],
        semester=row["semester"],
        year=row["year"],
        season=row["season"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


def _to_assignment(row: sqlite3.Row) -> AssignmentRecord:
    return AssignmentRecord(
        id=row["id"],
        user_id=row["user_id"],
        course_offering_id=row["course_offering_id"],
        course_id=row["course_id"],
        course_number=row["course_number"],
        course_name=row["course_name"],
        hours_per_week=row["hours_per_week"],
        semester=row["semester"],
        year=row["year"],
        season=row["season"],
    )


# ---------------------------------------------------------------------------
# Inserts
# ---------------------------------------------------------------------------


def insert_user(
    conn: sqlite3.Connection,
    first_name: str,
    last_name: str,
    email: str,
    role: str = HEAD_TA_ROLE,
    grad_year: int | None = None,
    user_id: str | None = None,
) -> str:
    """Insert a user. Returns the user ID."""
    user_id = user_id or _new_id()
    conn.execute(
        """
        INSERT INTO users (id, email, first_name, last_name, grad_year, role, created_at)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        (user_id, email, first_name, last_name, grad_year, role, datetime.now().isoformat()),
    )
    conn.commit()
    return user_id


def insert_professor(
    conn: sqlite3.Connection,
    first_name: str,
    last_name: str,
    email: str,
    professor_id: str | None = None,
) -> str:
    """Insert a professor. Returns the professor ID."""
    professor_id = professor_id or _new_id()
    conn.execute(
        """
        INSERT INTO professors (id, first_name, last_name, email, created_at)
        VALUES (?, ?, ?, ?, ?)
        """,
        (professor_id, first_name, last_name, email, datetime.now().isoformat()),
    )
    conn.commit()
    return professor_id


def insert_course(
    conn: sqlite3.Connection,
    course_number: str,
    course_name: str,
    course_id: str | None = None,
) -> str:
    """Insert a course. Returns the course ID."""
    course_id = course_id or _new_id()
    conn.execute(
        "INSERT INTO courses (id, course_number, course_name, created_at) VALUES (?, ?, ?, ?)",
        (course_id, course_number, course_name, datetime.now().isoformat()),
    )
    conn.commit()
    return course_id


def insert_course_offering(
    conn: sqlite3.Connection,
    course_id: str,
    year: int,
    season: Season,
    professor_id: str | None = None,
    offering_id: str | None = None,
    created_at: datetime | None = None,
) -> str:
    """Insert a course offering. The semester display string is derived."""
    offering_id = offering_id or _new_id()
    conn.execute(
        """
        INSERT INTO course_offerings
            (id, course_id, professor_id, semester, year, season, created_at)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        (
            offering_id,
            course_id,
            professor_id,
            format_semester(year, season),
            year,
            season,
            (created_at or datetime.now()).isoformat(),
        ),
    )
    conn.commit()
    return offering_id


def insert_assignment(
    conn: sqlite3.Connection,
    user_id: str,
    course_offering_id: str,
    hours_per_week: int | None = None,
    responsibilities: str | None = None,
    assignment_id: str | None = None,
) -> str | None:
    """Insert a TA assignment.

    Returns the new ID, or None if (user_id, course_offering_id) already exists.
    """
    assignment_id = assignment_id or _new_id()
    try:
        conn.execute(
            """
            INSERT INTO ta_assignments
                (id, user_id, course_offering_id, hours_per_week, responsibilities, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                assignment_id,
                user_id,
                course_offering_id,
                hours_per_week,
                responsibilities,
                datetime.now().isoformat(),
            ),
        )
        conn.commit()
        return assignment_id
    except sqlite3.IntegrityError:
        return None


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def get_user(conn: sqlite3.Connection, user_id: str) -> User | None:
    row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
    return _to_user(row) if row is not None else None


def list_users_by_role(conn: sqlite3.Connection, role: str) -> list[User]:
    """Users holding ``role``, in insertion order."""
    rows = conn.execute(
        "SELECT * FROM users WHERE role = ? ORDER BY rowid ASC", (role,)
    ).fetchall()
    return [_to_user(r) for r in rows]


def get_course_offering(conn: sqlite3.Connection, offering_id: str) -> CourseOffering | None:
    row = conn.execute(_OFFERING_SELECT + "WHERE o.id = ?", (offering_id,)).fetchone()
    return _to_offering(row) if row is not None else None


def list_course_offerings(conn: sqlite3.Connection) -> list[CourseOffering]:
    rows = conn.execute(_OFFERING_SELECT + "ORDER BY o.rowid ASC").fetchall()
    return [_to_offering(r) for r in rows]


def get_assignment(
    conn: sqlite3.Connection,
    user_id: str,
    course_offering_id: str,
) -> AssignmentRecord | None:
    row = conn.execute(
        _ASSIGNMENT_SELECT + "WHERE a.user_id = ? AND a.course_offering_id = ? LIMIT 1",
        (user_id, course_offering_id),
    ).fetchone()
    return _to_assignment(row) if row is not None else None


def get_assignment_by_id(conn: sqlite3.Connection, assignment_id: str) -> AssignmentRecord | None:
    row = conn.execute(_ASSIGNMENT_SELECT + "WHERE a.id = ?", (assignment_id,)).fetchone()
    return _to_assignment(row) if row is not None else None


def list_assignments_for_user(
    conn: sqlite3.Connection,
    user_id: str,
    year: int | None = None,
    season: str | None = None,
) -> list[AssignmentRecord]:
    """All assignments of a user; narrowed to one semester only when both year and season are given."""
    if year is not None and season is not None:
        rows = conn.execute(
            _ASSIGNMENT_SELECT
            + "WHERE a.user_id = ? AND o.year = ? AND o.season = ? ORDER BY a.rowid ASC",
            (user_id, year, season),
        ).fetchall()
    else:
        rows = conn.execute(
            _ASSIGNMENT_SELECT + "WHERE a.user_id = ? ORDER BY a.rowid ASC",
            (user_id,),
        ).fetchall()
    return [_to_assignment(r) for r in rows]


def list_assignments_for_offering(
    conn: sqlite3.Connection,
    course_offering_id: str,
) -> list[AssignmentRecord]:
    rows = conn.execute(
        _ASSIGNMENT_SELECT + "WHERE a.course_offering_id = ? ORDER BY a.user_id ASC",
        (course_offering_id,),
    ).fetchall()
    return [_to_assignment(r) for r in rows]


def list_prior_assignments_for_course(
    conn: sqlite3.Connection,
    user_id: str,
    course_id: str,
    exclude_offering_id: str | None = None,
) -> list[AssignmentRecord]:
    """Assignments of a user to any offering of ``course_id``, optionally skipping one offering."""
    rows = conn.execute(
        _ASSIGNMENT_SELECT
        + "WHERE a.user_id = ? AND o.course_id = ? AND o.id IS NOT ? ORDER BY a.rowid ASC",
        (user_id, course_id, exclude_offering_id),
    ).fetchall()
    return [_to_assignment(r) for r in rows]
