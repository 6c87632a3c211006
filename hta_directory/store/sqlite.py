"""SQLite-backed AssignmentStore."""

import logging
import sqlite3

from hta_directory.core import db
from hta_directory.core.schemas import HEAD_TA_ROLE, AssignmentRecord, CourseOffering, User
from hta_directory.store.base import AssignmentStore

logger = logging.getLogger(__name__)


class SQLiteAssignmentStore(AssignmentStore):
    """AssignmentStore over a connection returned by ``db.init_db``.

    Usage::

        store = SQLiteAssignmentStore(init_db("data/hta_directory.db"))
        verdict = can_assign_ta(store, user_id, offering_id, 10)
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    @property
    def conn(self) -> sqlite3.Connection:
        return self._conn

    def find_user_by_id(self, user_id: str) -> User | None:
        return db.get_user(self._conn, user_id)

    def find_course_offering_by_id(self, offering_id: str) -> CourseOffering | None:
        return db.get_course_offering(self._conn, offering_id)

    def find_assignment(self, user_id: str, offering_id: str) -> AssignmentRecord | None:
        return db.get_assignment(self._conn, user_id, offering_id)

    def find_assignments_for_user(
        self,
        user_id: str,
        year: int | None = None,
        season: str | None = None,
    ) -> list[AssignmentRecord]:
        return db.list_assignments_for_user(self._conn, user_id, year, season)

    def find_assignments_for_course(self, offering_id: str) -> list[AssignmentRecord]:
        return db.list_assignments_for_offering(self._conn, offering_id)

    def find_prior_assignments_for_course(
        self,
        user_id: str,
        course_id: str,
        exclude_offering_id: str | None = None,
    ) -> list[AssignmentRecord]:
        return db.list_prior_assignments_for_course(
            self._conn, user_id, course_id, exclude_offering_id,
        )

    def list_head_tas(self) -> list[User]:
        return db.list_users_by_role(self._conn, HEAD_TA_ROLE)

    def list_course_offerings(self) -> list[CourseOffering]:
        return db.list_course_offerings(self._conn)

    def create_assignment(
        self,
        user_id: str,
        offering_id: str,
        hours_per_week: int | None,
    ) -> AssignmentRecord | None:
        assignment_id = db.insert_assignment(self._conn, user_id, offering_id, hours_per_week)
        if assignment_id is None:
            logger.info("Assignment %s -> %s already exists", user_id, offering_id)
            return None
        logger.debug("Stored assignment %s (%s -> %s)", assignment_id, user_id, offering_id)
        return db.get_assignment_by_id(self._conn, assignment_id)
