"""Abstract persistence collaborator consumed by the assignment engine."""

from abc import ABC, abstractmethod

from hta_directory.core.schemas import AssignmentRecord, CourseOffering, User


class AssignmentStore(ABC):
    """Read access to users, offerings and assignments, plus the assignment write.

    The engine only reads. ``create_assignment`` exists for callers that have
    already obtained an approving verdict.
    """

    @abstractmethod
    def find_user_by_id(self, user_id: str) -> User | None:
        """Return the user, or None if absent."""

    @abstractmethod
    def find_course_offering_by_id(self, offering_id: str) -> CourseOffering | None:
        """Return the course offering, or None if absent."""

    @abstractmethod
    def find_assignment(self, user_id: str, offering_id: str) -> AssignmentRecord | None:
        """Return the assignment of ``user_id`` to ``offering_id``, if any."""

    @abstractmethod
    def find_assignments_for_user(
        self,
        user_id: str,
        year: int | None = None,
        season: str | None = None,
    ) -> list[AssignmentRecord]:
        """All assignments of a user, filtered to one semester when year and season are given."""

    @abstractmethod
    def find_assignments_for_course(self, offering_id: str) -> list[AssignmentRecord]:
        """All assignments attached to a course offering."""

    @abstractmethod
    def find_prior_assignments_for_course(
        self,
        user_id: str,
        course_id: str,
        exclude_offering_id: str | None = None,
    ) -> list[AssignmentRecord]:
        """Assignments of a user to other offerings of the same course."""

    @abstractmethod
    def list_head_tas(self) -> list[User]:
        """Every user holding the Head TA role, in a stable order."""

    @abstractmethod
    def list_course_offerings(self) -> list[CourseOffering]:
        """Every course offering, in a stable order."""

    @abstractmethod
    def create_assignment(
        self,
        user_id: str,
        offering_id: str,
        hours_per_week: int | None,
    ) -> AssignmentRecord | None:
        """Store a new assignment. Returns None if it already exists."""
