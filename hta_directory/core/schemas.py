"""Core data models for the Head TA assignment engine."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from hta_directory.core.semester import Season

HEAD_TA_ROLE = "head_ta"
ADMIN_ROLE = "admin"


class User(BaseModel):
    """A directory member as returned by the identity lookup."""

    model_config = ConfigDict(frozen=True)

    id: str
    first_name: str
    last_name: str
    email: str = ""
    role: str = HEAD_TA_ROLE
    grad_year: int | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_head_ta(self) -> bool:
        return self.role == HEAD_TA_ROLE


class CourseOffering(BaseModel):
    """One course taught in one semester."""

    model_config = ConfigDict(frozen=True)

    id: str
    course_id: str
    course_number: str
    course_name: str = ""
    professor_id: str | None = None
    professor_name: str | None = None
    semester: str
    year: int
    season: Season
    created_at: datetime = Field(default_factory=datetime.now)


class AssignmentRecord(BaseModel):
    """A Head TA assignment joined with its offering and course.

    ``hours_per_week`` is nullable; consumers count a missing value as the
    configured default (10).
    """

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    course_offering_id: str
    course_id: str
    course_number: str
    course_name: str = ""
    hours_per_week: int | None = None
    semester: str
    year: int
    season: Season


class WorkloadSummary(BaseModel):
    """Weekly hours committed by one user, optionally scoped to a semester."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    total_hours_per_week: int = 0
    assignments: list[AssignmentRecord] = Field(default_factory=list)

    @property
    def course_count(self) -> int:
        return len(self.assignments)


class EligibilityVerdict(BaseModel):
    """Accept/reject result of an assignment check. ``reasons`` is empty iff accepted."""

    model_config = ConfigDict(frozen=True)

    can_assign: bool
    reasons: list[str] = Field(default_factory=list)
    current_hours: int = 0
    max_hours: int


class Suggestion(BaseModel):
    """An eligible Head TA ranked for a course offering."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    user_name: str
    course_offering_id: str
    course_number: str
    course_name: str = ""
    score: float = Field(default=0.0, ge=0.0, le=100.0)
    reasons: list[str] = Field(default_factory=list)
    suggested_hours: int
    current_hours: int = 0
    max_hours: int


class MissingAssignment(BaseModel):
    """A course offering with no Head TA assigned."""

    model_config = ConfigDict(frozen=True)

    course_offering_id: str
    course_number: str
    course_name: str = ""
    semester: str
    professor_name: str | None = None
    days_since_created: int = 0


class AssignmentOutcome(BaseModel):
    """Verdict plus the stored record when the assignment was written."""

    model_config = ConfigDict(frozen=True)

    verdict: EligibilityVerdict
    assignment: AssignmentRecord | None = None

    @property
    def created(self) -> bool:
        return self.assignment is not None
