"""Course offerings that still need a Head TA."""

import logging
from datetime import date, datetime

from hta_directory.core.schemas import MissingAssignment
from hta_directory.core.semester import is_semester_past, make_semester, semester_sort_key
from hta_directory.store.base import AssignmentStore

logger = logging.getLogger(__name__)


def find_missing_assignments(
    store: AssignmentStore,
    now: date | datetime | None = None,
    include_past: bool = False,
) -> list[MissingAssignment]:
    """List offerings with no assignment, oldest semester first.

    The default is a forward-looking report: offerings in past semesters are
    skipped. Pass ``include_past=True`` for a full audit that reports every
    unassigned offering regardless of semester.
    """
    if now is None:
        now = datetime.now()
    today = now.date() if isinstance(now, datetime) else now

    missing: list[tuple[tuple[int, int], MissingAssignment]] = []
    for offering in store.list_course_offerings():
        semester = make_semester(offering.year, offering.season)
        if not include_past and is_semester_past(semester, now):
            continue
        if store.find_assignments_for_course(offering.id):
            continue
        missing.append((
            semester_sort_key(semester),
            MissingAssignment(
                course_offering_id=offering.id,
                course_number=offering.course_number,
                course_name=offering.course_name,
                semester=offering.semester,
                professor_name=offering.professor_name,
                days_since_created=max(0, (today - offering.created_at.date()).days),
            ),
        ))

    missing.sort(key=lambda item: item[0])
    logger.info("%d course offerings without a head TA", len(missing))
    return [m for _, m in missing]
