"""Eligibility check for assigning a Head TA to a course offering.

Check order:
  1. user exists                 (stop on failure)
  2. user is a Head TA           (stop on failure)
  3. offering exists             (stop on failure)
  4. not already assigned        (stop on failure)
  5. hours ceiling               (accumulate)
  6. course-count ceiling        (accumulate)

Business-rule failures are returned in the verdict, never raised.
"""

import logging

from hta_directory.core.config import AssignmentLimits
from hta_directory.core.schemas import EligibilityVerdict
from hta_directory.pipeline.workload import calculate_workload
from hta_directory.store.base import AssignmentStore

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"
NOT_HEAD_TA = "User is not a head TA"
OFFERING_NOT_FOUND = "Course offering not found"
ALREADY_ASSIGNED = "TA is already assigned to this course"


def _rejected(reason: str, limits: AssignmentLimits) -> EligibilityVerdict:
    return EligibilityVerdict(
        can_assign=False,
        reasons=[reason],
        current_hours=0,
        max_hours=limits.max_hours_per_week,
    )


def can_assign_ta(
    store: AssignmentStore,
    user_id: str,
    course_offering_id: str,
    proposed_hours: int | None = None,
    limits: AssignmentLimits | None = None,
) -> EligibilityVerdict:
    """Decide whether ``user_id`` may be assigned to ``course_offering_id``.

    Args:
        store: Persistence collaborator.
        user_id: Candidate Head TA.
        course_offering_id: Target offering.
        proposed_hours: Weekly hours for the new assignment (defaults to
            ``limits.default_hours_per_week``).
        limits: Workload ceilings.

    Returns:
        EligibilityVerdict. ``current_hours`` is the semester workload when it
        was computed, else 0.
    """
    limits = limits or AssignmentLimits()
    if proposed_hours is None:
        proposed_hours = limits.default_hours_per_week

    user = store.find_user_by_id(user_id)
    if user is None:
        logger.debug("Reject %s -> %s: user not found", user_id, course_offering_id)
        return _rejected(USER_NOT_FOUND, limits)

    if not user.is_head_ta:
        logger.debug("Reject %s -> %s: role is '%s'", user_id, course_offering_id, user.role)
        return _rejected(NOT_HEAD_TA, limits)

    offering = store.find_course_offering_by_id(course_offering_id)
    if offering is None:
        logger.debug("Reject %s -> %s: offering not found", user_id, course_offering_id)
        return _rejected(OFFERING_NOT_FOUND, limits)

    if store.find_assignment(user_id, course_offering_id) is not None:
        logger.debug("Reject %s -> %s: already assigned", user_id, course_offering_id)
        return _rejected(ALREADY_ASSIGNED, limits)

    workload = calculate_workload(store, user_id, offering.year, offering.season, limits)
    reasons: list[str] = []

    if workload.total_hours_per_week + proposed_hours > limits.max_hours_per_week:
        reasons.append(
            f"Adding {proposed_hours} hours would exceed maximum of "
            f"{limits.max_hours_per_week} hours per week"
        )

    if workload.course_count >= limits.max_courses_per_semester:
        reasons.append(
            f"TA already has {workload.course_count} course assignments this semester"
        )

    if reasons:
        logger.debug(
            "Reject %s -> %s: %s", user_id, course_offering_id, "; ".join(reasons),
        )

    return EligibilityVerdict(
        can_assign=not reasons,
        reasons=reasons,
        current_hours=workload.total_hours_per_week,
        max_hours=limits.max_hours_per_week,
    )
