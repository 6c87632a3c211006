"""Orchestrator: eligibility gate, then assignment write.

Flow:
  1. can_assign_ta (read-only)
  2. store.create_assignment, only when the verdict approves

The two steps are not one transaction; concurrent writers can both pass
step 1 and push a TA over the ceilings.
"""

import json
import logging

from hta_directory.core.config import Settings
from hta_directory.core.schemas import AssignmentOutcome, EligibilityVerdict, Suggestion
from hta_directory.pipeline.eligibility import ALREADY_ASSIGNED, can_assign_ta
from hta_directory.store.base import AssignmentStore

logger = logging.getLogger(__name__)


def assign_head_ta(
    store: AssignmentStore,
    user_id: str,
    course_offering_id: str,
    hours_per_week: int | None = None,
    settings: Settings | None = None,
) -> AssignmentOutcome:
    """Assign a Head TA if the eligibility check approves it."""
    settings = settings or Settings()
    hours = hours_per_week if hours_per_week is not None else settings.limits.default_hours_per_week

    verdict = can_assign_ta(store, user_id, course_offering_id, hours, settings.limits)
    if not verdict.can_assign:
        logger.info(
            "Assignment %s -> %s rejected: %s",
            user_id, course_offering_id, "; ".join(verdict.reasons),
        )
        return AssignmentOutcome(verdict=verdict)

    record = store.create_assignment(user_id, course_offering_id, hours)
    if record is None:
        # Lost a race with another writer between check and insert.
        verdict = EligibilityVerdict(
            can_assign=False,
            reasons=[ALREADY_ASSIGNED],
            current_hours=verdict.current_hours,
            max_hours=verdict.max_hours,
        )
        return AssignmentOutcome(verdict=verdict)

    logger.info("Assigned %s to %s (%d h/week)", user_id, course_offering_id, hours)
    return AssignmentOutcome(verdict=verdict, assignment=record)


def export_suggestions_json(suggestions: list[Suggestion]) -> str:
    """Export suggestions as a JSON string."""
    data = [
        {
            "user_id": s.user_id,
            "user_name": s.user_name,
            "course_offering_id": s.course_offering_id,
            "course_number": s.course_number,
            "course_name": s.course_name,
            "score": s.score,
            "reasons": s.reasons,
            "suggested_hours": s.suggested_hours,
            "current_hours": s.current_hours,
            "max_hours": s.max_hours,
        }
        for s in suggestions
    ]
    return json.dumps(data, indent=2)
