"""Weekly-hour workload of a Head TA, optionally scoped to one semester."""

import logging

from hta_directory.core.config import AssignmentLimits
from hta_directory.core.schemas import AssignmentRecord, WorkloadSummary
from hta_directory.store.base import AssignmentStore

logger = logging.getLogger(__name__)


def total_hours(records: list[AssignmentRecord], default_hours: int) -> int:
    """Sum hours_per_week, counting a missing value as ``default_hours``."""
    return sum(
        r.hours_per_week if r.hours_per_week is not None else default_hours
        for r in records
    )


def calculate_workload(
    store: AssignmentStore,
    user_id: str,
    year: int | None = None,
    season: str | None = None,
    limits: AssignmentLimits | None = None,
) -> WorkloadSummary:
    """Compute a user's workload.

    The semester filter applies only when both ``year`` and ``season`` are
    given. A user with no assignments (or an unknown user) yields a zero
    workload rather than an error.
    """
    limits = limits or AssignmentLimits()
    records = store.find_assignments_for_user(user_id, year, season)
    hours = total_hours(records, limits.default_hours_per_week)
    logger.debug(
        "Workload for %s (%s %s): %d h/week across %d assignments",
        user_id, season or "all", year or "", hours, len(records),
    )
    return WorkloadSummary(
        user_id=user_id,
        total_hours_per_week=hours,
        assignments=records,
    )
