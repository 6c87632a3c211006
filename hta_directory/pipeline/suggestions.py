"""Rule-based Head TA suggestions for a course offering.

Score range: 0-100. ScoringConfig caps the bonus total at 100, so the clamp
never merges candidates with different signal counts. Each matched signal adds its bonus from
ScoringConfig and one reason string, so len(reasons) equals the number of
matched signals. Ordering is score descending; equal scores keep the store's
enumeration order.
"""

import logging

from hta_directory.core.config import HoursConfig, ScoringConfig, Settings
from hta_directory.core.schemas import CourseOffering, EligibilityVerdict, Suggestion, User
from hta_directory.pipeline.eligibility import can_assign_ta
from hta_directory.store.base import AssignmentStore

logger = logging.getLogger(__name__)

TAUGHT_BEFORE = "Has taught this course before"
HAS_AVAILABILITY = "Has availability for more courses"
EXPERIENCED = "Experienced TA (2+ years)"


def suggest_hours(course_number: str, config: HoursConfig) -> int:
    """Weekly hours to offer: heavy hours for configured prefixes, else the default."""
    number = course_number.strip()
    if any(number.startswith(prefix) for prefix in config.heavy_course_prefixes):
        return config.heavy_course_hours
    return config.default_course_hours


def score_candidate(
    candidate: User,
    offering: CourseOffering,
    verdict: EligibilityVerdict,
    taught_before: bool,
    config: ScoringConfig,
) -> tuple[float, list[str]]:
    """Score one eligible candidate.

    Returns:
        (score clamped to 0-100, reasons for every matched signal).
    """
    score = 0.0
    reasons: list[str] = []

    if taught_before:
        score += config.experience_bonus
        reasons.append(TAUGHT_BEFORE)

    if verdict.current_hours < config.availability_threshold_hours:
        score += config.availability_bonus
        reasons.append(HAS_AVAILABILITY)

    if (
        candidate.grad_year is not None
        and offering.year - candidate.grad_year >= config.seniority_years
    ):
        score += config.seniority_bonus
        reasons.append(EXPERIENCED)

    score = max(0.0, min(100.0, score))
    return score, reasons


def suggest_assignments(
    store: AssignmentStore,
    course_offering_id: str,
    limit: int | None = None,
    settings: Settings | None = None,
) -> list[Suggestion]:
    """Rank eligible Head TAs for a course offering.

    An unknown offering yields an empty list, not an error.
    """
    settings = settings or Settings()
    if limit is None:
        limit = settings.scoring.max_suggestions

    offering = store.find_course_offering_by_id(course_offering_id)
    if offering is None:
        logger.info("No suggestions: course offering '%s' not found", course_offering_id)
        return []

    suggested = suggest_hours(offering.course_number, settings.hours)
    candidates = store.list_head_tas()
    suggestions: list[Suggestion] = []

    for candidate in candidates:
        verdict = can_assign_ta(
            store,
            candidate.id,
            course_offering_id,
            settings.limits.default_hours_per_week,
            settings.limits,
        )
        if not verdict.can_assign:
            continue

        prior = store.find_prior_assignments_for_course(
            candidate.id, offering.course_id, exclude_offering_id=course_offering_id,
        )
        score, reasons = score_candidate(
            candidate, offering, verdict, bool(prior), settings.scoring,
        )
        logger.debug("Candidate %s scored %.1f (%s)", candidate.id, score, reasons)

        suggestions.append(
            Suggestion(
                user_id=candidate.id,
                user_name=candidate.full_name,
                course_offering_id=course_offering_id,
                course_number=offering.course_number,
                course_name=offering.course_name,
                score=score,
                reasons=reasons,
                suggested_hours=suggested,
                current_hours=verdict.current_hours,
                max_hours=verdict.max_hours,
            )
        )

    suggestions.sort(key=lambda s: s.score, reverse=True)
    logger.info(
        "Suggestions for %s (%s): %d eligible of %d head TAs",
        offering.course_number, offering.semester, len(suggestions), len(candidates),
    )
    return suggestions[:limit]
