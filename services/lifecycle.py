"""
Application lifecycle: pending -> approved | rejected.
Both outcomes are terminal; an application leaves pending exactly once.
"""
from __future__ import annotations

from datetime import datetime

from models import ScholarshipApplication
from schemas.application import AchievementFactSchema, ApplicationStatus
from schemas.evaluation import ScoreBreakdownSchema
from services.errors import AlreadyEvaluated, Paused

TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    ApplicationStatus.PENDING: frozenset({ApplicationStatus.APPROVED, ApplicationStatus.REJECTED}),
    ApplicationStatus.APPROVED: frozenset(),
    ApplicationStatus.REJECTED: frozenset(),
}


def can_transition(current: ApplicationStatus, target: ApplicationStatus) -> bool:
    return target in TRANSITIONS[current]


def ensure_evaluable(application: ScholarshipApplication, engine_paused: bool) -> None:
    """Guards checked before any collaborator is called."""
    if ApplicationStatus(application.status) != ApplicationStatus.PENDING:
        raise AlreadyEvaluated(f"Application {application.id} is already {application.status}")
    if engine_paused:
        raise Paused()


def complete_evaluation(
    application: ScholarshipApplication,
    breakdown: ScoreBreakdownSchema,
    facts: list[AchievementFactSchema],
    evaluated_at: datetime,
) -> ApplicationStatus:
    """Stamp the outcome on the application. Caller owns the surrounding transaction."""
    target = ApplicationStatus.APPROVED if breakdown.approved else ApplicationStatus.REJECTED
    current = ApplicationStatus(application.status)
    if not can_transition(current, target):
        raise AlreadyEvaluated(f"Application {application.id} is already {application.status}")
    application.status = target.value
    application.score = breakdown.total_score
    application.evaluation_timestamp = evaluated_at
    application.verified_achievements = [f.model_dump() for f in facts]
    return target


def outcome_message(status: ApplicationStatus, breakdown: ScoreBreakdownSchema) -> str:
    if status == ApplicationStatus.APPROVED:
        return f"Application approved: score {breakdown.total_score} (passing {breakdown.passing_score})"
    reasons = "; ".join(breakdown.rejection_reasons)
    return f"Application rejected: criteria not met ({reasons})"
