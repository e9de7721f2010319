from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import EngineState, EvaluationLog, Scholarship, ScholarshipApplication
from schemas.application import AchievementClaimSchema, AchievementFactSchema, ApplicationStatus
from schemas.evaluation import ScoreBreakdownSchema
from schemas.scholarship import ScholarshipRecord
from schemas.student import StudentProfile
from services.collaborators import AchievementVerifier, CollaboratorDirectory, StudentRegistry
from services.errors import CollaboratorUnavailable, EngineError, InvalidApplication
from services.lifecycle import complete_evaluation, ensure_evaluable, outcome_message
from services.scoring import score_application

logger = logging.getLogger(__name__)

GPA_FACT = "gpa"


async def run_evaluation(
    session: AsyncSession,
    state: EngineState,
    directory: CollaboratorDirectory,
    application_id: int,
    evaluator: str,
    evaluated_at: datetime,
) -> tuple[ApplicationStatus, ScoreBreakdownSchema]:
    """
    Evaluate one pending application: fetch profile, attest facts, score, transition, log.
    Writes happen only after every collaborator call has returned, inside the caller's transaction.
    """
    result = await session.execute(
        select(ScholarshipApplication).where(ScholarshipApplication.id == application_id)
    )
    application = result.scalar_one_or_none()
    if not application:
        raise InvalidApplication(f"Application {application_id} not found")

    ensure_evaluable(application, state.paused)

    scholarship = await session.get(Scholarship, application.scholarship_id)
    if not scholarship:
        raise InvalidApplication(f"Scholarship {application.scholarship_id} of application {application_id} not found")
    record = ScholarshipRecord.model_validate(scholarship)

    registry = directory.registry_for(state.registry_address)
    verifier = directory.verifier_for(state.verifier_address)

    profile = await _fetch_profile(registry, application.student)
    if profile is None:
        raise InvalidApplication(f"Student {application.student!r} has no registry profile")

    claims = [AchievementClaimSchema.model_validate(c) for c in application.claimed_achievements or []]
    facts = await _attest_facts(verifier, application.student, profile, claims)

    breakdown = score_application(record, profile, facts, application.attendance_percentage)
    status = complete_evaluation(application, breakdown, facts, evaluated_at)
    session.add(
        EvaluationLog(
            application_id=application.id,
            timestamp=evaluated_at,
            message=outcome_message(status, breakdown),
            evaluator=evaluator,
        )
    )
    await session.flush()

    logger.info(
        "Application %s %s by %s: score %s / passing %s",
        application.id,
        status.value,
        evaluator,
        breakdown.total_score,
        breakdown.passing_score,
    )
    return status, breakdown


async def _fetch_profile(registry: StudentRegistry, student: str) -> StudentProfile | None:
    try:
        return await registry.get_student_profile(student)
    except EngineError:
        raise
    except Exception as e:
        logger.exception("Student registry lookup failed for %s", student)
        raise CollaboratorUnavailable(f"Student registry lookup failed: {e}") from e


async def _attest_facts(
    verifier: AchievementVerifier,
    student: str,
    profile: StudentProfile,
    claims: list[AchievementClaimSchema],
) -> list[AchievementFactSchema]:
    """Ask the verifier about the GPA fact, then each claimed achievement, one call per fact."""
    pending = [(GPA_FACT, profile.gpa)] + [(c.type, c.value) for c in claims]
    facts: list[AchievementFactSchema] = []
    for fact_type, value in pending:
        try:
            verified = await verifier.verify_achievement(student, value, fact_type)
        except EngineError:
            raise
        except Exception as e:
            logger.exception("Verifier failed on %s=%s for %s", fact_type, value, student)
            raise CollaboratorUnavailable(f"Achievement verification failed: {e}") from e
        facts.append(AchievementFactSchema(type=fact_type, value=value, verified=bool(verified)))
    return facts
