"""
ScholarshipEngine: the single entry point for every engine operation.

Each public method holds the engine lock for its whole body and runs in one database
transaction, so operations never interleave and a failing operation writes nothing.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from database import init_db
from models import (
    ENGINE_STATE_ID,
    ApplicationCounter,
    EngineState,
    EvaluationLog,
    Scholarship,
    ScholarshipApplication,
)
from schemas.admin import EngineStateRecord
from schemas.application import ApplicationCreate, ApplicationRecord, ApplicationStatus
from schemas.evaluation import EvaluationLogRecord, EvaluationOutcomeSchema
from schemas.scholarship import ScholarshipCreate, ScholarshipRecord
from services.admin_gate import require_admin, require_creator
from services.collaborators import CollaboratorDirectory
from services.errors import CriteriaNotMet, InvalidApplication, InvalidScholarship
from services.evaluation import run_evaluation
from services.validation import validate_application, validate_scholarship

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScholarshipEngine:
    def __init__(
        self,
        bind: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession],
        directory: CollaboratorDirectory,
        admin: str,
        verifier_address: str,
        registry_address: str,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._bind = bind
        self._session_factory = session_factory
        self.directory = directory
        self._bootstrap = {
            "admin": admin,
            "verifier_address": verifier_address,
            "registry_address": registry_address,
        }
        self._clock = clock
        self._lock = asyncio.Lock()

    async def init_storage(self) -> None:
        """Create tables and the engine_state row. Existing state is left untouched."""
        await init_db(self._bind)
        async with self._transaction() as session:
            state = await session.get(EngineState, ENGINE_STATE_ID)
            if state is None:
                session.add(
                    EngineState(
                        id=ENGINE_STATE_ID,
                        paused=False,
                        scholarship_counter=0,
                        application_counter=0,
                        **self._bootstrap,
                    )
                )
                logger.info("Engine state initialized with admin %s", self._bootstrap["admin"])

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        async with self._lock:
            async with self._session_factory() as session:
                async with session.begin():
                    yield session

    @staticmethod
    async def _state(session: AsyncSession) -> EngineState:
        state = await session.get(EngineState, ENGINE_STATE_ID)
        if state is None:
            raise RuntimeError("Engine storage is not initialized; call init_storage() first")
        return state

    # --- scholarships ---

    async def create_scholarship(self, caller: str, body: ScholarshipCreate) -> int:
        async with self._transaction() as session:
            state = await self._state(session)
            require_admin(state, caller)
            weight = validate_scholarship(body)

            state.scholarship_counter += 1
            scholarship_id = state.scholarship_counter
            session.add(
                Scholarship(
                    id=scholarship_id,
                    creator=caller,
                    gpa_threshold=body.gpa_threshold,
                    required_courses=list(body.required_courses),
                    required_credits=body.required_credits,
                    extracurricular_weight=body.extracurricular_weight,
                    essay_required=body.essay_required,
                    min_attendance=body.min_attendance,
                    custom_criteria=[c.model_dump() for c in body.custom_criteria],
                    total_weight=weight,
                    active=True,
                    paused=False,
                )
            )
            session.add(ApplicationCounter(scholarship_id=scholarship_id, count=0))
        logger.info("Scholarship %s created by %s", scholarship_id, caller)
        return scholarship_id

    async def get_scholarship_details(self, scholarship_id: int) -> Optional[ScholarshipRecord]:
        async with self._transaction() as session:
            scholarship = await session.get(Scholarship, scholarship_id)
            return ScholarshipRecord.model_validate(scholarship) if scholarship else None

    async def deactivate_scholarship(self, caller: str, scholarship_id: int) -> bool:
        """Owner-only, one-way. Deactivating an inactive scholarship is a successful no-op."""
        async with self._transaction() as session:
            scholarship = await session.get(Scholarship, scholarship_id)
            require_creator(scholarship, caller)
            if scholarship.active:
                scholarship.active = False
                logger.info("Scholarship %s deactivated by %s", scholarship_id, caller)
        return True

    async def pause_scholarship(self, caller: str, scholarship_id: int) -> bool:
        return await self._set_scholarship_paused(caller, scholarship_id, True)

    async def unpause_scholarship(self, caller: str, scholarship_id: int) -> bool:
        return await self._set_scholarship_paused(caller, scholarship_id, False)

    async def _set_scholarship_paused(self, caller: str, scholarship_id: int, paused: bool) -> bool:
        async with self._transaction() as session:
            require_admin(await self._state(session), caller)
            scholarship = await session.get(Scholarship, scholarship_id)
            if scholarship is None:
                raise InvalidScholarship(f"Scholarship {scholarship_id} not found")
            scholarship.paused = paused
        logger.info("Scholarship %s %s by %s", scholarship_id, "paused" if paused else "unpaused", caller)
        return True

    # --- applications ---

    async def submit_application(self, caller: str, body: ApplicationCreate) -> int:
        async with self._transaction() as session:
            state = await self._state(session)
            scholarship = await session.get(Scholarship, body.scholarship_id)
            record = ScholarshipRecord.model_validate(scholarship) if scholarship else None
            validate_application(record, body)

            counter = await session.get(ApplicationCounter, body.scholarship_id)
            if counter is None:
                counter = ApplicationCounter(scholarship_id=body.scholarship_id, count=0)
                session.add(counter)
            counter.count += 1
            state.application_counter += 1
            application_id = state.application_counter
            session.add(
                ScholarshipApplication(
                    id=application_id,
                    scholarship_id=body.scholarship_id,
                    sequence=counter.count,
                    student=caller,
                    status=ApplicationStatus.PENDING.value,
                    evaluation_timestamp=None,
                    score=0,
                    verified_achievements=[],
                    claimed_achievements=[a.model_dump() for a in body.achievements],
                    essay_hash=body.essay_hash,
                    attendance_percentage=body.attendance_percentage,
                )
            )
        logger.info("Application %s submitted by %s to scholarship %s", application_id, caller, body.scholarship_id)
        return application_id

    async def get_application(self, application_id: int) -> ApplicationRecord:
        async with self._transaction() as session:
            application = await session.get(ScholarshipApplication, application_id)
            if application is None:
                raise InvalidApplication(f"Application {application_id} not found")
            return ApplicationRecord.model_validate(application)

    async def get_application_status(self, application_id: int) -> ApplicationStatus:
        return (await self.get_application(application_id)).status

    async def list_applications(self, scholarship_id: int) -> list[ApplicationRecord]:
        async with self._transaction() as session:
            result = await session.execute(
                select(ScholarshipApplication)
                .where(ScholarshipApplication.scholarship_id == scholarship_id)
                .order_by(ScholarshipApplication.id)
            )
            return [ApplicationRecord.model_validate(a) for a in result.scalars().all()]

    async def get_evaluation_logs(self, application_id: int) -> list[EvaluationLogRecord]:
        async with self._transaction() as session:
            if await session.get(ScholarshipApplication, application_id) is None:
                raise InvalidApplication(f"Application {application_id} not found")
            result = await session.execute(
                select(EvaluationLog)
                .where(EvaluationLog.application_id == application_id)
                .order_by(EvaluationLog.id)
            )
            return [EvaluationLogRecord.model_validate(log) for log in result.scalars().all()]

    # --- evaluation ---

    async def evaluate_application(self, application_id: int, caller: str) -> ApplicationStatus:
        """
        Evaluate a pending application exactly once.
        Returns APPROVED; a rejection is committed first and then raised as CriteriaNotMet.
        """
        outcome = await self.evaluate_application_outcome(application_id, caller)
        return outcome.status

    async def evaluate_application_outcome(self, application_id: int, caller: str) -> EvaluationOutcomeSchema:
        """Same as evaluate_application, returning the committed score and timestamp as well."""
        async with self._transaction() as session:
            evaluated_at = self._clock()
            state = await self._state(session)
            status, breakdown = await run_evaluation(
                session,
                state,
                self.directory,
                application_id,
                evaluator=caller,
                evaluated_at=evaluated_at,
            )
        if status == ApplicationStatus.REJECTED:
            raise CriteriaNotMet(
                f"Application {application_id} rejected: score {breakdown.total_score} below {breakdown.passing_score}",
                score=breakdown.total_score,
                passing_score=breakdown.passing_score,
            )
        return EvaluationOutcomeSchema(
            application_id=application_id,
            status=status,
            score=breakdown.total_score,
            evaluation_timestamp=evaluated_at,
        )

    # --- admin ---

    async def get_engine_state(self) -> EngineStateRecord:
        async with self._transaction() as session:
            return EngineStateRecord.model_validate(await self._state(session))

    async def pause_engine(self, caller: str) -> bool:
        return await self._set_engine_paused(caller, True)

    async def unpause_engine(self, caller: str) -> bool:
        return await self._set_engine_paused(caller, False)

    async def _set_engine_paused(self, caller: str, paused: bool) -> bool:
        async with self._transaction() as session:
            state = await self._state(session)
            require_admin(state, caller)
            state.paused = paused
        logger.warning("Evaluation engine %s by %s", "paused" if paused else "unpaused", caller)
        return True

    async def update_verifier_address(self, caller: str, address: str) -> bool:
        async with self._transaction() as session:
            state = await self._state(session)
            require_admin(state, caller)
            previous, state.verifier_address = state.verifier_address, address
        logger.info("Verifier address rotated from %s to %s by %s", previous, address, caller)
        return True

    async def update_registry_address(self, caller: str, address: str) -> bool:
        async with self._transaction() as session:
            state = await self._state(session)
            require_admin(state, caller)
            previous, state.registry_address = state.registry_address, address
        logger.info("Registry address rotated from %s to %s by %s", previous, address, caller)
        return True
