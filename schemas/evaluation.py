from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from schemas.application import ApplicationStatus


class CriterionResultSchema(BaseModel):
    name: str
    met: bool
    points: int
    reason: str
    expected: Optional[str] = None
    actual: Optional[str] = None


class ScoreBreakdownSchema(BaseModel):
    gpa_score: int
    courses_score: int
    credits_score: int
    attendance_score: int
    extra_score: int
    custom_score: int
    total_score: int
    passing_score: int
    approved: bool
    rejection_reasons: list[str] = Field(default_factory=list)
    criteria_results: list[CriterionResultSchema] = Field(default_factory=list)


class EvaluationLogRecord(BaseModel):
    id: int
    application_id: int
    timestamp: datetime
    message: str
    evaluator: str

    model_config = {"from_attributes": True}


class EvaluationOutcomeSchema(BaseModel):
    """What an approving evaluation committed, captured inside its own transaction."""
    application_id: int
    status: ApplicationStatus
    score: int
    evaluation_timestamp: datetime
