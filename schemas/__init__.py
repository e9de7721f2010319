from schemas.admin import CollaboratorAddressUpdate, EngineStateRecord
from schemas.application import (
    AchievementClaimSchema,
    AchievementFactSchema,
    ApplicationCreate,
    ApplicationRecord,
    ApplicationStatus,
)
from schemas.evaluation import (
    CriterionResultSchema,
    EvaluationLogRecord,
    EvaluationOutcomeSchema,
    ScoreBreakdownSchema,
)
from schemas.scholarship import CustomCriterionSchema, ScholarshipCreate, ScholarshipRecord
from schemas.student import StudentProfile

__all__ = [
    "AchievementClaimSchema",
    "AchievementFactSchema",
    "ApplicationCreate",
    "ApplicationRecord",
    "ApplicationStatus",
    "CollaboratorAddressUpdate",
    "CriterionResultSchema",
    "CustomCriterionSchema",
    "EngineStateRecord",
    "EvaluationLogRecord",
    "EvaluationOutcomeSchema",
    "ScholarshipCreate",
    "ScholarshipRecord",
    "ScoreBreakdownSchema",
    "StudentProfile",
]
