from models.application import ScholarshipApplication
from models.engine_state import ENGINE_STATE_ID, EngineState
from models.evaluation_log import EvaluationLog
from models.scholarship import ApplicationCounter, Scholarship

__all__ = [
    "ApplicationCounter",
    "ENGINE_STATE_ID",
    "EngineState",
    "EvaluationLog",
    "Scholarship",
    "ScholarshipApplication",
]
