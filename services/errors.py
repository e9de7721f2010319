"""
Error taxonomy for the evaluation engine.

Every failure an engine operation can produce is an ``EngineError`` subclass carrying a
stable numeric ``code``, a ``category`` (authorization, validation, state, collaborator,
outcome) and the HTTP status the API renders it with.
"""
from __future__ import annotations

AUTHORIZATION = "authorization"
VALIDATION = "validation"
STATE = "state"
COLLABORATOR = "collaborator"
OUTCOME = "outcome"


class EngineError(Exception):
    code: int = 0
    category: str = VALIDATION
    status_code: int = 400
    default_detail: str = "Engine error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        return {
            "ok": False,
            "error": self.name,
            "code": self.code,
            "category": self.category,
            "detail": self.detail,
        }


class Unauthorized(EngineError):
    code = 100
    category = AUTHORIZATION
    status_code = 403
    default_detail = "Caller is not permitted to perform this operation"


class InvalidScholarship(EngineError):
    code = 101
    default_detail = "Scholarship does not exist or is not accepting applications"


class InvalidApplication(EngineError):
    code = 102
    default_detail = "Application is invalid"


class InvalidCriteria(EngineError):
    code = 103
    default_detail = "Criteria out of range"


class AlreadyEvaluated(EngineError):
    code = 105
    category = STATE
    status_code = 409
    default_detail = "Application has already been evaluated"


class CriteriaNotMet(EngineError):
    """Evaluation ran and the application was rejected. A business outcome, not a fault."""

    code = 107
    category = OUTCOME
    status_code = 200
    default_detail = "Application rejected: criteria not met"

    def __init__(self, detail: str | None = None, score: int = 0, passing_score: int = 0) -> None:
        super().__init__(detail)
        self.score = score
        self.passing_score = passing_score

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["score"] = self.score
        d["passingScore"] = self.passing_score
        return d


class InvalidWeight(EngineError):
    code = 108
    default_detail = "Criteria weights must sum to exactly 100"


class Paused(EngineError):
    code = 109
    category = STATE
    status_code = 409
    default_detail = "Evaluation engine is paused"


class InvalidGpa(EngineError):
    code = 110
    default_detail = "GPA threshold must be between 0 and 400"


class CollaboratorUnavailable(EngineError):
    code = 111
    category = COLLABORATOR
    status_code = 502
    default_detail = "External collaborator call failed"


class DuplicateCriteria(EngineError):
    code = 112
    default_detail = "Custom criteria keys must be unique"
