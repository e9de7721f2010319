from fastapi import APIRouter, Depends

from api.deps import get_caller, get_engine
from services.engine import ScholarshipEngine

router = APIRouter(prefix="/api", tags=["evaluation"])


@router.post("/applications/{application_id}/evaluate")
async def evaluate_application(
    application_id: int,
    caller: str = Depends(get_caller),
    engine: ScholarshipEngine = Depends(get_engine),
):
    """
    Evaluate a pending application. Anyone may trigger it; the caller is recorded in the log.
    A rejection comes back through the error handler as CriteriaNotMet.
    """
    outcome = await engine.evaluate_application_outcome(application_id, caller)
    return {
        "ok": True,
        "applicationId": outcome.application_id,
        "status": outcome.status.value,
        "score": outcome.score,
        "evaluationTimestamp": outcome.evaluation_timestamp.isoformat(),
    }
