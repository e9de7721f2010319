from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from api.deps import get_caller, get_engine
from schemas.application import ApplicationCreate, ApplicationRecord
from services.engine import ScholarshipEngine
from utils.case import model_to_camel

router = APIRouter(prefix="/api/applications", tags=["applications"])


def _app_to_response(app: ApplicationRecord) -> dict[str, Any]:
    """Serialize application to dict with camelCase for frontend."""
    return model_to_camel(app)


@router.post("", status_code=201)
async def submit_application(
    body: ApplicationCreate,
    caller: str = Depends(get_caller),
    engine: ScholarshipEngine = Depends(get_engine),
):
    application_id = await engine.submit_application(caller, body)
    return {"ok": True, "id": application_id}


@router.get("/{application_id}")
async def get_application(application_id: int, engine: ScholarshipEngine = Depends(get_engine)):
    return _app_to_response(await engine.get_application(application_id))


@router.get("/{application_id}/status")
async def get_application_status(application_id: int, engine: ScholarshipEngine = Depends(get_engine)):
    status = await engine.get_application_status(application_id)
    return {"ok": True, "applicationId": application_id, "status": status.value}


@router.get("/{application_id}/logs")
async def list_evaluation_logs(application_id: int, engine: ScholarshipEngine = Depends(get_engine)):
    logs = await engine.get_evaluation_logs(application_id)
    return [model_to_camel(log) for log in logs]
