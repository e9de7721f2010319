from fastapi import APIRouter, Depends

from api.deps import get_caller, get_engine
from schemas.scholarship import ScholarshipCreate
from services.engine import ScholarshipEngine
from utils.case import model_to_camel

router = APIRouter(prefix="/api/scholarships", tags=["scholarships"])


@router.post("", status_code=201)
async def create_scholarship(
    body: ScholarshipCreate,
    caller: str = Depends(get_caller),
    engine: ScholarshipEngine = Depends(get_engine),
):
    scholarship_id = await engine.create_scholarship(caller, body)
    return {"ok": True, "id": scholarship_id}


@router.get("/{scholarship_id}")
async def get_scholarship(scholarship_id: int, engine: ScholarshipEngine = Depends(get_engine)):
    """Scholarship record, or null when no scholarship has this id."""
    scholarship = await engine.get_scholarship_details(scholarship_id)
    return model_to_camel(scholarship) if scholarship else None


@router.post("/{scholarship_id}/deactivate")
async def deactivate_scholarship(
    scholarship_id: int,
    caller: str = Depends(get_caller),
    engine: ScholarshipEngine = Depends(get_engine),
):
    return {"ok": await engine.deactivate_scholarship(caller, scholarship_id)}


@router.post("/{scholarship_id}/pause")
async def pause_scholarship(
    scholarship_id: int,
    caller: str = Depends(get_caller),
    engine: ScholarshipEngine = Depends(get_engine),
):
    return {"ok": await engine.pause_scholarship(caller, scholarship_id)}


@router.post("/{scholarship_id}/unpause")
async def unpause_scholarship(
    scholarship_id: int,
    caller: str = Depends(get_caller),
    engine: ScholarshipEngine = Depends(get_engine),
):
    return {"ok": await engine.unpause_scholarship(caller, scholarship_id)}


@router.get("/{scholarship_id}/applications")
async def list_applications(scholarship_id: int, engine: ScholarshipEngine = Depends(get_engine)):
    return [model_to_camel(a) for a in await engine.list_applications(scholarship_id)]
