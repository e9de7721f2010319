from fastapi import APIRouter, Depends

from api.deps import get_caller, get_engine
from schemas.admin import CollaboratorAddressUpdate
from services.engine import ScholarshipEngine
from utils.case import model_to_camel

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/state")
async def get_engine_state(engine: ScholarshipEngine = Depends(get_engine)):
    state = await engine.get_engine_state()
    return model_to_camel(state)


@router.post("/pause")
async def pause_engine(caller: str = Depends(get_caller), engine: ScholarshipEngine = Depends(get_engine)):
    return {"ok": await engine.pause_engine(caller)}


@router.post("/unpause")
async def unpause_engine(caller: str = Depends(get_caller), engine: ScholarshipEngine = Depends(get_engine)):
    return {"ok": await engine.unpause_engine(caller)}


@router.put("/verifier")
async def update_verifier_address(
    body: CollaboratorAddressUpdate,
    caller: str = Depends(get_caller),
    engine: ScholarshipEngine = Depends(get_engine),
):
    return {"ok": await engine.update_verifier_address(caller, body.address)}


@router.put("/registry")
async def update_registry_address(
    body: CollaboratorAddressUpdate,
    caller: str = Depends(get_caller),
    engine: ScholarshipEngine = Depends(get_engine),
):
    return {"ok": await engine.update_registry_address(caller, body.address)}
