from fastapi import Header, HTTPException, Request

from services.engine import ScholarshipEngine


def get_engine(request: Request) -> ScholarshipEngine:
    return request.app.state.scholarship_engine


def get_caller(x_principal: str | None = Header(None, alias="X-Principal")) -> str:
    """Identity of the calling principal. Authentication happens upstream of this service."""
    if not x_principal:
        raise HTTPException(status_code=401, detail="Missing X-Principal header")
    return x_principal
