from pydantic import BaseModel, Field


class CollaboratorAddressUpdate(BaseModel):
    """New address of an external collaborator: a registered name or an http(s) base URL."""
    address: str = Field(..., min_length=1, max_length=512)


class EngineStateRecord(BaseModel):
    admin: str
    paused: bool
    verifier_address: str
    registry_address: str
    scholarship_counter: int
    application_counter: int

    model_config = {"from_attributes": True}
