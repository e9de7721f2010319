from sqlalchemy import Boolean, Column, Integer, String

from database import Base

ENGINE_STATE_ID = 1


class EngineState(Base):
    """Single-row configuration owned by the engine: admin, pause flag, collaborator addresses, id counters."""

    __tablename__ = "engine_state"

    id = Column(Integer, primary_key=True, autoincrement=False, default=ENGINE_STATE_ID)
    admin = Column(String(128), nullable=False)
    paused = Column(Boolean, nullable=False, default=False)
    verifier_address = Column(String(512), nullable=False)
    registry_address = Column(String(512), nullable=False)
    scholarship_counter = Column(Integer, nullable=False, default=0)
    application_counter = Column(Integer, nullable=False, default=0)
