from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, func

from database import Base


class ScholarshipApplication(Base):
    __tablename__ = "applications"

    # Globally unique; assigned from engine_state.application_counter.
    id = Column(Integer, primary_key=True, autoincrement=False)
    scholarship_id = Column(Integer, ForeignKey("scholarships.id"), nullable=False, index=True)
    # Position within the owning scholarship (application_counters.count at submission).
    sequence = Column(Integer, nullable=False)
    student = Column(String(128), nullable=False, index=True)
    status = Column(String(32), nullable=False, default="pending", index=True)
    evaluation_timestamp = Column(DateTime(timezone=True), nullable=True)
    score = Column(Integer, nullable=False, default=0)
    # [{"type": str, "value": int, "verified": bool}, ...]
    verified_achievements = Column(JSON, nullable=False, default=list)
    # [{"type": str, "value": int}, ...] as claimed by the student
    claimed_achievements = Column(JSON, nullable=False, default=list)
    essay_hash = Column(String(256), nullable=True)
    attendance_percentage = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
