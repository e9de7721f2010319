from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, func

from database import Base


class Scholarship(Base):
    __tablename__ = "scholarships"

    # Assigned from engine_state.scholarship_counter, never autoincremented.
    id = Column(Integer, primary_key=True, autoincrement=False)
    creator = Column(String(128), nullable=False, index=True)
    gpa_threshold = Column(Integer, nullable=False)
    required_courses = Column(JSON, nullable=False, default=list)
    required_credits = Column(Integer, nullable=False)
    extracurricular_weight = Column(Integer, nullable=False)
    essay_required = Column(Boolean, nullable=False, default=False)
    min_attendance = Column(Integer, nullable=False)
    # [{"key": str, "weight": int}, ...]
    custom_criteria = Column(JSON, nullable=False, default=list)
    total_weight = Column(Integer, nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    paused = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class ApplicationCounter(Base):
    __tablename__ = "application_counters"

    scholarship_id = Column(Integer, primary_key=True, autoincrement=False)
    count = Column(Integer, nullable=False, default=0)
