from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from database import Base


class EvaluationLog(Base):
    """Append-only record of evaluation outcomes. Rows are never updated or deleted."""

    __tablename__ = "evaluation_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(Integer, ForeignKey("applications.id"), nullable=False, index=True)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    message = Column(Text, nullable=False)
    evaluator = Column(String(128), nullable=False)
