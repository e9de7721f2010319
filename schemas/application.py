from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AchievementClaimSchema(BaseModel):
    """An achievement the student claims; attested by the verifier at evaluation time."""
    type: str = Field(..., min_length=1, max_length=64)
    value: int = Field(0, ge=0)


class AchievementFactSchema(BaseModel):
    type: str
    value: int
    verified: bool


class ApplicationCreate(BaseModel):
    scholarship_id: int = Field(..., alias="scholarshipId")
    essay_hash: Optional[str] = Field(None, alias="essayHash", max_length=256)
    attendance_percentage: int = Field(..., ge=0, alias="attendancePercentage")
    achievements: list[AchievementClaimSchema] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class ApplicationRecord(BaseModel):
    id: int
    scholarship_id: int
    sequence: int
    student: str
    status: ApplicationStatus
    evaluation_timestamp: Optional[datetime] = None
    score: int = 0
    verified_achievements: list[AchievementFactSchema] = Field(default_factory=list)
    claimed_achievements: list[AchievementClaimSchema] = Field(default_factory=list)
    essay_hash: Optional[str] = None
    attendance_percentage: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
