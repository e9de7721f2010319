"""
Scholarship request and record schemas.
Range rules (GPA scale, weight sum, list sizes) are enforced by services.validation so that each
violation maps to its own error code; the schemas only check shape and sign.
"""
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class CustomCriterionSchema(BaseModel):
    """A named weighted criterion, met when any achievement fact of the same type exists."""
    key: str = Field(..., min_length=1, max_length=64)
    weight: int = Field(..., ge=0, validation_alias=AliasChoices("weight", "value"))


class ScholarshipCreate(BaseModel):
    gpa_threshold: int = Field(..., ge=0, alias="gpaThreshold", description="Fixed-point GPA, 350 = 3.50")
    required_courses: list[str] = Field(default_factory=list, alias="requiredCourses")
    required_credits: int = Field(..., ge=0, alias="requiredCredits")
    extracurricular_weight: int = Field(..., ge=0, alias="extracurricularWeight")
    essay_required: bool = Field(False, alias="essayRequired")
    min_attendance: int = Field(..., ge=0, alias="minAttendance")
    custom_criteria: list[CustomCriterionSchema] = Field(default_factory=list, alias="customCriteria")

    model_config = {"populate_by_name": True}


class ScholarshipRecord(BaseModel):
    """Read model of a stored scholarship; the input of the scoring algorithm."""
    id: int
    creator: str
    gpa_threshold: int
    required_courses: list[str] = Field(default_factory=list)
    required_credits: int
    extracurricular_weight: int
    essay_required: bool
    min_attendance: int
    custom_criteria: list[CustomCriterionSchema] = Field(default_factory=list)
    total_weight: int
    active: bool = True
    paused: bool = False
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
