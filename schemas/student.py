from pydantic import BaseModel, Field


class StudentProfile(BaseModel):
    """Profile data served by the student registry. Read-only to the engine."""
    gpa: int = Field(..., ge=0, description="Fixed-point GPA, 360 = 3.60")
    courses: list[str] = Field(default_factory=list)
    credits: int = Field(0, ge=0)
