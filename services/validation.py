"""
Creation-time rules for scholarships and applications.
Checks run in a fixed order so that the first violated rule decides the error code.
Nothing here is re-run against stored records.
"""
from __future__ import annotations

from typing import Optional

from schemas.application import ApplicationCreate
from schemas.scholarship import ScholarshipCreate, ScholarshipRecord
from services.errors import (
    DuplicateCriteria,
    InvalidApplication,
    InvalidCriteria,
    InvalidGpa,
    InvalidScholarship,
    InvalidWeight,
)

GPA_SCALE = 400
MAX_CRITERIA_ITEMS = 20
MAX_CUSTOM_CRITERIA = 10
MAX_WEIGHT = 100
MAX_PERCENTAGE = 100
REQUIRED_TOTAL_WEIGHT = 100


def total_weight(body: ScholarshipCreate) -> int:
    return body.extracurricular_weight + sum(c.weight for c in body.custom_criteria)


def validate_scholarship(body: ScholarshipCreate) -> int:
    """Validate a new scholarship definition and return its total weight (always 100)."""
    if body.gpa_threshold > GPA_SCALE:
        raise InvalidGpa(f"GPA threshold {body.gpa_threshold} exceeds scale maximum {GPA_SCALE}")
    if len(body.required_courses) > MAX_CRITERIA_ITEMS:
        raise InvalidCriteria(
            f"{len(body.required_courses)} required courses exceeds limit of {MAX_CRITERIA_ITEMS}"
        )
    if len(set(body.required_courses)) != len(body.required_courses):
        raise InvalidCriteria("Required courses must not repeat")
    if body.extracurricular_weight > MAX_WEIGHT:
        raise InvalidWeight(f"Extracurricular weight {body.extracurricular_weight} exceeds {MAX_WEIGHT}")
    if body.min_attendance > MAX_PERCENTAGE:
        raise InvalidCriteria(f"Minimum attendance {body.min_attendance}% exceeds 100%")
    if body.required_credits <= 0:
        raise InvalidCriteria("Required credits must be a positive number")
    if len(body.custom_criteria) > MAX_CUSTOM_CRITERIA:
        raise InvalidCriteria(
            f"{len(body.custom_criteria)} custom criteria exceeds limit of {MAX_CUSTOM_CRITERIA}"
        )
    keys = [c.key for c in body.custom_criteria]
    duplicates = sorted({k for k in keys if keys.count(k) > 1})
    if duplicates:
        raise DuplicateCriteria(f"Duplicate custom criteria keys: {', '.join(duplicates)}")
    weight = total_weight(body)
    if weight != REQUIRED_TOTAL_WEIGHT:
        raise InvalidWeight(f"Criteria weights sum to {weight}; must be exactly {REQUIRED_TOTAL_WEIGHT}")
    return weight


def validate_application(scholarship: Optional[ScholarshipRecord], body: ApplicationCreate) -> None:
    """Validate a submission against its target scholarship (None if it does not exist)."""
    if scholarship is None:
        raise InvalidScholarship(f"Scholarship {body.scholarship_id} not found")
    if not scholarship.active:
        raise InvalidScholarship(f"Scholarship {scholarship.id} is no longer active")
    if scholarship.paused:
        raise InvalidScholarship(f"Scholarship {scholarship.id} is paused")
    if body.attendance_percentage > MAX_PERCENTAGE:
        raise InvalidCriteria(f"Attendance {body.attendance_percentage}% exceeds 100%")
    if scholarship.essay_required and not body.essay_hash:
        raise InvalidApplication(f"Scholarship {scholarship.id} requires an essay")
    # One slot is always taken by the GPA fact.
    if len(body.achievements) > MAX_CRITERIA_ITEMS - 1:
        raise InvalidCriteria(
            f"At most {MAX_CRITERIA_ITEMS - 1} achievements may be claimed; got {len(body.achievements)}"
        )
