"""
Scores a student's verified data against a scholarship's criteria.
Produces per-component points, the total, the passing threshold, and per-criterion results.
Pure: the same scholarship, profile, facts and attendance always give the same breakdown.
"""
from __future__ import annotations

from schemas.application import AchievementFactSchema
from schemas.evaluation import CriterionResultSchema, ScoreBreakdownSchema
from schemas.scholarship import ScholarshipRecord
from schemas.student import StudentProfile
from services.validation import MAX_CRITERIA_ITEMS

CRITERION_POINTS = 100
PASSING_PERCENT = 80


def _gpa(value: int) -> str:
    return f"{value / 100:.2f}"


def passing_score(total_weight: int) -> int:
    return total_weight * PASSING_PERCENT // 100


def score_application(
    scholarship: ScholarshipRecord,
    profile: StudentProfile,
    facts: list[AchievementFactSchema],
    attendance_percentage: int,
) -> ScoreBreakdownSchema:
    criteria_results: list[CriterionResultSchema] = []
    rejection_reasons: list[str] = []

    met = profile.gpa >= scholarship.gpa_threshold
    gpa_score = CRITERION_POINTS if met else 0
    criteria_results.append(
        CriterionResultSchema(
            name="GPA",
            met=met,
            points=gpa_score,
            reason=f"GPA {_gpa(profile.gpa)} meets minimum {_gpa(scholarship.gpa_threshold)}" if met
            else f"GPA {_gpa(profile.gpa)} below minimum {_gpa(scholarship.gpa_threshold)}",
            expected=f"≥ {_gpa(scholarship.gpa_threshold)}",
            actual=_gpa(profile.gpa),
        )
    )
    if not met:
        rejection_reasons.append(f"GPA {_gpa(profile.gpa)} below minimum {_gpa(scholarship.gpa_threshold)}")

    taken = set(profile.courses)
    missing = [c for c in scholarship.required_courses if c not in taken]
    met = not missing
    courses_score = CRITERION_POINTS if met else 0
    criteria_results.append(
        CriterionResultSchema(
            name="Required Courses",
            met=met,
            points=courses_score,
            reason="All required courses completed" if met else f"Missing courses: {', '.join(missing)}",
            expected=", ".join(scholarship.required_courses) or None,
            actual=", ".join(profile.courses) or None,
        )
    )
    if not met:
        rejection_reasons.append(f"Missing required courses: {', '.join(missing)}")

    met = profile.credits >= scholarship.required_credits
    credits_score = CRITERION_POINTS if met else 0
    criteria_results.append(
        CriterionResultSchema(
            name="Credits",
            met=met,
            points=credits_score,
            reason=f"{profile.credits} credits ≥ {scholarship.required_credits}" if met
            else f"Minimum {scholarship.required_credits} credits required; student has {profile.credits}",
            expected=f"≥ {scholarship.required_credits}",
            actual=str(profile.credits),
        )
    )
    if not met:
        rejection_reasons.append(f"Credits {profile.credits} below minimum {scholarship.required_credits}")

    met = attendance_percentage >= scholarship.min_attendance
    attendance_score = CRITERION_POINTS if met else 0
    criteria_results.append(
        CriterionResultSchema(
            name="Attendance",
            met=met,
            points=attendance_score,
            reason=f"Attendance {attendance_percentage}% meets minimum {scholarship.min_attendance}%" if met
            else f"Attendance {attendance_percentage}% below minimum {scholarship.min_attendance}%",
            expected=f"≥ {scholarship.min_attendance}%",
            actual=f"{attendance_percentage}%",
        )
    )
    if not met:
        rejection_reasons.append(
            f"Attendance {attendance_percentage}% below minimum {scholarship.min_attendance}%"
        )

    verified = [f for f in facts if f.verified]
    extra_score = scholarship.extracurricular_weight * len(verified) // MAX_CRITERIA_ITEMS
    criteria_results.append(
        CriterionResultSchema(
            name="Extracurricular",
            met=bool(verified),
            points=extra_score,
            reason=f"{len(verified)} of {len(facts)} achievements verified",
            expected=f"up to {MAX_CRITERIA_ITEMS} verified achievements",
            actual=str(len(verified)),
        )
    )

    fact_types = {f.type for f in facts}
    custom_score = 0
    for criterion in scholarship.custom_criteria:
        met = criterion.key in fact_types
        points = criterion.weight if met else 0
        custom_score += points
        criteria_results.append(
            CriterionResultSchema(
                name=criterion.key,
                met=met,
                points=points,
                reason=f"{criterion.key} achievement on record" if met else f"No {criterion.key} achievement",
                expected=f"weight {criterion.weight}",
                actual="present" if met else "none",
            )
        )

    total = gpa_score + courses_score + credits_score + attendance_score + extra_score + custom_score
    threshold = passing_score(scholarship.total_weight)
    approved = total >= threshold
    if approved:
        # Individual misses do not matter once the total clears the threshold.
        rejection_reasons = []
    else:
        rejection_reasons.append(f"Total score {total} below passing score {threshold}")

    return ScoreBreakdownSchema(
        gpa_score=gpa_score,
        courses_score=courses_score,
        credits_score=credits_score,
        attendance_score=attendance_score,
        extra_score=extra_score,
        custom_score=custom_score,
        total_score=total,
        passing_score=threshold,
        approved=approved,
        rejection_reasons=rejection_reasons,
        criteria_results=criteria_results,
    )
