"""
Tests for the scoring algorithm: component points, totals, passing threshold.
Run from repository root: python -m pytest tests/test_scoring.py -v
"""
import unittest

from schemas.application import AchievementFactSchema
from schemas.scholarship import CustomCriterionSchema, ScholarshipRecord
from schemas.student import StudentProfile
from services.scoring import passing_score, score_application


def _scholarship(**overrides):
    data = {
        "id": 1,
        "creator": "deployer",
        "gpa_threshold": 350,
        "required_courses": ["Math101"],
        "required_credits": 120,
        "extracurricular_weight": 20,
        "essay_required": True,
        "min_attendance": 90,
        "custom_criteria": [
            CustomCriterionSchema(key="leadership", weight=30),
            CustomCriterionSchema(key="volunteer", weight=50),
        ],
        "total_weight": 100,
    }
    data.update(overrides)
    return ScholarshipRecord(**data)


def _profile(**overrides):
    data = {"gpa": 360, "courses": ["Math101"], "credits": 130}
    data.update(overrides)
    return StudentProfile(**data)


def _gpa_fact(verified=True, value=360):
    return AchievementFactSchema(type="gpa", value=value, verified=verified)


class TestScoring(unittest.TestCase):
    def test_all_boolean_criteria_met(self):
        """GPA, courses, credits and attendance met, one verified fact -> 401."""
        result = score_application(_scholarship(), _profile(), [_gpa_fact()], 95)
        self.assertEqual(result.gpa_score, 100)
        self.assertEqual(result.courses_score, 100)
        self.assertEqual(result.credits_score, 100)
        self.assertEqual(result.attendance_score, 100)
        self.assertEqual(result.extra_score, 1)
        self.assertEqual(result.custom_score, 0)
        self.assertEqual(result.total_score, 401)
        self.assertEqual(result.passing_score, 80)
        self.assertTrue(result.approved)
        self.assertEqual(result.rejection_reasons, [])

    def test_thresholds_are_inclusive(self):
        result = score_application(
            _scholarship(),
            _profile(gpa=350, credits=120),
            [_gpa_fact(value=350)],
            90,
        )
        self.assertEqual(result.gpa_score + result.credits_score + result.attendance_score, 300)

    def test_single_missing_course_zeroes_courses(self):
        scholarship = _scholarship(required_courses=["Math101", "Science201"])
        result = score_application(scholarship, _profile(courses=["Math101"]), [_gpa_fact()], 95)
        self.assertEqual(result.courses_score, 0)
        courses = next(c for c in result.criteria_results if c.name == "Required Courses")
        self.assertFalse(courses.met)
        self.assertIn("Science201", courses.reason)

    def test_no_required_courses_is_met(self):
        result = score_application(_scholarship(required_courses=[]), _profile(courses=[]), [], 95)
        self.assertEqual(result.courses_score, 100)

    def test_extracurricular_is_proportional_and_floored(self):
        """weight * verified / 20 with integer division; unverified facts do not count."""
        facts = [_gpa_fact()] + [
            AchievementFactSchema(type=f"club{i}", value=1, verified=i % 2 == 0) for i in range(6)
        ]
        result = score_application(_scholarship(extracurricular_weight=50, custom_criteria=[
            CustomCriterionSchema(key="leadership", weight=50),
        ]), _profile(), facts, 95)
        # 4 verified facts: 50 * 4 // 20 = 10
        self.assertEqual(result.extra_score, 10)

    def test_custom_criterion_is_presence_not_count(self):
        facts = [
            _gpa_fact(),
            AchievementFactSchema(type="leadership", value=1, verified=True),
            AchievementFactSchema(type="leadership", value=2, verified=True),
        ]
        result = score_application(_scholarship(), _profile(), facts, 95)
        self.assertEqual(result.custom_score, 30)

    def test_unverified_custom_fact_still_scores(self):
        """Custom criteria look at fact types only; the verified flag feeds the extracurricular count."""
        facts = [_gpa_fact(), AchievementFactSchema(type="volunteer", value=5, verified=False)]
        result = score_application(_scholarship(), _profile(), facts, 95)
        self.assertEqual(result.custom_score, 50)
        self.assertEqual(result.extra_score, 1)

    def test_custom_weight_alone_can_approve(self):
        """Every boolean criterion missed, an unverified gpa fact matches an 80-weight custom key."""
        scholarship = _scholarship(
            extracurricular_weight=20,
            custom_criteria=[CustomCriterionSchema(key="gpa", weight=80)],
        )
        result = score_application(
            scholarship,
            _profile(gpa=200, courses=[], credits=10),
            [_gpa_fact(verified=False, value=200)],
            50,
        )
        self.assertEqual(result.custom_score, 80)
        self.assertEqual(result.extra_score, 0)
        self.assertEqual(result.total_score, 80)
        self.assertTrue(result.approved)

    def test_rejected_below_passing(self):
        """Every boolean criterion missed and nothing verified -> rejected with reasons."""
        result = score_application(
            _scholarship(),
            _profile(gpa=200, courses=[], credits=10),
            [_gpa_fact(verified=False, value=200)],
            50,
        )
        self.assertEqual(result.total_score, 0)
        self.assertFalse(result.approved)
        joined = " ".join(result.rejection_reasons)
        self.assertIn("GPA", joined)
        self.assertIn("Math101", joined)
        self.assertIn("below passing score 80", joined)

    def test_one_boolean_criterion_is_enough_to_pass(self):
        """A single 100-point component clears the 80-point threshold."""
        result = score_application(
            _scholarship(),
            _profile(gpa=200, courses=[], credits=10),
            [_gpa_fact(verified=False, value=200)],
            95,
        )
        self.assertEqual(result.total_score, 100)
        self.assertTrue(result.approved)

    def test_passing_score_is_eighty_percent(self):
        self.assertEqual(passing_score(100), 80)
        self.assertEqual(passing_score(0), 0)

    def test_deterministic(self):
        facts = [_gpa_fact(), AchievementFactSchema(type="leadership", value=1, verified=True)]
        first = score_application(_scholarship(), _profile(), facts, 95)
        second = score_application(_scholarship(), _profile(), facts, 95)
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
