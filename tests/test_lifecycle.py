import unittest
from datetime import datetime, timezone

from models import ScholarshipApplication
from schemas.application import AchievementFactSchema, ApplicationStatus
from schemas.evaluation import ScoreBreakdownSchema
from services.errors import AlreadyEvaluated, Paused
from services.lifecycle import can_transition, complete_evaluation, ensure_evaluable, outcome_message

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)


def _application(status="pending"):
    return ScholarshipApplication(
        id=1,
        scholarship_id=1,
        sequence=1,
        student="student_1",
        status=status,
        score=0,
        verified_achievements=[],
        claimed_achievements=[],
        attendance_percentage=95,
    )


def _breakdown(approved=True, total=401):
    return ScoreBreakdownSchema(
        gpa_score=100,
        courses_score=100,
        credits_score=100,
        attendance_score=100,
        extra_score=1,
        custom_score=0,
        total_score=total,
        passing_score=80,
        approved=approved,
        rejection_reasons=[] if approved else ["Total score 0 below passing score 80"],
    )


class TestLifecycle(unittest.TestCase):
    def test_only_pending_has_transitions(self):
        self.assertTrue(can_transition(ApplicationStatus.PENDING, ApplicationStatus.APPROVED))
        self.assertTrue(can_transition(ApplicationStatus.PENDING, ApplicationStatus.REJECTED))
        for terminal in (ApplicationStatus.APPROVED, ApplicationStatus.REJECTED):
            for target in ApplicationStatus:
                self.assertFalse(can_transition(terminal, target))

    def test_evaluated_application_is_rejected_before_pause_check(self):
        with self.assertRaises(AlreadyEvaluated):
            ensure_evaluable(_application("approved"), engine_paused=True)

    def test_paused_engine(self):
        with self.assertRaises(Paused):
            ensure_evaluable(_application(), engine_paused=True)

    def test_complete_evaluation_stamps_everything(self):
        app = _application()
        facts = [AchievementFactSchema(type="gpa", value=360, verified=True)]
        status = complete_evaluation(app, _breakdown(), facts, NOW)
        self.assertEqual(status, ApplicationStatus.APPROVED)
        self.assertEqual(app.status, "approved")
        self.assertEqual(app.score, 401)
        self.assertEqual(app.evaluation_timestamp, NOW)
        self.assertEqual(app.verified_achievements, [{"type": "gpa", "value": 360, "verified": True}])

    def test_rejection(self):
        app = _application()
        status = complete_evaluation(app, _breakdown(approved=False, total=0), [], NOW)
        self.assertEqual(status, ApplicationStatus.REJECTED)
        self.assertEqual(app.status, "rejected")

    def test_cannot_complete_twice(self):
        app = _application("rejected")
        with self.assertRaises(AlreadyEvaluated):
            complete_evaluation(app, _breakdown(), [], NOW)
        self.assertEqual(app.status, "rejected")

    def test_outcome_messages(self):
        self.assertTrue(outcome_message(ApplicationStatus.APPROVED, _breakdown()).startswith("Application approved"))
        message = outcome_message(ApplicationStatus.REJECTED, _breakdown(approved=False, total=0))
        self.assertTrue(message.startswith("Application rejected: criteria not met"))


if __name__ == "__main__":
    unittest.main()
