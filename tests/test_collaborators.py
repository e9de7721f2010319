import unittest
from unittest.mock import MagicMock, patch

import requests

from schemas.student import StudentProfile
from services.collaborators import (
    CollaboratorDirectory,
    HttpAchievementVerifier,
    HttpStudentRegistry,
    InMemoryStudentRegistry,
)
from services.errors import CollaboratorUnavailable


def _response(status_code=200, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.json.return_value = body
    return response


class TestHttpStudentRegistry(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.registry = HttpStudentRegistry("http://registry.test/", timeout_seconds=3.0)

    async def asyncTearDown(self):
        self.registry.close()

    async def test_fetches_profile(self):
        body = {"gpa": 360, "courses": ["Math101"], "credits": 130}
        with patch.object(self.registry._session, "request", return_value=_response(200, body)) as request:
            profile = await self.registry.get_student_profile("student_1")
        self.assertEqual(profile, StudentProfile(gpa=360, courses=["Math101"], credits=130))
        request.assert_called_once_with(
            method="GET", url="http://registry.test/students/student_1/profile", json=None, timeout=3.0
        )

    async def test_student_id_is_escaped_in_path(self):
        body = {"gpa": 360, "courses": [], "credits": 130}
        with patch.object(self.registry._session, "request", return_value=_response(200, body)) as request:
            await self.registry.get_student_profile("team/a?x#1")
        self.assertEqual(
            request.call_args.kwargs["url"],
            "http://registry.test/students/team%2Fa%3Fx%231/profile",
        )

    async def test_unknown_student(self):
        with patch.object(self.registry._session, "request", return_value=_response(404)):
            self.assertIsNone(await self.registry.get_student_profile("ghost"))

    async def test_server_error(self):
        with patch.object(self.registry._session, "request", return_value=_response(503)):
            with self.assertRaises(CollaboratorUnavailable):
                await self.registry.get_student_profile("student_1")

    async def test_malformed_profile(self):
        with patch.object(self.registry._session, "request", return_value=_response(200, {"gpa": "high"})):
            with self.assertRaises(CollaboratorUnavailable):
                await self.registry.get_student_profile("student_1")

    async def test_connection_error(self):
        with patch.object(self.registry._session, "request", side_effect=requests.ConnectionError("refused")):
            with self.assertRaises(CollaboratorUnavailable):
                await self.registry.get_student_profile("student_1")


class TestHttpAchievementVerifier(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.verifier = HttpAchievementVerifier("https://verifier.test")

    async def asyncTearDown(self):
        self.verifier.close()

    async def test_posts_fact(self):
        with patch.object(self.verifier._session, "request", return_value=_response(200, {"verified": True})) as request:
            self.assertTrue(await self.verifier.verify_achievement("student_1", 360, "gpa"))
        request.assert_called_once_with(
            method="POST",
            url="https://verifier.test/verifications",
            json={"studentId": "student_1", "value": 360, "factType": "gpa"},
            timeout=10.0,
        )

    async def test_false_is_propagated(self):
        with patch.object(self.verifier._session, "request", return_value=_response(200, {"verified": False})):
            self.assertFalse(await self.verifier.verify_achievement("student_1", 360, "gpa"))

    async def test_missing_verdict(self):
        with patch.object(self.verifier._session, "request", return_value=_response(200, {"status": "ok"})):
            with self.assertRaises(CollaboratorUnavailable):
                await self.verifier.verify_achievement("student_1", 360, "gpa")


class TestCollaboratorDirectory(unittest.TestCase):
    def test_registered_name(self):
        directory = CollaboratorDirectory()
        registry = InMemoryStudentRegistry()
        directory.register_registry("mock-registry", registry)
        self.assertIs(directory.registry_for("mock-registry"), registry)

    def test_http_address_builds_client_once(self):
        directory = CollaboratorDirectory(timeout_seconds=2.5)
        verifier = directory.verifier_for("http://verifier.test")
        self.assertIsInstance(verifier, HttpAchievementVerifier)
        self.assertEqual(verifier.timeout_seconds, 2.5)
        self.assertIs(directory.verifier_for("http://verifier.test"), verifier)
        directory.close()

    def test_unknown_name(self):
        directory = CollaboratorDirectory()
        with self.assertRaises(CollaboratorUnavailable):
            directory.registry_for("mock-registry")
        with self.assertRaises(CollaboratorUnavailable):
            directory.verifier_for("mock-verifier")


if __name__ == "__main__":
    unittest.main()
