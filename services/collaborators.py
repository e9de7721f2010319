"""
External collaborators consulted during evaluation: the student registry (profile data)
and the achievement verifier (attests individual facts).

The engine only knows the abstract interfaces. Addresses stored in engine_state are resolved
through a CollaboratorDirectory: registered names map to in-process implementations, and
http(s) URLs get a requests-backed client.
"""
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import requests
from pydantic import ValidationError
from requests.utils import quote

from schemas.student import StudentProfile
from services.errors import CollaboratorUnavailable

logger = logging.getLogger(__name__)

HTTP_SCHEMES = ("http://", "https://")


class StudentRegistry(ABC):
    @abstractmethod
    async def get_student_profile(self, student_id: str) -> Optional[StudentProfile]:
        """Return the student's profile, or None if the registry has no record of them."""


class AchievementVerifier(ABC):
    @abstractmethod
    async def verify_achievement(self, student_id: str, value: int, fact_type: str) -> bool:
        """Return whether the fact (fact_type, value) is true for the student."""


class InMemoryStudentRegistry(StudentRegistry):
    def __init__(self, profiles: Optional[dict[str, StudentProfile]] = None) -> None:
        self._profiles: dict[str, StudentProfile] = dict(profiles or {})

    def set_profile(self, student_id: str, profile: StudentProfile) -> None:
        self._profiles[student_id] = profile

    async def get_student_profile(self, student_id: str) -> Optional[StudentProfile]:
        return self._profiles.get(student_id)


class InMemoryAchievementVerifier(AchievementVerifier):
    """Facts not explicitly attested are reported as unverified."""

    def __init__(self) -> None:
        self._attested: dict[tuple[str, str, int], bool] = {}
        self.calls: list[tuple[str, int, str]] = []

    def set_verification(self, student_id: str, fact_type: str, value: int, verified: bool) -> None:
        self._attested[(student_id, fact_type, value)] = verified

    async def verify_achievement(self, student_id: str, value: int, fact_type: str) -> bool:
        self.calls.append((student_id, value, fact_type))
        return self._attested.get((student_id, fact_type, value), False)


class _HttpCollaborator:
    """Blocking requests session; calls are pushed to a worker thread. No retries."""

    def __init__(self, base_url: str, timeout_seconds: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._session = requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    def close(self) -> None:
        self._session.close()

    def _request(self, method: str, path: str, *, json: Optional[dict[str, Any]] = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            return self._session.request(method=method, url=url, json=json, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            logger.warning("Collaborator %s %s failed: %s", method, url, exc)
            raise CollaboratorUnavailable(f"{method} {url} failed: {exc}") from exc


class HttpStudentRegistry(_HttpCollaborator, StudentRegistry):
    def _fetch_profile(self, student_id: str) -> Optional[StudentProfile]:
        response = self._request("GET", f"/students/{quote(student_id, safe='')}/profile")
        if response.status_code == 404:
            return None
        if not response.ok:
            raise CollaboratorUnavailable(f"Registry returned HTTP {response.status_code}")
        try:
            return StudentProfile.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise CollaboratorUnavailable(f"Registry returned an invalid profile: {exc}") from exc

    async def get_student_profile(self, student_id: str) -> Optional[StudentProfile]:
        return await asyncio.to_thread(self._fetch_profile, student_id)


class HttpAchievementVerifier(_HttpCollaborator, AchievementVerifier):
    def _verify(self, student_id: str, value: int, fact_type: str) -> bool:
        payload = {"studentId": student_id, "value": value, "factType": fact_type}
        response = self._request("POST", "/verifications", json=payload)
        if not response.ok:
            raise CollaboratorUnavailable(f"Verifier returned HTTP {response.status_code}")
        try:
            verified = response.json().get("verified")
        except (ValueError, AttributeError) as exc:
            raise CollaboratorUnavailable(f"Verifier returned an invalid body: {exc}") from exc
        if not isinstance(verified, bool):
            raise CollaboratorUnavailable("Verifier response is missing boolean 'verified'")
        return verified

    async def verify_achievement(self, student_id: str, value: int, fact_type: str) -> bool:
        return await asyncio.to_thread(self._verify, student_id, value, fact_type)


class CollaboratorDirectory:
    """Resolves collaborator addresses to implementations."""

    def __init__(self, timeout_seconds: float = 10.0) -> None:
        self.timeout_seconds = timeout_seconds
        self._registries: dict[str, StudentRegistry] = {}
        self._verifiers: dict[str, AchievementVerifier] = {}

    def register_registry(self, address: str, registry: StudentRegistry) -> None:
        self._registries[address] = registry

    def register_verifier(self, address: str, verifier: AchievementVerifier) -> None:
        self._verifiers[address] = verifier

    def registry_for(self, address: str) -> StudentRegistry:
        if address not in self._registries:
            if not address.startswith(HTTP_SCHEMES):
                raise CollaboratorUnavailable(f"No student registry reachable at {address!r}")
            self._registries[address] = HttpStudentRegistry(address, self.timeout_seconds)
        return self._registries[address]

    def verifier_for(self, address: str) -> AchievementVerifier:
        if address not in self._verifiers:
            if not address.startswith(HTTP_SCHEMES):
                raise CollaboratorUnavailable(f"No achievement verifier reachable at {address!r}")
            self._verifiers[address] = HttpAchievementVerifier(address, self.timeout_seconds)
        return self._verifiers[address]

    def close(self) -> None:
        for collaborator in [*self._registries.values(), *self._verifiers.values()]:
            if isinstance(collaborator, _HttpCollaborator):
                collaborator.close()
