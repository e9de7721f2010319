from __future__ import annotations

from models import EngineState, Scholarship
from services.errors import Unauthorized


def require_admin(state: EngineState, caller: str) -> None:
    if caller != state.admin:
        raise Unauthorized(f"{caller!r} is not the engine admin")


def require_creator(scholarship: Scholarship | None, caller: str) -> None:
    # A missing scholarship has no owner, so nobody may act on it.
    if scholarship is None or caller != scholarship.creator:
        raise Unauthorized(f"{caller!r} is not the creator of this scholarship")
