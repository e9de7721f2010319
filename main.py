import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from database import AsyncSessionLocal, engine as db_engine
from api.admin import router as admin_router
from api.applications import router as applications_router
from api.evaluation import router as evaluation_router
from api.scholarships import router as scholarships_router
from schemas.student import StudentProfile
from services.collaborators import CollaboratorDirectory, InMemoryAchievementVerifier, InMemoryStudentRegistry
from services.engine import ScholarshipEngine
from services.errors import EngineError

logger = logging.getLogger(__name__)


# Loaded into the mock-registry / mock-verifier doubles so a fresh server can evaluate end to end.
# Point registry_address / verifier_address at real http(s) services to use live data instead.
DEMO_STUDENTS = {
    "student_1": {
        "profile": {"gpa": 360, "courses": ["Math101"], "credits": 130},
        "verified": [("gpa", 360), ("leadership", 1)],
    },
    "student_2": {
        "profile": {"gpa": 320, "courses": ["CS101", "CS102"], "credits": 75},
        "verified": [("gpa", 320), ("hackathon", 2)],
    },
    "student_3": {
        "profile": {"gpa": 240, "courses": [], "credits": 20},
        "verified": [],
    },
}


def build_demo_collaborators() -> tuple[InMemoryStudentRegistry, InMemoryAchievementVerifier]:
    registry = InMemoryStudentRegistry()
    verifier = InMemoryAchievementVerifier()
    for student_id, data in DEMO_STUDENTS.items():
        registry.set_profile(student_id, StudentProfile.model_validate(data["profile"]))
        for fact_type, value in data["verified"]:
            verifier.set_verification(student_id, fact_type, value, True)
    return registry, verifier


def build_default_engine() -> ScholarshipEngine:
    """Engine wired from settings; the default collaborator addresses resolve to in-process doubles."""
    directory = CollaboratorDirectory(timeout_seconds=settings.collaborator_timeout_seconds)
    if settings.demo_students:
        registry, verifier = build_demo_collaborators()
    else:
        registry, verifier = InMemoryStudentRegistry(), InMemoryAchievementVerifier()
    directory.register_registry("mock-registry", registry)
    directory.register_verifier("mock-verifier", verifier)
    return ScholarshipEngine(
        bind=db_engine,
        session_factory=AsyncSessionLocal,
        directory=directory,
        admin=settings.admin_principal,
        verifier_address=settings.verifier_address,
        registry_address=settings.registry_address,
    )


async def engine_error_handler(request: Request, exc: EngineError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app(scholarship_engine: Optional[ScholarshipEngine] = None) -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    scholarship_engine = scholarship_engine or build_default_engine()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await scholarship_engine.init_storage()
        yield
        scholarship_engine.directory.close()

    app = FastAPI(
        title=settings.app_name,
        description="Scholarship application evaluation API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.scholarship_engine = scholarship_engine

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(EngineError, engine_error_handler)

    app.include_router(scholarships_router)
    app.include_router(applications_router)
    app.include_router(evaluation_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
