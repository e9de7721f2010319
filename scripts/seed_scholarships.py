"""
Seed demo scholarships through the engine, as the configured admin.
The demo students they are meant for (main.DEMO_STUDENTS) live in the server process.
Run: python -m scripts.seed_scholarships (from the repository root).
"""
import asyncio
import os
import sys

# Add parent so we can import from the repository root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import settings
from main import build_default_engine
from schemas.scholarship import ScholarshipCreate
from services.errors import EngineError


SCHOLARSHIPS_DATA = [
    {
        "gpaThreshold": 350,
        "requiredCourses": ["Math101"],
        "requiredCredits": 120,
        "extracurricularWeight": 20,
        "essayRequired": True,
        "minAttendance": 90,
        "customCriteria": [{"key": "leadership", "weight": 30}, {"key": "volunteer", "weight": 50}],
    },
    {
        "gpaThreshold": 300,
        "requiredCourses": ["CS101", "CS102"],
        "requiredCredits": 60,
        "extracurricularWeight": 40,
        "essayRequired": False,
        "minAttendance": 80,
        "customCriteria": [{"key": "hackathon", "weight": 60}],
    },
    {
        "gpaThreshold": 250,
        "requiredCourses": [],
        "requiredCredits": 30,
        "extracurricularWeight": 100,
        "essayRequired": False,
        "minAttendance": 75,
        "customCriteria": [],
    },
]


async def seed():
    engine = build_default_engine()
    await engine.init_storage()
    state = await engine.get_engine_state()
    if state.scholarship_counter >= len(SCHOLARSHIPS_DATA):
        print(f"{state.scholarship_counter} scholarships already exist, skipping")
        return
    for data in SCHOLARSHIPS_DATA[state.scholarship_counter:]:
        try:
            scholarship_id = await engine.create_scholarship(
                settings.admin_principal, ScholarshipCreate.model_validate(data)
            )
        except EngineError as e:
            print(f"Skipping scholarship: {e.name} ({e.detail})")
            continue
        print(f"Seeded scholarship {scholarship_id}")
    print("Seed complete.")


if __name__ == "__main__":
    asyncio.run(seed())
