"""
Study Buddy - FastAPI Application Entry Point.

Feature-based modular architecture:
  Each feature in study_buddy/features/ has its own router and service.
  Adding a new feature = adding a new folder, no existing code changes needed.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from study_buddy.config import get_settings
from study_buddy.core.exceptions import register_exception_handlers

# ── Feature Routers ──────────────────────────────────────
from study_buddy.features.auth.router import router as auth_router
from study_buddy.features.chats.router import router as chats_router
from study_buddy.features.materials.router import router as materials_router
from study_buddy.features.courses.router import router as courses_router
from study_buddy.features.schedules.router import router as schedules_router
from study_buddy.features.assignments.router import (
    student_router as student_assignments_router,
    teacher_router as teacher_assignments_router,
)
from study_buddy.features.doubts.router import (
    student_router as student_doubts_router,
    teacher_router as teacher_doubts_router,
)
from study_buddy.features.meetings.router import (
    student_router as student_meetings_router,
    teacher_router as teacher_meetings_router,
)
from study_buddy.features.teacher.router import (
    directory_router as teachers_directory_router,
    router as teacher_router,
)

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup & shutdown."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} starting...")
    logger.info(f"LLM Provider: {settings.LLM_PROVIDER} ({settings.LLM_MODEL})")
    logger.info(f"Supabase: {settings.SUPABASE_URL[:40]}...")
    yield
    logger.info("Shutting down...")


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Study assistant grounded in your own course materials",
        lifespan=lifespan,
    )

    # ── CORS ─────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # ── Register Feature Routers ─────────────────────────
    app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
    app.include_router(chats_router, prefix="/api/conversations", tags=["Conversations"])
    app.include_router(materials_router, prefix="/api/materials", tags=["Materials"])
    app.include_router(courses_router, prefix="/api/courses", tags=["Courses"])
    app.include_router(schedules_router, prefix="/api/schedules", tags=["Schedules"])

    app.include_router(teacher_assignments_router, prefix="/api/teacher/assignments", tags=["Assignments"])
    app.include_router(student_assignments_router, prefix="/api/student/assignments", tags=["Assignments"])
    app.include_router(teacher_doubts_router, prefix="/api/teacher/doubts", tags=["Doubts"])
    app.include_router(student_doubts_router, prefix="/api/student/doubts", tags=["Doubts"])
    app.include_router(teacher_meetings_router, prefix="/api/teacher/meetings", tags=["Meetings"])
    app.include_router(student_meetings_router, prefix="/api/student/meetings", tags=["Meetings"])

    app.include_router(teacher_router, prefix="/api/teacher", tags=["Teacher"])
    app.include_router(teachers_directory_router, prefix="/api/teachers", tags=["Teacher"])

    # ── Health Check ─────────────────────────────────────
    @app.get("/health", tags=["System"])
    async def health_check():
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
        }

    return app


app = create_app()
