from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
from typing import Optional

from edumanage.config import Settings, load_settings
from edumanage.errors import (
    AuthenticationError, InvalidRecordError, OperationInProgressError, RecordNotFoundError, StoreError,
)
from edumanage.routes import (
    analytics, attendance, auth, calendar, courses, grades, invoices, messages, parents, students, users, views,
)
from edumanage.services.memory_store import MemoryStore
from edumanage.services.mutations import MutationHandlers
from edumanage.services.seed import SEED_CREDENTIALS, SEED_DATA
from edumanage.services.store import EntityStore
from edumanage.services.supabase_store import SupabaseStore
from edumanage.utils.inflight import InFlightGuard
from edumanage.utils.messages import NOT_FOUND_KEYS, message

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> EntityStore:
    if settings.backend == "remote":
        logger.info(f"Using Supabase store at {settings.supabase_url}")
        return SupabaseStore.from_settings(settings)
    logger.info("No remote service configured, using the seeded in-memory store")
    return MemoryStore(seed=SEED_DATA, credentials=SEED_CREDENTIALS, jwt_secret=settings.jwt_secret)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidRecordError)
    async def invalid_record(request: Request, exc: InvalidRecordError):
        return JSONResponse(status_code=422, content={"error": "invalid_record", "detail": str(exc)})

    @app.exception_handler(RecordNotFoundError)
    async def not_found(request: Request, exc: RecordNotFoundError):
        logger.warning(str(exc))
        locale = request.app.state.settings.locale
        key = NOT_FOUND_KEYS.get(exc.kind, "user_not_found")
        return JSONResponse(status_code=404, content={"detail": message(key, locale)})

    @app.exception_handler(OperationInProgressError)
    async def in_progress(request: Request, exc: OperationInProgressError):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(AuthenticationError)
    async def unauthenticated(request: Request, exc: AuthenticationError):
        locale = request.app.state.settings.locale
        return JSONResponse(status_code=401, content={"detail": message(exc.message_key, locale)})

    @app.exception_handler(StoreError)
    async def store_failure(request: Request, exc: StoreError):
        logger.error(f"Store failure on {request.url.path}: {str(exc)} ({exc.__cause__!r})")
        locale = request.app.state.settings.locale
        return JSONResponse(status_code=502, content={"detail": message("service_unavailable", locale)})


def create_app(settings: Optional[Settings] = None, store: Optional[EntityStore] = None) -> FastAPI:
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(
        redirect_slashes=False,
        title="EduManage API",
        description="Courses, grades, invoices and messaging for tutors, parents and students",
        version="1.0.0",
    )

    app.state.settings = settings
    app.state.store = store or build_store(settings)
    app.state.handlers = MutationHandlers(app.state.store, InFlightGuard())

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url] if settings.frontend_url else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(auth.router, prefix="/auth", tags=["Auth"])
    app.include_router(users.router, prefix="/users", tags=["Users"])
    app.include_router(students.router, prefix="/students", tags=["Students"])
    app.include_router(parents.router, prefix="/parents", tags=["Parents"])
    app.include_router(courses.router, prefix="/courses", tags=["Courses"])
    app.include_router(grades.router, prefix="/grades", tags=["Grades"])
    app.include_router(invoices.router, prefix="/invoices", tags=["Invoices"])
    app.include_router(messages.router, prefix="/messages", tags=["Messages"])
    app.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
    app.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])
    app.include_router(calendar.router, prefix="/calendar", tags=["Calendar"])
    app.include_router(views.router, prefix="/views", tags=["Views"])

    return app


app = create_app()
