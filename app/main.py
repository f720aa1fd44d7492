"""
ClearVision — FastAPI application entry-point.

Run with:
    uvicorn app.main:app --reload
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.config import settings
from app.database import async_session, create_tables
from app.dependencies import get_database_service
from app.exceptions import (
    ClearVisionError,
    DataStoreError,
    RecordNotFound,
    TextGenerationError,
    ValidationError,
)
from app.services.database_service import DatabaseService
from app.services.demo_data import DEMO_FOUNDER_ID, seed_demo_data
from app.services.store import MemoryDataStore, SqlDataStore
from app.services.text_generation import build_text_generator

# ── Import routers ──
from app.routers import ask, auth, dashboard, leave, notifications, tasks, users

logger = logging.getLogger(__name__)

ERROR_STATUS = [
    (ValidationError, 400),
    (RecordNotFound, 404),
    (TextGenerationError, 502),
    (DataStoreError, 503),
]


# ── Lifespan: pick the store, create tables on startup ──
@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if settings.USE_DEMO_STORE:
        db_service = DatabaseService(MemoryDataStore())
        await seed_demo_data(db_service, settings.FOUNDER_USER_ID or DEMO_FOUNDER_ID)
        logger.info("Serving the in-memory demo store")
    else:
        await create_tables()
        db_service = DatabaseService(SqlDataStore(async_session))

    app.state.db_service = db_service
    app.state.text_generator = build_text_generator()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Nonprofit team management: weekly task assignment, submissions, and AI feedback.",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Session middleware (required for OAuth state) ──
app.add_middleware(SessionMiddleware, secret_key=settings.SECRET_KEY, https_only=not settings.DEBUG)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=("*",))

# ── Register API routers ──
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(tasks.router)
app.include_router(ask.router)
app.include_router(leave.router)
app.include_router(notifications.router)
app.include_router(dashboard.router)


@app.exception_handler(ClearVisionError)
async def clearvision_error_handler(request: Request, exc: ClearVisionError):
    status_code = next((code for cls, code in ERROR_STATUS if isinstance(exc, cls)), 500)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


if os.environ.get("ENVIRONMENT", settings.ENVIRONMENT) != "production":
    from app.routers.auth import _set_auth_cookie

    @app.get("/mock-login/{member_id}")
    def mock_login(member_id: int):
        resp = RedirectResponse(url="/", status_code=303)
        return _set_auth_cookie(resp, member_id)


# ── Landing ──
@app.get("/")
async def homepage(db: DatabaseService = Depends(get_database_service)):
    return {
        "app": settings.APP_NAME,
        "organisation": settings.ORG_NAME,
        "database_available": await db.is_database_available(),
    }
