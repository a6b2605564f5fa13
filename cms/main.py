"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from cms.application.services import AuthService
from cms.config import get_settings
from cms.domain.exceptions import ArticleValidationError, PersistenceError
from cms.infrastructure.database import Base, engine
from cms.infrastructure.database.repositories import SQLAlchemyUserRepository
from cms.infrastructure.database.session import async_session_factory
from cms.infrastructure.logging.log_config import setup_logging
from cms.infrastructure.security import PasslibPasswordHasher
from cms.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _seed_admin_user() -> None:
    """Create the configured admin account when the users table is empty.

    Idempotent — safe to call on every startup.
    """
    settings = get_settings()
    if not settings.admin_username or not settings.admin_password:
        logger.debug("No admin credentials configured; skipping admin seed")
        return

    async with async_session_factory() as session:
        auth = AuthService(SQLAlchemyUserRepository(session), PasslibPasswordHasher())
        if await auth.ensure_admin(settings.admin_username, settings.admin_password):
            await session.commit()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables, seed the admin account."""
    settings = get_settings()
    setup_logging()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    await _seed_admin_user()

    Path(settings.upload_dir, "images").mkdir(parents=True, exist_ok=True)
    logger.info("%s %s started (%s)", settings.app_title, settings.app_version, settings.app_env)

    yield

    await engine.dispose()


async def _validation_error_handler(request: Request, exc: ArticleValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"errors": exc.errors})


async def _persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "The article store is unavailable"})


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ArticleValidationError, _validation_error_handler)
    app.add_exception_handler(PersistenceError, _persistence_error_handler)

    app.include_router(api_router)

    # Article images, as stored by LocalImageStorage
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cms.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
