from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .config import Settings
from .container import ApplicationContainer
from .logging import configure_logging
from ..infrastructure.persistence.database import Database, connect_with_retry
from ..infrastructure.repositories.subscription_repository import SQLSubscriptionRepository
from ..presentation.api.errors import register_exception_handlers
from ..presentation.api.middleware import register_request_middleware
from ..presentation.api.routers import subscriptions as subscriptions_router
from ..services.subscription_service import SubscriptionService

logger = logging.getLogger(__name__)


def create_application(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """Build the FastAPI app.

    When ``database`` is given the app takes ownership of it; otherwise the
    lifespan connects on startup using the bounded retry policy.
    """
    settings = settings or Settings()

    app = FastAPI(
        title="Subscription Service API",
        description="REST API for managing user subscriptions to online services.",
        version="1.0.0",
        lifespan=_create_lifespan(settings, database),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_request_middleware(app)
    register_exception_handlers(app)

    app.include_router(subscriptions_router.router)

    @app.get("/health")
    def health():
        container: ApplicationContainer = app.state.container  # type: ignore[attr-defined]
        try:
            container.database.ping()
        except SQLAlchemyError as exc:
            logger.warning("Health check failed error=%s", exc)
            return JSONResponse(status_code=503, content={"ok": False})
        return {"ok": True}

    return app


def build_container(settings: Settings, database: Database) -> ApplicationContainer:
    repository = SQLSubscriptionRepository(database.engine)
    return ApplicationContainer(
        settings=settings,
        database=database,
        subscription_service=SubscriptionService(repository),
    )


def _create_lifespan(settings: Settings, database: Optional[Database]):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        db = database
        if db is None:
            db = await asyncio.to_thread(connect_with_retry, settings)
        db.create_schema()

        app.state.container = build_container(settings, db)  # type: ignore[attr-defined]
        logger.info("Application started")

        try:
            yield
        finally:
            db.close()
            logger.info("Application stopped")

    return lifespan
