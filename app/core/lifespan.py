"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of the activity log pipeline
(writer, dispatcher, interceptor, retention job), telemetry and the DB
engine.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.application.services.mutation_interceptor import MutationInterceptor
from app.core.config import get_settings
from app.infrastructure.persistence import database
from app.infrastructure.services import (
    ActivityLogDispatcher,
    ActivityLogRetentionJob,
    ActivityLogWriter,
)
from app.shared.telemetry.telemetry import get_telemetry, set_telemetry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: activity log writer/dispatcher/interceptor on app.state,
    retention job (when ACTIVITY_LOG_RETENTION_DAYS is set), SQLAlchemy
    instrumentation (when telemetry is on). Shutdown: stop retention,
    drain pending activity writes, telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()
    session_factory = database.get_session_factory()
    if session_factory is None:
        logger.warning("DATABASE_URL not set: activity log writes are disabled")

    # ---- Startup ----
    writer = ActivityLogWriter(
        session_factory,
        resolve_claimed_actor=settings.activity_log_resolve_claimed_actor,
    )
    dispatcher = ActivityLogDispatcher(
        writer,
        mode=settings.activity_log_dispatch_mode,
        timeout_seconds=settings.activity_log_write_timeout_seconds,
    )
    app.state.activity_log_dispatcher = dispatcher
    app.state.mutation_interceptor = MutationInterceptor(dispatcher)

    retention = ActivityLogRetentionJob(
        session_factory,
        settings.activity_log_retention_days,
        interval_seconds=settings.activity_log_cleanup_interval_seconds,
    )
    retention.start()
    app.state.activity_log_retention = retention

    telemetry = get_telemetry()
    if telemetry is not None and database.engine is not None:
        telemetry.instrument_sqlalchemy(database.engine)

    yield

    # ---- Shutdown ----
    await retention.stop()

    await dispatcher.drain(timeout=settings.activity_log_write_timeout_seconds)
    logger.info("Activity log dispatcher drained")

    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")

    if database.engine is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")
