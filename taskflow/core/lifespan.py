"""Application lifespan: startup and shutdown.

Wiring only: logging setup, optional table creation, engine dispose.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from taskflow.core.config import get_settings
from taskflow.infrastructure.persistence import database
from taskflow.shared.telemetry import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit dispose the SQL engine."""
    settings = get_settings()
    setup_logging()

    if settings.database_auto_create:
        await database.init_models()

    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    await database.dispose_engine()
