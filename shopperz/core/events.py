"""
Application lifecycle events
Handles startup and shutdown tasks
"""

from fastapi import FastAPI
import logging
from contextlib import asynccontextmanager

from shopperz.services.context import build_context
from .config import Settings
from .monitoring import setup_logging
from .websocket import ConnectionManager

logger = logging.getLogger(__name__)

def create_lifespan(settings: Settings, context=None):
    """
    Build the application lifespan. The context is constructed once at
    startup unless one was injected (tests do this).
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        setup_logging(settings)
        logger.info(f"Starting {settings.APP_NAME}...")

        app.state.context = context or build_context(settings)
        app.state.ws_manager = ConnectionManager()
        app.state.ws_manager.attach(app.state.context)

        logger.info(f"{settings.APP_NAME} started successfully")

        try:
            yield
        finally:
            # Shutdown
            logger.info(f"Shutting down {settings.APP_NAME}...")
            app.state.ws_manager.detach()
            await app.state.context.close()
            logger.info(f"{settings.APP_NAME} shutdown complete")

    return lifespan
