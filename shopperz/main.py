"""Main FastAPI application"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime, timezone
from typing import Optional
import logging

from shopperz.core.config import Settings, settings as default_settings
from shopperz.core.events import create_lifespan
from shopperz.core.exceptions import ShopperzException, shopperz_exception_handler
from shopperz.core.monitoring import setup_metrics_endpoint
from shopperz.core.websocket import router as websocket_router
from shopperz.api.v1 import api_router
from shopperz.services.context import AppContext

logger = logging.getLogger(__name__)

def create_app(
    settings: Optional[Settings] = None,
    context: Optional[AppContext] = None
) -> FastAPI:
    """Build the storefront API. Pass a prebuilt context to control its collaborators."""
    settings = settings or (context.settings if context else default_settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="ShopperzStop storefront API",
        version=settings.APP_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=create_lifespan(settings, context)
    )

    app.add_exception_handler(ShopperzException, shopperz_exception_handler)

    # Add middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(api_router, prefix="/api/v1")
    app.include_router(websocket_router)

    if settings.PROMETHEUS_ENABLED:
        setup_metrics_endpoint(app)

    # Health check
    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    # Root endpoint
    @app.get("/")
    async def root():
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "docs": "/api/docs",
            "health": "/health"
        }

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "shopperz.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.DEBUG
    )
