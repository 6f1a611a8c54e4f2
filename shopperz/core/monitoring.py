# ShopperzStop Monitoring Configuration
# Prometheus metrics and logging setup

import logging
import logging.handlers
import os

from fastapi import FastAPI, Response
from prometheus_client import Counter, generate_latest, CONTENT_TYPE_LATEST

from .config import Settings

# Store metrics
store_mutations = Counter('store_mutations_total', 'Total store mutations', ['operation'])
storage_errors = Counter('storage_errors_total', 'Durable storage read/write failures', ['operation'])

# Collaborator metrics
assistant_requests = Counter('assistant_requests_total', 'Text generation requests', ['operation', 'outcome'])

# Checkout metrics
checkout_sessions = Counter('checkout_sessions_total', 'Checkout sessions by outcome', ['outcome'])

def setup_logging(settings: Settings):
    """Configure logging for the application"""

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    handlers = [console_handler]

    # File handler with rotation
    if settings.LOG_FILE:
        log_dir = os.path.dirname(settings.LOG_FILE)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            settings.LOG_FILE,
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    # Configure root logger
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        handlers=handlers
    )

    # Silence noisy loggers in production
    if settings.ENVIRONMENT == "production":
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

def setup_metrics_endpoint(app: FastAPI):
    """Expose Prometheus metrics"""

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
