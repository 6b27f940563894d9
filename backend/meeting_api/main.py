import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from meeting_api.api.api import api_router
from meeting_api.core.config import Settings, settings as default_settings
from meeting_api.core.errors import install_error_handlers
from meeting_api.core.logging import RequestIDMiddleware, init_logging
from meeting_api.core.middleware import RateLimitMiddleware, SecurityHeadersMiddleware
from meeting_api.db.session import Database

logger = logging.getLogger("meeting_api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables on startup and release the pool on shutdown."""
    app.state.database.create_all()
    logger.info("%s started (%s)", app.title, app.state.settings.ENVIRONMENT)
    yield
    app.state.database.dispose()


def _health(app: FastAPI) -> dict:
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - app.state.started_at, 3),
    }


def create_app(config: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application.

    Args:
        config: Settings to use (defaults to the environment-loaded ones)
        database: Store handle to use (defaults to one built from
            config.DATABASE_URL)
    """
    config = config or default_settings
    init_logging(config.LOG_LEVEL)

    app = FastAPI(
        title=config.APP_NAME,
        description="Meeting and candidate scheduling API",
        version=config.APP_VERSION,
        debug=config.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.database = database or Database(config.DATABASE_URL, echo=config.DATABASE_ECHO)
    app.state.started_at = time.monotonic()

    # Added innermost first: request id wraps CORS wraps headers wraps the limiter
    if config.RATE_LIMIT_ENABLED:
        app.add_middleware(
            RateLimitMiddleware,
            max_requests=config.RATE_LIMIT_MAX_REQUESTS,
            window_seconds=config.RATE_LIMIT_WINDOW_SECONDS,
        )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestIDMiddleware)

    install_error_handlers(app)

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """Liveness probe."""
        return _health(request.app)

    @app.get("/api/health", tags=["Health"])
    async def api_health_check(request: Request):
        """Liveness probe with deployment details."""
        return {
            **_health(request.app),
            "environment": config.ENVIRONMENT,
            "version": config.APP_VERSION,
        }

    @app.get("/api", tags=["Root"])
    async def api_index():
        """Describe the API and its resource roots."""
        return {
            "message": config.APP_NAME,
            "version": config.APP_VERSION,
            "endpoints": {
                "auth": "/api/auth",
                "meetings": "/api/meetings",
                "candidates": "/api/candidates",
                "positions": "/api/positions",
                "appliedPositions": "/api/positions/applied",
                "participants": "/api/meetings/:id/participants",
                "candidateHistory": "/api/candidates/:id/history",
            },
        }

    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
