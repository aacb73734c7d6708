"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import API_VERSION
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter, rate_limit_exceeded_handler
from infrastructure.database.session import engine

logger = structlog.get_logger()

setup_logging()

API_DESCRIPTION = f"""\
## ClassCast Groups & Peer Responses

Students form fixed-size groups for group assignments by sharing a
6-character join code, and check a draft peer response against the
assignment's rules before submitting it.

### Groups
- Create a group (the creator becomes its leader)
- Join a group with its code
- List an assignment's groups, or look up your own

### Peer responses
- Word minimum, character maximum and due date checks
- Per-student quota warning and per-video response cap

### Rate limits
- Reads and validation: {READ_LIMIT}
- Group creation and joins: {WRITE_LIMIT}
"""

OPENAPI_TAGS = [
    {"name": "health", "description": "Liveness and readiness probes"},
    {"name": "groups", "description": "Group formation for group assignments"},
    {"name": "peer-responses", "description": "Peer response eligibility checks"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup and release pooled connections on shutdown."""
    logger.info(
        "application_started",
        environment=settings.app_env,
        rate_limit_enabled=settings.rate_limit_enabled,
    )
    yield
    await engine.dispose()
    logger.info("application_stopped")


def _add_middleware(app: FastAPI) -> None:
    """Install middleware; the last one added runs outermost."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    # Outside the logger so the request ID is on request.state when it binds
    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def create_app() -> FastAPI:
    """Build the ClassCast groups application."""
    app = FastAPI(
        title=settings.app_name,
        description=API_DESCRIPTION,
        version=API_VERSION,
        debug=settings.debug,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        openapi_tags=OPENAPI_TAGS,
    )

    _add_middleware(app)
    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
