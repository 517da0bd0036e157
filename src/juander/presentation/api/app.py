"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager, suppress
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from juander.domain.shared.exceptions import ErrorCode
from juander.domain.shared.time import utc_now
from juander.infrastructure.persistence.sqlalchemy.models import Base
from juander.infrastructure.persistence.sqlalchemy.repositories import (
    PendingRegistrationRepositorySQLAlchemy,
)
from juander.presentation.api.dependencies import (
    get_engine,
    get_google_verifier,
    get_session_maker,
)
from juander.presentation.api.exception_handlers import (
    create_error_response,
    setup_exception_handlers,
)
from juander.presentation.api.routers import (
    account_router,
    admin_router,
    auth_router,
)
from juander_auth.persistence.sqlalchemy import AuthBase
from juander_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure application logging.

    Sets up logging for the juander packages with:
    - Console output with timestamps and module names
    - Configurable log level for juander modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    settings = get_settings()
    log_level_str = settings.log_level.upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("juander").setLevel(log_level)
    logging.getLogger("juander_auth").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

# API version info
API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Registration, login and session tokens.

**Registration:**
- `POST /register` stores a draft and emails a 6-digit code
- `POST /verify-otp` turns the draft into an account

**Login:**
- Email and password, or a Google ID token
- Returns a JWT valid for one day

**Security:**
- Passwords are hashed with argon2, codes with bcrypt
- Codes expire after 10 minutes and allow 5 wrong guesses
- Password login locks for 15 minutes after 5 failures
""",
    },
    {
        "name": "Account",
        "description": """Profile attributes, account details and deactivation.

Profiles stay incomplete until `POST /complete-profile` succeeds, which
requires first name, last name, birthday, gender and country.
""",
    },
    {
        "name": "Admin",
        "description": "User listing (admins) and role management (super admin).",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """Answer 504 when a request runs longer than the configured limit."""

    def __init__(self, app, timeout_seconds: float):
        super().__init__(app)
        self._timeout_seconds = timeout_seconds

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await asyncio.wait_for(
                call_next(request),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Request timed out after %.1fs: %s %s",
                self._timeout_seconds,
                request.method,
                request.url.path,
            )
            return create_error_response(
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                message="Request timed out",
                code=ErrorCode.REQUEST_TIMEOUT.value,
            )


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    logger.info("Starting %s API v%s...", settings.app_name, API_VERSION)
    engine = get_engine()
    await _init_database_schema(engine)

    purge_task = asyncio.create_task(
        _purge_expired_registrations(
            settings.pending_registration_purge_interval_seconds,
        ),
    )
    yield

    # Shutdown
    logger.info("Shutting down %s API...", settings.app_name)
    purge_task.cancel()
    with suppress(asyncio.CancelledError):
        await purge_task
    await get_google_verifier().close()
    await engine.dispose()
    logger.info("Database connections closed")


async def _init_database_schema(engine: AsyncEngine) -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    logger.info("Initializing database schema...")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            await conn.run_sync(AuthBase.metadata.create_all)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None

    logger.info("Database schema initialized successfully")


async def purge_expired_registrations_once() -> int:
    """Delete registration drafts whose code has expired."""
    async with get_session_maker()() as session:
        deleted = await PendingRegistrationRepositorySQLAlchemy(session).delete_expired(
            utc_now(),
        )
        await session.commit()
    if deleted:
        logger.info("Purged %d expired registration drafts", deleted)
    return deleted


async def _purge_expired_registrations(interval_seconds: int) -> None:
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await purge_expired_registrations_once()
        except Exception as e:
            # Keep the loop alive; the next run retries
            logger.warning("Purging expired registrations failed: %s", e)


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints.

    Returns
    -------
    APIRouter with all v1 endpoints mounted.
    """
    v1_router = APIRouter()

    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    v1_router.include_router(account_router, prefix="/auth", tags=["Account"])
    v1_router.include_router(admin_router, prefix="/auth", tags=["Admin"])

    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    # Configure logging on first app creation (not on module import)
    _configure_logging()

    if settings is None:
        settings = get_settings()

    app_name = settings.app_name

    app = FastAPI(
        title=f"{app_name} API",
        description=(
            "Identity service for the **Juander** tourism app: registration "
            "with emailed codes, password and Google login, and account management."
        ),
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.add_middleware(
        RequestTimeoutMiddleware,
        timeout_seconds=settings.api_request_timeout_seconds,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register domain exception handlers for consistent error responses
    setup_exception_handlers(app)

    # Include versioned API router
    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    # Health check endpoint (unversioned - always accessible)
    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint.

        Returns service status and version info.
        Unversioned for load balancer/monitoring compatibility.
        """
        return {
            "status": "healthy",
            "version": API_VERSION,
            "api_versions": ["v1"],
        }

    @app.get("/", tags=["Info"])
    async def root() -> dict:
        """API root endpoint with version information."""
        return {
            "name": f"{app_name} API",
            "version": API_VERSION,
            "docs": "/docs" if settings.api_debug else None,
            "api_base": API_V1_PREFIX,
            "endpoints": {
                "health": "/health",
                "auth": f"{API_V1_PREFIX}/auth",
                "admin": f"{API_V1_PREFIX}/auth/admin",
            },
        }

    return app


# Application instance for uvicorn
app = create_app()
