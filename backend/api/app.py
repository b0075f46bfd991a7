"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from backend.api.limiter import configure_auth_limit, limiter
from backend.api.routes import auth, jobs
from backend.auth.tokens import TokenCodec
from backend.config import Settings
from backend.config import settings as default_settings
from backend.db import create_db_engine, create_session_factory, init_db
from backend.errors import APIError, UnauthenticatedError

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API with explicitly injected settings.

    Falls back to the environment-derived settings when none are given.
    Raises ConfigurationError if no JWT secret is configured.
    """
    settings = settings or default_settings
    logging.basicConfig(level=settings.log_level.upper())

    token_codec = TokenCodec(settings)
    engine = create_db_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create tables on startup, release connections on shutdown."""
        init_db(engine)
        yield
        engine.dispose()

    app = FastAPI(
        title="Job Tracker API",
        description="Track job applications and application statistics",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.token_codec = token_codec
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.limiter = limiter
    configure_auth_limit(settings.auth_rate_limit)

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        """Return 429 with a clear message when rate limit is exceeded."""
        return JSONResponse(
            status_code=429,
            content={"detail": "Too many requests from this IP, please try again after 15 minutes"},
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(auth.router, prefix="/api/v1/auth", tags=["Auth"])
    app.include_router(jobs.router, prefix="/api/v1/jobs", tags=["Jobs"])

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
