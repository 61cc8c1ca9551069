import secrets
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import RequestResponseEndpoint

from src.scribe.api.dependencies import get_llm_provider
from src.scribe.api.v1.router import api_router
from src.scribe.core.config import get_settings
from src.scribe.core.db import dispose_engine, ping_database
from src.scribe.core.exceptions import ScribeError, setup_exception_handlers
from src.scribe.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from src.scribe.core.rate_limit import limiter
from src.scribe.integrations.gemini import LLMProvider

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Sign in with GitHub"},
    {"name": "changelogs", "description": "Generate, publish and delete changelogs"},
    {"name": "projects", "description": "Public project and changelog listings"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="AI-drafted changelogs from GitHub commit history",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    setup_exception_handlers(app)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    # Outermost middleware, so every response carries X-Request-ID
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )

    @app.middleware("http")
    async def logging_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Bind request_id to log context for all requests."""
        clear_request_context()
        bind_request_context(correlation_id.get())
        try:
            return await call_next(request)
        finally:
            clear_request_context()

    app.include_router(api_router)

    instrumentator = Instrumentator().instrument(app)

    if settings.metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
            if (
                api_key is None
                or settings.metrics_api_key is None
                or not secrets.compare_digest(api_key, settings.metrics_api_key)
            ):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid or missing metrics API key",
                )

        instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
    else:
        instrumentator.expose(app, endpoint="/metrics")

    @app.get("/health")
    async def health(llm: LLMProvider = Depends(get_llm_provider)) -> JSONResponse:
        """Database connectivity and AI configuration.

        A missing Gemini key is reported as degraded; the read endpoints
        keep working without it.
        """
        health_status: dict[str, Any] = {
            "status": "healthy",
            "database": "unknown",
            "llm": "configured" if llm.is_configured else "not_configured",
        }

        try:
            await ping_database()
            health_status["database"] = "healthy"
        except ScribeError as e:
            logger.warning("Health check database failure", cause=repr(e.__cause__))
            health_status["database"] = "unhealthy"
            health_status["status"] = "unhealthy"

        if health_status["status"] == "healthy" and not llm.is_configured:
            health_status["status"] = "degraded"

        status_code = 503 if health_status["status"] == "unhealthy" else 200
        return JSONResponse(content=health_status, status_code=status_code)

    return app


app = create_app()
