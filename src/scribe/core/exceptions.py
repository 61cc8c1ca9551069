"""Domain errors and the exception handlers that render them.

Every failure the service reports is a ScribeError subclass with a fixed
ErrorKind. Errors are classified where they happen (inside the GitHub and
Gemini adapters, the services and the access gate) and rendered here
without looking at their message text.
"""

from enum import Enum

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.scribe.core.logging import get_logger

logger = get_logger(__name__)


class ErrorKind(str, Enum):
    """Closed set of error kinds exposed to API clients."""

    VALIDATION = "validation_error"
    AUTHENTICATION_REQUIRED = "authentication_required"
    OWNERSHIP_REQUIRED = "ownership_required"
    REPOSITORY_ACCESS_REQUIRED = "repository_access_required"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UPSTREAM_NOT_FOUND = "upstream_not_found"
    UPSTREAM_ACCESS_DENIED = "upstream_access_denied"
    UPSTREAM_RATE_LIMITED = "upstream_rate_limited"
    UPSTREAM_ERROR = "upstream_error"
    GENERATION_TIMEOUT = "generation_timeout"
    EMPTY_RESPONSE = "empty_response"
    SAFETY_BLOCKED = "safety_blocked"
    CONFIGURATION_ERROR = "configuration_error"
    STORAGE_UNAVAILABLE = "storage_unavailable"


class ScribeError(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.UPSTREAM_ERROR
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# --- Validation ---


class InvalidRequest(ScribeError):
    kind = ErrorKind.VALIDATION
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"


class InvalidRepositoryUrl(InvalidRequest):
    default_message = "Invalid GitHub repository URL format"


class InvalidCommitCount(InvalidRequest):
    default_message = "Commit count must be between 1 and 100"


class NoCommitsFound(InvalidRequest):
    default_message = "No commits found for this repository"


# --- Access control ---


class AuthenticationRequired(ScribeError):
    kind = ErrorKind.AUTHENTICATION_REQUIRED
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class OwnershipRequired(ScribeError):
    kind = ErrorKind.OWNERSHIP_REQUIRED
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You can only modify resources that you own"


class RepositoryAccessRequired(ScribeError):
    kind = ErrorKind.REPOSITORY_ACCESS_REQUIRED
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have access to this repository"


# --- Storage ---


class NotFound(ScribeError):
    kind = ErrorKind.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class Conflict(ScribeError):
    kind = ErrorKind.CONFLICT
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflicting request"


class DuplicateRepository(Conflict):
    default_message = "A project with this repository URL has already been registered"


class AlreadyPublished(Conflict):
    default_message = "This changelog has already been published"


class StorageUnavailable(ScribeError):
    kind = ErrorKind.STORAGE_UNAVAILABLE
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Unable to connect to database. Please try again later."


# --- Upstream providers (GitHub, Gemini) ---


class UpstreamError(ScribeError):
    kind = ErrorKind.UPSTREAM_ERROR
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Upstream provider request failed"


class RepositoryNotFound(UpstreamError):
    kind = ErrorKind.UPSTREAM_NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Repository not found or access denied"


class AccessDenied(UpstreamError):
    kind = ErrorKind.UPSTREAM_ACCESS_DENIED
    default_message = "GitHub rejected the credential for this repository"


class RateLimited(UpstreamError):
    kind = ErrorKind.UPSTREAM_RATE_LIMITED
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "API rate limit exceeded. Please try again later."


class QuotaExceeded(RateLimited):
    default_message = "AI quota exceeded. Please try again later."


class GenerationTimeout(UpstreamError):
    kind = ErrorKind.GENERATION_TIMEOUT
    status_code = status.HTTP_408_REQUEST_TIMEOUT
    default_message = "AI changelog generation timed out. Please try again."


class EmptyResponse(UpstreamError):
    kind = ErrorKind.EMPTY_RESPONSE
    default_message = "AI returned an empty changelog"


class SafetyBlocked(UpstreamError):
    kind = ErrorKind.SAFETY_BLOCKED
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = (
        "Content was blocked by AI safety filters. Please review your commit messages."
    )


class ConfigurationError(UpstreamError):
    kind = ErrorKind.CONFIGURATION_ERROR
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "AI changelog generation is not configured"


def _error_body(detail: object, code: str | None = None) -> dict[str, object]:
    body: dict[str, object] = {"detail": detail}
    if code is not None:
        body["code"] = code
    body["request_id"] = correlation_id.get()
    return body


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(ScribeError)
    async def scribe_error_handler(request: Request, exc: ScribeError) -> JSONResponse:
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            "Request failed",
            kind=exc.kind.value,
            status_code=exc.status_code,
            error=exc.message,
            cause=repr(exc.__cause__) if exc.__cause__ else None,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.kind.value),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(
                jsonable_encoder(exc.errors()),
                ErrorKind.VALIDATION.value,
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.detail))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.detail))

    @app.exception_handler(OperationalError)
    @app.exception_handler(InterfaceError)
    async def storage_exception_handler(request: Request, exc: DBAPIError) -> JSONResponse:
        logger.error("Database unavailable", path=request.url.path, error=str(exc))
        error = StorageUnavailable()
        return JSONResponse(
            status_code=error.status_code,
            content=_error_body(error.message, error.kind.value),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Internal server error"),
        )
