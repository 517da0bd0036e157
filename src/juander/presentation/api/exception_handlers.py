"""Centralized exception handlers for the FastAPI application.

Domain and authentication exceptions are mapped to HTTP responses with one
error format:

    {
        "message": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Usage:
    from juander.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException

from juander.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)
from juander.domain.user import ProfileIncompleteError
from juander_auth.exceptions import (
    AuthError,
    FederationVerificationError,
    InvalidCodeError,
    InvalidCredentialsError,
    InvalidTokenError,
    WeakPasswordError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request - validation errors
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_FORMAT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PROFILE_VALUE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.WEAK_PASSWORD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EMAIL_IN_USE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PROFILE_INCOMPLETE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CONFIRMATION_MISMATCH: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PASSWORD_NOT_SUPPORTED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.SUPER_ADMIN_ROLE_LOCKED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EMAIL_VERIFICATION_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_CODE: status.HTTP_400_BAD_REQUEST,
    # 401 Unauthorized - authentication errors
    ErrorCode.AUTHENTICATION_FAILED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.FEDERATION_FAILED: status.HTTP_401_UNAUTHORIZED,
    # 403 Forbidden
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    # 404 Not Found
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PENDING_REGISTRATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409 Conflict - already exists
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.EMAIL_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.REGISTRATION_IN_PROGRESS: status.HTTP_409_CONFLICT,
    # 500 Internal Server Error - external collaborators
    ErrorCode.EMAIL_DELIVERY_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    # 504 Gateway Timeout
    ErrorCode.REQUEST_TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

AUTH_ERROR_CODES: list[tuple[type[AuthError], ErrorCode]] = [
    (WeakPasswordError, ErrorCode.WEAK_PASSWORD),
    (InvalidCodeError, ErrorCode.INVALID_CODE),
    (InvalidCredentialsError, ErrorCode.INVALID_CREDENTIALS),
    (InvalidTokenError, ErrorCode.INVALID_TOKEN),
    (FederationVerificationError, ErrorCode.FEDERATION_FAILED),
]

HTTP_STATUS_TO_CODE: dict[int, ErrorCode] = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.VALIDATION_ERROR,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.AUTHENTICATION_FAILED,
    status.HTTP_403_FORBIDDEN: ErrorCode.FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorCode.ENTITY_NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorCode.CONFLICT,
    status.HTTP_504_GATEWAY_TIMEOUT: ErrorCode.REQUEST_TIMEOUT,
}


def _get_status_for_exception(exc: DomainException) -> int:
    """Determine HTTP status code for a domain exception.

    Uses the error code mapping, with fallback based on exception type.
    """
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST

    return status.HTTP_400_BAD_REQUEST


def _get_code_for_auth_error(exc: AuthError) -> ErrorCode:
    for exc_type, code in AUTH_ERROR_CODES:
        if isinstance(exc, exc_type):
            return code
    return ErrorCode.AUTHENTICATION_FAILED


def create_error_response(
    status_code: int,
    message: str,
    code: str,
    extra: Optional[dict[str, Any]] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content: dict[str, Any] = {"message": message, "code": code}
    if extra:
        content.update(extra)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle all domain exceptions with structured response.

        Details are logged but never returned to the client.
        """
        status_code = _get_status_for_exception(exc)

        logger.warning(
            "Domain exception on %s %s: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )

        extra = None
        if isinstance(exc, ProfileIncompleteError):
            extra = {"missingFields": [to_camel(name) for name in exc.missing_fields]}

        return create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
            extra=extra,
        )

    @app.exception_handler(AuthError)
    async def auth_exception_handler(
        request: Request,
        exc: AuthError,
    ) -> JSONResponse:
        """Handle authentication errors with their generic messages."""
        code = _get_code_for_auth_error(exc)
        status_code = ERROR_CODE_TO_STATUS.get(code, status.HTTP_401_UNAUTHORIZED)

        logger.info(
            "Authentication error on %s %s: %s (code=%s)",
            request.method,
            request.url.path,
            type(exc).__name__,
            code.value,
        )

        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        return create_error_response(
            status_code=status_code,
            message=exc.message,
            code=code.value,
            headers=headers,
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Render HTTPExceptions (access checks, 404 routes) in the same shape."""
        code = HTTP_STATUS_TO_CODE.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
        return create_error_response(
            status_code=exc.status_code,
            message=str(exc.detail),
            code=code.value,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Reject malformed input with 400 before any store access."""
        errors = jsonable_encoder(exc.errors())
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = first.get("msg", "Invalid request")
        if field:
            message = f"{field}: {message}"

        logger.info(
            "Validation error on %s %s: %s",
            request.method,
            request.url.path,
            message,
        )

        return create_error_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message=message,
            code=ErrorCode.VALIDATION_ERROR.value,
            extra={"errors": errors},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format.

        The client only ever sees a generic message.
        """
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An internal error occurred",
            code=ErrorCode.INTERNAL_ERROR.value,
        )
