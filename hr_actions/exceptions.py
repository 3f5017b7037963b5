from __future__ import annotations

import enum

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str
    detail: str | None = None
    status_code: int
    errors: dict[str, str] | None = None


class AppError(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class RequestValidationFailed(AppError):
    """A submitted payload failed the per-type field rules."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        super().__init__("Request failed validation", status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)


# ---------------------------------------------------------------------------
# Client-side errors raised by the workflow core
# ---------------------------------------------------------------------------


class HRActionClientError(Exception):
    """Base class for errors raised on the requesting side of the workflow."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AssemblyError(HRActionClientError):
    """The draft cannot be turned into a submission payload."""


class TransportError(HRActionClientError):
    """The backend was unreachable or answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.errors = errors or {}
        super().__init__(message)


class AuthorizationReason(enum.StrEnum):
    """Why the backend refused the caller."""

    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"


class AuthorizationError(TransportError):
    """The backend answered 401 or 403."""

    def __init__(self, message: str, reason: AuthorizationReason) -> None:
        self.reason = reason
        status_code = (
            status.HTTP_401_UNAUTHORIZED
            if reason is AuthorizationReason.NOT_AUTHENTICATED
            else status.HTTP_403_FORBIDDEN
        )
        super().__init__(message, status_code=status_code)


class WizardStateError(HRActionClientError):
    """An operation was attempted in a state that does not allow it."""


# ---------------------------------------------------------------------------
# FastAPI handlers
# ---------------------------------------------------------------------------


async def _app_exception_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=type(exc).__name__,
            detail=exc.message,
            status_code=exc.status_code,
            errors=getattr(exc, "errors", None),
        ).model_dump(),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            error="ValidationError",
            detail=str(exc.errors()),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        ).model_dump(),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the application."""
    app.add_exception_handler(AppError, _app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)  # type: ignore[arg-type]
