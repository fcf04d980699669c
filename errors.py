"""
Application error hierarchy and FastAPI exception handlers.

AppError is the base for all typed errors. Every flow signals its outcome
through one of the named subclasses below; the global exception handler
converts them to consistent JSON responses.

Non-AppError exceptions bubble up as 500s (with Sentry reporting in production).
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shared.logging import get_logger

log = get_logger(__name__)


class AppError(Exception):
    """Base application error. All typed errors inherit from this."""

    status_code: int = 500
    error_code: str = "internal_error"
    default_message: str = "An internal server error occurred."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        field: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details

    def to_dict(self) -> dict:
        payload: dict = {"error": self.message, "code": self.error_code}
        if self.field is not None:
            payload["field"] = self.field
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(AppError):
    status_code = 400
    error_code = "validation_error"
    default_message = "Invalid input."


class AuthenticationError(AppError):
    status_code = 401
    error_code = "authentication_error"
    default_message = "Authentication required."


class NotFoundError(AppError):
    status_code = 404
    error_code = "not_found"
    default_message = "Resource not found."


class ConflictError(AppError):
    status_code = 409
    error_code = "conflict"
    default_message = "Conflict with the current state of the resource."


class UpstreamError(AppError):
    status_code = 502
    error_code = "upstream_error"
    default_message = "An upstream service failed."


# ── Named flow errors ────────────────────────────────────────────────────────


class InvalidEmailError(ValidationError):
    error_code = "invalid_email"
    default_message = "This email address cannot be used."


class InvalidCredentialsError(AuthenticationError):
    # Raised for both unknown account and wrong password
    error_code = "invalid_credentials"
    default_message = "Invalid email or password."


class EmailUnavailableError(ConflictError):
    error_code = "email_unavailable"
    default_message = "An account already exists for this email."


class WeakPasswordError(ValidationError):
    error_code = "weak_password"
    default_message = "Password does not meet the security requirements."


class EmailVerifiedAlreadyError(ConflictError):
    error_code = "email_verified_already"
    default_message = "This email address is already verified."


class InvalidTokenError(ValidationError):
    # Raised for empty, unknown and expired tokens alike
    error_code = "invalid_token"
    default_message = "Invalid or expired token."


class InvalidMagicLinkError(ValidationError):
    error_code = "invalid_magic_link"
    default_message = "Invalid or expired magic link."


class DirectoryLookupFailedError(UpstreamError):
    error_code = "directory_lookup_failed"
    default_message = "Could not retrieve the official contact email."


class OfficialContactEmailVerificationNotNeededError(ConflictError):
    error_code = "official_contact_email_verification_not_needed"
    default_message = "Official contact email verification is not needed."


class InvalidPersonalInformationsError(ValidationError):
    error_code = "invalid_personal_informations"
    default_message = "Invalid personal informations."


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        # Sentry integration: if sentry_sdk is initialized it will auto-capture
        # unhandled exceptions before this handler fires.
        log.error(
            "unhandled_exception",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "An internal server error occurred.", "code": "internal_error"},
        )
