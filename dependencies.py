"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain functions used with
FastAPI's Depends() system. Long-lived clients (MongoDB, HTTP providers)
are created once in the app lifespan and read from app.state; repositories
and services are cheap and built per request.
"""

from __future__ import annotations

import jwt
from fastapi import Depends, Request

from config import AppSettings
from errors import AuthenticationError
from infrastructure.directory.protocol import DirectoryProvider
from infrastructure.email.protocol import EmailProvider
from infrastructure.email_check.protocol import EmailCheckProvider
from repositories.organization_repo import OrganizationRepository
from repositories.user_repo import UserRepository
from services.auth_service import AuthService
from services.email_verification_service import EmailVerificationService
from services.magic_link_service import MagicLinkService
from services.official_contact_email_service import OfficialContactEmailService
from services.password_reset_service import PasswordResetService
from services.profile_service import ProfileService
from shared.access_tokens import verify_access_jwt


def get_settings(request: Request) -> AppSettings:
    """Return the AppSettings instance stored on app.state."""
    return request.app.state.settings


def get_db(request: Request):
    """Return the async MongoDB database from app.state."""
    return request.app.state.db


def get_email_provider(request: Request) -> EmailProvider:
    return request.app.state.email_provider


def get_directory(request: Request) -> DirectoryProvider:
    return request.app.state.directory


def get_email_check(request: Request) -> EmailCheckProvider:
    return request.app.state.email_check


# ── Repositories ─────────────────────────────────────────────────────────────


def get_user_repo(db=Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_organization_repo(db=Depends(get_db)) -> OrganizationRepository:
    return OrganizationRepository(db)


# ── Services ─────────────────────────────────────────────────────────────────


def get_auth_service(
    users: UserRepository = Depends(get_user_repo),
    email_check: EmailCheckProvider = Depends(get_email_check),
) -> AuthService:
    return AuthService(users, email_check)


def get_email_verification_service(
    users: UserRepository = Depends(get_user_repo),
    mailer: EmailProvider = Depends(get_email_provider),
) -> EmailVerificationService:
    return EmailVerificationService(users, mailer)


def get_magic_link_service(
    users: UserRepository = Depends(get_user_repo),
    mailer: EmailProvider = Depends(get_email_provider),
    settings: AppSettings = Depends(get_settings),
) -> MagicLinkService:
    return MagicLinkService(users, mailer, settings.api_auth_host)


def get_password_reset_service(
    users: UserRepository = Depends(get_user_repo),
    mailer: EmailProvider = Depends(get_email_provider),
    settings: AppSettings = Depends(get_settings),
) -> PasswordResetService:
    return PasswordResetService(users, mailer, settings.api_auth_host)


def get_profile_service(
    users: UserRepository = Depends(get_user_repo),
) -> ProfileService:
    return ProfileService(users)


def get_official_contact_email_service(
    organizations: OrganizationRepository = Depends(get_organization_repo),
    directory: DirectoryProvider = Depends(get_directory),
    mailer: EmailProvider = Depends(get_email_provider),
) -> OfficialContactEmailService:
    return OfficialContactEmailService(organizations, directory, mailer)


# ── Authentication ───────────────────────────────────────────────────────────


def get_current_user_id(
    request: Request, settings: AppSettings = Depends(get_settings)
) -> str:
    """Return the user id carried by the access JWT.

    The token is read from ``Authorization: Bearer`` first, then from the
    ``access_token`` cookie.
    """
    token = None
    auth_header = request.headers.get("Authorization", "")
    if auth_header.lower().startswith("bearer "):
        token = auth_header.split(" ", 1)[1].strip()
    if not token:
        token = request.cookies.get("access_token")
    if not token:
        raise AuthenticationError()

    try:
        claims = verify_access_jwt(settings.jwt, token)
    except jwt.InvalidTokenError as e:
        raise AuthenticationError("Invalid or expired access token.") from e

    return claims["sub"]
