"""
Request DTOs for account endpoints.

StartLoginRequest             — POST /users/start-sign-in
LoginRequest                  — POST /users/sign-in
SignupRequest                 — POST /users/sign-up
SendEmailRequest              — POST /users/send-email-verification,
                                POST /users/send-magic-link,
                                POST /users/reset-password
VerifyEmailRequest            — POST /users/verify-email
MagicLinkLoginRequest         — POST /users/sign-in-with-magic-link
ChangePasswordRequest         — POST /users/change-password
PersonalInformationsRequest   — POST /users/personal-information
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class _EmailBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str

    @field_validator("email")
    @classmethod
    def _strip_email(cls, value: str) -> str:
        return value.strip()


class StartLoginRequest(_EmailBody):
    """Request body for POST /users/start-sign-in."""


class LoginRequest(_EmailBody):
    """Request body for POST /users/sign-in."""

    password: str


class SignupRequest(_EmailBody):
    """Request body for POST /users/sign-up."""

    password: str


class SendEmailRequest(_EmailBody):
    """Request body shared by the endpoints that email a code or a link.

    ``check_before_send`` asks to skip sending while the previous code or
    link is still valid.
    """

    check_before_send: bool = False


class VerifyEmailRequest(BaseModel):
    """Request body for POST /users/verify-email."""

    model_config = ConfigDict(populate_by_name=True)

    verify_email_token: str = ""


class MagicLinkLoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    magic_link_token: str = ""


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reset_password_token: str = ""
    password: str


class PersonalInformationsRequest(BaseModel):
    """Request body for POST /users/personal-information.

    Fields are untyped; ProfileService validates them and raises
    invalid_personal_informations.
    """

    model_config = ConfigDict(populate_by_name=True)

    given_name: Any = None
    family_name: Any = None
    phone_number: Any = None
    job: Any = None
