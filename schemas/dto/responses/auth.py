"""
Response DTOs for account endpoints.

UserProfileResponse   — public shape of an account (no hash, no token)
StartLoginResponse    — POST /users/start-sign-in  (200)
LoginResponse         — POST /users/sign-in, /users/sign-in-with-magic-link  (200)
SignupResponse        — POST /users/sign-up  (201)
EmailSentResponse     — endpoints that email a code or a link  (200)
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from schemas.models.user import UserDoc


class UserProfileResponse(BaseModel):
    """Account fields safe to return to the account owner."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    email_verified: bool
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    phone_number: Optional[str] = None
    job: Optional[str] = None
    sign_in_count: int = 0
    last_sign_in_at: Optional[str] = None  # ISO 8601 string

    @classmethod
    def from_user(cls, user: UserDoc) -> "UserProfileResponse":
        return cls(
            id=str(user.id),
            email=user.email,
            email_verified=user.email_verified,
            given_name=user.given_name,
            family_name=user.family_name,
            phone_number=user.phone_number,
            job=user.job,
            sign_in_count=user.sign_in_count,
            last_sign_in_at=(
                user.last_sign_in_at.isoformat() if user.last_sign_in_at else None
            ),
        )


class StartLoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    user_exists: bool


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str
    user: UserProfileResponse


class SignupResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str
    user: UserProfileResponse


class EmailSentResponse(BaseModel):
    """``email_sent`` is False when a still-valid code made sending unnecessary."""

    model_config = ConfigDict(populate_by_name=True)

    email_sent: bool
