"""
User document model.

Maps to the `users` MongoDB collection.

Two creation paths produce slightly different shapes:
- Password sign-up: encrypted_password is set
- Magic link to an unknown email: the account has no password yet

Each email flow owns one token slot: the token value and the time it was
sent. Both are None together or set together, and are cleared when the
token is consumed.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.models.base import MongoBaseModel


class UserDoc(MongoBaseModel):
    """Document model for the `users` collection."""

    email: str
    email_verified: bool = False
    encrypted_password: Optional[str] = None

    given_name: Optional[str] = None
    family_name: Optional[str] = None
    phone_number: Optional[str] = None
    job: Optional[str] = None

    sign_in_count: int = Field(default=0, ge=0)
    last_sign_in_at: Optional[datetime] = None

    verify_email_token: Optional[str] = None
    verify_email_sent_at: Optional[datetime] = None
    magic_link_token: Optional[str] = None
    magic_link_sent_at: Optional[datetime] = None
    reset_password_token: Optional[str] = None
    reset_password_sent_at: Optional[datetime] = None
