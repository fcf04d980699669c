"""
Password authentication — sign-in and sign-up.

Unknown account and wrong password raise the same InvalidCredentialsError
so that the login endpoint cannot be used to enumerate accounts.
"""

from __future__ import annotations

from dataclasses import dataclass

from errors import (
    EmailUnavailableError,
    InvalidCredentialsError,
    InvalidEmailError,
    WeakPasswordError,
)
from infrastructure.email_check.protocol import EmailCheckProvider
from repositories.user_repo import UserRepository
from schemas.models.user import UserDoc
from shared.crypto import hash_password_async, verify_password_async
from shared.datetime_utils import utc_now
from shared.logging import get_logger
from shared.validators import is_email_valid, is_password_secure

log = get_logger(__name__)


@dataclass(frozen=True)
class StartLoginResult:
    email: str
    user_exists: bool


class AuthService:
    def __init__(
        self, user_repo: UserRepository, email_check: EmailCheckProvider
    ) -> None:
        self._users = user_repo
        self._email_check = email_check

    async def start_login(self, email: str) -> StartLoginResult:
        """First step of sign-in: tell the client whether to ask for a password.

        Unknown addresses must be well-formed and deliverable since the next
        step will send them an email.
        """
        user_exists = await self._users.find_by_email(email) is not None

        if not user_exists:
            if not is_email_valid(email):
                raise InvalidEmailError()
            if not await self._email_check.is_email_safe_to_send_transactional(email):
                log.warning("start_login_rejected", reason="unsafe_email")
                raise InvalidEmailError()

        return StartLoginResult(email=email, user_exists=user_exists)

    async def login(self, email: str, password: str) -> UserDoc:
        user = await self._users.find_by_email(email)
        if user is None:
            log.warning("login_failed", reason="invalid_credentials")
            raise InvalidCredentialsError()

        if not await verify_password_async(password, user.encrypted_password):
            log.warning("login_failed", reason="invalid_credentials", user_id=str(user.id))
            raise InvalidCredentialsError()

        updated = await self._users.update(
            user.id,
            {
                "sign_in_count": user.sign_in_count + 1,
                "last_sign_in_at": utc_now(),
            },
        )
        log.info("login_success", user_id=str(user.id), auth_method="password")
        return updated

    async def signup(self, email: str, password: str) -> UserDoc:
        if not is_email_valid(email):
            raise InvalidEmailError()

        if await self._users.find_by_email(email) is not None:
            raise EmailUnavailableError()

        if not is_password_secure(password):
            raise WeakPasswordError()

        user = await self._users.create(
            email, encrypted_password=await hash_password_async(password)
        )
        log.info("signup_success", user_id=str(user.id))
        return user
