"""
Password reset by emailed link.

Requesting a reset for an unknown address succeeds silently: the response
must not reveal whether an account exists.
"""

from __future__ import annotations

from urllib.parse import urlencode

from errors import InvalidTokenError, WeakPasswordError
from infrastructure.email.protocol import EmailProvider
from repositories.user_repo import UserRepository
from schemas.models.user import UserDoc
from shared.crypto import hash_password_async
from shared.datetime_utils import is_expired, utc_now
from shared.generators import generate_token
from shared.logging import get_logger
from shared.validators import is_password_secure

log = get_logger(__name__)

RESET_PASSWORD_TOKEN_EXPIRATION_DURATION_IN_MINUTES = 60


class PasswordResetService:
    def __init__(
        self,
        user_repo: UserRepository,
        email_provider: EmailProvider,
        api_auth_host: str,
    ) -> None:
        self._users = user_repo
        self._mailer = email_provider
        self._api_auth_host = api_auth_host.rstrip("/")

    def build_reset_password_link(self, token: str) -> str:
        query = urlencode({"reset_password_token": token})
        return f"{self._api_auth_host}/users/change-password?{query}"

    async def send_reset_password_email(
        self, email: str, check_before_send: bool = False
    ) -> bool:
        user = await self._users.find_by_email(email)
        if user is None:
            # Same answer as a successful send
            log.info("reset_password_requested", user_found=False)
            return True

        if check_before_send and not is_expired(
            user.reset_password_sent_at, RESET_PASSWORD_TOKEN_EXPIRATION_DURATION_IN_MINUTES
        ):
            log.info("reset_password_not_resent", user_id=str(user.id))
            return False

        reset_password_token = generate_token()

        await self._users.update(
            user.id,
            {
                "reset_password_token": reset_password_token,
                "reset_password_sent_at": utc_now(),
            },
        )

        delivered = await self._mailer.send_mail(
            to=[user.email],
            subject="Instructions pour la réinitialisation du mot de passe",
            template="reset-password",
            params={
                "reset_password_link": self.build_reset_password_link(reset_password_token),
                "expiration_minutes": RESET_PASSWORD_TOKEN_EXPIRATION_DURATION_IN_MINUTES,
            },
        )
        if not delivered:
            log.warning("reset_password_not_delivered", user_id=str(user.id))

        log.info("reset_password_requested", user_found=True, user_id=str(user.id))
        return True

    async def change_password(self, token: str, password: str) -> UserDoc:
        # An empty token would match every account without a pending reset
        if not token:
            raise InvalidTokenError()

        user = await self._users.find_by_reset_password_token(token)
        if user is None:
            raise InvalidTokenError()

        if is_expired(
            user.reset_password_sent_at, RESET_PASSWORD_TOKEN_EXPIRATION_DURATION_IN_MINUTES
        ):
            log.info("change_password_failed", reason="expired", user_id=str(user.id))
            raise InvalidTokenError()

        if not is_password_secure(password):
            raise WeakPasswordError()

        encrypted_password = await hash_password_async(password)
        updated = await self._users.update(
            user.id,
            {
                "encrypted_password": encrypted_password,
                "reset_password_token": None,
                "reset_password_sent_at": None,
            },
        )
        log.info("password_changed", user_id=str(user.id))
        return updated
