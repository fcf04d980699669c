"""
Email address verification.

A numeric code is emailed to the account address and typed back by the
user. The code is valid for VERIFY_EMAIL_TOKEN_EXPIRATION_DURATION_IN_MINUTES.
"""

from __future__ import annotations

from errors import EmailVerifiedAlreadyError, InvalidTokenError, NotFoundError
from infrastructure.email.protocol import EmailProvider
from repositories.user_repo import UserRepository
from schemas.models.user import UserDoc
from shared.datetime_utils import is_expired, utc_now
from shared.generators import generate_pin_token
from shared.logging import get_logger

log = get_logger(__name__)

VERIFY_EMAIL_TOKEN_EXPIRATION_DURATION_IN_MINUTES = 60


class EmailVerificationService:
    def __init__(self, user_repo: UserRepository, email_provider: EmailProvider) -> None:
        self._users = user_repo
        self._mailer = email_provider

    async def send_email_address_verification_email(
        self, email: str, check_before_send: bool = False
    ) -> bool:
        """Email a fresh verification code to *email*.

        Returns:
            ``False`` when ``check_before_send`` is set and the previous code
            is still valid (nothing is sent), ``True`` otherwise.
        """
        user = await self._users.find_by_email(email)
        if user is None:
            raise NotFoundError()

        if user.email_verified:
            raise EmailVerifiedAlreadyError()

        if check_before_send and not is_expired(
            user.verify_email_sent_at, VERIFY_EMAIL_TOKEN_EXPIRATION_DURATION_IN_MINUTES
        ):
            log.info("verify_email_not_resent", user_id=str(user.id))
            return False

        verify_email_token = generate_pin_token()

        await self._users.update(
            user.id,
            {
                "verify_email_token": verify_email_token,
                "verify_email_sent_at": utc_now(),
            },
        )

        delivered = await self._mailer.send_mail(
            to=[user.email],
            subject=f"Code de confirmation : {verify_email_token}",
            template="verify-email",
            params={
                "verify_email_token": verify_email_token,
                "expiration_minutes": VERIFY_EMAIL_TOKEN_EXPIRATION_DURATION_IN_MINUTES,
            },
        )
        if not delivered:
            log.warning("verify_email_not_delivered", user_id=str(user.id))

        return True

    async def verify_email(self, token: str) -> UserDoc:
        # An empty token would match every account without a pending code
        if not token:
            raise InvalidTokenError()

        user = await self._users.find_by_verify_email_token(token)
        if user is None:
            raise InvalidTokenError()

        if is_expired(
            user.verify_email_sent_at, VERIFY_EMAIL_TOKEN_EXPIRATION_DURATION_IN_MINUTES
        ):
            log.info("verify_email_failed", reason="expired", user_id=str(user.id))
            raise InvalidTokenError()

        updated = await self._users.update(
            user.id,
            {
                "email_verified": True,
                "verify_email_token": None,
                "verify_email_sent_at": None,
            },
        )
        log.info("email_verified", user_id=str(user.id))
        return updated
