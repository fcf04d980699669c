"""
Password-less sign-in through a single-use link sent by email.

Requesting a link for an unknown address creates the account, so the
magic link doubles as a sign-up path. Following the link proves control
of the mailbox and therefore also verifies the email address.
"""

from __future__ import annotations

from urllib.parse import urlencode

from errors import InvalidMagicLinkError
from infrastructure.email.protocol import EmailProvider
from repositories.user_repo import UserRepository
from schemas.models.user import UserDoc
from shared.datetime_utils import is_expired, utc_now
from shared.generators import generate_token
from shared.logging import get_logger

log = get_logger(__name__)

MAGIC_LINK_TOKEN_EXPIRATION_DURATION_IN_MINUTES = 10


class MagicLinkService:
    def __init__(
        self,
        user_repo: UserRepository,
        email_provider: EmailProvider,
        api_auth_host: str,
    ) -> None:
        self._users = user_repo
        self._mailer = email_provider
        self._api_auth_host = api_auth_host.rstrip("/")

    def build_magic_link(self, token: str) -> str:
        query = urlencode({"magic_link_token": token})
        return f"{self._api_auth_host}/users/sign-in-with-magic-link?{query}"

    async def send_magic_link_email(
        self, email: str, check_before_send: bool = False
    ) -> bool:
        """Email a sign-in link to *email*, creating the account if needed.

        Returns ``False`` without sending when ``check_before_send`` is set
        and the previous link is still valid.
        """
        user = await self._users.find_by_email(email)
        if user is None:
            user = await self._users.create(email)
        elif check_before_send and not is_expired(
            user.magic_link_sent_at, MAGIC_LINK_TOKEN_EXPIRATION_DURATION_IN_MINUTES
        ):
            log.info("magic_link_not_resent", user_id=str(user.id))
            return False

        magic_link_token = generate_token()

        await self._users.update(
            user.id,
            {
                "magic_link_token": magic_link_token,
                "magic_link_sent_at": utc_now(),
            },
        )

        delivered = await self._mailer.send_mail(
            to=[user.email],
            subject="Connexion avec un lien magique",
            template="magic-link",
            params={
                "magic_link": self.build_magic_link(magic_link_token),
                "expiration_minutes": MAGIC_LINK_TOKEN_EXPIRATION_DURATION_IN_MINUTES,
            },
        )
        if not delivered:
            log.warning("magic_link_not_delivered", user_id=str(user.id))

        return True

    async def login_with_magic_link(self, token: str) -> UserDoc:
        # An empty token would match every account without a pending link
        if not token:
            raise InvalidMagicLinkError()

        user = await self._users.find_by_magic_link_token(token)
        if user is None:
            raise InvalidMagicLinkError()

        if is_expired(user.magic_link_sent_at, MAGIC_LINK_TOKEN_EXPIRATION_DURATION_IN_MINUTES):
            log.info("magic_link_login_failed", reason="expired", user_id=str(user.id))
            raise InvalidMagicLinkError()

        updated = await self._users.update(
            user.id,
            {
                "email_verified": True,
                "sign_in_count": user.sign_in_count + 1,
                "last_sign_in_at": utc_now(),
                "magic_link_token": None,
                "magic_link_sent_at": None,
            },
        )
        log.info("login_success", user_id=str(user.id), auth_method="magic_link")
        return updated
