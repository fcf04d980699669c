"""
Official contact email verification.

A member of an organization proves their affiliation by obtaining a code
sent to the organization's official contact address. The address is not
supplied by the user: it is resolved from the public establishments
directory using the organization's official geographic code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from errors import (
    DirectoryLookupFailedError,
    InvalidTokenError,
    NotFoundError,
    OfficialContactEmailVerificationNotNeededError,
)
from infrastructure.directory.protocol import DirectoryLookupError, DirectoryProvider
from infrastructure.email.protocol import EmailProvider
from repositories.organization_repo import OrganizationRepository
from schemas.models.base import to_object_id
from schemas.models.organization import (
    OrganizationDoc,
    OrganizationUser,
    UserOrganizationLinkDoc,
)
from shared.datetime_utils import is_expired, utc_now
from shared.generators import generate_diceware_password
from shared.logging import get_logger, log_with_context

log = get_logger(__name__)

OFFICIAL_CONTACT_EMAIL_VERIFICATION_TOKEN_EXPIRATION_DURATION_IN_MINUTES = 60


@dataclass(frozen=True)
class OfficialContactEmailSendResult:
    code_sent: bool
    contact_email: str
    libelle: Optional[str]


class OfficialContactEmailService:
    def __init__(
        self,
        organization_repo: OrganizationRepository,
        directory: DirectoryProvider,
        email_provider: EmailProvider,
    ) -> None:
        self._organizations = organization_repo
        self._directory = directory
        self._mailer = email_provider

    async def _get_member(
        self, user_id: Any, organization_id: Any
    ) -> tuple[OrganizationUser, OrganizationDoc]:
        # The user must already be a member of the organization
        user_oid = to_object_id(user_id)
        members = await self._organizations.get_users(organization_id)
        user = next((member for member in members if member.id == user_oid), None)
        organization = await self._organizations.find_by_id(organization_id)

        if user is None or organization is None:
            raise NotFoundError()
        return user, organization

    async def send_official_contact_email_verification_email(
        self, user_id: Any, organization_id: Any, check_before_send: bool = False
    ) -> OfficialContactEmailSendResult:
        logger = log_with_context(
            log, user_id=str(user_id), organization_id=str(organization_id)
        )
        user, organization = await self._get_member(user_id, organization_id)

        if not user.needs_official_contact_email_verification:
            raise OfficialContactEmailVerificationNotNeededError()

        libelle = organization.cached_libelle

        try:
            contact_email = await self._directory.get_contact_email(
                organization.cached_code_officiel_geographique
            )
        except DirectoryLookupError as e:
            logger.error("official_contact_email_lookup_failed", error=str(e))
            raise DirectoryLookupFailedError() from e

        if check_before_send and not is_expired(
            user.official_contact_email_verification_sent_at,
            OFFICIAL_CONTACT_EMAIL_VERIFICATION_TOKEN_EXPIRATION_DURATION_IN_MINUTES,
        ):
            logger.info("official_contact_email_not_resent")
            return OfficialContactEmailSendResult(
                code_sent=False, contact_email=contact_email, libelle=libelle
            )

        verification_code = generate_diceware_password()

        await self._organizations.update_user_organization_link(
            organization_id,
            user_id,
            {
                "official_contact_email_verification_token": verification_code,
                "official_contact_email_verification_sent_at": utc_now(),
            },
        )

        delivered = await self._mailer.send_mail(
            to=[contact_email],
            subject="Authentifier un email",
            template="official-contact-email-verification",
            params={
                "given_name": user.given_name,
                "family_name": user.family_name,
                "email": user.email,
                "libelle": libelle,
                "official_contact_email_verification_token": verification_code,
                "expiration_minutes": OFFICIAL_CONTACT_EMAIL_VERIFICATION_TOKEN_EXPIRATION_DURATION_IN_MINUTES,
            },
        )
        if not delivered:
            logger.warning("official_contact_email_not_delivered")

        logger.info("official_contact_email_sent")
        return OfficialContactEmailSendResult(
            code_sent=True, contact_email=contact_email, libelle=libelle
        )

    async def verify_official_contact_email_token(
        self, user_id: Any, organization_id: Any, token: str
    ) -> UserOrganizationLinkDoc:
        # Empty codes are rejected before any lookup
        if not token:
            raise InvalidTokenError()

        user, _ = await self._get_member(user_id, organization_id)

        if user.official_contact_email_verification_token != token:
            raise InvalidTokenError()

        if is_expired(
            user.official_contact_email_verification_sent_at,
            OFFICIAL_CONTACT_EMAIL_VERIFICATION_TOKEN_EXPIRATION_DURATION_IN_MINUTES,
        ):
            raise InvalidTokenError()

        link = await self._organizations.update_user_organization_link(
            organization_id,
            user_id,
            {
                "needs_official_contact_email_verification": False,
                "official_contact_email_verification_token": None,
                "official_contact_email_verification_sent_at": None,
            },
        )
        if link is None:
            raise NotFoundError()
        log.info(
            "official_contact_email_verified",
            user_id=str(user_id),
            organization_id=str(organization_id),
        )
        return link
