"""
Organization endpoints — official contact email verification of a member.

Both endpoints act on behalf of the authenticated user.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dependencies import get_current_user_id, get_official_contact_email_service
from errors import NotFoundError
from schemas.dto.requests.organization import (
    SendOfficialContactEmailRequest,
    VerifyOfficialContactEmailRequest,
)
from schemas.dto.responses.common import ErrorResponse
from schemas.dto.responses.organization import (
    OfficialContactEmailSentResponse,
    OfficialContactEmailVerifiedResponse,
)
from services.official_contact_email_service import OfficialContactEmailService

router = APIRouter(
    prefix="/organizations",
    tags=["organizations"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)


@router.post(
    "/{organization_id}/official-contact-email-verification/send",
    response_model=OfficialContactEmailSentResponse,
)
async def send_official_contact_email_verification(
    organization_id: str,
    body: SendOfficialContactEmailRequest,
    user_id: str = Depends(get_current_user_id),
    service: OfficialContactEmailService = Depends(get_official_contact_email_service),
) -> OfficialContactEmailSentResponse:
    result = await service.send_official_contact_email_verification_email(
        user_id, organization_id, check_before_send=body.check_before_send
    )
    return OfficialContactEmailSentResponse(
        code_sent=result.code_sent,
        contact_email=result.contact_email,
        libelle=result.libelle,
    )


@router.post(
    "/{organization_id}/official-contact-email-verification/verify",
    response_model=OfficialContactEmailVerifiedResponse,
)
async def verify_official_contact_email(
    organization_id: str,
    body: VerifyOfficialContactEmailRequest,
    user_id: str = Depends(get_current_user_id),
    service: OfficialContactEmailService = Depends(get_official_contact_email_service),
) -> OfficialContactEmailVerifiedResponse:
    link = await service.verify_official_contact_email_token(
        user_id, organization_id, body.official_contact_email_verification_token
    )
    if link is None:
        raise NotFoundError()
    return OfficialContactEmailVerifiedResponse(
        user_id=user_id,
        organization_id=organization_id,
        needs_official_contact_email_verification=link.needs_official_contact_email_verification,
    )
