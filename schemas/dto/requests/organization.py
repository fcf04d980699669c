"""
Request DTOs for organization endpoints.

SendOfficialContactEmailRequest   — POST /organizations/{id}/official-contact-email-verification/send
VerifyOfficialContactEmailRequest — POST /organizations/{id}/official-contact-email-verification/verify
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SendOfficialContactEmailRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    check_before_send: bool = False


class VerifyOfficialContactEmailRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    official_contact_email_verification_token: str = ""
