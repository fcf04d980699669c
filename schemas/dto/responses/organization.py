"""
Response DTOs for organization endpoints.

OfficialContactEmailSentResponse     — .../official-contact-email-verification/send  (200)
OfficialContactEmailVerifiedResponse — .../official-contact-email-verification/verify  (200)
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class OfficialContactEmailSentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code_sent: bool
    contact_email: str
    libelle: Optional[str] = None


class OfficialContactEmailVerifiedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str
    organization_id: str
    needs_official_contact_email_verification: bool
