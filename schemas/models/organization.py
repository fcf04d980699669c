"""
Organization and membership document models.

`organizations`        — OrganizationDoc
`users_organizations`  — UserOrganizationLinkDoc, one per (user, organization)

OrganizationUser is the read shape returned when listing the members of an
organization: the user's identity merged with the fields of its link.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from schemas.models.base import MongoBaseModel, PyObjectId


class OrganizationDoc(MongoBaseModel):
    """Document model for the `organizations` collection."""

    siret: str
    cached_libelle: Optional[str] = None
    cached_code_officiel_geographique: Optional[str] = None


class UserOrganizationLinkDoc(MongoBaseModel):
    """Document model for the `users_organizations` collection."""

    user_id: PyObjectId
    organization_id: PyObjectId
    needs_official_contact_email_verification: bool = False
    official_contact_email_verification_token: Optional[str] = None
    official_contact_email_verification_sent_at: Optional[datetime] = None


class OrganizationUser(BaseModel):
    """A member of an organization, as listed by OrganizationRepository.get_users."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: PyObjectId
    email: str
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    needs_official_contact_email_verification: bool = False
    official_contact_email_verification_token: Optional[str] = None
    official_contact_email_verification_sent_at: Optional[datetime] = None
