"""
Organization repository — organizations and user membership links.

Membership lives in `users_organizations`, one document per
(user_id, organization_id) pair, carrying the official contact email
verification state of that member.
"""

from __future__ import annotations

from typing import Any, Optional

from pymongo import ASCENDING, ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from schemas.models.base import to_object_id
from schemas.models.organization import (
    OrganizationDoc,
    OrganizationUser,
    UserOrganizationLinkDoc,
)
from schemas.models.user import UserDoc
from shared.datetime_utils import utc_now

ORGANIZATIONS_COLLECTION = "organizations"
USERS_ORGANIZATIONS_COLLECTION = "users_organizations"
USERS_COLLECTION = "users"

_LINK_FIELDS = (
    "needs_official_contact_email_verification",
    "official_contact_email_verification_token",
    "official_contact_email_verification_sent_at",
)


class OrganizationRepository:
    def __init__(self, db: AsyncDatabase) -> None:
        self._organizations = db[ORGANIZATIONS_COLLECTION]
        self._links = db[USERS_ORGANIZATIONS_COLLECTION]
        self._users = db[USERS_COLLECTION]

    async def ensure_indexes(self) -> None:
        await self._organizations.create_index([("siret", ASCENDING)], unique=True)
        await self._links.create_index(
            [("organization_id", ASCENDING), ("user_id", ASCENDING)], unique=True
        )

    async def find_by_id(self, organization_id: Any) -> Optional[OrganizationDoc]:
        oid = to_object_id(organization_id)
        if oid is None:
            return None
        doc = await self._organizations.find_one({"_id": oid})
        return OrganizationDoc.from_mongo(doc)

    async def get_users(self, organization_id: Any) -> list[OrganizationUser]:
        """Return the members of an organization, each merged with its link fields."""
        oid = to_object_id(organization_id)
        if oid is None:
            return []

        links = await self._links.find({"organization_id": oid}).to_list(length=None)
        if not links:
            return []

        links_by_user = {link["user_id"]: link for link in links}
        users = await self._users.find(
            {"_id": {"$in": list(links_by_user)}}
        ).to_list(length=None)

        members = []
        for raw_user in users:
            user = UserDoc.from_mongo(raw_user)
            link = links_by_user[user.id]
            members.append(
                OrganizationUser(
                    id=user.id,
                    email=user.email,
                    given_name=user.given_name,
                    family_name=user.family_name,
                    **{field: link.get(field) for field in _LINK_FIELDS if field in link},
                )
            )
        return members

    async def update_user_organization_link(
        self, organization_id: Any, user_id: Any, fields: dict[str, Any]
    ) -> Optional[UserOrganizationLinkDoc]:
        """Apply *fields* to the membership link and return it after the update."""
        org_oid = to_object_id(organization_id)
        user_oid = to_object_id(user_id)
        if org_oid is None or user_oid is None:
            return None
        doc = await self._links.find_one_and_update(
            {"organization_id": org_oid, "user_id": user_oid},
            {"$set": {**fields, "updated_at": utc_now()}},
            return_document=ReturnDocument.AFTER,
        )
        return UserOrganizationLinkDoc.from_mongo(doc)
