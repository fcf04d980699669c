"""
User repository — all reads and writes on the `users` collection.

Emails are stored and looked up lowercased so that lookups are
case-insensitive. Token lookups refuse empty tokens: a query on
``{"magic_link_token": None}`` would otherwise match every account that
has no pending token.
"""

from __future__ import annotations

from typing import Any, Optional

from pymongo import ASCENDING, ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from schemas.models.base import to_object_id
from schemas.models.user import UserDoc
from shared.datetime_utils import utc_now
from shared.logging import get_logger

log = get_logger(__name__)

USERS_COLLECTION = "users"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository:
    def __init__(self, db: AsyncDatabase) -> None:
        self._col = db[USERS_COLLECTION]

    async def ensure_indexes(self) -> None:
        await self._col.create_index([("email", ASCENDING)], unique=True)
        for field in ("verify_email_token", "magic_link_token", "reset_password_token"):
            await self._col.create_index([(field, ASCENDING)], sparse=True)

    async def find_by_id(self, user_id: Any) -> Optional[UserDoc]:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return UserDoc.from_mongo(await self._col.find_one({"_id": oid}))

    async def find_by_email(self, email: str) -> Optional[UserDoc]:
        if not email:
            return None
        doc = await self._col.find_one({"email": normalize_email(email)})
        return UserDoc.from_mongo(doc)

    async def _find_by_token(self, field: str, token: Optional[str]) -> Optional[UserDoc]:
        if not token:
            return None
        return UserDoc.from_mongo(await self._col.find_one({field: token}))

    async def find_by_verify_email_token(self, token: Optional[str]) -> Optional[UserDoc]:
        return await self._find_by_token("verify_email_token", token)

    async def find_by_magic_link_token(self, token: Optional[str]) -> Optional[UserDoc]:
        return await self._find_by_token("magic_link_token", token)

    async def find_by_reset_password_token(
        self, token: Optional[str]
    ) -> Optional[UserDoc]:
        return await self._find_by_token("reset_password_token", token)

    async def create(self, email: str, **fields: Any) -> UserDoc:
        """Insert a new account and return it with its generated id."""
        now = utc_now()
        user = UserDoc(
            email=normalize_email(email), created_at=now, updated_at=now, **fields
        )
        result = await self._col.insert_one(user.to_mongo())
        user.id = result.inserted_id
        log.info("user_created", user_id=str(result.inserted_id))
        return user

    async def update(self, user_id: Any, fields: dict[str, Any]) -> Optional[UserDoc]:
        """Apply *fields* with ``$set`` and return the account after the update.

        Returns None when no account has this id.
        """
        oid = to_object_id(user_id)
        if oid is None:
            return None
        doc = await self._col.find_one_and_update(
            {"_id": oid},
            {"$set": {**fields, "updated_at": utc_now()}},
            return_document=ReturnDocument.AFTER,
        )
        return UserDoc.from_mongo(doc)
