"""Personal informations of an account (names, phone number, job)."""

from __future__ import annotations

from typing import Any

from errors import InvalidPersonalInformationsError, NotFoundError
from repositories.user_repo import UserRepository
from schemas.models.user import UserDoc
from shared.logging import get_logger
from shared.validators import is_phone_number_valid

log = get_logger(__name__)


class ProfileService:
    def __init__(self, user_repo: UserRepository) -> None:
        self._users = user_repo

    async def update_personal_informations(
        self,
        user_id: Any,
        *,
        given_name: Any,
        family_name: Any,
        phone_number: Any,
        job: Any,
    ) -> UserDoc:
        """Validate then store the personal informations of *user_id*.

        Validation happens before any repository call: an invalid payload
        never reaches the database.
        """
        if not all(isinstance(value, str) for value in (given_name, family_name, job)):
            raise InvalidPersonalInformationsError()

        if not is_phone_number_valid(phone_number):
            raise InvalidPersonalInformationsError(field="phone_number")

        updated = await self._users.update(
            user_id,
            {
                "given_name": given_name,
                "family_name": family_name,
                "phone_number": phone_number,
                "job": job,
            },
        )
        if updated is None:
            raise NotFoundError()

        log.info("personal_informations_updated", user_id=str(user_id))
        return updated
