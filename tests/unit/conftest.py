"""
Unit test configuration.

Patches dotenv so pydantic-settings never reads the project's real .env file
during unit tests. Tests control config exclusively through monkeypatch.setenv().

Repositories and providers are replaced by AsyncMock objects specced on the
real classes, so a misspelled method fails loudly.
"""

from unittest.mock import AsyncMock

import pytest

from infrastructure.directory.etablissements_publics import EtablissementsPublicsDirectory
from infrastructure.email.zeptomail import ZeptoMailProvider
from infrastructure.email_check.debounce import DebounceEmailCheck
from repositories.organization_repo import OrganizationRepository
from repositories.user_repo import UserRepository
from schemas.models.user import UserDoc


@pytest.fixture(autouse=True)
def disable_dotenv_loading(monkeypatch):
    """Prevent pydantic-settings from loading .env files in all unit tests."""
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})


def _updating(user: UserDoc):
    """side_effect for users.update that applies the fields to *user*."""

    async def update(user_id, fields):
        return user.model_copy(update=fields)

    return update


@pytest.fixture
def users():
    repo = AsyncMock(spec=UserRepository)
    repo.find_by_email.return_value = None
    repo.find_by_verify_email_token.return_value = None
    repo.find_by_magic_link_token.return_value = None
    repo.find_by_reset_password_token.return_value = None
    return repo


@pytest.fixture
def stored_user(users):
    """Install *user* as the account every lookup returns; update applies fields."""

    def install(user: UserDoc) -> UserDoc:
        users.find_by_email.return_value = user
        users.find_by_id.return_value = user
        users.find_by_verify_email_token.return_value = user
        users.find_by_magic_link_token.return_value = user
        users.find_by_reset_password_token.return_value = user
        users.update.side_effect = _updating(user)
        return user

    return install


@pytest.fixture
def organizations():
    return AsyncMock(spec=OrganizationRepository)


@pytest.fixture
def mailer():
    provider = AsyncMock(spec=ZeptoMailProvider)
    provider.send_mail.return_value = True
    return provider


@pytest.fixture
def directory():
    provider = AsyncMock(spec=EtablissementsPublicsDirectory)
    provider.get_contact_email.return_value = "mairie@commune.fr"
    return provider


@pytest.fixture
def email_check():
    provider = AsyncMock(spec=DebounceEmailCheck)
    provider.is_email_safe_to_send_transactional.return_value = True
    return provider
