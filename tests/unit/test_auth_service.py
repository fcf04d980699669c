"""Unit tests for AuthService — start_login, login, signup."""

import asyncio

import pytest

from errors import (
    EmailUnavailableError,
    InvalidCredentialsError,
    InvalidEmailError,
    WeakPasswordError,
)
from factories import make_user
from services.auth_service import AuthService
from shared.crypto import hash_password, verify_password

PASSWORD = "Abcdef1@"


@pytest.fixture
def service(users, email_check):
    return AuthService(users, email_check)


class TestStartLogin:
    async def test_existing_user(self, service, stored_user, email_check):
        stored_user(make_user())
        result = await service.start_login("jean.dupont@example.org")
        assert result.user_exists is True
        assert result.email == "jean.dupont@example.org"
        email_check.is_email_safe_to_send_transactional.assert_not_awaited()

    async def test_new_safe_email(self, service, email_check):
        result = await service.start_login("new@example.org")
        assert result.user_exists is False
        email_check.is_email_safe_to_send_transactional.assert_awaited_once_with(
            "new@example.org"
        )

    async def test_new_unsafe_email_rejected(self, service, email_check):
        email_check.is_email_safe_to_send_transactional.return_value = False
        with pytest.raises(InvalidEmailError):
            await service.start_login("disposable@example.org")

    async def test_new_malformed_email_rejected(self, service, email_check):
        with pytest.raises(InvalidEmailError):
            await service.start_login("not-an-email")
        email_check.is_email_safe_to_send_transactional.assert_not_awaited()


class TestLogin:
    async def test_success_increments_sign_in_count(self, service, users, stored_user):
        user = stored_user(
            make_user(encrypted_password=hash_password(PASSWORD), sign_in_count=3)
        )
        result = await service.login(user.email, PASSWORD)

        users.update.assert_awaited_once()
        user_id, fields = users.update.call_args.args
        assert user_id == user.id
        assert fields["sign_in_count"] == 4
        assert fields["last_sign_in_at"] is not None
        assert result.sign_in_count == 4

    async def test_unknown_account(self, service, users):
        with pytest.raises(InvalidCredentialsError) as unknown:
            await service.login("nobody@example.org", PASSWORD)
        users.update.assert_not_awaited()
        assert unknown.value.error_code == "invalid_credentials"

    async def test_wrong_password_raises_same_error_as_unknown_account(
        self, service, users, stored_user
    ):
        stored_user(make_user(encrypted_password=hash_password(PASSWORD)))
        with pytest.raises(InvalidCredentialsError) as wrong:
            await service.login("jean.dupont@example.org", "Wrong1@pass")
        users.update.assert_not_awaited()

        users.find_by_email.return_value = None
        with pytest.raises(InvalidCredentialsError) as unknown:
            await service.login("nobody@example.org", "Wrong1@pass")

        assert wrong.value.to_dict() == unknown.value.to_dict()

    async def test_concurrent_logins_keep_the_event_loop_responsive(
        self, service, stored_user
    ):
        stored_user(make_user(encrypted_password=hash_password(PASSWORD)))
        gaps = []
        done = asyncio.Event()

        async def ticker():
            loop = asyncio.get_running_loop()
            last = loop.time()
            while not done.is_set():
                await asyncio.sleep(0.001)
                now = loop.time()
                gaps.append(now - last)
                last = now

        task = asyncio.create_task(ticker())
        await asyncio.gather(
            *(service.login("jean.dupont@example.org", PASSWORD) for _ in range(3))
        )
        done.set()
        await task

        assert gaps
        assert max(gaps) < 0.2

    async def test_account_without_password(self, service, stored_user):
        # Accounts created through a magic link have no password yet
        stored_user(make_user(encrypted_password=None))
        with pytest.raises(InvalidCredentialsError):
            await service.login("jean.dupont@example.org", PASSWORD)


class TestSignup:
    async def test_creates_account_with_hashed_password(self, service, users):
        users.create.side_effect = lambda email, **fields: make_user(email=email, **fields)

        user = await service.signup("new@example.org", PASSWORD)

        users.create.assert_awaited_once()
        email, = users.create.call_args.args
        stored_hash = users.create.call_args.kwargs["encrypted_password"]
        assert email == "new@example.org"
        assert stored_hash != PASSWORD
        assert verify_password(PASSWORD, stored_hash)
        assert user.email == "new@example.org"

    async def test_email_unavailable(self, service, users, stored_user):
        stored_user(make_user(email="taken@example.org"))
        with pytest.raises(EmailUnavailableError):
            await service.signup("taken@example.org", PASSWORD)
        users.create.assert_not_awaited()

    async def test_weak_password(self, service, users):
        with pytest.raises(WeakPasswordError):
            await service.signup("new@example.org", "weak")
        users.create.assert_not_awaited()

    async def test_email_unavailable_checked_before_password_strength(
        self, service, stored_user
    ):
        stored_user(make_user(email="taken@example.org"))
        with pytest.raises(EmailUnavailableError):
            await service.signup("taken@example.org", "weak")

    async def test_malformed_email(self, service, users):
        with pytest.raises(InvalidEmailError):
            await service.signup("not-an-email", PASSWORD)
        users.find_by_email.assert_not_awaited()
