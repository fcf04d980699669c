"""Unit tests for request and response DTOs."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from schemas.dto.requests.auth import (
    ChangePasswordRequest,
    LoginRequest,
    MagicLinkLoginRequest,
    PersonalInformationsRequest,
    SendEmailRequest,
    SignupRequest,
    StartLoginRequest,
    VerifyEmailRequest,
)
from schemas.dto.requests.organization import (
    SendOfficialContactEmailRequest,
    VerifyOfficialContactEmailRequest,
)
from schemas.dto.responses.auth import (
    EmailSentResponse,
    LoginResponse,
    UserProfileResponse,
)
from schemas.dto.responses.common import ErrorResponse, HealthResponse
from schemas.dto.responses.organization import OfficialContactEmailSentResponse
from factories import make_user


# ── Requests ──────────────────────────────────────────────────────────────────


class TestEmailRequests:
    def test_email_is_stripped(self):
        req = StartLoginRequest(email="  jean@example.org ")
        assert req.email == "jean@example.org"

    def test_email_required(self):
        with pytest.raises(ValidationError):
            StartLoginRequest()

    def test_login_requires_password(self):
        with pytest.raises(ValidationError):
            LoginRequest(email="jean@example.org")

    def test_signup(self):
        req = SignupRequest(email="jean@example.org", password="Abcdef1@")
        assert req.password == "Abcdef1@"

    def test_send_email_defaults_to_unconditional_send(self):
        req = SendEmailRequest(email="jean@example.org")
        assert req.check_before_send is False

    def test_send_email_check_before_send(self):
        req = SendEmailRequest.model_validate(
            {"email": "jean@example.org", "check_before_send": True}
        )
        assert req.check_before_send is True


class TestTokenRequests:
    def test_verify_email_token_defaults_to_empty(self):
        assert VerifyEmailRequest().verify_email_token == ""

    def test_magic_link_token(self):
        req = MagicLinkLoginRequest(magic_link_token="abc")
        assert req.magic_link_token == "abc"

    def test_change_password_requires_password(self):
        with pytest.raises(ValidationError):
            ChangePasswordRequest(reset_password_token="abc")

    def test_official_contact_requests(self):
        assert SendOfficialContactEmailRequest().check_before_send is False
        req = VerifyOfficialContactEmailRequest(
            official_contact_email_verification_token="a-b-c-d"
        )
        assert req.official_contact_email_verification_token == "a-b-c-d"


class TestPersonalInformationsRequest:
    def test_values_are_passed_through_untouched(self):
        req = PersonalInformationsRequest.model_validate(
            {"given_name": 42, "family_name": "Dupont", "job": None}
        )
        assert req.given_name == 42
        assert req.phone_number is None


# ── Responses ─────────────────────────────────────────────────────────────────


class TestUserProfileResponse:
    def test_from_user_hides_secrets(self):
        user = make_user(
            encrypted_password="$argon2id$hash",
            magic_link_token="secret",
            given_name="Jean",
            last_sign_in_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        )
        resp = UserProfileResponse.from_user(user)
        dumped = resp.model_dump()

        assert dumped["id"] == str(user.id)
        assert dumped["given_name"] == "Jean"
        assert dumped["last_sign_in_at"] == "2024-05-01T12:00:00+00:00"
        assert "encrypted_password" not in dumped
        assert "magic_link_token" not in dumped

    def test_login_response_is_json_serialisable(self):
        resp = LoginResponse(
            access_token="jwt", user=UserProfileResponse.from_user(make_user())
        )
        body = json.loads(resp.model_dump_json())
        assert body["access_token"] == "jwt"
        assert body["user"]["email"] == "jean.dupont@example.org"


class TestOtherResponses:
    def test_email_sent(self):
        assert EmailSentResponse(email_sent=False).model_dump() == {"email_sent": False}

    def test_official_contact_sent(self):
        resp = OfficialContactEmailSentResponse(
            code_sent=True, contact_email="mairie@commune.fr", libelle=None
        )
        assert resp.model_dump()["contact_email"] == "mairie@commune.fr"

    def test_error_response_optional_fields(self):
        resp = ErrorResponse(error="Mot de passe trop faible", code="weak_password")
        assert resp.field is None
        assert resp.details is None

    def test_health_response(self):
        resp = HealthResponse(status="healthy", checks={"mongodb": "ok"})
        assert resp.checks["mongodb"] == "ok"
