"""Unit tests for the infrastructure layer — HTTP client and external providers."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from jinja2 import TemplateNotFound, TemplateSyntaxError

from config import EmailSettings
from infrastructure.directory.etablissements_publics import EtablissementsPublicsDirectory
from infrastructure.directory.protocol import DirectoryLookupError
from infrastructure.email.zeptomail import ZeptoMailProvider
from infrastructure.email_check.debounce import DebounceEmailCheck
from infrastructure.http_client import HttpClient


def _response(status_code=200, json_data=None, text=""):
    resp = MagicMock(status_code=status_code, text=text)
    resp.json.return_value = json_data
    return resp


# ── HttpClient ────────────────────────────────────────────────────────────────


class TestHttpClient:
    async def test_post_delegates_to_httpx(self, mocker):
        client = HttpClient()
        fake_resp = MagicMock(status_code=200)
        mocker.patch.object(client._client, "post", return_value=fake_resp)
        resp = await client.post("http://example.com")
        assert resp.status_code == 200
        await client.aclose()

    async def test_get_delegates_to_httpx(self, mocker):
        client = HttpClient()
        fake_resp = MagicMock(status_code=200)
        mocker.patch.object(client._client, "get", return_value=fake_resp)
        resp = await client.get("http://example.com", params={"q": "1"})
        assert resp.status_code == 200
        client._client.get.assert_called_once_with("http://example.com", params={"q": "1"})
        await client.aclose()

    async def test_get_propagates_exception(self, mocker):
        client = HttpClient()
        mocker.patch.object(client._client, "get", side_effect=Exception("timeout"))
        with pytest.raises(Exception, match="timeout"):
            await client.get("http://example.com")
        await client.aclose()

    async def test_timeout_is_kept(self):
        async with HttpClient(timeout=2.5) as client:
            assert client.timeout == 2.5


# ── ZeptoMailProvider ─────────────────────────────────────────────────────────


class TestZeptoMailProvider:
    def _make(self, token="test-token"):
        settings = EmailSettings(
            zepto_api_token=token,
            zepto_from_email="noreply@example.org",
            zepto_from_name="Accounts",
        )
        http = MagicMock()
        http.post = AsyncMock(return_value=_response(200))
        provider = ZeptoMailProvider(settings=settings, http_client=http)
        return provider, http

    async def _send(self, provider, template="verify-email", params=None):
        return await provider.send_mail(
            to=["jean.dupont@example.org"],
            subject="Code de confirmation : 1234567890",
            template=template,
            params=params
            or {"verify_email_token": "1234567890", "expiration_minutes": 60},
        )

    async def test_renders_templates_into_payload(self):
        provider, http = self._make()
        assert await self._send(provider) is True

        http.post.assert_awaited_once()
        payload = http.post.call_args.kwargs["json"]
        assert payload["to"] == [
            {
                "email_address": {
                    "address": "jean.dupont@example.org",
                    "name": "jean.dupont@example.org",
                }
            }
        ]
        assert payload["from"]["address"] == "noreply@example.org"
        assert payload["subject"] == "Code de confirmation : 1234567890"
        assert "1234567890" in payload["htmlbody"]
        assert "1234567890" in payload["textbody"]

    async def test_html_params_are_escaped(self):
        provider, http = self._make()
        await self._send(
            provider,
            template="official-contact-email-verification",
            params={
                "given_name": "<script>",
                "family_name": "Dupont",
                "email": "jean.dupont@example.org",
                "libelle": "Commune de Clapiers",
                "official_contact_email_verification_token": "a-b-c-d",
                "expiration_minutes": 60,
            },
        )
        payload = http.post.call_args.kwargs["json"]
        assert "<script>" not in payload["htmlbody"]
        assert "&lt;script&gt;" in payload["htmlbody"]

    async def test_text_part_is_optional(self):
        provider, http = self._make()
        jinja = MagicMock()
        html_template = MagicMock()
        html_template.render.return_value = "<p>hello</p>"

        def get_template(name):
            if name.endswith(".txt"):
                raise TemplateNotFound(name)
            return html_template

        jinja.get_template.side_effect = get_template
        provider._jinja = jinja

        assert await self._send(provider, template="html-only", params={}) is True
        payload = http.post.call_args.kwargs["json"]
        assert payload["htmlbody"] == "<p>hello</p>"
        assert "textbody" not in payload

    async def test_returns_false_on_unknown_template(self):
        provider, http = self._make()
        assert await self._send(provider, template="no-such-template", params={}) is False
        http.post.assert_not_called()

    async def test_returns_false_on_broken_template(self):
        provider, http = self._make()
        jinja = MagicMock()
        jinja.get_template.side_effect = TemplateSyntaxError("unexpected '}'", 3)
        provider._jinja = jinja

        assert await self._send(provider) is False
        http.post.assert_not_called()

    async def test_returns_false_when_token_empty(self):
        provider, http = self._make(token="")
        assert await self._send(provider) is False
        http.post.assert_not_called()

    async def test_returns_false_on_non_2xx(self):
        provider, http = self._make()
        http.post = AsyncMock(return_value=_response(422, text="Unprocessable"))
        assert await self._send(provider) is False

    async def test_returns_false_on_exception(self):
        provider, http = self._make()
        http.post = AsyncMock(side_effect=Exception("timeout"))
        assert await self._send(provider) is False

    async def test_auth_header_prepends_prefix(self):
        provider, http = self._make(token="rawtoken")
        await self._send(provider)
        auth = http.post.call_args.kwargs["headers"]["Authorization"]
        assert auth == "Zoho-enczapikey rawtoken"

    async def test_auth_header_not_double_prefixed(self):
        provider, http = self._make(token="Zoho-enczapikey alreadyprefixed")
        http.post = AsyncMock(return_value=_response(201))
        await self._send(provider)
        auth = http.post.call_args.kwargs["headers"]["Authorization"]
        assert auth.count("Zoho-enczapikey") == 1


# ── EtablissementsPublicsDirectory ────────────────────────────────────────────


class TestEtablissementsPublicsDirectory:
    def _make(self, response=None, error=None):
        http = MagicMock()
        if error is not None:
            http.get = AsyncMock(side_effect=error)
        else:
            http.get = AsyncMock(return_value=response)
        return EtablissementsPublicsDirectory("https://directory.test/v3/", http), http

    async def test_returns_mairie_email(self):
        directory, http = self._make(
            _response(
                json_data={"features": [{"properties": {"email": "mairie@clapiers.fr"}}]}
            )
        )
        assert await directory.get_contact_email("34077") == "mairie@clapiers.fr"
        http.get.assert_awaited_once_with("https://directory.test/v3/communes/34077/mairie")

    async def test_empty_code_raises_without_request(self):
        directory, http = self._make(_response())
        with pytest.raises(DirectoryLookupError):
            await directory.get_contact_email("")
        http.get.assert_not_awaited()

    async def test_network_error(self):
        directory, _ = self._make(error=Exception("connection reset"))
        with pytest.raises(DirectoryLookupError):
            await directory.get_contact_email("34077")

    async def test_non_200(self):
        directory, _ = self._make(_response(404, text="Not found"))
        with pytest.raises(DirectoryLookupError):
            await directory.get_contact_email("34077")

    @pytest.mark.parametrize(
        "json_data",
        [
            {"features": []},
            {},
            {"features": [{"properties": {}}]},
            None,
        ],
    )
    async def test_response_without_email(self, json_data):
        directory, _ = self._make(_response(json_data=json_data))
        with pytest.raises(DirectoryLookupError):
            await directory.get_contact_email("34077")

    async def test_invalid_email_in_response(self):
        directory, _ = self._make(
            _response(json_data={"features": [{"properties": {"email": "pas un email"}}]})
        )
        with pytest.raises(DirectoryLookupError):
            await directory.get_contact_email("34077")


# ── DebounceEmailCheck ────────────────────────────────────────────────────────


class TestDebounceEmailCheck:
    def _make(self, api_key="key", response=None, error=None):
        http = MagicMock()
        if error is not None:
            http.get = AsyncMock(side_effect=error)
        else:
            http.get = AsyncMock(return_value=response)
        return DebounceEmailCheck(api_key, http), http

    async def test_safe_address(self):
        check, http = self._make(
            response=_response(json_data={"debounce": {"send_transactional": "1"}})
        )
        assert await check.is_email_safe_to_send_transactional("jean@example.org") is True
        params = http.get.call_args.kwargs["params"]
        assert params == {"api": "key", "email": "jean@example.org"}

    async def test_unsafe_address(self):
        check, _ = self._make(
            response=_response(
                json_data={"debounce": {"send_transactional": "0", "reason": "Disposable"}}
            )
        )
        assert await check.is_email_safe_to_send_transactional("x@yopmail.com") is False

    async def test_without_api_key_everything_is_safe(self):
        check, http = self._make(api_key="")
        assert await check.is_email_safe_to_send_transactional("x@example.org") is True
        http.get.assert_not_awaited()

    async def test_fails_open_on_http_error(self):
        check, _ = self._make(response=_response(500, text="boom"))
        assert await check.is_email_safe_to_send_transactional("x@example.org") is True

    async def test_fails_open_on_exception(self):
        check, _ = self._make(error=Exception("timeout"))
        assert await check.is_email_safe_to_send_transactional("x@example.org") is True
