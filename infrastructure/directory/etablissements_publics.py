"""Public establishments directory implementation of DirectoryProvider.

Resolves the town hall ("mairie") of an official geographic code and
returns its published email address. Unlike the other providers, failures
raise DirectoryLookupError: the caller cannot continue without an address.
"""

from __future__ import annotations

from infrastructure.directory.protocol import DirectoryLookupError
from infrastructure.http_client import HttpClient
from shared.logging import get_logger
from shared.validators import is_email_valid

log = get_logger(__name__)


class EtablissementsPublicsDirectory:
    def __init__(self, base_url: str, http_client: HttpClient) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_client

    async def get_contact_email(self, code_officiel_geographique: str) -> str:
        if not code_officiel_geographique:
            raise DirectoryLookupError("missing code officiel geographique")

        url = f"{self._base_url}/communes/{code_officiel_geographique}/mairie"
        try:
            response = await self._http.get(url)
        except Exception as e:
            log.error(
                "directory_request_failed",
                code=code_officiel_geographique,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise DirectoryLookupError(str(e)) from e

        if response.status_code != 200:
            log.error(
                "directory_api_error",
                code=code_officiel_geographique,
                status_code=response.status_code,
                response_text=response.text[:200],
            )
            raise DirectoryLookupError(f"unexpected status {response.status_code}")

        try:
            features = response.json().get("features") or []
            email = features[0]["properties"]["email"]
        except (ValueError, AttributeError, IndexError, KeyError, TypeError) as e:
            log.error(
                "directory_response_invalid",
                code=code_officiel_geographique,
                error_type=type(e).__name__,
            )
            raise DirectoryLookupError("no contact email in directory response") from e

        if not is_email_valid(email):
            log.error("directory_email_invalid", code=code_officiel_geographique)
            raise DirectoryLookupError("invalid contact email in directory response")

        return email
