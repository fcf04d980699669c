"""Debounce implementation of EmailCheckProvider.

Fails open: an unconfigured key or an API failure answers ``True`` so that
an outage of the checker never blocks sign-in.
"""

from infrastructure.http_client import HttpClient
from shared.logging import get_logger

log = get_logger(__name__)

_DEBOUNCE_API_URL = "https://api.debounce.io/v1/"


class DebounceEmailCheck:
    def __init__(self, api_key: str, http_client: HttpClient) -> None:
        self._api_key = api_key
        self._http = http_client

    async def is_email_safe_to_send_transactional(self, email: str) -> bool:
        if not self._api_key:
            log.debug("debounce_api_key_not_configured")
            return True
        try:
            response = await self._http.get(
                _DEBOUNCE_API_URL, params={"api": self._api_key, "email": email}
            )
            if response.status_code != 200:
                log.error(
                    "debounce_api_error",
                    status_code=response.status_code,
                    response_text=response.text[:200],
                )
                return True
            result = response.json().get("debounce", {})
            safe = str(result.get("send_transactional")) == "1"
            if not safe:
                log.warning("email_unsafe_for_transactional", reason=result.get("reason"))
            return safe
        except Exception as e:
            log.error(
                "debounce_request_failed", error=str(e), error_type=type(e).__name__
            )
            return True
