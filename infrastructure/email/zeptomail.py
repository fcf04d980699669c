"""ZeptoMail implementation of EmailProvider.

Each transactional email is a pair of Jinja2 templates under
``templates/emails``: ``<template>.html`` and ``<template>.txt``, rendered
with the params supplied by the calling service.
"""

import os
from typing import Any, Mapping, Optional, Sequence

from jinja2 import (
    Environment,
    FileSystemLoader,
    TemplateError,
    TemplateNotFound,
    select_autoescape,
)

from config import EmailSettings
from infrastructure.http_client import HttpClient
from shared.logging import get_logger

log = get_logger(__name__)

_ZEPTO_API_URL = "https://api.zeptomail.eu/v1.1/email"
_DEFAULT_TEMPLATE_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(__file__))),
    "templates",
    "emails",
)


class ZeptoMailProvider:
    def __init__(
        self,
        settings: EmailSettings,
        http_client: HttpClient,
        template_dir: str = _DEFAULT_TEMPLATE_DIR,
    ) -> None:
        self._settings = settings
        self._http = http_client
        self._jinja = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def _render(self, template: str, params: Mapping[str, Any]) -> tuple[str, Optional[str]]:
        html_body = self._jinja.get_template(f"{template}.html").render(**params)
        try:
            text_body = self._jinja.get_template(f"{template}.txt").render(**params)
        except TemplateNotFound:
            text_body = None
        return html_body, text_body

    async def send_mail(
        self,
        to: Sequence[str],
        subject: str,
        template: str,
        params: Mapping[str, Any],
    ) -> bool:
        if not self._settings.zepto_api_token:
            log.error("zepto_mail_send_failed", reason="token_not_configured")
            return False

        try:
            html_body, text_body = self._render(template, params)
        except TemplateError as e:
            log.error(
                "email_render_error",
                template=template,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        payload: dict = {
            "from": {
                "address": self._settings.zepto_from_email,
                "name": self._settings.zepto_from_name,
            },
            "to": [
                {"email_address": {"address": address, "name": address}}
                for address in to
            ],
            "subject": subject,
            "htmlbody": html_body,
        }
        if text_body:
            payload["textbody"] = text_body

        token = self._settings.zepto_api_token
        if not token.startswith("Zoho-enczapikey "):
            token = f"Zoho-enczapikey {token}"

        headers = {"Authorization": token, "Content-Type": "application/json"}

        try:
            response = await self._http.post(
                _ZEPTO_API_URL, json=payload, headers=headers
            )
            if response.status_code in (200, 201, 202):
                log.info("email_sent_success", template=template, recipients=len(to))
                return True
            log.error(
                "email_sent_failed",
                template=template,
                status_code=response.status_code,
                response=response.text[:200],
            )
            return False
        except Exception as e:
            log.error(
                "email_send_error",
                template=template,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False
