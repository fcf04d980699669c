"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo import AsyncMongoClient

from config import AppSettings
from errors import register_error_handlers
from infrastructure.directory.etablissements_publics import EtablissementsPublicsDirectory
from infrastructure.email.zeptomail import ZeptoMailProvider
from infrastructure.email_check.debounce import DebounceEmailCheck
from infrastructure.http_client import HttpClient
from repositories.organization_repo import OrganizationRepository
from repositories.user_repo import UserRepository
from routes.auth_routes import router as auth_router
from routes.health_routes import router as health_router
from routes.organization_routes import router as organization_router
from shared.logging import get_logger
from shared.logging_config import setup_logging

log = get_logger(__name__)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Create and return a fully configured FastAPI application."""
    if settings is None:
        settings = AppSettings()

    setup_logging(settings.logging)

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # ── Startup ──────────────────────────────────────────────────────────
        mongo_client: AsyncMongoClient = AsyncMongoClient(
            settings.db.mongodb_uri, tz_aware=True
        )
        app.state.mongo_client = mongo_client
        app.state.db = mongo_client[settings.db.db_name]

        await UserRepository(app.state.db).ensure_indexes()
        await OrganizationRepository(app.state.db).ensure_indexes()

        # One HTTP client per external service, each with its own timeout
        mail_http = HttpClient()
        directory_http = HttpClient(timeout=settings.directory.directory_timeout_seconds)
        email_check_http = HttpClient(timeout=settings.email_check.debounce_timeout_seconds)

        app.state.email_provider = ZeptoMailProvider(settings.email, mail_http)
        app.state.directory = EtablissementsPublicsDirectory(
            settings.directory.directory_api_url, directory_http
        )
        app.state.email_check = DebounceEmailCheck(
            settings.email_check.debounce_api_key, email_check_http
        )

        log.info("app_started", env=settings.env, db_name=settings.db.db_name)

        yield

        # ── Shutdown ─────────────────────────────────────────────────────────
        for client in (mail_http, directory_http, email_check_http):
            await client.aclose()
        await mongo_client.close()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(organization_router)

    return app
