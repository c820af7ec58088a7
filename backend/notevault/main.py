from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from .api.errors import register_exception_handlers
from .api.middleware.security import SecurityMiddleware
from .api.v1.router import api_router
from .config import APP_VERSION, Settings, settings
from .core.repositories.implementations.memory.credential_repository import (
    InMemoryCredentialRepository,
)
from .core.repositories.implementations.memory.note_repository import InMemoryNoteRepository
from .core.security.tokens import TokenService
from .dependencies import LoginRateLimiter
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the API with its own stores.

    State lives on ``app.state`` and reaches handlers through dependencies,
    so every app (one per test, one per process) is isolated.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level)

    app = FastAPI(
        title="NoteVault API",
        debug=app_settings.debug,
        version=APP_VERSION,
        root_path=app_settings.root_path or "",
    )

    app.state.settings = app_settings
    app.state.credentials = InMemoryCredentialRepository()
    app.state.notes = InMemoryNoteRepository()
    app.state.tokens = TokenService(app_settings.token_secret)
    app.state.rate_limiter = LoginRateLimiter(
        max_attempts=app_settings.max_login_attempts,
        window_seconds=app_settings.login_attempt_window,
        enabled=app_settings.enable_rate_limiting,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_origin_regex=app_settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=[
            "Accept",
            "Accept-Language",
            "Content-Language",
            "Content-Type",
            "Authorization",
            "X-Requested-With",
        ],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Proxy headers (X-Forwarded-*) only from the configured load balancers
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=app_settings.forwarded_allow_ips)

    # Trusted hosts (configure in env for production)
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=app_settings.trusted_hosts)

    # GZip compression
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(SecurityMiddleware, auth_path_prefix=f"{app_settings.api_prefix}/auth")

    register_exception_handlers(app)
    app.include_router(api_router, prefix=app_settings.api_prefix)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    logger.info(
        "Starting NoteVault API",
        extra={"host": settings.host, "port": settings.port, "api_prefix": settings.api_prefix},
    )
    uvicorn.run("notevault.main:app", host=settings.host, port=settings.port, log_config=None)
