"""Server configuration: reads settings from environment variables.

All settings have sensible defaults for local development.  In production
the values are typically overridden via env vars or a ``.env`` file.
"""

import os
from dataclasses import dataclass, field

from soul_builder.constants import (
    DEFAULT_LOCALE,
    SESSION_EXPIRY_SECONDS,
    SWEEP_INTERVAL_SECONDS,
)


@dataclass(frozen=True)
class ServerSettings:
    """Immutable server configuration read from environment at startup."""

    # Network
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS: comma-separated origins, or "*" for wide-open dev mode
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    # Question set / message locale (en, de)
    locale: str = DEFAULT_LOCALE

    # Session expiry, anchored at creation time
    session_expiry_seconds: int = SESSION_EXPIRY_SECONDS
    sweep_interval_seconds: int = SWEEP_INTERVAL_SECONDS

    # Admin API key: shared secret for admin endpoints (None = disabled)
    admin_api_key: str | None = None

    # Token served at /.well-known/openai-apps-challenge (None = 404)
    openai_apps_challenge: str | None = None


def load_settings() -> ServerSettings:
    """Build settings from ``SERVER_*`` and related environment variables."""
    raw_origins = os.getenv("SERVER_CORS_ORIGINS", "*")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]

    return ServerSettings(
        host=os.getenv("SERVER_HOST", "0.0.0.0"),
        # PORT is what most PaaS hosts inject
        port=int(os.getenv("SERVER_PORT", os.getenv("PORT", "3000"))),
        cors_origins=origins,
        log_level=os.getenv("SERVER_LOG_LEVEL", "INFO").upper(),
        locale=os.getenv("SOUL_BUILDER_LOCALE", DEFAULT_LOCALE),
        session_expiry_seconds=int(
            os.getenv("SESSION_EXPIRY_SECONDS", str(SESSION_EXPIRY_SECONDS))
        ),
        sweep_interval_seconds=int(
            os.getenv("SESSION_SWEEP_INTERVAL_SECONDS", str(SWEEP_INTERVAL_SECONDS))
        ),
        admin_api_key=os.getenv("ADMIN_API_KEY") or None,
        openai_apps_challenge=os.getenv("OPENAI_APPS_CHALLENGE") or None,
    )
