"""FastAPI dependency injection: provides the engine, store, and admin auth.

The engine and store are built once in the lifespan handler and stashed on
``app.state``; these helpers hand them to route functions.
"""

import hmac

from fastapi import Header, HTTPException, Request

from soul_builder.engine import SoulBuilderEngine
from soul_builder.store import SessionStore


# ------------------------------------------------------------------
# Engine & store: stashed on app.state during lifespan
# ------------------------------------------------------------------

def get_engine(request: Request) -> SoulBuilderEngine:
    """Return the engine singleton from ``app.state``."""
    return request.app.state.engine


def get_session_store(request: Request) -> SessionStore:
    """Return the SessionStore singleton from ``app.state``."""
    return request.app.state.session_store


# ------------------------------------------------------------------
# Admin auth
# ------------------------------------------------------------------

async def require_admin_key(
    request: Request,
    x_admin_key: str | None = Header(None, alias="X-Admin-Key"),
) -> str:
    """Validate the ``X-Admin-Key`` header against ``ADMIN_API_KEY``.

    Raises 403 if admin endpoints are disabled (no key configured) or the key
    does not match, 401 if the header is missing.
    """
    expected: str | None = request.app.state.settings.admin_api_key
    if not expected:
        raise HTTPException(
            status_code=403,
            detail="Admin endpoints are disabled (ADMIN_API_KEY not configured)",
        )
    if not x_admin_key:
        raise HTTPException(status_code=401, detail="X-Admin-Key header is required")
    # Constant-time comparison to prevent timing side-channels.
    if not hmac.compare_digest(x_admin_key, expected):
        raise HTTPException(status_code=403, detail="Invalid admin key")
    return x_admin_key
