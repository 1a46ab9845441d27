"""Admin endpoints: manual session sweep.

Protected by the ``ADMIN_API_KEY`` environment variable.  Every request
must include an ``X-Admin-Key`` header whose value matches the configured
key.  Returns 401 if missing, 403 if wrong or not configured.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from soul_builder.store import SessionStore

from soul_builder_server.dependencies import get_session_store, require_admin_key

router = APIRouter(prefix="/admin", tags=["admin"])


class SweepResult(BaseModel):
    """Response body for the sweep operation."""
    evicted: int
    active_sessions: int


@router.post("/sweep")
async def sweep_sessions(
    store: SessionStore = Depends(get_session_store),
    _admin: str = Depends(require_admin_key),
) -> SweepResult:
    """Evict expired sessions now instead of waiting for the next sweep."""
    evicted = store.sweep()
    return SweepResult(evicted=evicted, active_sessions=store.count())
