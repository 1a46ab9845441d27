"""Route registration: mounts all routers under ``/api/v1``."""

from fastapi import FastAPI

from soul_builder_server.routes.admin import router as admin_router
from soul_builder_server.routes.sessions import router as sessions_router
from soul_builder_server.routes.tools import router as tools_router

API_PREFIX = "/api/v1"


def register_routes(app: FastAPI) -> None:
    """Include all sub-routers under the versioned API prefix."""
    app.include_router(sessions_router, prefix=API_PREFIX)
    app.include_router(tools_router, prefix=API_PREFIX)
    app.include_router(admin_router, prefix=API_PREFIX)
