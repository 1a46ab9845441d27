"""Session endpoints: start, answer, inspect, generate, export.

Each endpoint forwards to the engine and maps the returned ``ToolResult``
onto an HTTP status (see ``errors.result_status_code``).  The body is always
the ToolResult, so clients can rely on ``success``/``error`` either way.
"""

from typing import Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from soul_builder.engine import SoulBuilderEngine
from soul_builder.models.result import ToolResult
from soul_builder.models.session import SessionInfo

from soul_builder_server.dependencies import get_engine
from soul_builder_server.errors import result_response

router = APIRouter(tags=["sessions"])


# ------------------------------------------------------------------
# Request models
# ------------------------------------------------------------------

class SubmitAnswerRequest(BaseModel):
    """Body for POST /sessions/{session_id}/answer."""
    answer: str = ""


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post(
    "/sessions/{session_id}/start",
    response_model=ToolResult,
    response_model_exclude_none=True,
)
async def start_session(
    session_id: str,
    engine: SoulBuilderEngine = Depends(get_engine),
) -> JSONResponse:
    """Start a session, or report progress of an existing one."""
    return result_response(await engine.begin(session_id))


@router.post(
    "/sessions/{session_id}/answer",
    response_model=ToolResult,
    response_model_exclude_none=True,
)
async def answer_question(
    session_id: str,
    body: SubmitAnswerRequest,
    engine: SoulBuilderEngine = Depends(get_engine),
) -> JSONResponse:
    """Answer the current question and advance.

    Returns 422 for an empty answer to a required question and 404 for an
    unknown or expired session.
    """
    return result_response(await engine.submit_answer(session_id, body.answer))


@router.get("/sessions/{session_id}")
async def get_session(
    session_id: str,
    engine: SoulBuilderEngine = Depends(get_engine),
) -> SessionInfo:
    """Get session progress.  Raises 404 if the session does not exist."""
    info = engine.get_session_info(session_id)
    if info is None:
        raise ValueError(f"Session not found: session_id={session_id}")
    return info


@router.post(
    "/sessions/{session_id}/generate",
    response_model=ToolResult,
    response_model_exclude_none=True,
)
async def generate_soul(
    session_id: str,
    engine: SoulBuilderEngine = Depends(get_engine),
) -> JSONResponse:
    """Render the SOUL.md.  Returns 409 while questions remain."""
    return result_response(await engine.generate(session_id))


@router.get(
    "/sessions/{session_id}/export",
    response_model=ToolResult,
    response_model_exclude_none=True,
)
async def export_soul(
    session_id: str,
    format: Literal["json", "markdown"] = Query("json"),
    engine: SoulBuilderEngine = Depends(get_engine),
) -> Response:
    """Export the SOUL.md.

    ``format=markdown`` returns the document itself as a ``SOUL.md``
    attachment; failures are always returned as JSON.
    """
    result = await engine.export(session_id)
    if format == "markdown" and result.success:
        return Response(
            content=result.document,
            media_type="text/markdown; charset=utf-8",
            headers={"Content-Disposition": 'attachment; filename="SOUL.md"'},
        )
    return result_response(result)
