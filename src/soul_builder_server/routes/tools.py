"""Tool endpoints: list tool definitions and dispatch tool calls.

``POST /tools/{name}`` always answers 200 with the text layout agent hosts
display; ``is_error`` is set when the tool reported ``success=False``.
Unknown tools yield 404 and missing arguments 400 through the global
exception handlers.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from soul_builder.engine import SoulBuilderEngine

from soul_builder_server.dependencies import get_engine
from soul_builder_server.tools import (
    TOOLS,
    TextContent,
    ToolCallResponse,
    ToolDefinition,
    call_tool,
    format_tool_text,
)

router = APIRouter(tags=["tools"])


@router.get("/tools")
async def list_tools() -> list[ToolDefinition]:
    """Return the four Soul Builder tool definitions."""
    return TOOLS


@router.post("/tools/{name}")
async def invoke_tool(
    name: str,
    request: Request,
    arguments: dict[str, Any] | None = Body(None),
    engine: SoulBuilderEngine = Depends(get_engine),
) -> ToolCallResponse:
    """Run a tool with the JSON body as its arguments."""
    result = await call_tool(engine, name, arguments or {})
    label = request.app.state.questions.format("question_label")
    return ToolCallResponse(
        content=[TextContent(text=format_tool_text(result, question_label=label))],
        is_error=not result.success,
        result=result,
    )
