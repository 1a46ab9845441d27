"""Tool definitions and dispatch for the tool-call endpoint.

The four tools mirror the engine operations one-to-one.  Each definition
carries a JSON-Schema ``input_schema`` and behaviour hints so agent hosts
can present them without calling the service first.

``call_tool`` validates arguments and dispatches to the engine;
``format_tool_text`` lays the result out as a single text block (message,
then the next question, then the rendered document).
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from pydantic import BaseModel

from soul_builder.engine import SoulBuilderEngine
from soul_builder.models.result import ToolResult


class ToolAnnotations(BaseModel):
    """Behaviour hints for agent hosts."""

    read_only_hint: bool
    open_world_hint: bool = False
    destructive_hint: bool = False


class ToolDefinition(BaseModel):
    name: str
    description: str
    annotations: ToolAnnotations
    input_schema: dict[str, Any]


class TextContent(BaseModel):
    type: str = "text"
    text: str


class ToolCallResponse(BaseModel):
    """Response body of ``POST /tools/{name}``."""

    content: list[TextContent]
    is_error: bool = False
    result: ToolResult


def _schema(*, with_answer: bool = False) -> dict[str, Any]:
    properties: dict[str, Any] = {
        "session_id": {"type": "string", "description": "Unique session identifier"},
    }
    required = ["session_id"]
    if with_answer:
        properties["answer"] = {
            "type": "string",
            "description": "The user's answer to the current question",
        }
        required.append("answer")
    return {"type": "object", "properties": properties, "required": required}


TOOLS: list[ToolDefinition] = [
    ToolDefinition(
        name="start_soul_builder",
        description=(
            "Starts a new Soul Builder session. Returns a welcome message and "
            "the first question, or the current question if the session exists."
        ),
        annotations=ToolAnnotations(read_only_hint=False),
        input_schema=_schema(),
    ),
    ToolDefinition(
        name="answer_question",
        description=(
            "Takes an answer to the current question and returns the next "
            "question or the completion status."
        ),
        annotations=ToolAnnotations(read_only_hint=False),
        input_schema=_schema(with_answer=True),
    ),
    ToolDefinition(
        name="generate_soul",
        description="Generates the finished SOUL.md from all collected answers.",
        annotations=ToolAnnotations(read_only_hint=True),
        input_schema=_schema(),
    ),
    ToolDefinition(
        name="export_soul",
        description="Exports the SOUL.md as plain text for copying or download.",
        annotations=ToolAnnotations(read_only_hint=True),
        input_schema=_schema(),
    ),
]


def _require(arguments: dict[str, Any], key: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str):
        raise ValueError(f"Missing required argument: {key}")
    return value


async def call_tool(
    engine: SoulBuilderEngine,
    name: str,
    arguments: dict[str, Any],
) -> ToolResult:
    """Dispatch a tool call to the engine.

    Raises ``KeyError`` for an unknown tool and ``ValueError`` when a
    required argument is missing or not a string.
    """
    handlers: dict[str, Callable[[], Awaitable[ToolResult]]] = {
        "start_soul_builder": lambda: engine.begin(_require(arguments, "session_id")),
        "answer_question": lambda: engine.submit_answer(
            _require(arguments, "session_id"), _require(arguments, "answer"),
        ),
        "generate_soul": lambda: engine.generate(_require(arguments, "session_id")),
        "export_soul": lambda: engine.export(_require(arguments, "session_id")),
    }
    if name not in handlers:
        raise KeyError(f"Unknown tool: {name}")
    return await handlers[name]()


def format_tool_text(result: ToolResult, question_label: str = "Question") -> str:
    """Lay out a result as one text block for agent hosts."""
    text = result.message
    if result.next_question:
        text += (
            f"\n\n**{question_label} {result.current_step}/{result.total_steps}:** "
            f"{result.next_question}"
        )
    if result.document:
        text += f"\n\n---\n\n{result.document}"
    return text
