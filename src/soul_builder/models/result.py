"""Result model: the uniform shape returned by every flow operation.

Failures are values, not exceptions: ``success=False`` plus an ``error``
code and a human-readable ``message``.  ``ALREADY_COMPLETE`` is the one
informational code that accompanies ``success=True``.
"""

import enum

from pydantic import BaseModel


class ErrorCode(str, enum.Enum):
    """Enumerable outcomes other than plain success.

    NO_SESSION           unknown or expired session id
    VALIDATION_REQUIRED  empty answer to a required question
    NOT_COMPLETE         generate/export before every question is answered
    ALREADY_COMPLETE     answer submitted after completion (informational)
    """

    NO_SESSION = "NO_SESSION"
    VALIDATION_REQUIRED = "VALIDATION_REQUIRED"
    NOT_COMPLETE = "NOT_COMPLETE"
    ALREADY_COMPLETE = "ALREADY_COMPLETE"


class ToolResult(BaseModel):
    """Outcome of begin / submit_answer / generate / export."""

    success: bool
    message: str
    next_question: str | None = None
    current_step: int | None = None
    total_steps: int | None = None
    is_complete: bool | None = None
    document: str | None = None
    error: ErrorCode | None = None
