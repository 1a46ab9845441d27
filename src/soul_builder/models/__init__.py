"""Public model re-exports for soul_builder.

Consumers should import from ``soul_builder.models`` rather than
reaching into sub-modules directly.
"""

# --- Questions ---
from soul_builder.models.question import FieldKey, Messages, Question

# --- Session ---
from soul_builder.models.session import (
    AnswerAlreadyRecordedError,
    AnswerSet,
    SessionInfo,
    SoulAnswers,
    SoulSession,
)

# --- Results ---
from soul_builder.models.result import ErrorCode, ToolResult

__all__ = [
    # Questions
    "FieldKey",
    "Messages",
    "Question",
    # Session
    "AnswerAlreadyRecordedError",
    "AnswerSet",
    "SessionInfo",
    "SoulAnswers",
    "SoulSession",
    # Results
    "ErrorCode",
    "ToolResult",
]
