"""soul_builder: guided persona questionnaire that renders a SOUL.md.

Public API:
    SoulBuilderEngine: question/answer state machine (begin, submit_answer,
                        generate, export)
    SessionStore     : in-memory session map with creation-anchored expiry
    QuestionSet      : loads the fixed question list and messages from YAML
    DocumentRenderer : Jinja2 renderer for a complete AnswerSet

Models:
    Question         : one entry of the questionnaire
    SoulAnswers      : fixed-shape answer record filled step by step
    AnswerSet        : complete, frozen answer record used for rendering
    SoulSession      : one questionnaire run
    SessionInfo      : public view of session state
    ToolResult       : uniform result of every operation
    ErrorCode        : NO_SESSION, VALIDATION_REQUIRED, NOT_COMPLETE,
                        ALREADY_COMPLETE
"""

from soul_builder.engine import SoulBuilderEngine
from soul_builder.models import (
    AnswerSet,
    ErrorCode,
    Messages,
    Question,
    SessionInfo,
    SoulAnswers,
    SoulSession,
    ToolResult,
)
from soul_builder.question_set import QuestionSet
from soul_builder.render import DocumentRenderer
from soul_builder.store import SessionStore

__all__ = [
    # Engine & stores
    "SoulBuilderEngine",
    "SessionStore",
    "QuestionSet",
    "DocumentRenderer",
    # Models
    "AnswerSet",
    "ErrorCode",
    "Messages",
    "Question",
    "SessionInfo",
    "SoulAnswers",
    "SoulSession",
    "ToolResult",
]
