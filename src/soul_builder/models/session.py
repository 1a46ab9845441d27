"""Session models: the in-memory state of one questionnaire run.

``SoulAnswers`` is a fixed-shape record with one slot per question field.
Slots start as ``None`` and are filled exactly once, when their question is
answered.  Skipped optional questions hold an empty string.

``AnswerSet`` is the read-only, fully populated view handed to the renderer.
Building one from an incomplete record raises ``ValueError``, which makes
"all fields answered" a structural check rather than a scan.

``SessionInfo`` is the public view exposed by the server; it never carries
answer text.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from soul_builder.models.question import FieldKey


class AnswerAlreadyRecordedError(RuntimeError):
    """A slot was written twice.  Signals a broken step invariant, not bad input."""


class SoulAnswers(BaseModel):
    """Answer slots, populated incrementally as questions are answered."""

    name: str | None = None
    personality: str | None = None
    core_values: str | None = None
    tone: str | None = None
    backstory: str | None = None
    signature: str | None = None

    def get(self, field_key: FieldKey) -> str | None:
        return getattr(self, field_key)

    def set(self, field_key: FieldKey, value: str) -> None:
        """Fill a slot.  Raises ``AnswerAlreadyRecordedError`` if it was already filled."""
        if getattr(self, field_key) is not None:
            raise AnswerAlreadyRecordedError(f"Answer already recorded: field={field_key}")
        setattr(self, field_key, value)

    def to_answer_set(self) -> "AnswerSet":
        """Freeze into an ``AnswerSet``.  Raises ``ValueError`` if any slot is empty."""
        return AnswerSet.model_validate(self.model_dump())


class AnswerSet(BaseModel):
    """Complete, immutable answer record consumed by the document renderer."""

    model_config = ConfigDict(frozen=True)

    name: str
    personality: str
    core_values: str
    tone: str
    backstory: str
    signature: str


class SoulSession(BaseModel):
    """One user's questionnaire run, keyed by an opaque ``session_id``.

    ``current_step`` is 1-based.  Values ``1..total_steps`` mean "awaiting the
    answer to this question"; ``total_steps + 1`` means complete.
    ``created_at`` is set once and anchors expiry.
    """

    session_id: str
    current_step: int = 1
    answers: SoulAnswers = Field(default_factory=SoulAnswers)
    created_at: datetime

    def is_complete(self, total_steps: int) -> bool:
        return self.current_step > total_steps

    def remaining_steps(self, total_steps: int) -> int:
        return max(total_steps - self.current_step + 1, 0)


class SessionInfo(BaseModel):
    """Public view of session state for API consumers."""

    session_id: str
    current_step: int
    total_steps: int
    is_complete: bool
    created_at: datetime
    expires_at: datetime
