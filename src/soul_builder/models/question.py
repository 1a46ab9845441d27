"""Question model: one entry of the fixed, ordered questionnaire.

Question sets are loaded from ``locales/<locale>.yaml`` by
:class:`~soul_builder.question_set.QuestionSet`.  Each question fills exactly one
slot of :class:`~soul_builder.models.session.SoulAnswers`; ``field_key`` is
restricted to those slot names so a typo in the YAML fails at load time.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Answer slots, in questionnaire order.
FieldKey = Literal["name", "personality", "core_values", "tone", "backstory", "signature"]


class Question(BaseModel):
    """A single prompt in the questionnaire.

    ``optional`` questions accept the skip sentinel (and an empty answer),
    which is stored as an empty string.
    """

    model_config = ConfigDict(frozen=True)

    position: int = Field(ge=1)
    field_key: FieldKey
    prompt: str
    optional: bool = False


class Messages(BaseModel):
    """Localized user-facing message templates.

    Values are ``str.format`` templates; the placeholders each one accepts are
    fixed by the engine (``total``, ``step``, ``question``, ``name``,
    ``remaining``).
    """

    model_config = ConfigDict(frozen=True)

    welcome: str
    already_active: str
    already_active_complete: str
    no_session: str
    already_complete: str
    answer_required: str
    answer_saved: str
    complete: str
    not_complete: str
    generated: str
    export_ready: str
    no_signature: str
    question_label: str
