"""QuestionSet: loads the fixed questionnaire from ``locales/<locale>.yaml``.

The question list is the single source of truth for the flow engine.  It is
loaded once at startup and never changes for the lifetime of the process.

Usage::

    questions = QuestionSet(locale="en")
    questions.load()

    first = questions.question_at(1)
    questions.total_steps            # 6
    questions.format("answer_saved", step=2, total=6)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from soul_builder.constants import DEFAULT_LOCALE, SUPPORTED_LOCALES
from soul_builder.models.question import Messages, Question
from soul_builder.models.session import SoulAnswers

logger = logging.getLogger(__name__)


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


class QuestionSet:
    """Ordered, immutable question list plus the localized message catalog.

    Attributes populated after :meth:`load`:

        questions : tuple[Question, ...] in position order
        messages  : Messages catalog for the locale

    Args:
        locale: which ``locales/<locale>.yaml`` to read (default from
            ``SOUL_BUILDER_LOCALE``, falling back to ``en``)
        locale_dir: optional override for the directory holding the YAML
            files; defaults to ``locales/`` beside this module
    """

    def __init__(
        self,
        locale: str | None = None,
        locale_dir: str | Path | None = None,
    ) -> None:
        self.locale = locale or DEFAULT_LOCALE
        if locale_dir is None:
            if self.locale not in SUPPORTED_LOCALES:
                raise ValueError(
                    f"Unsupported locale: {self.locale} "
                    f"(expected one of {sorted(SUPPORTED_LOCALES)})"
                )
            locale_dir = Path(__file__).parent / "locales"
        self._base = Path(locale_dir)

        # Populated by load()
        self.questions: tuple[Question, ...] = ()
        self.messages: Messages | None = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse and validate the locale file.

        Raises ``FileNotFoundError`` if the file is missing and ``ValueError``
        if the question list is malformed.
        """
        raw = load_yaml(self._base / f"{self.locale}.yaml")
        questions = tuple(Question(**q) for q in raw.get("questions") or [])
        self._validate(questions)

        self.questions = questions
        self.messages = Messages(**raw["messages"])
        logger.info(
            "QuestionSet loaded: locale=%s, %d questions (%d optional)",
            self.locale,
            len(self.questions),
            sum(1 for q in self.questions if q.optional),
        )

    @staticmethod
    def _validate(questions: tuple[Question, ...]) -> None:
        """Positions must be 1..N in order; field keys must cover every slot once."""
        if not questions:
            raise ValueError("Question set is empty")

        positions = [q.position for q in questions]
        if positions != list(range(1, len(questions) + 1)):
            raise ValueError(f"Question positions must run 1..N in order, got {positions}")

        keys = [q.field_key for q in questions]
        slots = list(SoulAnswers.model_fields)
        if sorted(keys) != sorted(slots):
            raise ValueError(
                f"Question field keys {keys} do not match answer slots {slots}"
            )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def total_steps(self) -> int:
        return len(self.questions)

    def question_at(self, step: int) -> Question | None:
        """Return the question for a 1-based step, or ``None`` past the end."""
        if 1 <= step <= len(self.questions):
            return self.questions[step - 1]
        return None

    def format(self, key: str, **kwargs: Any) -> str:
        """Render a message template from the catalog."""
        if self.messages is None:
            raise RuntimeError("QuestionSet.load() has not been called")
        return getattr(self.messages, key).format(**kwargs)
