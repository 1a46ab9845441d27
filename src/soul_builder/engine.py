"""SoulBuilderEngine: the question/answer state machine.

States are ``AWAITING_ANSWER(step)`` for ``step`` in ``1..total_steps`` and
``COMPLETE`` (``current_step == total_steps + 1``).  The only transition is
:meth:`SoulBuilderEngine.submit_answer`, which advances exactly one step per
accepted answer.  ``COMPLETE`` is terminal.

Every operation returns a :class:`ToolResult`.  Unknown sessions, empty
answers to required questions, and premature generate/export calls are
reported as ``success=False`` results with an :class:`ErrorCode`; they never
raise and never mutate state.

Usage::

    questions = QuestionSet(locale="en")
    questions.load()
    engine = SoulBuilderEngine(SessionStore(), questions)

    await engine.begin("s1")
    await engine.submit_answer("s1", "Aria")
    ...
    result = await engine.generate("s1")
    result.document
"""

from __future__ import annotations

import logging

from soul_builder.constants import SKIP_SENTINEL
from soul_builder.models.result import ErrorCode, ToolResult
from soul_builder.models.session import SessionInfo, SoulSession
from soul_builder.question_set import QuestionSet
from soul_builder.render import DocumentRenderer
from soul_builder.store import SessionStore

logger = logging.getLogger(__name__)


class SoulBuilderEngine:
    """Drives sessions through the fixed question list.

    Args:
        store: the :class:`SessionStore` holding live sessions
        questions: a loaded :class:`QuestionSet`
        renderer: optional :class:`DocumentRenderer`; by default one is built
            with the question set's "no signature" placeholder
    """

    def __init__(
        self,
        store: SessionStore,
        questions: QuestionSet,
        renderer: DocumentRenderer | None = None,
    ) -> None:
        self._store = store
        self._questions = questions
        if renderer is None:
            renderer = DocumentRenderer(no_signature=questions.format("no_signature"))
        self._renderer = renderer

    @property
    def total_steps(self) -> int:
        return self._questions.total_steps

    # ==================================================================
    # Operations
    # ==================================================================

    async def begin(self, session_id: str) -> ToolResult:
        """Ensure a session exists and report its current question.

        A fresh session gets the welcome message and question 1.  An existing
        session is left untouched and reports the question it is waiting on.
        """
        total = self.total_steps
        existing = self._store.get(session_id)

        if existing is not None:
            if existing.is_complete(total):
                return ToolResult(
                    success=True,
                    message=self._questions.format("already_active_complete", total=total),
                    current_step=existing.current_step,
                    total_steps=total,
                    is_complete=True,
                )
            return ToolResult(
                success=True,
                message=self._questions.format(
                    "already_active", step=existing.current_step, total=total,
                ),
                next_question=self._questions.question_at(existing.current_step).prompt,
                current_step=existing.current_step,
                total_steps=total,
                is_complete=False,
            )

        session = self._store.create(session_id)
        logger.info("Session created: session_id=%s", session_id)
        return ToolResult(
            success=True,
            message=self._questions.format("welcome", total=total),
            next_question=self._questions.question_at(session.current_step).prompt,
            current_step=session.current_step,
            total_steps=total,
            is_complete=False,
        )

    async def submit_answer(self, session_id: str, raw_answer: str | None) -> ToolResult:
        """Validate and store an answer to the current question, then advance."""
        total = self.total_steps
        if self._store.get(session_id) is None:
            return self._no_session()

        async with self._store.lock(session_id):
            # Re-check: the session may have been swept while waiting for the lock
            session = self._store.get(session_id)
            if session is None:
                return self._no_session()

            if session.is_complete(total):
                return ToolResult(
                    success=True,
                    message=self._questions.format("already_complete"),
                    current_step=session.current_step,
                    total_steps=total,
                    is_complete=True,
                    error=ErrorCode.ALREADY_COMPLETE,
                )

            question = self._questions.question_at(session.current_step)
            answer = (raw_answer or "").strip()

            if question.optional and answer.lower() == SKIP_SENTINEL:
                value = ""
            elif not answer and not question.optional:
                logger.debug(
                    "Empty answer rejected: session_id=%s, step=%d",
                    session_id, session.current_step,
                )
                return ToolResult(
                    success=False,
                    message=self._questions.format("answer_required", question=question.prompt),
                    next_question=question.prompt,
                    current_step=session.current_step,
                    total_steps=total,
                    is_complete=False,
                    error=ErrorCode.VALIDATION_REQUIRED,
                )
            else:
                value = answer

            def _record(s: SoulSession) -> None:
                s.answers.set(question.field_key, value)
                s.current_step += 1

            self._store.mutate(session_id, _record)

            if session.is_complete(total):
                logger.info("Session complete: session_id=%s", session_id)
                return ToolResult(
                    success=True,
                    message=self._questions.format(
                        "complete", total=total, name=session.answers.name,
                    ),
                    current_step=session.current_step,
                    total_steps=total,
                    is_complete=True,
                )

            return ToolResult(
                success=True,
                message=self._questions.format(
                    "answer_saved", step=session.current_step, total=total,
                ),
                next_question=self._questions.question_at(session.current_step).prompt,
                current_step=session.current_step,
                total_steps=total,
                is_complete=False,
            )

    async def generate(self, session_id: str) -> ToolResult:
        """Render the SOUL.md for a complete session."""
        session, failure = self._completed_session(session_id)
        if failure is not None:
            return failure

        answers = session.answers.to_answer_set()
        return ToolResult(
            success=True,
            message=self._questions.format("generated", name=answers.name),
            document=self._renderer.render(answers),
            is_complete=True,
        )

    async def export(self, session_id: str) -> ToolResult:
        """Render the SOUL.md for copy/download.  Does not require ``generate`` first."""
        session, failure = self._completed_session(session_id)
        if failure is not None:
            return failure

        return ToolResult(
            success=True,
            message=self._questions.format("export_ready"),
            document=self._renderer.render(session.answers.to_answer_set()),
            is_complete=True,
        )

    # ==================================================================
    # Diagnostics
    # ==================================================================

    def active_session_count(self) -> int:
        return self._store.count()

    def get_session_info(self, session_id: str) -> SessionInfo | None:
        """Public view of a session, or ``None`` if unknown/expired."""
        session = self._store.get(session_id)
        if session is None:
            return None
        return SessionInfo(
            session_id=session.session_id,
            current_step=session.current_step,
            total_steps=self.total_steps,
            is_complete=session.is_complete(self.total_steps),
            created_at=session.created_at,
            expires_at=self._store.expires_at(session),
        )

    # ==================================================================
    # Helpers
    # ==================================================================

    def _no_session(self) -> ToolResult:
        return ToolResult(
            success=False,
            message=self._questions.format("no_session"),
            error=ErrorCode.NO_SESSION,
        )

    def _completed_session(
        self, session_id: str,
    ) -> tuple[SoulSession | None, ToolResult | None]:
        """Return ``(session, None)`` when renderable, else ``(None, failure)``."""
        total = self.total_steps
        session = self._store.get(session_id)
        if session is None:
            return None, self._no_session()

        if not session.is_complete(total):
            return None, ToolResult(
                success=False,
                message=self._questions.format(
                    "not_complete", remaining=session.remaining_steps(total),
                ),
                current_step=session.current_step,
                total_steps=total,
                is_complete=False,
                error=ErrorCode.NOT_COMPLETE,
            )
        return session, None
