"""DocumentRenderer: Jinja2-based SOUL.md renderer.

Loads ``soul.md.jinja2`` from the ``template/`` directory and renders a
complete :class:`AnswerSet` into Markdown.  Rendering is a pure function of
the answer set and the placeholder text chosen at construction: no I/O after
the template is loaded, no clock, no randomness.
"""

from __future__ import annotations

from pathlib import Path

import jinja2

from soul_builder.models.session import AnswerSet

DEFAULT_NO_SIGNATURE = "*No signature defined*"

_TEMPLATE_NAME = "soul.md.jinja2"


class DocumentRenderer:
    """Renders a complete answer set as a SOUL.md document.

    Args:
        no_signature: text rendered in the Signature section when the
            signature answer is empty (skipped or answered blank)
        template_dir: optional override for the template directory.
            Defaults to ``template/`` sibling of this module.
    """

    def __init__(
        self,
        no_signature: str = DEFAULT_NO_SIGNATURE,
        template_dir: Path | None = None,
    ) -> None:
        if template_dir is None:
            template_dir = Path(__file__).parent / "template"
        self._no_signature = no_signature
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            # Markdown output; answers are inserted verbatim
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._template = self._env.get_template(_TEMPLATE_NAME)

    def render(self, answers: AnswerSet) -> str:
        """Render ``answers`` into the SOUL.md text."""
        return self._template.render(answers=answers, no_signature=self._no_signature)
