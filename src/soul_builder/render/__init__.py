"""Document rendering for completed questionnaires."""

from soul_builder.render.renderer import DEFAULT_NO_SIGNATURE, DocumentRenderer

__all__ = ["DEFAULT_NO_SIGNATURE", "DocumentRenderer"]
