"""Hungry backspace: delete a whole run of whitespace before the caret."""

import logging
from typing import Optional

from .context import DocumentContext, TextSpan, delete_span, get_document_context
from .view import ViewProvider
from .whitespace import is_hungry_char, trailing_whitespace_length

logger = logging.getLogger(__name__)


def compute_backspace_span(context: DocumentContext) -> TextSpan:
    """Return the span a hungry backspace deletes.

    - With a selection, the selected text.
    - At the start of a line, every line break and whitespace character
      back to the previous content (or to the start of the document).
    - Mid-line, the whitespace run ending at the caret, or a single
      character if the caret follows content.
    """
    if context.has_selection:
        return context.selection.span

    snapshot = context.snapshot
    position = context.active_offset
    line_start = context.line_start_offset

    if position == line_start:
        start = position
        while start > 0 and is_hungry_char(snapshot.char_at(start - 1)):
            start -= 1
        return TextSpan(start, position)

    before_caret = snapshot.get_text(line_start, position - line_start)
    count = trailing_whitespace_length(before_caret) or 1
    return TextSpan(position - count, position)


class HungryBackspace:
    """Runs hungry backspace against the provider's active view."""

    def __init__(self, provider: ViewProvider):
        self._provider = provider

    def execute(self) -> Optional[TextSpan]:
        """Delete backward from the caret.

        Returns:
            The deleted span in the pre-edit snapshot, or None when there
            is no active view.
        """
        context = get_document_context(self._provider)
        if context is None:
            logger.debug("Hungry backspace: no active view")
            return None

        if not context.has_selection and context.in_virtual_space:
            # Virtual columns are not text; drop them before measuring
            view = self._provider.get_current_view()
            if view is None:
                return None
            view.move_caret(context.active_offset)
            context = get_document_context(self._provider)

        span = compute_backspace_span(context)
        logger.debug(f"Hungry backspace deleting [{span.start}, {span.end})")
        if not span.is_empty:
            delete_span(context, span)
        return span
