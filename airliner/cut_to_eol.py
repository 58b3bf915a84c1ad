"""Cut to end of line, accruing rapid consecutive kills on the clipboard."""

import logging
import threading
from typing import Optional

from .clipboard import Clipboard
from .constants import AirlinerConstants
from .context import DocumentContext, TextSpan, delete_span, get_document_context
from .kill_timer import KillAccrualTimer
from .view import ViewProvider
from .whitespace import is_line_terminator, leading_whitespace_before_content

logger = logging.getLogger(__name__)


def compute_kill_span(context: DocumentContext) -> TextSpan:
    """Return the span a cut-to-EOL removes.

    With a selection this is the selection. Otherwise it is the rest of
    the line, except that leading whitespace followed by content is
    killed alone so the content can be joined to the caret. At the end
    of the line content, up to two line break characters are killed.
    """
    if context.has_selection:
        return context.selection.span

    snapshot = context.snapshot
    active = context.active_offset
    # The caret can sit inside a "\r\n" pair, past line_end_offset
    eol = max(context.line_end_offset, active)
    to_eol = snapshot.get_text(active, eol - active)

    if to_eol:
        leading = leading_whitespace_before_content(to_eol)
        if leading is not None:
            return TextSpan(active, active + len(leading))
        return TextSpan(active, eol)

    end = active
    length = len(snapshot)
    while (end < length
           and end - active < AirlinerConstants.MAX_TERMINATOR_CHARS
           and is_line_terminator(snapshot.char_at(end))):
        end += 1
    return TextSpan(active, end)


class CutToEol:
    """Kills text forward from the caret into the clipboard.

    Kills made while ``timer`` is active are appended to the current
    clipboard text; otherwise they replace it. Cutting a selection always
    replaces the clipboard and leaves the timer untouched. One invocation
    runs at a time: the window check, the delete, the clipboard write and
    the timer re-arm happen under a single lock.
    """

    def __init__(self, provider: ViewProvider, clipboard: Clipboard,
                 timer: Optional[KillAccrualTimer] = None):
        self._provider = provider
        self._clipboard = clipboard
        self.timer = timer if timer is not None else KillAccrualTimer()
        self._lock = threading.Lock()

    def execute(self) -> Optional[str]:
        """Kill and update the clipboard.

        Returns:
            The text written to the clipboard, or None when there is no
            active view.
        """
        with self._lock:
            return self._execute()

    def _execute(self) -> Optional[str]:
        context = get_document_context(self._provider)
        if context is None:
            logger.debug("Cut to EOL: no active view")
            return None

        if context.has_selection:
            return self._cut_selection(context)

        now = self.timer.now()
        accrued = ""
        if self.timer.is_active(now):
            accrued = self._clipboard.get_text_or_empty()
            logger.debug(f"Cut to EOL: accruing onto {len(accrued)} clipboard characters")

        span = compute_kill_span(context)
        killed = context.get_text(span)
        if not span.is_empty:
            delete_span(context, span)

        text = accrued + killed
        self._clipboard.set_text(text)
        self.timer.record_kill(now)
        logger.debug(f"Cut to EOL killed [{span.start}, {span.end})")
        return text

    def _cut_selection(self, context: DocumentContext) -> str:
        span = context.selection.span
        text = context.get_text(span)
        delete_span(context, span)
        self._clipboard.set_text(text)
        logger.debug(f"Cut selection [{span.start}, {span.end})")
        return text
