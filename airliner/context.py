"""Snapshot of the caret, selection and current line of the active view."""

from dataclasses import dataclass, field
from typing import Optional

from .buffer import TextSnapshot
from .view import ViewProvider


@dataclass(frozen=True)
class TextSpan:
    """Half-open range ``[start, end)`` of snapshot offsets."""
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span [{self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class Selection:
    anchor: int
    active: int

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.active

    @property
    def start(self) -> int:
        return min(self.anchor, self.active)

    @property
    def end(self) -> int:
        return max(self.anchor, self.active)

    @property
    def span(self) -> TextSpan:
        return TextSpan(self.start, self.end)


@dataclass(frozen=True)
class DocumentContext:
    """Immutable view state, valid only against ``snapshot``.

    Line offsets describe the line holding the active point.
    ``line_end_offset`` is the position before the line break.
    """
    snapshot: TextSnapshot = field(repr=False, compare=False)
    snapshot_id: int
    anchor_offset: int
    active_offset: int
    line_start_offset: int
    line_end_offset: int
    line_end_including_break: int
    active_virtual_spaces: int = 0

    @property
    def selection(self) -> Selection:
        return Selection(self.anchor_offset, self.active_offset)

    @property
    def has_selection(self) -> bool:
        return self.anchor_offset != self.active_offset

    @property
    def in_virtual_space(self) -> bool:
        return self.active_virtual_spaces > 0

    @property
    def snapshot_length(self) -> int:
        return len(self.snapshot)

    def is_current(self) -> bool:
        """True while the buffer has not changed since the context was built."""
        return self.snapshot.buffer.version == self.snapshot_id

    def get_text(self, span: TextSpan) -> str:
        return self.snapshot.get_text(span.start, span.length)


def get_document_context(provider: ViewProvider) -> Optional[DocumentContext]:
    """Build a context from the provider's active view.

    Returns:
        The context, or None if there is no active view.
    """
    view = provider.get_current_view()
    if view is None:
        return None

    snapshot = view.snapshot
    active = view.active_position
    line = snapshot.get_line_from_position(active)
    return DocumentContext(
        snapshot=snapshot,
        snapshot_id=snapshot.version,
        anchor_offset=view.anchor_position,
        active_offset=active,
        line_start_offset=line.start,
        line_end_offset=line.end,
        line_end_including_break=line.end_including_line_break,
        active_virtual_spaces=view.virtual_spaces,
    )


def delete_span(context: DocumentContext, span: TextSpan) -> TextSnapshot:
    """Delete ``span`` from the context's buffer in one edit.

    Raises whatever the edit raises (read-only buffer, stale snapshot);
    nothing is changed in that case.
    """
    buffer = context.snapshot.buffer
    with buffer.create_edit(context.snapshot) as edit:
        edit.delete(span.start, span.length)
        return edit.apply()
