"""Editor views: caret, selection and the active-view capability."""

from abc import ABC, abstractmethod
from typing import Optional

from .buffer import TextBuffer, TextSnapshot


class TextView:
    """A caret and selection over a :class:`TextBuffer`.

    The selection is the pair (anchor, active); it is empty when both are
    equal. The caret follows the active point and may sit in virtual
    space, i.e. ``virtual_spaces`` columns past the end of its line.
    Positions track deletions applied to the buffer.
    """

    def __init__(self, buffer: TextBuffer, caret: int = 0,
                 anchor: Optional[int] = None, virtual_spaces: int = 0):
        self.buffer = buffer
        self._anchor = 0
        self._active = 0
        self._virtual_spaces = 0
        if anchor is None or anchor == caret:
            self.move_caret(caret, virtual_spaces)
        else:
            self.select(anchor, caret)
        buffer.add_change_listener(self._on_delete)
        self._tracking = True

    @property
    def snapshot(self) -> TextSnapshot:
        return self.buffer.current_snapshot

    @property
    def anchor_position(self) -> int:
        return self._anchor

    @property
    def active_position(self) -> int:
        return self._active

    @property
    def caret_position(self) -> int:
        return self._active

    @property
    def virtual_spaces(self) -> int:
        return self._virtual_spaces

    @property
    def in_virtual_space(self) -> bool:
        return self._virtual_spaces > 0

    @property
    def has_selection(self) -> bool:
        return self._anchor != self._active

    def _check_position(self, position: int):
        length = len(self.snapshot)
        if position < 0 or position > length:
            raise ValueError(f"Position {position} outside buffer of length {length}")

    def move_caret(self, position: int, virtual_spaces: int = 0):
        """Move the caret, collapsing any selection."""
        self._check_position(position)
        if virtual_spaces < 0:
            raise ValueError("virtual_spaces must not be negative")
        if virtual_spaces and self.snapshot.get_line_from_position(position).end != position:
            raise ValueError("Virtual space is only allowed at the end of a line")
        self._anchor = self._active = position
        self._virtual_spaces = virtual_spaces

    def select(self, anchor: int, active: int):
        self._check_position(anchor)
        self._check_position(active)
        self._anchor = anchor
        self._active = active
        self._virtual_spaces = 0

    def clear_selection(self):
        self._anchor = self._active

    def close(self):
        """Stop tracking buffer changes. Safe to call more than once."""
        if self._tracking:
            self.buffer.remove_change_listener(self._on_delete)
            self._tracking = False

    def __enter__(self) -> "TextView":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def _on_delete(self, offset: int, length: int):
        end = offset + length
        anchor, active = self._anchor, self._active
        self._anchor = self._shift(anchor, offset, end, length)
        self._active = self._shift(active, offset, end, length)
        if self._active != active:
            self._virtual_spaces = 0

    @staticmethod
    def _shift(position: int, offset: int, end: int, length: int) -> int:
        if position >= end:
            return position - length
        if position > offset:
            return offset
        return position


class ViewProvider(ABC):
    """Supplies the editor view that commands act on."""

    @abstractmethod
    def get_current_view(self) -> Optional[TextView]:
        """Return the active view, or None if no editor is active."""
        pass


class SingleViewProvider(ViewProvider):
    """Provider holding at most one view; ``view`` may be reassigned."""

    def __init__(self, view: Optional[TextView] = None):
        self.view = view

    def get_current_view(self) -> Optional[TextView]:
        return self.view
