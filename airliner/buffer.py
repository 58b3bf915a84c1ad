"""In-memory text buffer with immutable snapshots and atomic edits.

This is the host side of the editing commands: a buffer hands out
snapshots (frozen views of its text at one version) and accepts edits
created against a snapshot. An edit collects deletions and applies them
all at once, or not at all.
"""

import bisect
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple


_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class AirlinerError(Exception):
    """Base class for errors raised by the editing layer."""


class ReadOnlyBufferError(AirlinerError):
    """An edit was applied to a read-only buffer."""


class StaleSnapshotError(AirlinerError):
    """An edit was applied against a snapshot that is no longer current."""


@dataclass(frozen=True)
class SnapshotLine:
    """A line of a snapshot.

    ``end`` is the position before the line break characters,
    ``end_including_line_break`` the position after them.
    """
    number: int
    start: int
    end: int
    end_including_line_break: int

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def line_break_length(self) -> int:
        return self.end_including_line_break - self.end


class TextSnapshot:
    """Immutable text of a buffer at a given version."""

    def __init__(self, buffer: "TextBuffer", text: str, version: int):
        self._buffer = buffer
        self._text = text
        self._version = version
        self._lines: Optional[List[SnapshotLine]] = None
        self._line_starts: Optional[List[int]] = None

    @property
    def buffer(self) -> "TextBuffer":
        return self._buffer

    @property
    def text(self) -> str:
        return self._text

    @property
    def version(self) -> int:
        return self._version

    def __len__(self) -> int:
        return len(self._text)

    def get_text(self, start: int = 0, length: Optional[int] = None) -> str:
        """Return ``length`` characters starting at ``start``.

        Raises:
            ValueError: If the range does not lie within the snapshot.
        """
        if length is None:
            length = len(self._text) - start
        self._check_range(start, length)
        return self._text[start:start + length]

    def char_at(self, position: int) -> str:
        return self.get_text(position, 1)

    def _check_range(self, start: int, length: int):
        if start < 0 or length < 0 or start + length > len(self._text):
            raise ValueError(
                f"Span [{start}, {start + length}) outside snapshot of length {len(self._text)}"
            )

    def _build_lines(self):
        lines = []
        start = 0
        for match in _LINE_BREAK.finditer(self._text):
            lines.append(SnapshotLine(len(lines), start, match.start(), match.end()))
            start = match.end()
        # The last line never has a line break (it may be empty)
        lines.append(SnapshotLine(len(lines), start, len(self._text), len(self._text)))
        self._lines = lines
        self._line_starts = [line.start for line in lines]

    @property
    def line_count(self) -> int:
        if self._lines is None:
            self._build_lines()
        return len(self._lines)

    def get_line(self, number: int) -> SnapshotLine:
        if self._lines is None:
            self._build_lines()
        return self._lines[number]

    def get_line_from_position(self, position: int) -> SnapshotLine:
        """Return the line containing ``position``.

        Positions between the characters of a line break belong to the
        line that the break terminates; ``len(snapshot)`` belongs to the
        last line.
        """
        if position < 0 or position > len(self._text):
            raise ValueError(f"Position {position} outside snapshot of length {len(self._text)}")
        if self._lines is None:
            self._build_lines()
        index = bisect.bisect_right(self._line_starts, position) - 1
        return self._lines[index]


class TextEdit:
    """A set of deletions applied to a buffer as one atomic change.

    Use as a context manager; an edit that was not applied when the
    block exits is discarded::

        with buffer.create_edit() as edit:
            edit.delete(10, 3)
            edit.apply()
    """

    def __init__(self, buffer: "TextBuffer", snapshot: TextSnapshot):
        self._buffer = buffer
        self._snapshot = snapshot
        self._deletions: List[Tuple[int, int]] = []
        self._closed = False

    @property
    def snapshot(self) -> TextSnapshot:
        return self._snapshot

    @property
    def has_changes(self) -> bool:
        return bool(self._deletions)

    def delete(self, offset: int, length: int):
        """Queue deletion of ``length`` characters at ``offset``.

        Offsets refer to the snapshot the edit was created from.
        Zero-length deletions are ignored.
        """
        if self._closed:
            raise AirlinerError("Edit has already been applied or canceled")
        self._snapshot._check_range(offset, length)
        if length == 0:
            return
        for start, other_length in self._deletions:
            if offset < start + other_length and start < offset + length:
                raise ValueError(f"Deletion at {offset} overlaps an earlier deletion at {start}")
        self._deletions.append((offset, length))

    def apply(self) -> TextSnapshot:
        """Apply all queued deletions and return the resulting snapshot."""
        if self._closed:
            raise AirlinerError("Edit has already been applied or canceled")
        self._closed = True
        return self._buffer._apply(self._snapshot, self._deletions)

    def cancel(self):
        self._closed = True
        self._deletions = []

    def __enter__(self) -> "TextEdit":
        return self

    def __exit__(self, exc_type, exc, tb):
        if not self._closed:
            self.cancel()
        return False


ChangeListener = Callable[[int, int], None]


class TextBuffer:
    """Mutable text storage. Each applied edit bumps the version."""

    def __init__(self, text: str = "", read_only: bool = False):
        self.read_only = read_only
        self._version = 0
        self._snapshot = TextSnapshot(self, text, self._version)
        self._listeners: List[ChangeListener] = []

    @property
    def current_snapshot(self) -> TextSnapshot:
        return self._snapshot

    @property
    def text(self) -> str:
        return self._snapshot.text

    @property
    def version(self) -> int:
        return self._version

    def add_change_listener(self, listener: ChangeListener):
        """Register ``listener(offset, length)``, called for each deleted range."""
        self._listeners.append(listener)

    def remove_change_listener(self, listener: ChangeListener):
        self._listeners.remove(listener)

    def create_edit(self, snapshot: Optional[TextSnapshot] = None) -> TextEdit:
        if snapshot is None:
            snapshot = self._snapshot
        if snapshot.buffer is not self:
            raise ValueError("Snapshot belongs to a different buffer")
        return TextEdit(self, snapshot)

    def _apply(self, snapshot: TextSnapshot, deletions: List[Tuple[int, int]]) -> TextSnapshot:
        if self.read_only:
            raise ReadOnlyBufferError("Buffer is read-only")
        if snapshot.version != self._version:
            raise StaleSnapshotError(
                f"Edit created against version {snapshot.version}, buffer is at {self._version}"
            )
        if not deletions:
            return self._snapshot

        # Highest offset first so earlier offsets stay valid
        ordered = sorted(deletions, reverse=True)
        text = snapshot.text
        for offset, length in ordered:
            text = text[:offset] + text[offset + length:]

        self._version += 1
        self._snapshot = TextSnapshot(self, text, self._version)
        for offset, length in ordered:
            for listener in list(self._listeners):
                listener(offset, length)
        return self._snapshot
