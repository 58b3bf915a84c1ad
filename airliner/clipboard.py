"""Clipboard access for kills.

The system clipboard is a single global slot; the last writer wins.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import pyperclip

logger = logging.getLogger(__name__)


class Clipboard(ABC):
    """A single-slot text clipboard."""

    @abstractmethod
    def get_text(self) -> Optional[str]:
        """Return the clipboard text, or None if it holds no text."""
        pass

    @abstractmethod
    def set_text(self, text: str) -> None:
        """Replace the clipboard contents with ``text``."""
        pass

    def get_text_or_empty(self) -> str:
        """Clipboard text, with "no text" read as an empty string."""
        return self.get_text() or ""


class SystemClipboard(Clipboard):
    """The operating system clipboard, via pyperclip (plain text only)."""

    def get_text(self) -> Optional[str]:
        try:
            content = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            logger.warning(f"Could not read system clipboard: {e}")
            return None
        return content if content else None

    def set_text(self, text: str) -> None:
        pyperclip.copy(text)


class MemoryClipboard(Clipboard):
    """Process-local clipboard, for headless use and tests."""

    def __init__(self, text: Optional[str] = None):
        self._text = text
        self.write_count = 0

    def get_text(self) -> Optional[str]:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text
        self.write_count += 1
