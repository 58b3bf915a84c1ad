"""Whitespace classification used by the editing commands."""

import re
from typing import Optional

from .constants import AirlinerConstants

# \s minus the ASCII information separators \x1c-\x1f, which str.isspace()
# accepts but editors treat as content
_WS = r"[^\S\x1c-\x1f]"
_NON_WS = r"[\S\x1c-\x1f]"

_WHITESPACE = re.compile(rf"^{_WS}+\Z")
# Lazy prefix so the group captures the whole trailing run
_TRAILING_WHITESPACE = re.compile(rf"^.*?({_WS}+)\Z", re.DOTALL)
_LEADING_WHITESPACE_BEFORE_CONTENT = re.compile(rf"^({_WS}+){_NON_WS}")


def is_whitespace(text: str) -> bool:
    """True if ``text`` is non-empty and consists only of whitespace."""
    return bool(_WHITESPACE.match(text))


def is_line_terminator(char: str) -> bool:
    return len(char) == 1 and char in AirlinerConstants.LINE_TERMINATOR_CHARS


def is_hungry_char(char: str) -> bool:
    """Characters a backspace at column 0 consumes: line breaks and whitespace."""
    return is_line_terminator(char) or is_whitespace(char)


def trailing_whitespace_length(text: str) -> int:
    """Length of the whitespace run ending ``text``, 0 if it ends in content.

    Text made only of whitespace matches as a whole.
    """
    match = _TRAILING_WHITESPACE.match(text)
    if match is None:
        return 0
    return len(match.group(1))


def leading_whitespace_before_content(text: str) -> Optional[str]:
    """Return the leading whitespace of ``text`` if non-whitespace follows it.

    >>> leading_whitespace_before_content("   bar")
    '   '
    >>> leading_whitespace_before_content("   ") is None
    True
    """
    match = _LEADING_WHITESPACE_BEFORE_CONTENT.match(text)
    if match is None:
        return None
    return match.group(1)
