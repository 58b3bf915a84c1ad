"""Airliner - whitespace-aware editing commands: hungry backspace and cut to EOL."""

__version__ = "0.1.0"

from .buffer import (
    AirlinerError,
    ReadOnlyBufferError,
    StaleSnapshotError,
    TextBuffer,
    TextSnapshot,
)
from .clipboard import Clipboard, MemoryClipboard, SystemClipboard
from .commands import CommandRegistry, EditorService
from .context import DocumentContext, Selection, TextSpan, get_document_context
from .cut_to_eol import CutToEol, compute_kill_span
from .hungry_backspace import HungryBackspace, compute_backspace_span
from .kill_timer import KillAccrualTimer
from .view import SingleViewProvider, TextView, ViewProvider

__all__ = [
    'AirlinerError',
    'ReadOnlyBufferError',
    'StaleSnapshotError',
    'TextBuffer',
    'TextSnapshot',
    'Clipboard',
    'MemoryClipboard',
    'SystemClipboard',
    'CommandRegistry',
    'EditorService',
    'DocumentContext',
    'Selection',
    'TextSpan',
    'get_document_context',
    'CutToEol',
    'compute_kill_span',
    'HungryBackspace',
    'compute_backspace_span',
    'KillAccrualTimer',
    'SingleViewProvider',
    'TextView',
    'ViewProvider',
]
