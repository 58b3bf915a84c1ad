"""Airliner CLI entry point.

Applies one editing command to a file, as if the caret were at OFFSET
(with an optional selection anchor), and writes the file back::

    python -m airliner [--verbose] COMMAND FILE OFFSET [ANCHOR]
    python -m airliner --version
"""

from __future__ import annotations

import logging
import os
import sys
import tempfile
from typing import Optional

import pyperclip

from . import __version__
from .buffer import AirlinerError, TextBuffer
from .commands import CommandRegistry, EditorService
from .view import SingleViewProvider, TextView

USAGE = "usage: python -m airliner [--verbose] COMMAND FILE OFFSET [ANCHOR]"


def load_document(filename: str) -> str:
    # newline='' keeps "\r\n" and "\r" intact
    with open(filename, 'r', encoding='utf-8', newline='') as f:
        return f.read()


def save_document(filename: str, text: str) -> None:
    """Write ``text`` to ``filename`` atomically (temp file + replace)."""
    dir_name = os.path.dirname(filename) or '.'
    suffix = os.path.splitext(filename)[1]
    with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', newline='',
                                     dir=dir_name, suffix=suffix,
                                     delete=False) as temp_file:
        temp_filename = temp_file.name
        temp_file.write(text)
        temp_file.flush()
        os.fsync(temp_file.fileno())
    try:
        os.replace(temp_filename, filename)
    except OSError:
        os.remove(temp_filename)
        raise


def _usage_error(message: Optional[str] = None) -> int:
    if message:
        print(f"error: {message}", file=sys.stderr)
    print(USAGE, file=sys.stderr)
    print(f"commands: {', '.join(CommandRegistry().names())}", file=sys.stderr)
    return 2


def main(argv: Optional[list[str]] = None) -> int:
    # Small arg parsing, in the manner of the rest of the CLI
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in ("--version", "-V"):
        print(__version__)
        return 0

    verbose = False
    if args and args[0] in ("--verbose", "-v"):
        verbose = True
        args = args[1:]
    if len(args) not in (3, 4):
        return _usage_error()

    command, filename = args[0], args[1]
    try:
        offsets = [int(a) for a in args[2:]]
    except ValueError:
        return _usage_error("OFFSET and ANCHOR must be integers")
    offset = offsets[0]
    anchor = offsets[1] if len(offsets) > 1 else None

    if verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")

    try:
        text = load_document(filename)
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: could not read {filename}: {e}", file=sys.stderr)
        return 1

    buffer = TextBuffer(text)
    try:
        view = TextView(buffer, caret=offset, anchor=anchor)
    except ValueError as e:
        return _usage_error(str(e))

    with view, EditorService.from_settings(SingleViewProvider(view)) as service:
        try:
            service.registry.get(command)
        except KeyError:
            return _usage_error(f"unknown command {command!r}")
        try:
            service.run(command)
        except (AirlinerError, pyperclip.PyperclipException) as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
        caret = view.caret_position

    if buffer.text != text:
        try:
            save_document(filename, buffer.text)
        except OSError as e:
            print(f"error: could not write {filename}: {e}", file=sys.stderr)
            return 1
    print(caret)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
