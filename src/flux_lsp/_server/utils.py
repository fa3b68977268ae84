"""Position and word helpers shared by the LSP features."""

from __future__ import annotations

import re

from lsprotocol.types import Position

_re_line_break = re.compile(r"\r\n|\r|\n")
_re_word_char = re.compile(r"[\w\-:.@]")
_re_partial_attribute = re.compile(r"[:@]?[\w\-:.]*$")


def _line_bounds(source: str, line: int) -> tuple[int, int] | None:
    """Start and end offsets of a line (terminator excluded), or None if out of range."""
    if line < 0:
        return None

    line_start = 0
    for _ in range(line):
        match = _re_line_break.search(source, line_start)
        if not match:
            return None
        line_start = match.end()

    match = _re_line_break.search(source, line_start)
    line_end = match.start() if match else len(source)
    return line_start, line_end


def position_to_offset(source: str, position: Position) -> int:
    """Convert an LSP position (line, character) to an offset into ``source``.

    Positions past the end of a line or of the document are clamped.
    """
    bounds = _line_bounds(source, position.line)
    if bounds is None:
        return len(source)

    line_start, line_end = bounds
    return line_start + min(position.character, line_end - line_start)


def get_line(source: str, line: int) -> str:
    """Get a line of ``source`` without its line terminator, or "" if out of range."""
    bounds = _line_bounds(source, line)
    if bounds is None:
        return ""
    return source[bounds[0] : bounds[1]]


def find_word_bounds(line: str, character: int) -> tuple[int, int] | None:
    """Find the markup word (tag or attribute name) around ``character``."""
    if character > len(line):
        return None

    start = character
    end = character
    while start > 0 and _re_word_char.match(line[start - 1]):
        start -= 1
    while end < len(line) and _re_word_char.match(line[end]):
        end += 1

    if start == end:
        return None
    return start, end


def partial_attribute_length(line_prefix: str, label: str) -> int:
    """Number of characters before the cursor that an attribute completion replaces.

    A leading ``:``/``@`` typed by the user is kept unless the completion
    label itself starts with it, so ``:var`` completes to ``:variant``.
    """
    match = _re_partial_attribute.search(line_prefix)
    typed = match.group(0) if match else ""
    if typed and typed[0] in ":@" and not label.startswith(typed[0]):
        return len(typed) - 1
    return len(typed)
