"""
Tag context detection.
Decides whether the cursor is starting a Flux tag or sitting inside one.
"""

from __future__ import annotations

import re

from flux_lsp.models import InsideTag, NoContext, OpeningTag, TagContext

from .attribute_extractor import extract_attributes

# "<", "<f", "<fl", "<flu", "<flux", "<flux:" and "<flux:partial.name" at end of line
_re_opening_tag = re.compile(r"<(?:f(?:l(?:u(?:x(?::([a-z0-9.\-]*))?)?)?)?)?$", re.IGNORECASE)
_re_flux_tag_start = re.compile(r"^<flux:([a-z0-9.\-]+)\s+", re.IGNORECASE)


def _clamp_offset(text: str, offset: int) -> int:
    return max(0, min(offset, len(text)))


def get_line_prefix(text: str, offset: int) -> str:
    """Get the text between the start of the cursor's line and the cursor."""
    offset = _clamp_offset(text, offset)
    line_start = max(text.rfind("\n", 0, offset), text.rfind("\r", 0, offset)) + 1
    return text[line_start:offset]


def find_tag_start(text: str, offset: int) -> int | None:
    """Scan backwards from the cursor for the ``<`` opening the enclosing tag.

    Returns None when a ``>`` is found first (the cursor is between tags) or
    when the start of the document is reached.
    """
    for i in range(_clamp_offset(text, offset) - 1, -1, -1):
        char = text[i]
        if char == "<":
            return i
        if char == ">":
            return None
    return None


def detect_tag_context(text: str, offset: int) -> TagContext:
    """Classify the cursor position for completion.

    Args:
        text: Full document text.
        offset: Cursor offset into ``text``. Out-of-range values are clamped.

    Returns:
        ``OpeningTag`` when a component tag is being typed, ``InsideTag`` when
        the cursor is inside an open ``<flux:...`` tag after its name, and
        ``NoContext`` otherwise.
    """
    offset = _clamp_offset(text, offset)

    opening_match = _re_opening_tag.search(get_line_prefix(text, offset))
    if opening_match:
        return OpeningTag(typed_prefix=opening_match.group(1) or "")

    tag_start = find_tag_start(text, offset)
    if tag_start is None:
        return NoContext()

    tag_text = text[tag_start:offset]
    tag_match = _re_flux_tag_start.match(tag_text)
    if not tag_match:
        return NoContext()

    return InsideTag(
        component_name=tag_match.group(1),
        existing_attributes=extract_attributes(tag_text),
    )
