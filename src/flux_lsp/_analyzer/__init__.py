"""
Analyzer package - text analysis used by the completion engine.

Contains the tag context detector and the attribute extractor. Both work on
raw document text and never raise for malformed markup.
"""

from __future__ import annotations

from .attribute_extractor import extract_attributes
from .tag_context import detect_tag_context, find_tag_start, get_line_prefix

__all__ = [
    "detect_tag_context",
    "extract_attributes",
    "find_tag_start",
    "get_line_prefix",
]
