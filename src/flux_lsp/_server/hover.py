"""Hover mixin for providing hover information functionality."""

from __future__ import annotations

from lsprotocol.types import Hover, MarkupContent, MarkupKind, Position, Range

from flux_lsp._analyzer import detect_tag_context
from flux_lsp.completion import build_component_documentation, build_prop_documentation
from flux_lsp.constants import ATTRIBUTE_SIGILS, FLUX_NAMESPACE
from flux_lsp.models import InsideTag

from .base import LSPServerBase
from .utils import find_word_bounds, get_line, position_to_offset

_FLUX_TAG_PREFIX = f"{FLUX_NAMESPACE}:"


class HoverMixin(LSPServerBase):
    """Provides hover documentation for Flux tags and their props."""

    def _get_hover(self, source: str, position: Position) -> Hover | None:
        """Get hover information for the word under the cursor."""
        line = get_line(source, position.line)
        bounds = find_word_bounds(line, position.character)
        if bounds is None:
            return None

        start, end = bounds
        word = line[start:end]
        word_offset = position_to_offset(source, Position(line=position.line, character=start))

        hover_info = self._get_tag_hover_info(word) or self._get_prop_hover_info(
            source, word_offset, word
        )
        if not hover_info:
            return None

        return Hover(
            contents=MarkupContent(kind=MarkupKind.Markdown, value=hover_info),
            range=Range(
                start=Position(line=position.line, character=start),
                end=Position(line=position.line, character=end),
            ),
        )

    def _get_tag_hover_info(self, word: str) -> str | None:
        """Hover for a tag name like ``flux:button``."""
        if not word.lower().startswith(_FLUX_TAG_PREFIX):
            return None

        component = self.catalog.lookup(word[len(_FLUX_TAG_PREFIX) :])
        if component is None:
            return None

        doc = build_component_documentation(component)
        return f"**<{component.tag_name}>**\n\n{doc}".rstrip()

    def _get_prop_hover_info(self, source: str, word_offset: int, word: str) -> str | None:
        """Hover for a prop name inside an open Flux tag."""
        context = detect_tag_context(source, word_offset)
        if not isinstance(context, InsideTag):
            return None

        component = self.catalog.lookup(context.component_name)
        if component is None:
            return None

        prop = component.get_prop(word.lstrip("".join(ATTRIBUTE_SIGILS)))
        if prop is None:
            return None

        header = f"**{prop.name}**: `{prop.type}`"
        if prop.required:
            header += " *(required)*"
        doc = build_prop_documentation(prop)
        return f"{header}\n\n{doc}".rstrip() + f"\n\nProp of `<{component.tag_name}>`"
