"""Completion mixin for providing autocompletion functionality."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    InsertTextFormat,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    TextEdit,
)

from flux_lsp._analyzer import get_line_prefix
from flux_lsp.models import SuggestionKind

from .base import LSPServerBase
from .utils import partial_attribute_length, position_to_offset

if TYPE_CHECKING:
    from flux_lsp.models import Suggestion

_ITEM_KINDS = {
    SuggestionKind.COMPONENT: CompletionItemKind.Class,
    SuggestionKind.ATTRIBUTE: CompletionItemKind.Property,
}


class CompletionMixin(LSPServerBase):
    """Provides autocompletion functionality for the LSP server."""

    def _get_completion_items(self, source: str, position: Position) -> list[CompletionItem]:
        """Get completion items for the cursor at ``position`` in ``source``."""
        offset = position_to_offset(source, position)
        suggestions = self.engine.complete(source, offset)
        if not suggestions:
            return []

        line_prefix = get_line_prefix(source, offset)
        # Clamped cursor column, in case the client sent a position past the line end
        cursor = Position(line=position.line, character=len(line_prefix))

        return [self._to_completion_item(s, line_prefix, cursor) for s in suggestions]

    def _replaced_length(self, suggestion: Suggestion, line_prefix: str) -> int:
        """How many characters before the cursor the suggestion replaces."""
        if suggestion.kind == SuggestionKind.COMPONENT:
            # Everything typed after "<", e.g. "fl" or "flux:but"
            return len(line_prefix) - line_prefix.rfind("<") - 1
        return partial_attribute_length(line_prefix, suggestion.label)

    def _to_completion_item(
        self, suggestion: Suggestion, line_prefix: str, cursor: Position
    ) -> CompletionItem:
        replace_start = Position(
            line=cursor.line,
            character=cursor.character - self._replaced_length(suggestion, line_prefix),
        )

        return CompletionItem(
            label=suggestion.label,
            kind=_ITEM_KINDS[suggestion.kind],
            detail=suggestion.detail,
            documentation=MarkupContent(kind=MarkupKind.Markdown, value=suggestion.documentation),
            insert_text_format=InsertTextFormat.Snippet,
            text_edit=TextEdit(
                range=Range(start=replace_start, end=cursor),
                new_text=suggestion.insert_text,
            ),
            filter_text=suggestion.filter_text,
            sort_text=suggestion.sort_key,
        )
