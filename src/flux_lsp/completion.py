"""Completion engine: turns a cursor position into ranked Flux suggestions."""

from __future__ import annotations

import logging
import re
from collections.abc import Set

from ._analyzer import detect_tag_context
from .catalog import Catalog
from .config import DEFAULT_SETTINGS, Settings
from .constants import ATTRIBUTE_SIGILS, INTEROP_ATTRIBUTES, MAX_DOCUMENTED_PROPS
from .models import (
    ComponentDefinition,
    InsideTag,
    NoContext,
    OpeningTag,
    PropDefinition,
    Suggestion,
    SuggestionKind,
    TagContext,
)

logger = logging.getLogger(__name__)

_re_snippet_special = re.compile(r"([$}\\])")
_re_choice_special = re.compile(r"([$}\\,|])")


def escape_placeholder(text: str) -> str:
    """Escape text for use inside a ``${1:...}`` snippet placeholder."""
    return _re_snippet_special.sub(r"\\\1", text)


def escape_choice(text: str) -> str:
    """Escape text for use as an option of a ``${1|...|}`` snippet choice."""
    return _re_choice_special.sub(r"\\\1", text)


def _bare_attribute_name(name: str) -> str:
    """Lower-cased attribute name without a leading ``:``/``@`` sigil."""
    name = name.lower()
    if name.startswith(ATTRIBUTE_SIGILS):
        return name[1:]
    return name


def _by_sort_key(suggestion: Suggestion) -> str:
    return suggestion.sort_key


class CompletionEngine:
    """Produces completion suggestions for Flux component tags.

    The engine holds a reference to a loaded, read-only :class:`Catalog` and
    the current :class:`Settings`. Every public method is total: odd input
    results in fewer (or zero) suggestions rather than an exception.
    """

    def __init__(self, catalog: Catalog, settings: Settings = DEFAULT_SETTINGS):
        self.catalog = catalog
        self.settings = settings

    def complete(self, text: str, offset: int) -> list[Suggestion]:
        """Get suggestions for the cursor at ``offset`` in ``text``."""
        if not self.settings.enable:
            return []

        context = detect_tag_context(text, offset)
        return self.suggestions_for_context(context)

    def suggestions_for_context(self, context: TagContext) -> list[Suggestion]:
        """Dispatch on the detected tag context."""
        if isinstance(context, OpeningTag):
            return self.component_suggestions(context.typed_prefix)
        if isinstance(context, InsideTag):
            return self.attribute_suggestions(
                context.component_name, context.existing_attributes
            )
        if isinstance(context, NoContext):
            return []
        raise TypeError(f"Unknown tag context: {context!r}")

    # Component names

    def component_suggestions(self, typed_prefix: str = "") -> list[Suggestion]:
        """Suggest ``flux:*`` tags whose name starts with ``typed_prefix``."""
        prefix = typed_prefix.lower()
        include_pro = self.settings.include_pro_components

        suggestions = [
            self._build_component_suggestion(component)
            for component in self.catalog
            if component.name.lower().startswith(prefix) and (include_pro or not component.is_pro)
        ]
        logger.debug(f"{len(suggestions)} component suggestions for prefix {typed_prefix!r}")
        return sorted(suggestions, key=_by_sort_key)

    def _build_component_suggestion(self, component: ComponentDefinition) -> Suggestion:
        tag_name = component.tag_name
        if component.self_closing:
            insert_text = f"{tag_name} $0/>"
        else:
            insert_text = f"{tag_name}$0></{tag_name}>"

        return Suggestion(
            label=tag_name,
            kind=SuggestionKind.COMPONENT,
            detail="Flux Pro Component" if component.is_pro else "Flux Component",
            documentation=build_component_documentation(component),
            insert_text=insert_text,
            sort_key=("1" if component.is_pro else "0") + component.name,
            filter_text=f"{tag_name} {component.name}",
        )

    # Attributes

    def attribute_suggestions(
        self, component_name: str, existing_attributes: Set[str] = frozenset()
    ) -> list[Suggestion]:
        """Suggest props of ``component_name`` plus Livewire/Alpine attributes.

        Attributes already present in the tag (compared lower-cased, without
        sigils) are left out. Unknown components get no suggestions.
        """
        component = self.catalog.lookup(component_name)
        if component is None:
            logger.debug(f"No catalog entry for component {component_name!r}")
            return []

        existing = {_bare_attribute_name(name) for name in existing_attributes}

        suggestions = [
            self._build_prop_suggestion(prop)
            for prop in component.props
            if prop.name.lower() not in existing
        ]
        suggestions.extend(
            self._build_interop_suggestion(name, description)
            for name, description in INTEROP_ATTRIBUTES
            if _bare_attribute_name(name) not in existing
        )
        return sorted(suggestions, key=_by_sort_key)

    def _build_prop_suggestion(self, prop: PropDefinition) -> Suggestion:
        return Suggestion(
            label=prop.name,
            kind=SuggestionKind.ATTRIBUTE,
            detail=build_prop_detail(prop),
            documentation=build_prop_documentation(prop),
            insert_text=build_prop_snippet(prop),
            sort_key=("0" if prop.required else "1") + prop.name,
        )

    def _build_interop_suggestion(self, name: str, description: str) -> Suggestion:
        return Suggestion(
            label=name,
            kind=SuggestionKind.ATTRIBUTE,
            detail="Livewire/Alpine attribute",
            documentation=description,
            insert_text=f'{name}="$1"',
            sort_key="2" + name,
        )


def build_prop_snippet(prop: PropDefinition) -> str:
    """Build the snippet inserted for a prop, based on its type."""
    if prop.type == "boolean":
        # Boolean props are written without a value
        return prop.name

    if prop.values:
        choices = ",".join(escape_choice(value) for value in prop.values)
        return f'{prop.name}="${{1|{choices}|}}"'

    return f'{prop.name}="${{1:{escape_placeholder(prop.unquoted_default)}}}"'


def build_prop_detail(prop: PropDefinition) -> str:
    """Short one-line summary: type, required marker and default."""
    detail = prop.type or "any"
    if prop.required:
        detail += " (required)"
    if prop.has_default:
        detail += f" = {prop.default}"
    return detail


def build_prop_documentation(prop: PropDefinition) -> str:
    """Markdown documentation for a prop."""
    doc = ""

    if prop.description:
        doc += prop.description + "\n\n"

    if prop.values:
        doc += "**Allowed values:** " + ", ".join(f"`{v}`" for v in prop.values) + "\n"

    if prop.has_default:
        doc += f"**Default:** `{prop.default}`\n"

    return doc


def build_component_documentation(component: ComponentDefinition) -> str:
    """Markdown documentation for a component, listing its first few props."""
    doc = ""

    if component.description:
        doc += component.description + "\n\n"

    if component.props:
        doc += "**Props:**\n"
        for prop in component.props[:MAX_DOCUMENTED_PROPS]:
            doc += f"- `{prop.name}`"
            if prop.type:
                doc += f": {prop.type}"
            if prop.required:
                doc += " *(required)*"
            doc += "\n"
        remaining = len(component.props) - MAX_DOCUMENTED_PROPS
        if remaining > 0:
            doc += f"- *...and {remaining} more*\n"

    if component.is_pro:
        doc += "\n*Requires Flux Pro*"

    return doc
