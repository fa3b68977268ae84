"""Data models for the flux-lsp completion engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .constants import FLUX_NAMESPACE

# Prop types understood by the catalog; anything else is treated as "any"
PROP_TYPES = frozenset({"string", "boolean", "number", "array", "object", "any"})

# Literal used by the catalog asset to mean "no default value"
NO_DEFAULT = "null"


@dataclass(frozen=True)
class PropDefinition:
    """A single prop accepted by a Flux component."""

    name: str
    type: str = "any"
    required: bool = False
    default: str | None = None
    values: tuple[str, ...] = ()
    description: str = ""

    @property
    def has_default(self) -> bool:
        """Whether the prop declares a default value."""
        return self.default is not None

    @property
    def unquoted_default(self) -> str:
        """Default value with quote characters removed, empty when there is none."""
        if self.default is None:
            return ""
        return self.default.replace("'", "").replace('"', "")


@dataclass(frozen=True)
class ComponentDefinition:
    """A Flux component as described by the catalog."""

    name: str
    self_closing: bool = False
    description: str = ""
    is_pro: bool = False
    props: tuple[PropDefinition, ...] = ()

    @property
    def tag_name(self) -> str:
        """Full tag name including the ``flux:`` namespace."""
        return f"{FLUX_NAMESPACE}:{self.name}"

    def get_prop(self, name: str) -> PropDefinition | None:
        """Get a prop by name, ignoring case."""
        lowered = name.lower()
        for prop in self.props:
            if prop.name.lower() == lowered:
                return prop
        return None


@dataclass(frozen=True)
class OpeningTag:
    """Cursor is typing the start of a component tag, e.g. ``<flux:but``."""

    typed_prefix: str = ""


@dataclass(frozen=True)
class InsideTag:
    """Cursor is inside an open component tag, waiting for an attribute."""

    component_name: str
    existing_attributes: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class NoContext:
    """Cursor is not in a position where completions apply."""


TagContext = OpeningTag | InsideTag | NoContext


class SuggestionKind(str, Enum):
    COMPONENT = "component"
    ATTRIBUTE = "attribute"


@dataclass(frozen=True)
class Suggestion:
    """A single completion candidate produced by the engine.

    ``insert_text`` uses snippet syntax (``$0``, ``${1:default}``,
    ``${1|a,b|}``) so it can be handed to an editor as-is.
    """

    label: str
    kind: SuggestionKind
    detail: str
    documentation: str
    insert_text: str
    sort_key: str
    filter_text: str | None = None
