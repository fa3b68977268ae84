"""Component catalog: the immutable table of Flux component definitions."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Iterator, Mapping
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any

import platformdirs

from .constants import CATALOG_ENV_VAR, CATALOG_FILENAME
from .models import NO_DEFAULT, PROP_TYPES, ComponentDefinition, PropDefinition

logger = logging.getLogger(__name__)


class MalformedCatalogError(ValueError):
    """Raised when the catalog data cannot be turned into component definitions."""


def user_catalog_path() -> Path:
    """Location of the user-generated catalog (written by ``flux-lsp catalog --generate``)."""
    return Path(platformdirs.user_data_dir("flux-lsp", "flux-lsp")) / CATALOG_FILENAME


def _parse_default(value: Any) -> str | None:
    if value is None or value == NO_DEFAULT:
        return None
    if isinstance(value, str):
        return value
    # Structured JSON values are kept in their literal form
    return json.dumps(value)


def _read_text(raw: Mapping[str, Any], key: str, owner: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedCatalogError(f"'{key}' of {owner} must be a string, got {value!r}")
    return value


def _read_values(raw: Mapping[str, Any], owner: str) -> tuple[str, ...]:
    values = raw.get("values")
    if values is None:
        return ()
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise MalformedCatalogError(f"'values' of {owner} must be a list of strings")
    return tuple(values)


def _parse_prop(raw: Any, component_name: str) -> PropDefinition:
    if not isinstance(raw, Mapping):
        raise MalformedCatalogError(f"Prop of component '{component_name}' is not an object")

    name = raw.get("name")
    if not isinstance(name, str) or not name:
        raise MalformedCatalogError(f"Prop of component '{component_name}' has no name")

    owner = f"prop '{component_name}.{name}'"
    prop_type = _read_text(raw, "type", owner) or "any"
    if prop_type not in PROP_TYPES:
        logger.debug(f"Unknown type {prop_type!r} for {component_name}.{name}, using 'any'")
        prop_type = "any"

    return PropDefinition(
        name=name,
        type=prop_type,
        required=bool(raw.get("required", False)),
        default=_parse_default(raw.get("default")),
        values=_read_values(raw, owner),
        description=_read_text(raw, "description", owner),
    )


def _parse_component(raw: Any, index: int) -> ComponentDefinition:
    if not isinstance(raw, Mapping):
        raise MalformedCatalogError(f"Catalog entry {index} is not an object")

    name = raw.get("name")
    if not isinstance(name, str) or not name:
        raise MalformedCatalogError(f"Catalog entry {index} has no name")

    props = raw.get("props") or []
    if not isinstance(props, list):
        raise MalformedCatalogError(f"Props of component '{name}' must be a list")

    return ComponentDefinition(
        name=name,
        self_closing=bool(raw.get("selfClosing", False)),
        description=_read_text(raw, "description", f"component '{name}'"),
        is_pro=bool(raw.get("isPro", False)),
        props=tuple(_parse_prop(p, name) for p in props),
    )


class Catalog:
    """Read-only table of component definitions with case-insensitive lookup.

    Build instances with :meth:`Catalog.load`. Once loaded the catalog is
    never mutated, so a single instance can be shared by every request.
    """

    def __init__(self, components: Iterable[ComponentDefinition] = ()):
        index: dict[str, ComponentDefinition] = {}
        ordered: list[ComponentDefinition] = []
        for component in components:
            key = component.name.lower()
            if key in index:
                # First definition wins, later duplicates are dropped
                logger.debug(f"Ignoring duplicate catalog entry '{component.name}'")
                continue
            index[key] = component
            ordered.append(component)

        self._components = tuple(ordered)
        self._index = MappingProxyType(index)

    @classmethod
    def load(cls, raw_definitions: Any) -> Catalog:
        """Build a catalog from raw (JSON-decoded) component definitions.

        Args:
            raw_definitions: Sequence of component mappings as stored in the
                catalog data file.

        Returns:
            The loaded catalog.

        Raises:
            MalformedCatalogError: If the data is not a list, an entry has no
                name, or a field has the wrong type.
        """
        if not isinstance(raw_definitions, (list, tuple)):
            raise MalformedCatalogError("Catalog data must be a list of components")
        return cls(_parse_component(raw, i) for i, raw in enumerate(raw_definitions))

    def lookup(self, name: str) -> ComponentDefinition | None:
        """Get a component by name, ignoring case."""
        return self._index.get(name.lower())

    @property
    def components(self) -> tuple[ComponentDefinition, ...]:
        return self._components

    def __iter__(self) -> Iterator[ComponentDefinition]:
        return iter(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._index

    def __repr__(self) -> str:
        return f"Catalog({len(self)} components)"


def resolve_catalog_path(path: str | os.PathLike[str] | None = None) -> Path | None:
    """Find the catalog file to load.

    Priority: explicit path > ``FLUX_LSP_CATALOG`` > user data directory.
    Returns None when the bundled catalog should be used.
    """
    if path:
        return Path(path)

    env_path = os.getenv(CATALOG_ENV_VAR)
    if env_path:
        return Path(env_path)

    user_path = user_catalog_path()
    if user_path.exists():
        return user_path

    return None


def load_catalog(path: str | os.PathLike[str] | None = None) -> Catalog:
    """Load the catalog from disk, falling back to the bundled one."""
    catalog_path = resolve_catalog_path(path)

    try:
        if catalog_path is None:
            source = "bundled catalog"
            bundled = resources.files("flux_lsp") / "data" / CATALOG_FILENAME
            text = bundled.read_text(encoding="utf-8")
        else:
            source = str(catalog_path)
            text = catalog_path.read_text(encoding="utf-8")
        raw = json.loads(text)
    except (OSError, json.JSONDecodeError) as e:
        raise MalformedCatalogError(f"Could not read catalog: {e}") from e

    catalog = Catalog.load(raw)
    logger.info(f"Loaded {len(catalog)} components from {source}")
    return catalog
