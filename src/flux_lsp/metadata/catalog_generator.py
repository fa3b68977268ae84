"""Generate the component catalog from Flux Blade sources.

Scans a Flux ``resources/views/flux`` directory, reads each template's
``@props([...])`` declaration and writes the catalog JSON consumed by
:func:`flux_lsp.catalog.load_catalog`. Hand-written fields of an existing
catalog (descriptions, Pro flags, prop values) are preserved.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from flux_lsp.constants import BLADE_SUFFIX, EXCLUDED_DIRS
from flux_lsp.models import NO_DEFAULT

logger = logging.getLogger(__name__)

_re_props_directive = re.compile(r"@props\(\[\s*([\s\S]*?)\s*\]\)")
_re_prop_entry = re.compile(r"""['"]([^'"]+)['"]\s*(?:=>\s*([^,\]]+))?""")
_re_number = re.compile(r"^\d+(\.\d+)?$")
_re_quoted = re.compile(r"""^['"].*['"]$""")
_SLOT_MARKERS = ("{{ $slot }}", "{!! $slot !!}")


def infer_type(default_value: str | None) -> str:
    """Infer a prop type from the literal form of its default value."""
    if not default_value or default_value == NO_DEFAULT:
        return "string"

    value = default_value.strip()

    if value in ("true", "false"):
        return "boolean"
    if _re_number.match(value):
        return "number"
    if value.startswith("["):
        return "array"
    if value.startswith("{"):
        return "object"
    if _re_quoted.match(value):
        return "string"
    return "any"


def extract_props(content: str) -> list[dict[str, Any]]:
    """Extract props from the ``@props([...])`` directive of a Blade template."""
    props_match = _re_props_directive.search(content)
    if not props_match:
        return []

    props = []
    for match in _re_prop_entry.finditer(props_match.group(1)):
        default_value = match.group(2).strip() if match.group(2) else None
        props.append(
            {
                "name": match.group(1),
                "type": infer_type(default_value),
                "default": default_value or NO_DEFAULT,
            }
        )
    return props


def is_self_closing(content: str) -> bool:
    """A component is self-closing unless its template renders the slot."""
    return not any(marker in content for marker in _SLOT_MARKERS)


def component_name(file_path: Path, base_dir: Path) -> str:
    """Derive the dotted component name from a template path.

    ``select/option.blade.php`` becomes ``select.option`` and
    ``modal/index.blade.php`` becomes ``modal``.
    """
    relative = file_path.relative_to(base_dir).as_posix()
    if relative.endswith(BLADE_SUFFIX):
        relative = relative[: -len(BLADE_SUFFIX)]
    name = relative.replace("/", ".")
    if name.endswith(".index"):
        name = name[: -len(".index")]
    return name


def scan_directory(source_dir: Path) -> list[dict[str, Any]]:
    """Build raw catalog entries for every Blade template under ``source_dir``."""
    components = []

    for path in sorted(source_dir.rglob(f"*{BLADE_SUFFIX}")):
        relative_parts = path.relative_to(source_dir).parts
        if any(part in EXCLUDED_DIRS for part in relative_parts):
            continue

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping {path}: {e}")
            continue

        name = component_name(path, source_dir)
        components.append(
            {
                "name": name,
                "selfClosing": is_self_closing(content),
                "description": f"Flux {name} component",
                # Pro components need to be flagged by hand
                "isPro": False,
                "props": extract_props(content),
            }
        )

    return components


def merge_with_existing(
    extracted: list[dict[str, Any]], existing: list[dict[str, Any]]
) -> list[dict[str, Any]]:
    """Carry hand-authored fields from an existing catalog into freshly extracted entries.

    Kept per component: ``description`` and ``isPro``. Kept per prop:
    ``description``, ``values`` and ``required``. When the existing catalog
    has duplicate names the first entry is used.
    """
    existing_by_name: dict[str, dict[str, Any]] = {}
    for component in existing:
        existing_by_name.setdefault(component.get("name"), component)

    for component in extracted:
        previous = existing_by_name.get(component["name"])
        if not previous:
            continue

        component["description"] = previous.get("description") or component["description"]
        component["isPro"] = bool(previous.get("isPro", False))

        previous_props = {}
        for prop in previous.get("props") or []:
            previous_props.setdefault(prop.get("name"), prop)

        for prop in component["props"]:
            previous_prop = previous_props.get(prop["name"])
            if not previous_prop:
                continue
            for key in ("description", "values"):
                if previous_prop.get(key):
                    prop[key] = previous_prop[key]
            if previous_prop.get("required"):
                prop["required"] = True

    return extracted


def _read_existing(path: Path) -> list[dict[str, Any]]:
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable existing catalog {path}: {e}")
        return []
    if not isinstance(data, list):
        logger.warning(f"Ignoring existing catalog {path}: expected a list")
        return []
    return [entry for entry in data if isinstance(entry, dict)]


def generate_catalog(source_dir: Path, output: Path) -> list[dict[str, Any]]:
    """Scan ``source_dir``, merge with the catalog at ``output`` and write it back.

    Args:
        source_dir: Flux views directory containing ``*.blade.php`` templates.
        output: Catalog JSON file to update (created if missing).

    Returns:
        The merged catalog entries, sorted by name.
    """
    logger.info(f"Scanning {source_dir}...")
    extracted = scan_directory(source_dir)
    logger.info(f"Found {len(extracted)} components")

    merged = merge_with_existing(extracted, _read_existing(output))
    merged.sort(key=lambda component: component["name"])

    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8") as f:
        json.dump(merged, f, indent=2)
        f.write("\n")
    logger.info(f"Updated {output}")

    return merged


def summarize(components: list[dict[str, Any]]) -> str:
    """Human-readable summary of a generated catalog."""
    pro = sum(1 for c in components if c.get("isPro"))
    self_closing = sum(1 for c in components if c.get("selfClosing"))
    return (
        "Component Summary:\n"
        f"  Total: {len(components)}\n"
        f"  Pro: {pro}\n"
        f"  Self-closing: {self_closing}"
    )
