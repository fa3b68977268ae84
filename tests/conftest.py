from __future__ import annotations

import pytest

from flux_lsp.catalog import Catalog
from flux_lsp.completion import CompletionEngine
from flux_lsp.config import Settings

RAW_CATALOG = [
    {
        "name": "button",
        "selfClosing": False,
        "description": "A composable button.",
        "isPro": False,
        "props": [
            {
                "name": "variant",
                "type": "string",
                "default": "'outline'",
                "values": ["outline", "primary", "danger"],
                "description": "Visual style of the button.",
            },
            {"name": "size", "type": "string", "default": "'base'"},
            {"name": "loading", "type": "boolean", "default": "null"},
            {"name": "href", "type": "string", "default": "null"},
            {"name": "type", "type": "string", "default": "'button'", "required": True},
            {"name": "icon", "type": "string", "default": "null"},
        ],
    },
    {
        "name": "input",
        "selfClosing": True,
        "description": "Text input.",
        "isPro": False,
        "props": [
            {"name": "label", "type": "string", "default": "null"},
            {"name": "placeholder", "type": "string", "default": "null"},
            {"name": "name", "type": "string", "default": "null", "required": True},
        ],
    },
    {
        "name": "select",
        "selfClosing": False,
        "description": "Dropdown select.",
        "isPro": False,
        "props": [{"name": "placeholder", "type": "string", "default": "null"}],
    },
    {
        "name": "select.option",
        "selfClosing": False,
        "description": "An option inside a select.",
        "isPro": False,
        "props": [{"name": "value", "type": "string", "default": "null"}],
    },
    {
        "name": "chart",
        "selfClosing": False,
        "description": "Charts.",
        "isPro": True,
        "props": [{"name": "value", "type": "array", "default": "[]", "required": True}],
    },
    {
        "name": "autocomplete",
        "selfClosing": False,
        "description": "Autocomplete input.",
        "isPro": True,
    },
]


@pytest.fixture
def raw_catalog():
    return [dict(entry) for entry in RAW_CATALOG]


@pytest.fixture
def catalog(raw_catalog):
    return Catalog.load(raw_catalog)


@pytest.fixture
def engine(catalog):
    return CompletionEngine(catalog)


@pytest.fixture
def engine_without_pro(catalog):
    return CompletionEngine(catalog, Settings(include_pro_components=False))
