"""Tests for the registered LSP request and notification handlers."""

from __future__ import annotations

import pytest
from lsprotocol.types import (
    INITIALIZE,
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_HOVER,
    WORKSPACE_DID_CHANGE_CONFIGURATION,
    ClientCapabilities,
    CompletionParams,
    DidChangeConfigurationParams,
    HoverParams,
    InitializeParams,
    Position,
    TextDocumentIdentifier,
    TextDocumentItem,
)

from flux_lsp.config import Settings
from flux_lsp.constants import TRIGGER_CHARACTERS
from flux_lsp.server import create_server

URI = "file:///project/resources/views/page.blade.php"


def initialize(server, options=None):
    """Run the initialize request, including the handler registered for it."""
    params = InitializeParams(capabilities=ClientCapabilities(), initialization_options=options)
    steps = server.protocol.lsp_initialize(params)
    try:
        handler, args, _ = next(steps)
        while True:
            handler, args, _ = steps.send(handler(*args))
    except StopIteration as stop:
        return stop.value


def call_feature(server, name, params):
    return server.protocol.fm.features[name](params)


def open_document(server, text, uri=URI):
    server.workspace.put_text_document(
        TextDocumentItem(uri=uri, language_id="blade", version=1, text=text)
    )


def complete(server, line, character, uri=URI):
    params = CompletionParams(
        text_document=TextDocumentIdentifier(uri=uri),
        position=Position(line=line, character=character),
    )
    return call_feature(server, TEXT_DOCUMENT_COMPLETION, params)


def hover(server, line, character, uri=URI):
    params = HoverParams(
        text_document=TextDocumentIdentifier(uri=uri),
        position=Position(line=line, character=character),
    )
    return call_feature(server, TEXT_DOCUMENT_HOVER, params)


def change_configuration(server, settings):
    params = DidChangeConfigurationParams(settings=settings)
    call_feature(server, WORKSPACE_DID_CHANGE_CONFIGURATION, params)


@pytest.fixture
def server(catalog):
    server = create_server(catalog)
    initialize(server)
    return server


@pytest.fixture
def server_without_pro(catalog):
    server = create_server(catalog, Settings(include_pro_components=False))
    initialize(server)
    return server


@pytest.fixture
def messages(server, monkeypatch):
    sent = []
    monkeypatch.setattr(server, "window_show_message", sent.append)
    return sent


class TestInitialize:
    """Test the initialize handshake."""

    def test_capabilities(self, catalog):
        server = create_server(catalog)
        result = initialize(server)
        capabilities = result.capabilities
        assert set(capabilities.completion_provider.trigger_characters) == set(TRIGGER_CHARACTERS)
        assert capabilities.hover_provider

    def test_initialization_options(self, catalog):
        server = create_server(catalog)
        initialize(server, {"flux-ui": {"includeProComponents": False}})
        assert server.settings == Settings(enable=True, include_pro_components=False)

    @pytest.mark.parametrize(
        "options", [{"someOtherOption": 1}, {"flux-ui": {"enable": True}}, {}]
    )
    def test_options_keep_startup_settings(self, catalog, options):
        server = create_server(catalog, Settings(include_pro_components=False))
        initialize(server, options)
        assert server.settings.include_pro_components is False

    def test_initialize_handler_is_registered(self, server):
        assert INITIALIZE in server.protocol.fm.features


class TestDidChangeConfiguration:
    """Test settings updates sent by the client."""

    def test_disable_shows_message_once(self, server, messages):
        change_configuration(server, {"flux-ui": {"enable": False}})
        change_configuration(server, {"flux-ui": {"enable": False}})

        assert server.settings.enable is False
        (message,) = messages
        assert message.message == "Flux UI suggestions disabled."

    def test_disabled_server_returns_no_items(self, server, messages):
        open_document(server, "<flux:")
        change_configuration(server, {"enable": False})
        assert complete(server, 0, 6).items == []

    @pytest.mark.parametrize("settings", [None, {"python": {"enable": False}}, {}])
    def test_unrelated_settings_keep_current(self, server_without_pro, settings):
        change_configuration(server_without_pro, settings)
        assert server_without_pro.settings == Settings(include_pro_components=False)

    def test_reenable(self, server, messages):
        change_configuration(server, {"flux-ui": {"enable": False}})
        change_configuration(server, {"flux-ui": {"enable": True}})
        assert server.settings.enable is True
        assert len(messages) == 1


class TestCompletionHandler:
    """Test completion requests against workspace documents."""

    def test_open_document(self, server):
        open_document(server, "<div>\n  <flux:sel")
        result = complete(server, 1, 11)
        assert result.is_incomplete is False
        assert [item.label for item in result.items] == ["flux:select", "flux:select.option"]

    def test_unopened_document(self, server):
        result = complete(server, 0, 6, uri="file:///project/never-opened.blade.php")
        assert result.items == []

    def test_pro_components_respect_startup_settings(self, server_without_pro):
        open_document(server_without_pro, "<flux:")
        change_configuration(server_without_pro, {"flux-ui": {"enable": True}})
        labels = [item.label for item in complete(server_without_pro, 0, 6).items]
        assert "flux:chart" not in labels
        assert "flux:button" in labels

    def test_ranges_use_utf16_units(self, server):
        # The emoji is one code point but two UTF-16 code units
        open_document(server, "<p>\U0001f600</p><flux:but")
        (item,) = complete(server, 0, 18).items
        assert item.label == "flux:button"
        assert item.text_edit.range.start == Position(line=0, character=10)
        assert item.text_edit.range.end == Position(line=0, character=18)


class TestHoverHandler:
    """Test hover requests against workspace documents."""

    def test_open_document(self, server):
        open_document(server, '<flux:button variant="primary">')
        result = hover(server, 0, 15)
        assert result.contents.value.startswith("**variant**")

    def test_unopened_document(self, server):
        assert hover(server, 0, 3, uri="file:///project/never-opened.blade.php") is None

    def test_range_uses_utf16_units(self, server):
        open_document(server, "<p>\U0001f600</p><flux:button>")
        result = hover(server, 0, 12)
        assert result.contents.value.startswith("**<flux:button>**")
        assert result.range.start == Position(line=0, character=10)
        assert result.range.end == Position(line=0, character=21)
