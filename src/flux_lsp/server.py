"""Language Server for Flux UI components in Blade templates."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import unquote

from lsprotocol.types import (
    INITIALIZE,
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_HOVER,
    WORKSPACE_DID_CHANGE_CONFIGURATION,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    DidChangeConfigurationParams,
    Hover,
    HoverParams,
    InitializeParams,
    MessageType,
    Position,
    ShowMessageParams,
)

from . import __version__
from ._server import CompletionMixin, HoverMixin
from .catalog import Catalog
from .config import DEFAULT_SETTINGS, Settings
from .constants import TRIGGER_CHARACTERS

if TYPE_CHECKING:
    from pygls.workspace import TextDocument

logger = logging.getLogger(__name__)


class FluxLanguageServer(CompletionMixin, HoverMixin):
    """Language Server for Flux UI components."""


def _open_document(ls: FluxLanguageServer, uri: str) -> TextDocument | None:
    """The open document for ``uri``, or None if the client never opened it."""
    if unquote(uri) not in ls.workspace.text_documents:
        logger.debug(f"Ignoring request for unopened document {uri}")
        return None
    return ls.workspace.get_text_document(uri)


def _position_from_client(document: TextDocument, position: Position) -> Position:
    """Convert a client position (UTF-16 units by default) to code points."""
    server_position = document.position_codec.position_from_client_units(
        document.lines, Position(line=position.line, character=position.character)
    )
    return Position(line=server_position.line, character=server_position.character)


def create_server(
    catalog: Catalog, settings: Settings = DEFAULT_SETTINGS
) -> FluxLanguageServer:
    """Create a language server serving completions from ``catalog``.

    The catalog is loaded by the caller and shared, read-only, by every request.
    Settings sent by the client override ``settings`` key by key.
    """
    server = FluxLanguageServer("flux-lsp", __version__, catalog=catalog, settings=settings)

    @server.feature(INITIALIZE)
    def initialize(ls: FluxLanguageServer, params: InitializeParams):
        """Pick up settings passed as initialization options."""
        logger.info("Initializing Flux LSP server")
        if params.initialization_options is not None:
            ls.update_settings(
                Settings.from_options(params.initialization_options, base=ls.settings)
            )

    @server.feature(WORKSPACE_DID_CHANGE_CONFIGURATION)
    def did_change_configuration(ls: FluxLanguageServer, params: DidChangeConfigurationParams):
        """Apply changed settings to subsequent completion requests."""
        if ls.update_settings(Settings.from_options(params.settings, base=ls.settings)):
            ls.window_show_message(
                ShowMessageParams(type=MessageType.Info, message="Flux UI suggestions disabled.")
            )

    @server.feature(
        TEXT_DOCUMENT_COMPLETION,
        CompletionOptions(trigger_characters=TRIGGER_CHARACTERS),
    )
    def completion(ls: FluxLanguageServer, params: CompletionParams) -> CompletionList:
        """Provide completion suggestions."""
        document = _open_document(ls, params.text_document.uri)
        if document is None:
            return CompletionList(is_incomplete=False, items=[])

        position = _position_from_client(document, params.position)
        items = ls._get_completion_items(document.source, position)

        lines = document.lines
        for item in items:
            item.text_edit.range = document.position_codec.range_to_client_units(
                lines, item.text_edit.range
            )
        return CompletionList(is_incomplete=False, items=items)

    @server.feature(TEXT_DOCUMENT_HOVER)
    def hover(ls: FluxLanguageServer, params: HoverParams) -> Hover | None:
        """Provide hover information."""
        document = _open_document(ls, params.text_document.uri)
        if document is None:
            return None

        result = ls._get_hover(document.source, _position_from_client(document, params.position))
        if result is not None and result.range is not None:
            result.range = document.position_codec.range_to_client_units(
                document.lines, result.range
            )
        return result

    return server
