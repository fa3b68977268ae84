"""Base class for LSP server with interface for mixins."""

from __future__ import annotations

import logging

from pygls.lsp.server import LanguageServer

from flux_lsp.catalog import Catalog
from flux_lsp.completion import CompletionEngine
from flux_lsp.config import DEFAULT_SETTINGS, Settings

logger = logging.getLogger(__name__)


class LSPServerBase(LanguageServer):
    """Base class defining the interface needed by mixins.

    Holds the completion engine, which in turn owns the read-only catalog and
    the current settings.
    """

    def __init__(self, *args, catalog: Catalog, settings: Settings = DEFAULT_SETTINGS, **kwargs):
        super().__init__(*args, **kwargs)
        self.engine = CompletionEngine(catalog, settings)

    @property
    def catalog(self) -> Catalog:
        return self.engine.catalog

    @property
    def settings(self) -> Settings:
        return self.engine.settings

    def update_settings(self, settings: Settings) -> bool:
        """Replace the current settings.

        Returns:
            True if completions were enabled before and are disabled now.
        """
        was_enabled = self.engine.settings.enable
        self.engine.settings = settings
        logger.info(
            f"Settings updated: enable={settings.enable}, "
            f"includeProComponents={settings.include_pro_components}"
        )
        return was_enabled and not settings.enable
