"""flux-lsp: Language Server Protocol implementation for Flux UI components."""

from __future__ import annotations

from ._version import __version__

__all__ = ["__version__"]
