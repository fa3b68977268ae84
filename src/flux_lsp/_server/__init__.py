"""Mixins for the Flux Language Server."""

from __future__ import annotations

from .base import LSPServerBase
from .completion import CompletionMixin
from .hover import HoverMixin

__all__ = ["CompletionMixin", "HoverMixin", "LSPServerBase"]
