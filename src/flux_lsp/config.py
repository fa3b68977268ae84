"""User-facing settings for flux-lsp."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

logger = logging.getLogger(__name__)

# Settings section used by editors, e.g. {"flux-ui": {"enable": true}}
SETTINGS_SECTION = "flux-ui"


@dataclass(frozen=True)
class Settings:
    """Completion settings.

    Attributes:
        enable: Whether completions are produced at all.
        include_pro_components: Whether Flux Pro components are suggested.
    """

    enable: bool = True
    include_pro_components: bool = True

    @classmethod
    def from_options(cls, options: Any, base: Settings | None = None) -> Settings:
        """Build settings from LSP initialization options or configuration.

        Accepts both the flat form (``{"enable": false}``) and the form nested
        under the ``flux-ui`` section. Missing or invalid values keep the
        value from ``base`` (the defaults when not given).
        """
        if base is None:
            base = cls()
        if not isinstance(options, Mapping):
            return base

        section = options.get(SETTINGS_SECTION)
        if isinstance(section, Mapping):
            options = section

        return replace(
            base,
            enable=_read_bool(options, "enable", base.enable),
            include_pro_components=_read_bool(
                options, "includeProComponents", base.include_pro_components
            ),
        )


def _read_bool(options: Mapping[str, Any], key: str, default: bool) -> bool:
    value = options.get(key, default)
    if isinstance(value, bool):
        return value
    logger.warning(f"Ignoring non-boolean value {value!r} for setting '{key}'")
    return default


DEFAULT_SETTINGS = Settings()
