"""Tests for log formatting."""

from __future__ import annotations

import logging
import re

from flux_lsp._logging import ColoredFormatter, PlainFormatter


def make_record(name="flux_lsp.catalog", level=logging.INFO, msg="Loaded 3 components"):
    return logging.LogRecord(name, level, __file__, 1, msg, None, None)


class TestFormatters:
    def test_plain_format(self):
        line = PlainFormatter().format(make_record())
        assert re.fullmatch(
            r"\[I \d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3} catalog\] Loaded 3 components", line
        )

    def test_package_logger_name(self):
        line = PlainFormatter().format(make_record(name="flux_lsp", level=logging.WARNING))
        assert line.startswith("[W ")
        assert " FluxLSP] " in line

    def test_foreign_logger_name_is_kept(self):
        assert " pygls.server] " in PlainFormatter().format(make_record(name="pygls.server"))

    def test_colored_format(self):
        line = ColoredFormatter().format(make_record(level=logging.ERROR))
        assert line.startswith(ColoredFormatter.COLORS["ERROR"] + "[E ")
        assert f"{ColoredFormatter.RESET} Loaded 3 components" in line
