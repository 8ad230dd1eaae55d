"""Tests for TOML config file loading."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from rulesheet.cli import build_parser, load_config, resolve_options


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("[parser]\nkeep_quotes = true\n")
        result = load_config(cfg, tmp_path)
        assert result["parser"] == {"keep_quotes": True}

    def test_auto_discover_rulesheet_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "rulesheet.toml"
        cfg.write_text('[output]\nformat = "json"\n')
        result = load_config(None, tmp_path)
        assert result["output"] == {"format": "json"}


class TestConfigMerge:
    def _options(self, tmp_path: Path, config: str, *argv: str):
        (tmp_path / "rulesheet.toml").write_text(config)
        sheet = tmp_path / "style.css"
        sheet.write_text("")
        ns = build_parser().parse_args([str(sheet), *argv])
        return resolve_options(ns)

    def test_defaults(self, tmp_path: Path) -> None:
        opts = self._options(tmp_path, "")
        assert opts.output_format == "tree"
        assert opts.indent == 2
        assert opts.keep_quotes is False

    def test_config_keep_quotes(self, tmp_path: Path) -> None:
        opts = self._options(tmp_path, "[parser]\nkeep_quotes = true\n")
        assert opts.keep_quotes is True

    def test_cli_keep_quotes_overrides_absent_config(self, tmp_path: Path) -> None:
        opts = self._options(tmp_path, "", "--keep-quotes")
        assert opts.keep_quotes is True

    def test_config_output(self, tmp_path: Path) -> None:
        opts = self._options(tmp_path, '[output]\nformat = "json"\nindent = 4\n')
        assert opts.output_format == "json"
        assert opts.indent == 4

    def test_cli_overrides_config_output(self, tmp_path: Path) -> None:
        opts = self._options(
            tmp_path, '[output]\nformat = "json"\nindent = 4\n', "-f", "tree", "--indent", "0"
        )
        assert opts.output_format == "tree"
        assert opts.indent == 0

    def test_invalid_config_format_raises(self, tmp_path: Path) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            self._options(tmp_path, '[output]\nformat = "xml"\n')

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text("[parser]\nkeep_quotes = true\n")
        sheet = tmp_path / "style.css"
        sheet.write_text("")
        ns = build_parser().parse_args([str(sheet), "--config", str(cfg)])
        assert resolve_options(ns).keep_quotes is True
