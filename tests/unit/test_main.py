# tests/unit/test_main.py — v1
"""Tests for main.py: CLI parser and offline commands."""

from __future__ import annotations

import json

import pytest

from toolcompare.main import _build_parser, main


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    # Keep any developer .env out of the settings used by the CLI.
    monkeypatch.chdir(tmp_path)


class TestParser:
    def test_similar_args(self):
        args = _build_parser().parse_args(["similar", "notion", "-k", "3"])
        assert args.command == "similar"
        assert args.slug == "notion"
        assert args.limit == 3

    def test_compare_requires_ids(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["compare"])

    def test_serve_defaults(self):
        args = _build_parser().parse_args(["serve"])
        assert args.host is None
        assert args.port is None

    def test_no_command_returns_error(self, capsys):
        assert main([]) == 1


class TestCommands:
    def test_resolve(self, catalog_file, capsys):
        code = main(["--catalog", str(catalog_file), "resolve", "gcp-speech", "JSP", "zzz"])
        out = capsys.readouterr().out.splitlines()
        assert code == 1
        assert out == [
            "gcp-speech\tgoogle-cloud-speech-to-text",
            "JSP\tjasper",
            "zzz\t-",
        ]

    def test_resolve_all_known(self, catalog_file, capsys):
        assert main(["--catalog", str(catalog_file), "resolve", "notion"]) == 0

    def test_compare(self, catalog_file, capsys):
        code = main(["--catalog", str(catalog_file), "compare", "notion", "jasper-ai"])
        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert data["ok"] is True
        assert data["slugs"] == ["notion-ai", "jasper"]

    def test_compare_unknown(self, catalog_file, capsys):
        assert main(["--catalog", str(catalog_file), "compare", "zzz"]) == 1

    def test_similar(self, catalog_file, capsys):
        code = main(["--catalog", str(catalog_file), "similar", "notion-ai", "-k", "2"])
        lines = capsys.readouterr().out.splitlines()
        assert code == 0
        assert len(lines) == 2
        assert "notion-ai" not in lines[0].split()[1]

    def test_similar_unknown(self, catalog_file):
        assert main(["--catalog", str(catalog_file), "similar", "zzz"]) == 1

    def test_missing_catalog_file(self, tmp_path):
        assert main(["--catalog", str(tmp_path / "none.json"), "resolve", "x"]) == 1
