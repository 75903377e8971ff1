#!/usr/bin/env python
"""Command line entry point"""

import json
from datetime import datetime, timezone
from unittest.mock import patch

import main
from gluon_news.models import NormalizedEntry
from gluon_news.pipeline import CycleResult


def make_result(entries):
    return CycleResult(cycle=1, entries=entries, requested=2, fetched=1, parsed=1)


ENTRIES = [
    NormalizedEntry(
        source_title="Example RSS",
        title="RSS newest",
        summary="see  here",
        link="https://rss.example.org/3",
        published=datetime(2024, 1, 3, 10, 0, tzinfo=timezone.utc),
    )
]


class TestParseArgs:
    """Argument handling"""

    def test_defaults(self):
        args = main.parse_args([])
        assert args.settings is None
        assert args.feed is None
        assert args.quiet is False

    def test_repeatable_feed(self):
        args = main.parse_args(["--feed", "https://a.example.org", "--feed", "https://b.example.org"])
        assert args.feed == ["https://a.example.org", "https://b.example.org"]


class TestRun:
    """One-shot run"""

    def test_success_exit_code_and_outputs(self, tmp_path, monkeypatch, capsys):
        """Entries give exit 0 and are written where asked"""
        monkeypatch.chdir(tmp_path)
        args = main.parse_args(["--json", "out/news.json", "--html", "out/news.html"])

        with patch.object(main, "_run_cycle", return_value=make_result(ENTRIES)):
            status = main.run(args)

        assert status == 0
        data = json.loads((tmp_path / "out" / "news.json").read_text(encoding="utf-8"))
        assert data[0]["title"] == "RSS newest"
        assert "RSS newest" in (tmp_path / "out" / "news.html").read_text(encoding="utf-8")
        assert "RSS newest" in capsys.readouterr().out

    def test_unavailable_exit_code(self, tmp_path, monkeypatch, capsys):
        """No entries gives exit 1 and the failure message"""
        monkeypatch.chdir(tmp_path)
        args = main.parse_args(["--json", "news.json"])

        with patch.object(main, "_run_cycle", return_value=make_result(None)):
            status = main.run(args)

        assert status == 1
        assert json.loads((tmp_path / "news.json").read_text(encoding="utf-8")) is None
        assert main.deliver.UNAVAILABLE_MESSAGE in capsys.readouterr().out

    def test_feed_flag_overrides_settings(self, tmp_path, monkeypatch):
        """--feed replaces the configured list"""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "settings.json").write_text(
            json.dumps({"feeds": ["https://configured.example.org/rss"], "maximized": False}),
            encoding="utf-8",
        )
        args = main.parse_args(["--feed", "https://cli.example.org/rss", "--quiet"])

        with patch.object(main, "_run_cycle", return_value=make_result(ENTRIES)) as run_cycle:
            main.run(args)

        settings = run_cycle.call_args.args[0]
        assert settings.feeds == ["https://cli.example.org/rss"]
        assert settings.maximized is False

    def test_quiet_prints_nothing(self, tmp_path, monkeypatch, capsys):
        """--quiet keeps stdout empty"""
        monkeypatch.chdir(tmp_path)
        args = main.parse_args(["--quiet"])

        with patch.object(main, "_run_cycle", return_value=make_result(ENTRIES)):
            main.run(args)

        assert capsys.readouterr().out == ""
