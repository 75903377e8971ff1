#!/usr/bin/env python
"""Settings loading"""

import json

from gluon_news.settings import (
    DEFAULT_FEEDS,
    DEFAULT_TIMEOUT_S,
    DEFAULT_USER_AGENT,
    SETTINGS_ENV,
    Settings,
    load_settings,
    settings_path,
)


def write_json(path, data) -> str:
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestDefaults:
    """Built-in configuration"""

    def test_default_values(self):
        """Defaults point at the project's own feed"""
        settings = Settings()
        assert settings.feeds == DEFAULT_FEEDS
        assert settings.maximized is True
        assert settings.user_agent == DEFAULT_USER_AGENT
        assert settings.timeout_s == DEFAULT_TIMEOUT_S

    def test_default_feeds_not_shared(self):
        """Each instance gets its own list"""
        a = Settings()
        a.feeds.append("https://example.org/extra")
        assert Settings().feeds == DEFAULT_FEEDS


class TestLoadSettings:
    """Reading settings files"""

    def test_missing_file_gives_defaults(self, tmp_path):
        """No file is not an error"""
        settings = load_settings(tmp_path / "nope.json")
        assert settings == Settings()

    def test_malformed_json_gives_defaults(self, tmp_path):
        """Unparseable content is ignored"""
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_settings(path) == Settings()

    def test_wrong_shape_gives_defaults(self, tmp_path):
        """A top-level list is not settings"""
        path = write_json(tmp_path / "settings.json", ["https://example.org/rss"])
        assert load_settings(path) == Settings()

    def test_invalid_field_gives_defaults(self, tmp_path):
        """A field of the wrong type discards the whole file"""
        path = write_json(tmp_path / "settings.json", {"feeds": "https://example.org/rss"})
        assert load_settings(path) == Settings()

    def test_non_positive_timeout_gives_defaults(self, tmp_path):
        """The timeout must be positive"""
        path = write_json(tmp_path / "settings.json", {"timeout_s": 0})
        assert load_settings(path) == Settings()

    def test_valid_file(self, tmp_path):
        """A complete file is used as is"""
        data = {
            "feeds": ["https://a.example.org/rss", "https://b.example.org/atom"],
            "maximized": False,
        }
        settings = load_settings(write_json(tmp_path / "settings.json", data))

        assert settings.feeds == data["feeds"]
        assert settings.maximized is False

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        """Omitted keys fall back individually"""
        settings = load_settings(write_json(tmp_path / "settings.json", {"maximized": False}))

        assert settings.feeds == DEFAULT_FEEDS
        assert settings.maximized is False

    def test_empty_feed_list_is_kept(self, tmp_path):
        """An explicitly empty list is honoured"""
        settings = load_settings(write_json(tmp_path / "settings.json", {"feeds": []}))
        assert settings.feeds == []

    def test_yaml_file(self, tmp_path):
        """YAML files are read by extension"""
        path = tmp_path / "settings.yaml"
        path.write_text(
            "feeds:\n  - https://a.example.org/rss\nmaximized: false\nuser_agent: reader/2\n",
            encoding="utf-8",
        )
        settings = load_settings(path)

        assert settings.feeds == ["https://a.example.org/rss"]
        assert settings.maximized is False
        assert settings.user_agent == "reader/2"

    def test_malformed_yaml_gives_defaults(self, tmp_path):
        """Broken YAML is ignored"""
        path = tmp_path / "settings.yml"
        path.write_text("feeds: [unterminated\n", encoding="utf-8")
        assert load_settings(path) == Settings()


class TestSettingsPath:
    """Settings file resolution"""

    def test_default_path(self, monkeypatch):
        """settings.json in the working directory"""
        monkeypatch.delenv(SETTINGS_ENV, raising=False)
        assert str(settings_path()) == "settings.json"

    def test_env_override(self, monkeypatch, tmp_path):
        """The environment variable picks another file"""
        path = write_json(tmp_path / "custom.json", {"feeds": ["https://env.example.org/rss"]})
        monkeypatch.setenv(SETTINGS_ENV, path)

        assert str(settings_path()) == path
        assert load_settings().feeds == ["https://env.example.org/rss"]
