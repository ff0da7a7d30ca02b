"""Tests for settings and logging helpers."""

import logging
import sys
from pathlib import Path

from poststore.core.config import Settings, get_logger, setup_logging


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("POSTSTORE_POSTS_DIR", raising=False)
        monkeypatch.delenv("POSTSTORE_DEFAULT_LAYOUT", raising=False)

        settings = Settings(_env_file=None)

        assert settings.posts_dir == Path("_posts")
        assert settings.default_layout == "default"
        assert settings.log_level == "INFO"
        assert settings.log_file is None

    def test_environment_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("POSTSTORE_POSTS_DIR", str(tmp_path))
        monkeypatch.setenv("POSTSTORE_DEFAULT_LAYOUT", "article")

        settings = Settings(_env_file=None)

        assert settings.posts_dir == tmp_path
        assert settings.default_layout == "article"


class TestLogging:
    """Tests for setup_logging and get_logger."""

    def test_logs_go_to_stderr(self, monkeypatch):
        """Test log records stay out of stdout, where CLI output goes."""
        captured = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

        setup_logging("debug")

        assert captured["level"] == logging.DEBUG
        streams = [h.stream for h in captured["handlers"] if type(h) is logging.StreamHandler]
        assert streams == [sys.stderr]

    def test_logger_namespace(self):
        assert get_logger("storage.markdown").name == "poststore.storage.markdown"
