"""
Tests for configuration and telemetry sinks.
"""

import logging
from pathlib import Path

from curriculex.config import (
    DEFAULT_CONNECTOR_IDS,
    DEFAULT_CONTENT_PATH,
    ENV_CONNECTOR_IDS,
    ENV_CONTENT_PATH,
    ENV_LOG_LEVEL,
    IndexSettings,
    parse_connector_ids,
)
from curriculex.telemetry import LoggingTelemetry, RecordingTelemetry


class TestIndexSettings:
    """Test environment-driven settings."""

    def _clear_env(self, monkeypatch):
        for name in (ENV_CONTENT_PATH, ENV_CONNECTOR_IDS, ENV_LOG_LEVEL):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self, monkeypatch, tmp_path):
        self._clear_env(monkeypatch)
        settings = IndexSettings.from_env(tmp_path / "missing.env")
        assert settings.content_path == DEFAULT_CONTENT_PATH
        assert settings.connector_ids == DEFAULT_CONNECTOR_IDS
        assert settings.log_level == "INFO"

    def test_from_environment(self, monkeypatch, tmp_path):
        self._clear_env(monkeypatch)
        monkeypatch.setenv(ENV_CONTENT_PATH, str(tmp_path / "c.yaml"))
        monkeypatch.setenv(ENV_CONNECTOR_IDS, "va, ya ,")
        monkeypatch.setenv(ENV_LOG_LEVEL, "debug")

        settings = IndexSettings.from_env(tmp_path / "missing.env")

        assert settings.content_path == Path(tmp_path / "c.yaml")
        assert settings.connector_ids == frozenset({"va", "ya"})
        assert settings.log_level == "DEBUG"

    def test_from_dotenv_file(self, monkeypatch, tmp_path):
        self._clear_env(monkeypatch)
        env_file = tmp_path / ".env"
        env_file.write_text(f"{ENV_CONNECTOR_IDS}=ham\n{ENV_LOG_LEVEL}=warning\n", encoding="utf-8")
        # load_dotenv writes into os.environ; register for cleanup
        monkeypatch.setenv(ENV_CONNECTOR_IDS, "")
        monkeypatch.delenv(ENV_CONNECTOR_IDS)
        monkeypatch.setenv(ENV_LOG_LEVEL, "")
        monkeypatch.delenv(ENV_LOG_LEVEL)

        settings = IndexSettings.from_env(env_file)

        assert settings.connector_ids == frozenset({"ham"})
        assert settings.log_level == "WARNING"

    def test_parse_connector_ids(self):
        assert parse_connector_ids(None) == DEFAULT_CONNECTOR_IDS
        assert parse_connector_ids("  ") == DEFAULT_CONNECTOR_IDS
        assert parse_connector_ids("va,vali") == frozenset({"va", "vali"})


class TestTelemetry:
    """Test the warning sinks."""

    def test_recording(self):
        sink = RecordingTelemetry()
        sink.warn("learned_state.unknown_vocabulary", vocabulary_id="ghost")
        sink.warn("other")
        assert sink.contexts() == ["learned_state.unknown_vocabulary", "other"]
        assert sink.events[0][1] == {"vocabulary_id": "ghost"}
        sink.clear()
        assert sink.events == []

    def test_logging(self, caplog):
        sink = LoggingTelemetry(logging.getLogger("curriculex.test"))
        with caplog.at_level(logging.WARNING, logger="curriculex.test"):
            sink.warn("learned_state.step_index_clamped", step_index=99, clamped_to=3)
        assert caplog.records[0].levelno == logging.WARNING
        assert caplog.messages == ["learned_state.step_index_clamped: step_index=99, clamped_to=3"]
