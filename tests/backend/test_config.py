"""Tests for settings loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sensor_events.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.delenv("EVENTS_PORT", raising=False)
        cfg = Settings(_env_file=None)
        assert cfg.port == 8000
        assert cfg.host == "0.0.0.0"
        assert cfg.variant == "climate"
        assert cfg.fail_fast_startup is False
        assert Path(cfg.db_path).name == "events.db"

    def test_plain_port_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "9100")
        assert Settings(_env_file=None).port == 9100

    def test_prefixed_env(self, monkeypatch):
        monkeypatch.setenv("EVENTS_VARIANT", "telemetry")
        monkeypatch.setenv("EVENTS_FAIL_FAST_STARTUP", "true")
        cfg = Settings(_env_file=None)
        assert cfg.variant == "telemetry"
        assert cfg.fail_fast_startup is True

    def test_relative_db_path_made_absolute(self):
        cfg = Settings(_env_file=None, db_path="data/events.db")
        assert Path(cfg.db_path).is_absolute()
        assert cfg.db_path.endswith("data/events.db")
        assert cfg.database_url == f"sqlite:///{cfg.db_path}"

    def test_absolute_db_path_kept(self, tmp_path):
        target = tmp_path / "x.db"
        assert Settings(_env_file=None, db_path=str(target)).db_path == str(target)

    def test_unknown_variant_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, variant="pressure")
