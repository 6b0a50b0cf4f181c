"""Shared fixtures: per-test SQLite files and TestClients for each variant."""

import pytest
from fastapi.testclient import TestClient

from sensor_events.config import Settings
from sensor_events.main import create_app
from sensor_events.models.database import init_database, make_engine, make_session_factory
from sensor_events.services.event_store import EventStore, get_variant


@pytest.fixture(autouse=True)
def _no_network_probe(monkeypatch):
    monkeypatch.setattr("sensor_events.main.local_ip_address", lambda: "192.0.2.10")


@pytest.fixture
def make_settings(tmp_path):
    def _make(variant: str = "climate", **overrides) -> Settings:
        overrides.setdefault("db_path", str(tmp_path / f"{variant}.db"))
        return Settings(variant=variant, **overrides)
    return _make


@pytest.fixture
def climate_client(make_settings):
    with TestClient(create_app(make_settings("climate"))) as client:
        yield client


@pytest.fixture
def telemetry_client(make_settings):
    with TestClient(create_app(make_settings("telemetry"))) as client:
        yield client


@pytest.fixture
def make_store(tmp_path):
    """Build an EventStore on a fresh database for the given variant."""
    engines = []
    sessions = []

    def _make(variant: str = "climate") -> EventStore:
        engine = make_engine(f"sqlite:///{tmp_path / f'store_{variant}.db'}")
        assert init_database(engine, variant)
        db = make_session_factory(engine)()
        engines.append(engine)
        sessions.append(db)
        return EventStore(db, get_variant(variant))

    yield _make

    for db in sessions:
        db.close()
    for engine in engines:
        engine.dispose()
