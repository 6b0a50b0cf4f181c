"""Tests for the on/off control flag and its endpoints."""

import threading

import pytest

from sensor_events.services.control import ControlState, InvalidControlStatus


class TestControlState:
    def test_defaults_to_off(self):
        assert ControlState().status == "off"

    def test_transitions(self):
        control = ControlState()
        assert control.set("on") == "on"
        assert control.status == "on"
        control.set("off")
        assert control.status == "off"

    @pytest.mark.parametrize("bad", ["ON", "Off", "", "bogus", None, 1, True])
    def test_rejects_anything_else(self, bad):
        control = ControlState("on")
        with pytest.raises(InvalidControlStatus):
            control.set(bad)
        assert control.status == "on"

    def test_concurrent_writers_leave_valid_state(self):
        control = ControlState()

        def flip(value):
            for _ in range(200):
                control.set(value)

        threads = [threading.Thread(target=flip, args=(v,)) for v in ("on", "off") * 4]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert control.status in ("on", "off")


class TestControlApi:
    def test_initial_status(self, telemetry_client):
        resp = telemetry_client.get("/api/control/status")
        assert resp.status_code == 200
        assert resp.json() == {"status": "off"}

    def test_set_on_then_read(self, telemetry_client):
        resp = telemetry_client.post("/api/control", json={"status": "on"})
        assert resp.status_code == 200
        assert resp.json() == {"status": "on"}
        assert telemetry_client.get("/api/control/status").json() == {"status": "on"}

    def test_invalid_status_leaves_flag_unchanged(self, telemetry_client):
        telemetry_client.post("/api/control", json={"status": "on"})

        resp = telemetry_client.post("/api/control", json={"status": "bogus"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Status must be 'on' or 'off'"}
        assert telemetry_client.get("/api/control/status").json() == {"status": "on"}

    def test_missing_status(self, telemetry_client):
        for body in ({}, [], "on"):
            resp = telemetry_client.post("/api/control", json=body)
            assert resp.status_code == 400

    def test_flag_is_per_app(self, make_settings):
        """A fresh app (process restart) starts from "off" again."""
        from fastapi.testclient import TestClient
        from sensor_events.main import create_app

        with TestClient(create_app(make_settings("telemetry"))) as first:
            first.post("/api/control", json={"status": "on"})
        with TestClient(create_app(make_settings("telemetry"))) as second:
            assert second.get("/api/control/status").json() == {"status": "off"}

    def test_climate_variant_has_no_control_routes(self, climate_client):
        assert climate_client.get("/api/control/status").status_code == 404
        assert climate_client.post("/api/control", json={"status": "on"}).status_code in (404, 405)
