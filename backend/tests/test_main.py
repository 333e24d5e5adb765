"""Tests for the application entry point."""

from fastapi.testclient import TestClient

from tickfeed import main
from tickfeed.main import HEALTH_PATHS, create_app
from tickfeed.market.config import FeedConfig


class TestApp:
    def test_health_paths(self):
        """Test that every health path reports liveness."""
        app = create_app(FeedConfig())
        with TestClient(app) as client:
            for path in HEALTH_PATHS:
                response = client.get(path)
                assert response.status_code == 200
                body = response.json()
                assert body["status"] == "ok"
                assert body["uptime_seconds"] >= 0
                assert "timestamp" in body

    def test_unknown_path(self):
        with TestClient(create_app(FeedConfig())) as client:
            assert client.get("/nope").status_code == 404

    def test_lifespan_runs_broadcaster(self):
        """Test that the broadcast loop runs for the app's lifetime."""
        app = create_app(FeedConfig())
        with TestClient(app):
            assert app.state.feed.broadcaster.running
        assert not app.state.feed.broadcaster.running

    def test_cron_ping_is_a_health_path(self):
        with TestClient(create_app(FeedConfig())) as client:
            response = client.get("/cron-ping")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_module_level_app(self):
        """Test that `uvicorn tickfeed.main:app` has an application to serve."""
        with TestClient(main.app) as client:
            assert client.get("/health").json()["status"] == "ok"
        assert main.app.state.feed.broadcaster.running is False
