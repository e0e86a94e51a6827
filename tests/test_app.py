# tests/test_app.py

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskboard.core.config import Settings
from taskboard.core.rate_limit import RATE_LIMIT_MESSAGE, FixedWindowLimiter
from taskboard.main import create_app

from .helpers import create_task


def _settings(tmp_path: Path, **overrides) -> Settings:
    values = {"DB_PATH": str(tmp_path / "app.db"), "ENVIRONMENT": "test", "LOG_LEVEL": "WARNING"}
    values.update(overrides)
    return Settings(**values)


def test_health(client: TestClient, settings: Settings) -> None:
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["environment"] == "test"
    assert body["port"] == settings.PORT
    assert body["uptime"] >= 0
    assert "timestamp" in body


def test_unknown_route_is_404_envelope(client: TestClient) -> None:
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Endpoint not found"}


def test_invalid_json_body_is_400(client: TestClient) -> None:
    response = client.post("/api/tasks", content="{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_dashboard_renders_stats(client: TestClient, settings: Settings) -> None:
    create_task(client, name="Visible on dashboard")
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert settings.PROJECT_NAME in response.text
    assert "Visible on dashboard" in response.text


def test_dashboard_shows_only_newest_tasks(client: TestClient) -> None:
    for i in range(1, 7):
        create_task(client, name=f"Task number {i}")
    response = client.get("/")
    assert response.status_code == 200
    for i in range(2, 7):
        assert f"Task number {i}" in response.text
    assert "<td>Task number 1</td>" not in response.text


def test_static_files_are_served(client: TestClient) -> None:
    response = client.get("/static/css/dashboard.css")
    assert response.status_code == 200


def test_cors_allows_local_frontend(client: TestClient) -> None:
    response = client.options(
        "/api/tasks",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"},
    )
    assert response.headers.get("access-control-allow-origin") == "http://localhost:3000"


def test_rate_limit_blocks_after_max_requests(tmp_path: Path) -> None:
    app = create_app(_settings(tmp_path, RATE_LIMIT_MAX=3))
    with TestClient(app) as client:
        for remaining in (2, 1, 0):
            response = client.get("/api/health")
            assert response.status_code == 200
            assert response.headers["X-RateLimit-Limit"] == "3"
            assert response.headers["X-RateLimit-Remaining"] == str(remaining)

        blocked = client.get("/api/tasks")
        assert blocked.status_code == 429
        assert blocked.json() == {"success": False, "message": RATE_LIMIT_MESSAGE}
        assert int(blocked.headers["Retry-After"]) > 0

        # Only the API is throttled.
        assert client.get("/").status_code == 200


def test_fixed_window_resets_after_window() -> None:
    limiter = FixedWindowLimiter(max_requests=1, window_seconds=10)
    assert limiter.hit("1.2.3.4", 100.0)[0] is True
    assert limiter.hit("1.2.3.4", 105.0)[0] is False
    assert limiter.hit("5.6.7.8", 105.0)[0] is True
    assert limiter.hit("1.2.3.4", 110.0)[0] is True


def test_limiter_forgets_clients_whose_window_ended() -> None:
    limiter = FixedWindowLimiter(max_requests=1, window_seconds=1)
    for i in range(5000):
        limiter.hit(f"10.0.{i // 256}.{i % 256}", 1000.0 + i * 10)
    assert len(limiter._states) == 1


def test_limiter_keeps_clients_inside_their_window() -> None:
    limiter = FixedWindowLimiter(max_requests=1, window_seconds=10)
    limiter.hit("old", 100.0)
    limiter.hit("busy", 112.0)
    limiter.hit("late", 115.0)
    assert set(limiter._states) == {"busy", "late"}
    assert limiter.hit("busy", 116.0)[0] is False


def test_unhandled_error_shows_detail_in_development(tmp_path: Path) -> None:
    app = create_app(_settings(tmp_path, ENVIRONMENT="development"))

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/boom")
    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "kaboom"
    assert body["stack"]


def test_unhandled_error_is_generic_in_production(tmp_path: Path) -> None:
    app = create_app(_settings(tmp_path, ENVIRONMENT="production"))

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/boom")
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal server error"}


def test_startup_fails_when_database_cannot_be_created(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("occupied")
    app = create_app(_settings(tmp_path, DB_PATH=str(blocker / "app.db")))

    with pytest.raises(OSError):
        with TestClient(app):
            pass


def test_cors_origins_follow_environment(tmp_path: Path) -> None:
    production = _settings(tmp_path, ENVIRONMENT="production", FRONTEND_URL="https://board.example.com")
    assert production.CORS_ORIGINS == ["https://board.example.com"]
    assert "http://localhost:3000" in _settings(tmp_path).CORS_ORIGINS
