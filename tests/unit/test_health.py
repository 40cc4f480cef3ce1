from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from barpos.api.main import create_app
from barpos.infrastructure.settings import Settings


def _app():
    return create_app(Settings(app_env="test", seed_menu=False))


def test_live_health_endpoint() -> None:
    with TestClient(_app()) as client:
        response = client.get("/health/live")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready_without_redis_only_checks_the_store() -> None:
    app = _app()

    with TestClient(app) as client:
        response = client.get("/health/ready")

    assert app.state.redis_probe is None
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready_with_healthy_redis_probe() -> None:
    app = _app()
    app.state.redis_probe = lambda: True

    with TestClient(app) as client:
        response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready_reports_unavailable_dependencies() -> None:
    app = _app()
    app.state.store = replace(app.state.store, ping=lambda: False)
    app.state.redis_probe = lambda: False

    with TestClient(app) as client:
        response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json() == {
        "status": "unavailable",
        "checks": {"store": False, "redis": False},
    }
