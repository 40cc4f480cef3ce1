from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from barpos.api.main import create_app
from barpos.application.use_cases.menu_catalog import MENU_CACHE_KEY
from barpos.infrastructure.cache import redis_client
from barpos.infrastructure.db.repositories import menu_repo as menu_repo_module
from barpos.infrastructure.settings import Settings

pytestmark = pytest.mark.integration


def test_menu_is_served_from_redis_once_warm(settings: Settings, monkeypatch) -> None:
    redis = redis_client.get_redis_client(settings.redis_url)

    with TestClient(create_app(settings)) as client:
        first_response = client.get("/v1/menu-items")
        assert first_response.status_code == 200
        assert len(first_response.json()) == 12
        assert redis.ttl(MENU_CACHE_KEY) > 0

        def _raise_if_called(*args, **kwargs):
            raise RuntimeError("database should not be called on warm cache")

        monkeypatch.setattr(
            menu_repo_module.SqlAlchemyMenuRepository,
            "list_items",
            _raise_if_called,
        )

        second_response = client.get("/v1/menu-items")
        assert second_response.status_code == 200
        assert second_response.json() == first_response.json()


def test_menu_writes_invalidate_the_cache(settings: Settings) -> None:
    redis = redis_client.get_redis_client(settings.redis_url)

    with TestClient(create_app(settings)) as client:
        client.get("/v1/menu-items")
        assert redis.exists(MENU_CACHE_KEY) == 1

        created = client.post(
            "/v1/menu-items",
            json={"name": "ハイボール", "price": 550, "category": "cocktail"},
        )
        assert created.status_code == 201
        assert redis.exists(MENU_CACHE_KEY) == 0

        names = [item["name"] for item in client.get("/v1/menu-items").json()]
        assert "ハイボール" in names

        assert client.delete(f"/v1/menu-items/{created.json()['id']}").status_code == 204


def test_ready_checks_postgres_and_redis(settings: Settings) -> None:
    with TestClient(create_app(settings)) as client:
        response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
