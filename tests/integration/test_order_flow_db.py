from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from barpos.api.main import create_app
from barpos.infrastructure.settings import Settings

pytestmark = pytest.mark.integration


def test_order_lifecycle_is_persisted(settings: Settings) -> None:
    with TestClient(create_app(settings)) as client:
        place_response = client.post(
            "/v1/orders",
            json={"items": [{"menuItemId": 1, "quantity": 2}, {"menuItemId": 11, "quantity": 1}]},
        )
        assert place_response.status_code == 201
        placed = place_response.json()
        assert placed["orderNumber"] == "#1000"
        assert placed["totalAmount"] == 1500

        edit_response = client.patch(
            f"/v1/orders/{placed['id']}",
            json={
                "orderNumber": placed["orderNumber"],
                "status": "in-progress",
                "items": [{"menuItemId": 2, "quantity": 4}],
            },
        )
        assert edit_response.status_code == 200
        assert edit_response.json()["totalAmount"] == 2200

        ready_response = client.patch(
            f"/v1/orders/{placed['id']}/status",
            json={"status": "ready"},
        )
        assert ready_response.status_code == 200
        assert ready_response.json()["status"] == "ready"

    # a fresh application instance reads the same rows and keeps counting
    with TestClient(create_app(settings)) as client:
        get_response = client.get(f"/v1/orders/{placed['id']}", params={"withItems": "true"})
        assert get_response.status_code == 200
        assert get_response.json()["status"] == "ready"
        assert [item["quantity"] for item in get_response.json()["items"]] == [4]

        next_response = client.post(
            "/v1/orders",
            json={"items": [{"menuItemId": 3, "quantity": 1}]},
        )
        assert next_response.json()["orderNumber"] == "#1001"

        delete_response = client.delete(f"/v1/orders/{placed['id']}")
        assert delete_response.status_code == 204
        assert client.get(f"/v1/orders/{placed['id']}").status_code == 404
