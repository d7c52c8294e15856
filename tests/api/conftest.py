"""Fixtures for API tests."""

from collections.abc import Callable
from typing import Any

import pytest
from fastapi.testclient import TestClient

from storefront.infrastructure.config import settings
from storefront.main import app


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Authorization headers for admin writes."""
    return {"Authorization": f"Bearer {settings.catalog_api_key}"}


@pytest.fixture
def image(client: TestClient, auth_headers: dict[str, str]) -> dict[str, Any]:
    """Register one image through the API."""
    response = client.post(
        "/media",
        json={"alt": "Фото товара", "filename": "tovar.webp", "mimeType": "image/webp"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def create_product(
    client: TestClient,
    auth_headers: dict[str, str],
    image: dict[str, Any],
) -> Callable[..., dict[str, Any]]:
    """Factory creating products through the API.

    Products are active, in stock and priced at 100 unless overridden.
    """

    def _create(**overrides: Any) -> dict[str, Any]:
        data = {
            "name": "Стикер №1",
            "type": "stickers",
            "active": True,
            "inStock": True,
            "mainImage": image["id"],
            "pricing": {"price": 100},
        }
        data.update(overrides)
        response = client.post("/products", json=data, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
