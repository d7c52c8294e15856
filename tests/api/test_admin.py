"""Tests for admin write endpoints."""

from fastapi.testclient import TestClient


class TestCreateProduct:
    """Tests for POST /products."""

    def test_requires_api_key(self, client: TestClient) -> None:
        """Writes without a key are rejected."""
        response = client.post("/products", json={"name": "Товар"})
        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"

    def test_slug_derived_from_name(self, create_product) -> None:
        """Leaving slug empty derives it from the name."""
        product = create_product(name="Стикер №1")
        assert product["slug"] == "stiker-1"
        assert product["id"]

    def test_explicit_slug_kept(self, create_product) -> None:
        """An explicit slug is stored as given."""
        assert create_product(slug="custom")["slug"] == "custom"

    def test_duplicate_slug(self, client: TestClient, auth_headers, create_product, image) -> None:
        """A taken slug is a 409."""
        create_product(name="Дождь")
        response = client.post(
            "/products",
            json={"name": "ДОЖДЬ", "mainImage": image["id"], "pricing": {"price": 1}},
            headers=auth_headers,
        )
        assert response.status_code == 409
        data = response.json()
        assert data["error_code"] == "SLUG_CONFLICT"
        assert data["details"] == {"slug": "dozhd"}

    def test_whitespace_slug_is_derived(self, client: TestClient, create_product) -> None:
        """A whitespace-only slug is replaced and the product can be fetched."""
        product = create_product(name="Товар", slug="   ")
        assert product["slug"] == "tovar"

        assert [doc["slug"] for doc in client.get("/products/list").json()["docs"]] == ["tovar"]
        assert client.get("/products/i/tovar").status_code == 200

    def test_price_with_too_many_decimals(
        self, client: TestClient, auth_headers, image
    ) -> None:
        """Prices keep at most two decimal places."""
        response = client.post(
            "/products",
            json={"name": "Товар", "mainImage": image["id"], "pricing": {"price": 99.999}},
            headers=auth_headers,
        )
        assert response.status_code == 422
        errors = response.json()["details"]["errors"]
        assert errors[0]["field"] == "pricing.price"

    def test_price_out_of_range(self, client: TestClient, auth_headers, image) -> None:
        """Prices that do not fit the stored column are a 422."""
        response = client.post(
            "/products",
            json={"name": "Товар", "mainImage": image["id"], "pricing": {"price": 1e10}},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_name_without_slug_characters(
        self, client: TestClient, auth_headers, image
    ) -> None:
        """A name that produces an empty slug is rejected."""
        response = client.post(
            "/products",
            json={"name": "!!!", "mainImage": image["id"], "pricing": {"price": 1}},
            headers=auth_headers,
        )
        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert "slug" in [error["field"] for error in data["details"]["errors"]]

    def test_missing_name(self, client: TestClient, auth_headers, image) -> None:
        """Name is required."""
        response = client.post(
            "/products",
            json={"mainImage": image["id"], "pricing": {"price": 1}},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_unknown_media(self, client: TestClient, auth_headers) -> None:
        """Media references must exist."""
        response = client.post(
            "/products",
            json={"name": "Товар", "mainImage": "missing", "pricing": {"price": 1}},
            headers=auth_headers,
        )
        assert response.status_code == 422
        errors = response.json()["details"]["errors"]
        assert errors[0]["field"] == "mainImage"

    def test_negative_price(self, client: TestClient, auth_headers, image) -> None:
        """Prices cannot be negative."""
        response = client.post(
            "/products",
            json={"name": "Товар", "mainImage": image["id"], "pricing": {"price": -5}},
            headers=auth_headers,
        )
        assert response.status_code == 422


class TestUpdateProduct:
    """Tests for PATCH /products/{id}."""

    def test_rename_keeps_slug(self, client: TestClient, auth_headers, create_product) -> None:
        """Renaming keeps the existing slug."""
        product = create_product(name="Старое имя")
        response = client.patch(
            f"/products/{product['id']}",
            json={"name": "Новое имя"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Новое имя"
        assert data["slug"] == "staroe-imya"

    def test_cleared_slug_regenerates(
        self, client: TestClient, auth_headers, create_product
    ) -> None:
        """Sending an empty slug derives a new one from the name."""
        product = create_product(name="Старое имя")
        response = client.patch(
            f"/products/{product['id']}",
            json={"name": "Новое имя", "slug": ""},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["slug"] == "novoe-imya"

    def test_whitespace_slug_regenerates(
        self, client: TestClient, auth_headers, create_product
    ) -> None:
        """A whitespace-only slug in a patch regenerates it from the name."""
        product = create_product(name="Старое имя")
        response = client.patch(
            f"/products/{product['id']}",
            json={"name": "Новое имя", "slug": "  "},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["slug"] == "novoe-imya"

    def test_deactivate_hides_product(
        self, client: TestClient, auth_headers, create_product
    ) -> None:
        """Deactivated products disappear from public reads."""
        product = create_product(name="Товар 2")
        client.patch(
            f"/products/{product['id']}",
            json={"active": False},
            headers=auth_headers,
        )
        assert client.get("/products/i/tovar-2").status_code == 404
        assert client.get("/products/list").json()["total"] == 0

    def test_price_merge(self, client: TestClient, auth_headers, create_product) -> None:
        """Pricing is merged key by key."""
        product = create_product(pricing={"price": 100, "oldPrice": 150})
        response = client.patch(
            f"/products/{product['id']}",
            json={"pricing": {"price": 80}},
            headers=auth_headers,
        )
        assert response.json()["pricing"] == {"price": 80.0, "oldPrice": 150.0}

    def test_unknown_product(self, client: TestClient, auth_headers) -> None:
        """Updating a missing product is a 404."""
        response = client.patch(
            "/products/missing",
            json={"name": "X"},
            headers=auth_headers,
        )
        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"

    def test_requires_api_key(self, client: TestClient, create_product) -> None:
        """Updates without a key are rejected."""
        product = create_product()
        response = client.patch(f"/products/{product['id']}", json={"name": "X"})
        assert response.status_code == 401


class TestCreateMedia:
    """Tests for POST /media."""

    def test_create(self, client: TestClient, auth_headers) -> None:
        """Accepted MIME types are registered."""
        response = client.post(
            "/media",
            json={"alt": "Видео", "filename": "clip.webm", "mimeType": "video/webm"},
            headers=auth_headers,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["id"]
        assert data["mimeType"] == "video/webm"

    def test_rejects_mime_type(self, client: TestClient, auth_headers) -> None:
        """Other MIME types are a 422."""
        response = client.post(
            "/media",
            json={"alt": "Doc", "filename": "file.pdf", "mimeType": "application/pdf"},
            headers=auth_headers,
        )
        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["details"]["mime_type"] == "application/pdf"

    def test_requires_api_key(self, client: TestClient) -> None:
        """Media registration is an admin write."""
        response = client.post(
            "/media",
            json={"alt": "a", "filename": "a.png", "mimeType": "image/png"},
        )
        assert response.status_code == 401
