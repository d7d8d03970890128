"""API tests for catalog endpoints."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from retail_pos.api.dependencies import get_cat_store
from retail_pos.api.main import app
from retail_pos.core.entities import Product, ProductStatus
from retail_pos.core.exceptions import ProductInUseError, ProductNotFoundError


def _make_product(**overrides) -> Product:
    now = datetime(2026, 5, 1, 9, tzinfo=UTC)
    data = {
        "id": 1,
        "name": "Falafel Wrap",
        "category": "Wraps",
        "sale_price": 6.99,
        "stock_quantity": 25,
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return Product(**data)


@pytest.fixture
def mock_catalog_store():
    store = AsyncMock()
    store.list_products.return_value = [_make_product()]
    store.get_product.return_value = _make_product()
    store.list_low_stock.return_value = [_make_product(id=2, name="Baklava", stock_quantity=3)]

    async def create(product):
        product.id = 10
        return product

    store.create_product.side_effect = create
    store.update_product.return_value = _make_product(sale_price=7.49)
    return store


@pytest.fixture
async def product_client(mock_catalog_store):
    app.dependency_overrides[get_cat_store] = lambda: mock_catalog_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_cat_store, None)


class TestProductReads:
    async def test_staff_can_list(self, product_client, staff_headers):
        response = await product_client.get("/api/products", headers=staff_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["products"][0]["name"] == "Falafel Wrap"

    async def test_filters_forwarded(self, product_client, mock_catalog_store, staff_headers):
        await product_client.get(
            "/api/products",
            params={"search": "wrap", "category": "Wraps", "status": "inactive"},
            headers=staff_headers,
        )
        mock_catalog_store.list_products.assert_awaited_once_with(
            search="wrap", category="Wraps", status=ProductStatus.INACTIVE
        )

    async def test_list_requires_identity(self, product_client):
        response = await product_client.get("/api/products")
        assert response.status_code == 401

    async def test_get_product(self, product_client, staff_headers):
        response = await product_client.get("/api/products/1", headers=staff_headers)
        assert response.status_code == 200
        assert response.json()["stock_quantity"] == 25

    async def test_get_missing(self, product_client, mock_catalog_store, staff_headers):
        mock_catalog_store.get_product.return_value = None
        response = await product_client.get("/api/products/99", headers=staff_headers)
        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"

    async def test_low_stock_admin_only(self, product_client, staff_headers):
        response = await product_client.get("/api/products/alert/low-stock", headers=staff_headers)
        assert response.status_code == 403

    async def test_low_stock_default_threshold(self, product_client, mock_catalog_store, admin_headers):
        response = await product_client.get("/api/products/alert/low-stock", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["threshold"] == 20
        assert response.json()["products"][0]["name"] == "Baklava"
        mock_catalog_store.list_low_stock.assert_awaited_once_with(20)


class TestProductWrites:
    async def test_create(self, product_client, admin_headers):
        response = await product_client.post(
            "/api/products",
            json={"name": "Garlic Sauce", "category": "Sides", "sale_price": 0.99, "stock_quantity": 40},
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["id"] == 10
        assert response.json()["status"] == "active"

    async def test_create_negative_price_rejected(self, product_client, admin_headers):
        response = await product_client.post(
            "/api/products",
            json={"name": "X", "category": "Sides", "sale_price": -1},
            headers=admin_headers,
        )
        assert response.status_code == 422

    async def test_staff_cannot_create(self, product_client, mock_catalog_store, staff_headers):
        response = await product_client.post(
            "/api/products",
            json={"name": "X", "category": "Sides", "sale_price": 1},
            headers=staff_headers,
        )
        assert response.status_code == 403
        mock_catalog_store.create_product.assert_not_awaited()

    async def test_update_sends_only_set_fields(self, product_client, mock_catalog_store, admin_headers):
        response = await product_client.put(
            "/api/products/1", json={"sale_price": 7.49}, headers=admin_headers
        )
        assert response.status_code == 200
        mock_catalog_store.update_product.assert_awaited_once_with(1, {"sale_price": 7.49})

    async def test_update_missing(self, product_client, mock_catalog_store, admin_headers):
        mock_catalog_store.update_product.side_effect = ProductNotFoundError(5)
        response = await product_client.put("/api/products/5", json={"name": "Y"}, headers=admin_headers)
        assert response.status_code == 404

    async def test_delete(self, product_client, admin_headers):
        response = await product_client.delete("/api/products/1", headers=admin_headers)
        assert response.status_code == 204

    async def test_delete_sold_product_conflict(self, product_client, mock_catalog_store, admin_headers):
        mock_catalog_store.delete_product.side_effect = ProductInUseError(1)
        response = await product_client.delete("/api/products/1", headers=admin_headers)
        assert response.status_code == 409
        assert response.json()["error_code"] == "PRODUCT_IN_USE"
