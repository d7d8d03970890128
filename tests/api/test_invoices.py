"""API tests for invoice (checkout) endpoints."""

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from retail_pos.api.dependencies import get_create_invoice_use_case, get_inv_store
from retail_pos.api.main import app
from retail_pos.application.use_cases.create_invoice import (
    CreateInvoiceResult,
    CreateInvoiceUseCase,
    invoice_to_response,
)
from retail_pos.core.entities import DailyTotal, Invoice, InvoiceItem
from retail_pos.core.exceptions import InsufficientStockError, PersistenceError


def _make_invoice(staff_id: int = 2, staff_name: str = "Staff Member") -> Invoice:
    return Invoice(
        id=1,
        invoice_number="INV-20260501-K3M9QZ",
        items=[
            InvoiceItem(
                id=1, invoice_id=1, product_id=1,
                product_name="Chicken Shawarma", quantity=2, unit_price=8.99,
            ),
        ],
        payment_method="cash",
        staff_id=staff_id,
        staff_name=staff_name,
        created_at=datetime(2026, 5, 1, 12, tzinfo=UTC),
    )


@pytest.fixture
def mock_invoice_store():
    store = AsyncMock()
    store.list_invoices.return_value = [_make_invoice()]
    store.count_invoices.return_value = 3
    store.get_invoice.return_value = _make_invoice()
    store.daily_totals.return_value = [
        DailyTotal(day=datetime.now(UTC).date(), orders=4, sales=61.5)
    ]
    return store


@pytest.fixture
def mock_create_uc():
    uc = AsyncMock(spec=CreateInvoiceUseCase)
    uc.execute.return_value = CreateInvoiceResult(invoice=_make_invoice())
    uc.to_response.return_value = invoice_to_response(_make_invoice())
    return uc


@pytest.fixture
async def invoice_client(mock_invoice_store, mock_create_uc):
    app.dependency_overrides[get_inv_store] = lambda: mock_invoice_store
    app.dependency_overrides[get_create_invoice_use_case] = lambda: mock_create_uc
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_inv_store, None)
    app.dependency_overrides.pop(get_create_invoice_use_case, None)


CART = {"items": [{"product_id": 1, "quantity": 2}], "payment_method": "cash"}


class TestCreateInvoice:
    async def test_create_returns_201(self, invoice_client, mock_create_uc, staff_headers):
        response = await invoice_client.post("/api/invoices", json=CART, headers=staff_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["invoice_number"] == "INV-20260501-K3M9QZ"
        assert data["total"] == pytest.approx(17.98)
        assert data["item_count"] == 2
        assert data["items"][0]["product_name"] == "Chicken Shawarma"

    async def test_caller_identity_passed_to_checkout(
        self, invoice_client, mock_create_uc, staff_headers
    ):
        await invoice_client.post("/api/invoices", json=CART, headers=staff_headers)

        kwargs = mock_create_uc.execute.await_args.kwargs
        assert kwargs["staff_id"] == 2
        assert kwargs["staff_name"] == "Staff Member"

    async def test_missing_identity_is_401(self, invoice_client, mock_create_uc):
        response = await invoice_client.post("/api/invoices", json=CART)

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTHENTICATION_REQUIRED"
        mock_create_uc.execute.assert_not_awaited()

    async def test_unknown_role_is_401(self, invoice_client):
        headers = {"X-Staff-Id": "2", "X-Staff-Role": "manager"}
        response = await invoice_client.post("/api/invoices", json=CART, headers=headers)
        assert response.status_code == 401

    async def test_empty_cart_is_400(self, invoice_client, staff_headers):
        """Validation runs before any storage is touched."""
        uow = AsyncMock()
        app.dependency_overrides[get_create_invoice_use_case] = lambda: CreateInvoiceUseCase(uow=uow)

        response = await invoice_client.post(
            "/api/invoices", json={"items": [], "payment_method": "cash"}, headers=staff_headers
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert "Cart is empty" in body["message"]
        uow.begin.assert_not_called()

    async def test_bad_payment_method_is_400(self, invoice_client, staff_headers):
        app.dependency_overrides[get_create_invoice_use_case] = lambda: CreateInvoiceUseCase(
            uow=AsyncMock()
        )
        response = await invoice_client.post(
            "/api/invoices",
            json={"items": [{"product_id": 1, "quantity": 1}], "payment_method": "card"},
            headers=staff_headers,
        )
        assert response.status_code == 400

    async def test_missing_payment_method_is_400(self, invoice_client, staff_headers):
        uow = AsyncMock()
        app.dependency_overrides[get_create_invoice_use_case] = lambda: CreateInvoiceUseCase(uow=uow)

        response = await invoice_client.post(
            "/api/invoices",
            json={"items": [{"product_id": 1, "quantity": 1}]},
            headers=staff_headers,
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert "Payment method is required" in body["message"]
        uow.begin.assert_not_called()

    async def test_boolean_quantity_is_422(self, invoice_client, mock_create_uc, staff_headers):
        response = await invoice_client.post(
            "/api/invoices",
            json={"items": [{"product_id": 1, "quantity": True}], "payment_method": "cash"},
            headers=staff_headers,
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        mock_create_uc.execute.assert_not_called()

    async def test_malformed_body_is_422(self, invoice_client, staff_headers):
        response = await invoice_client.post(
            "/api/invoices",
            json={"items": [{"product_id": "abc", "quantity": 1}]},
            headers=staff_headers,
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_insufficient_stock_is_409(self, invoice_client, mock_create_uc, staff_headers):
        mock_create_uc.execute.side_effect = InsufficientStockError(1, "Chicken Shawarma", 10, 5)

        response = await invoice_client.post("/api/invoices", json=CART, headers=staff_headers)

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "INSUFFICIENT_STOCK"
        assert body["message"] == "Insufficient stock for Chicken Shawarma. Available: 5"

    async def test_persistence_failure_is_500(self, invoice_client, mock_create_uc, staff_headers):
        mock_create_uc.execute.side_effect = PersistenceError("checkout")

        response = await invoice_client.post("/api/invoices", json=CART, headers=staff_headers)

        assert response.status_code == 500
        body = response.json()
        assert body["error_code"] == "PERSISTENCE_FAILURE"
        assert body["message"] == "Could not save checkout. Nothing was written."
        assert "error" not in (body["detail"] or "")


class TestListInvoices:
    async def test_staff_sees_own_only(self, invoice_client, mock_invoice_store, staff_headers):
        response = await invoice_client.get("/api/invoices", headers=staff_headers)

        assert response.status_code == 200
        assert mock_invoice_store.list_invoices.await_args.kwargs["staff_id"] == 2
        data = response.json()
        assert data["total"] == 3
        assert data["has_more"] is True
        assert len(data["invoices"]) == 1

    async def test_admin_sees_all(self, invoice_client, mock_invoice_store, admin_headers):
        await invoice_client.get("/api/invoices", headers=admin_headers)
        assert mock_invoice_store.list_invoices.await_args.kwargs["staff_id"] is None

    async def test_date_filters_forwarded(self, invoice_client, mock_invoice_store, admin_headers):
        await invoice_client.get(
            "/api/invoices",
            params={"start_date": "2026-05-01", "end_date": "2026-05-31", "limit": 10},
            headers=admin_headers,
        )
        kwargs = mock_invoice_store.list_invoices.await_args.kwargs
        assert kwargs["start_date"] == date(2026, 5, 1)
        assert kwargs["end_date"] == date(2026, 5, 31)
        assert kwargs["limit"] == 10

    async def test_today_stats(self, invoice_client, admin_headers):
        response = await invoice_client.get("/api/invoices/stats/today", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["orders"] == 4
        assert response.json()["sales"] == 61.5


class TestGetInvoice:
    async def test_owner_can_view(self, invoice_client, staff_headers):
        response = await invoice_client.get("/api/invoices/1", headers=staff_headers)
        assert response.status_code == 200
        assert response.json()["staff_id"] == 2

    async def test_other_staff_forbidden(self, invoice_client, mock_invoice_store, staff_headers):
        mock_invoice_store.get_invoice.return_value = _make_invoice(staff_id=7, staff_name="Other")

        response = await invoice_client.get("/api/invoices/1", headers=staff_headers)

        assert response.status_code == 403
        assert response.json()["error_code"] == "PERMISSION_DENIED"

    async def test_admin_can_view_any(self, invoice_client, mock_invoice_store, admin_headers):
        mock_invoice_store.get_invoice.return_value = _make_invoice(staff_id=7, staff_name="Other")
        response = await invoice_client.get("/api/invoices/1", headers=admin_headers)
        assert response.status_code == 200

    async def test_missing_is_404(self, invoice_client, mock_invoice_store, admin_headers):
        mock_invoice_store.get_invoice.return_value = None
        response = await invoice_client.get("/api/invoices/99", headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["error_code"] == "INVOICE_NOT_FOUND"
