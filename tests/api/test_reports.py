"""API tests for the sales report endpoint."""

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from retail_pos.api.dependencies import get_generate_report_use_case
from retail_pos.api.main import app
from retail_pos.application.use_cases.generate_report import GenerateReportUseCase
from retail_pos.core.entities import Expense, Invoice, InvoiceItem


@pytest.fixture
def report_stores():
    invoices = AsyncMock()
    invoices.scan_invoices.return_value = [
        Invoice(
            id=1,
            invoice_number="INV-20260502-AAAAAA",
            items=[InvoiceItem(product_id=1, product_name="Wrap", quantity=3, unit_price=5.0)],
            payment_method="online_bank",
            staff_id=2,
            staff_name="Staff Member",
            created_at=datetime(2026, 5, 2, 12, tzinfo=UTC),
        )
    ]
    expenses = AsyncMock()
    expenses.scan_expenses.return_value = [
        Expense(id=1, title="Rent", amount=5.0, date=date(2026, 5, 2))
    ]
    return invoices, expenses


@pytest.fixture
async def report_client(report_stores):
    invoices, expenses = report_stores
    use_case = GenerateReportUseCase(invoice_store=invoices, expense_store=expenses)
    app.dependency_overrides[get_generate_report_use_case] = lambda: use_case
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_generate_report_use_case, None)


class TestSalesReportAPI:
    async def test_report(self, report_client, admin_headers):
        response = await report_client.get(
            "/api/reports/sales",
            params={"start_date": "2026-05-01", "end_date": "2026-05-31"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["start_date"] == "2026-05-01"
        assert data["summary"]["total_sales"] == 15.0
        assert data["summary"]["online_sales"] == 15.0
        assert data["summary"]["cash_sales"] == 0.0
        assert data["summary"]["net_profit"] == 10.0
        assert data["product_summary"][0]["quantity"] == 3
        assert data["daily_breakdown"][0]["day"] == "2026-05-02"

    async def test_defaults_to_current_month(self, report_client, report_stores, admin_headers):
        invoices, _ = report_stores
        today = datetime.now(UTC).date()

        response = await report_client.get("/api/reports/sales", headers=admin_headers)

        assert response.status_code == 200
        kwargs = invoices.scan_invoices.await_args.kwargs
        assert kwargs["start_date"] == today.replace(day=1)
        assert kwargs["end_date"] == today

    async def test_inverted_range_is_400(self, report_client, admin_headers):
        response = await report_client.get(
            "/api/reports/sales",
            params={"start_date": "2026-06-01", "end_date": "2026-05-01"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_staff_forbidden(self, report_client, staff_headers):
        response = await report_client.get("/api/reports/sales", headers=staff_headers)
        assert response.status_code == 403
