"""Tests for SQLiteInvoiceStore and the invoice insert helper."""

from datetime import UTC, date, datetime
from pathlib import Path

import aiosqlite
import pytest

from retail_pos.core.entities import Invoice, InvoiceItem, PaymentMethod, Product
from retail_pos.core.exceptions import DuplicateInvoiceNumberError
from retail_pos.infrastructure.storage.sqlite.connection import get_transaction
from retail_pos.infrastructure.storage.sqlite.invoice_store import (
    SQLiteInvoiceStore,
    insert_invoice,
)
from retail_pos.infrastructure.storage.sqlite.product_store import SQLiteCatalogStore


@pytest.fixture
def store(pos_db: Path) -> SQLiteInvoiceStore:
    return SQLiteInvoiceStore()


@pytest.fixture
async def products(pos_db: Path) -> list[Product]:
    catalog = SQLiteCatalogStore()
    return [
        await catalog.create_product(
            Product(name="Chicken Shawarma", category="Shawarma", sale_price=8.0, stock_quantity=100)
        ),
        await catalog.create_product(
            Product(name="Soft Drink", category="Beverages", sale_price=2.0, stock_quantity=100)
        ),
    ]


@pytest.fixture
def save(admin_user, staff_user, products):
    """Insert an invoice directly, bypassing checkout."""

    async def _save(
        number: str,
        when: datetime,
        lines: list[tuple[int, int]],
        method: PaymentMethod = PaymentMethod.CASH,
        staff=None,
    ) -> Invoice:
        staff = staff or admin_user
        invoice = Invoice(
            invoice_number=number,
            items=[
                InvoiceItem(
                    product_id=products[index].id,
                    product_name=products[index].name,
                    quantity=qty,
                    unit_price=products[index].sale_price,
                )
                for index, qty in lines
            ],
            payment_method=method,
            staff_id=staff.id,
            staff_name=staff.full_name,
            created_at=when,
        )
        async with get_transaction() as conn:
            return await insert_invoice(conn, invoice)

    return _save


class TestInsertInvoice:
    async def test_insert_sets_ids(self, save):
        invoice = await save("INV-20260501-AAAAAA", datetime(2026, 5, 1, 10, tzinfo=UTC), [(0, 2), (1, 1)])
        assert invoice.id is not None
        assert all(item.id is not None for item in invoice.items)
        assert all(item.invoice_id == invoice.id for item in invoice.items)

    async def test_duplicate_number(self, save):
        when = datetime(2026, 5, 1, 10, tzinfo=UTC)
        await save("INV-20260501-AAAAAA", when, [(0, 1)])
        with pytest.raises(DuplicateInvoiceNumberError):
            await save("INV-20260501-AAAAAA", when, [(0, 1)])

    async def test_unknown_staff_is_integrity_error(self, products):
        invoice = Invoice(
            invoice_number="INV-20260501-BBBBBB",
            items=[
                InvoiceItem(product_id=products[0].id, product_name="x", quantity=1, unit_price=1.0)
            ],
            payment_method="cash",
            staff_id=999,
            staff_name="Ghost",
        )
        with pytest.raises(aiosqlite.IntegrityError):
            async with get_transaction() as conn:
                await insert_invoice(conn, invoice)


class TestReads:
    async def test_get_invoice_round_trips_snapshot(self, store, save):
        saved = await save("INV-20260501-AAAAAA", datetime(2026, 5, 1, 10, tzinfo=UTC), [(0, 2), (1, 3)])

        invoice = await store.get_invoice(saved.id)

        assert invoice.invoice_number == "INV-20260501-AAAAAA"
        assert invoice.total == 22.0
        assert invoice.subtotal == 22.0
        assert invoice.payment_method == PaymentMethod.CASH
        assert [i.product_name for i in invoice.items] == ["Chicken Shawarma", "Soft Drink"]
        assert invoice.created_at == datetime(2026, 5, 1, 10, tzinfo=UTC)

    async def test_get_missing(self, store, pos_db):
        assert await store.get_invoice(999) is None
        assert await store.get_by_number("INV-NOPE") is None

    async def test_get_by_number(self, store, save):
        saved = await save("INV-20260501-CCCCCC", datetime(2026, 5, 1, 10, tzinfo=UTC), [(0, 1)])
        invoice = await store.get_by_number("INV-20260501-CCCCCC")
        assert invoice.id == saved.id

    async def test_list_newest_first_with_items(self, store, save):
        await save("INV-1", datetime(2026, 5, 1, 10, tzinfo=UTC), [(0, 1)])
        await save("INV-2", datetime(2026, 5, 2, 10, tzinfo=UTC), [(0, 1), (1, 1)])

        invoices = await store.list_invoices()

        assert [i.invoice_number for i in invoices] == ["INV-2", "INV-1"]
        assert len(invoices[0].items) == 2

    async def test_list_date_range_is_inclusive(self, store, save):
        await save("INV-APR", datetime(2026, 4, 30, 23, 59, tzinfo=UTC), [(0, 1)])
        await save("INV-MAY1", datetime(2026, 5, 1, 0, 0, tzinfo=UTC), [(0, 1)])
        await save("INV-MAY2", datetime(2026, 5, 2, 23, 59, tzinfo=UTC), [(0, 1)])
        await save("INV-MAY3", datetime(2026, 5, 3, 0, 0, tzinfo=UTC), [(0, 1)])

        invoices = await store.list_invoices(start_date=date(2026, 5, 1), end_date=date(2026, 5, 2))

        assert [i.invoice_number for i in invoices] == ["INV-MAY2", "INV-MAY1"]
        assert await store.count_invoices(date(2026, 5, 1), date(2026, 5, 2)) == 2

    async def test_list_by_staff(self, store, save, staff_user):
        await save("INV-ADMIN", datetime(2026, 5, 1, 10, tzinfo=UTC), [(0, 1)])
        await save("INV-STAFF", datetime(2026, 5, 1, 11, tzinfo=UTC), [(0, 1)], staff=staff_user)

        invoices = await store.list_invoices(staff_id=staff_user.id)

        assert [i.invoice_number for i in invoices] == ["INV-STAFF"]
        assert await store.count_invoices(staff_id=staff_user.id) == 1

    async def test_pagination(self, store, save):
        for n in range(5):
            await save(f"INV-{n}", datetime(2026, 5, 1, 10 + n, tzinfo=UTC), [(0, 1)])

        page = await store.list_invoices(limit=2, offset=2)

        assert [i.invoice_number for i in page] == ["INV-2", "INV-1"]
        assert await store.count_invoices() == 5

    async def test_scan_pages_by_ascending_id(self, store, save):
        saved = [
            await save(f"INV-{n}", datetime(2026, 5, 1, 10 + n, tzinfo=UTC), [(0, 1)])
            for n in range(3)
        ]

        first = await store.scan_invoices(date(2026, 5, 1), date(2026, 5, 1), limit=2)
        rest = await store.scan_invoices(
            date(2026, 5, 1), date(2026, 5, 1), after_id=first[-1].id, limit=2
        )

        assert [i.id for i in first + rest] == [s.id for s in saved]
        assert len(rest[0].items) == 1

    async def test_scan_ignores_rows_added_between_pages(self, store, save):
        for n in range(3):
            await save(f"INV-{n}", datetime(2026, 5, 1, 10 + n, tzinfo=UTC), [(0, 1)])

        first = await store.scan_invoices(date(2026, 5, 1), date(2026, 5, 1), limit=2)
        await save("INV-LATE", datetime(2026, 5, 1, 23, tzinfo=UTC), [(0, 1)])
        rest = await store.scan_invoices(
            date(2026, 5, 1), date(2026, 5, 1), after_id=first[-1].id, limit=2
        )

        numbers = [i.invoice_number for i in first + rest]
        assert numbers == ["INV-0", "INV-1", "INV-2", "INV-LATE"]

    async def test_scan_respects_range(self, store, save):
        await save("INV-APR", datetime(2026, 4, 30, 23, tzinfo=UTC), [(0, 1)])
        await save("INV-MAY", datetime(2026, 5, 1, 9, tzinfo=UTC), [(0, 1)])

        invoices = await store.scan_invoices(date(2026, 5, 1), date(2026, 5, 31))

        assert [i.invoice_number for i in invoices] == ["INV-MAY"]


class TestAggregates:
    async def test_daily_totals(self, store, save):
        await save("INV-1", datetime(2026, 5, 1, 9, tzinfo=UTC), [(0, 1)])
        await save("INV-2", datetime(2026, 5, 1, 18, tzinfo=UTC), [(1, 2)])
        await save("INV-3", datetime(2026, 5, 3, 12, tzinfo=UTC), [(0, 2)])

        totals = await store.daily_totals(date(2026, 5, 1), date(2026, 5, 3))

        assert [(t.day, t.orders, t.sales) for t in totals] == [
            (date(2026, 5, 1), 2, 12.0),
            (date(2026, 5, 3), 1, 16.0),
        ]

    async def test_best_sellers_by_quantity(self, store, save):
        await save("INV-1", datetime(2026, 5, 1, 9, tzinfo=UTC), [(0, 2), (1, 5)])
        await save("INV-2", datetime(2026, 5, 2, 9, tzinfo=UTC), [(0, 1), (1, 1)])

        best = await store.best_sellers(limit=5)

        assert [p.name for p in best] == ["Soft Drink", "Chicken Shawarma"]
        assert best[0].quantity == 6
        assert best[0].revenue == 12.0
        assert best[1].revenue == 24.0

    async def test_best_sellers_limit_and_range(self, store, save):
        await save("INV-1", datetime(2026, 5, 1, 9, tzinfo=UTC), [(1, 5)])
        await save("INV-2", datetime(2026, 5, 2, 9, tzinfo=UTC), [(0, 1)])

        best = await store.best_sellers(limit=1, start_date=date(2026, 5, 2), end_date=date(2026, 5, 2))

        assert [p.name for p in best] == ["Chicken Shawarma"]
