"""SQLite implementation of the invoice ledger."""

from datetime import date
from typing import Any

import aiosqlite

from retail_pos.config import get_logger
from retail_pos.core.entities.invoice import Invoice, InvoiceItem, PaymentMethod
from retail_pos.core.entities.report import DailyTotal, ProductSales
from retail_pos.core.exceptions import DuplicateInvoiceNumberError
from retail_pos.core.interfaces.invoice_store import IInvoiceStore
from retail_pos.infrastructure.storage.sqlite.connection import get_connection
from retail_pos.infrastructure.storage.sqlite.rows import (
    day_bounds,
    parse_date,
    parse_timestamp,
)

logger = get_logger(__name__)


def is_duplicate_number(error: aiosqlite.IntegrityError) -> bool:
    """True when an IntegrityError came from the invoice_number UNIQUE index."""
    message = str(error)
    return "UNIQUE" in message and "invoice_number" in message


async def insert_invoice(conn: aiosqlite.Connection, invoice: Invoice) -> Invoice:
    """
    Insert invoice header and items on an open transaction.

    A number collision only aborts the failing statement, so the caller may
    retry with a fresh number inside the same transaction.
    """
    try:
        cursor = await conn.execute(
            """
            INSERT INTO invoices (
                invoice_number, subtotal, total, payment_method,
                staff_id, staff_name, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                invoice.invoice_number,
                invoice.subtotal,
                invoice.total,
                invoice.payment_method.value,
                invoice.staff_id,
                invoice.staff_name,
                invoice.created_at.isoformat(),
            ),
        )
    except aiosqlite.IntegrityError as e:
        if is_duplicate_number(e):
            raise DuplicateInvoiceNumberError(invoice.invoice_number) from e
        raise
    invoice.id = cursor.lastrowid

    for item in invoice.items:
        item.invoice_id = invoice.id
        item_cursor = await conn.execute(
            """
            INSERT INTO invoice_items (
                invoice_id, product_id, product_name,
                quantity, unit_price, total
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                item.invoice_id,
                item.product_id,
                item.product_name,
                item.quantity,
                item.unit_price,
                item.total,
            ),
        )
        item.id = item_cursor.lastrowid

    return invoice


def _filters(
    start_date: date | None,
    end_date: date | None,
    staff_id: int | None,
    alias: str = "",
) -> tuple[str, list[Any]]:
    """Build the WHERE fragment shared by invoice queries."""
    prefix = f"{alias}." if alias else ""
    clauses: list[str] = []
    params: list[Any] = []

    lower, upper = day_bounds(start_date, end_date)
    if lower:
        clauses.append(f"{prefix}created_at >= ?")
        params.append(lower)
    if upper:
        clauses.append(f"{prefix}created_at < ?")
        params.append(upper)
    if staff_id is not None:
        clauses.append(f"{prefix}staff_id = ?")
        params.append(staff_id)

    where = " WHERE " + " AND ".join(clauses) if clauses else ""
    return where, params


class SQLiteInvoiceStore(IInvoiceStore):
    """SQLite implementation of invoice reads and aggregates."""

    async def get_invoice(self, invoice_id: int) -> Invoice | None:
        """Get invoice by ID with items."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM invoices WHERE id = ?", (invoice_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            items = await self._load_items(conn, [row["id"]])
            return self._row_to_invoice(row, items.get(row["id"], []))

    async def get_by_number(self, invoice_number: str) -> Invoice | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM invoices WHERE invoice_number = ?", (invoice_number,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            items = await self._load_items(conn, [row["id"]])
            return self._row_to_invoice(row, items.get(row["id"], []))

    async def list_invoices(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        staff_id: int | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Invoice]:
        """List invoices, newest first, with items."""
        where, params = _filters(start_date, end_date, staff_id)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM invoices{where}
                ORDER BY created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                [*params, limit, offset],
            )
            rows = await cursor.fetchall()
            items = await self._load_items(conn, [row["id"] for row in rows])
            return [self._row_to_invoice(row, items.get(row["id"], [])) for row in rows]

    async def scan_invoices(
        self,
        start_date: date,
        end_date: date,
        after_id: int = 0,
        limit: int = 500,
    ) -> list[Invoice]:
        """
        Keyset page over a date range.

        Ids only grow, so rows committed between pages land after the
        cursor and are never returned twice.
        """
        where, params = _filters(start_date, end_date, None)
        where += " AND id > ?" if where else " WHERE id > ?"
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM invoices{where} ORDER BY id LIMIT ?",
                [*params, after_id, limit],
            )
            rows = await cursor.fetchall()
            items = await self._load_items(conn, [row["id"] for row in rows])
            return [self._row_to_invoice(row, items.get(row["id"], [])) for row in rows]

    async def count_invoices(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        staff_id: int | None = None,
    ) -> int:
        where, params = _filters(start_date, end_date, staff_id)
        async with get_connection() as conn:
            cursor = await conn.execute(f"SELECT COUNT(*) FROM invoices{where}", params)
            row = await cursor.fetchone()
            return int(row[0])

    async def daily_totals(
        self,
        start_date: date,
        end_date: date,
        staff_id: int | None = None,
    ) -> list[DailyTotal]:
        """Invoice count and sales per day that has sales, ascending."""
        where, params = _filters(start_date, end_date, staff_id)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT substr(created_at, 1, 10) AS day,
                       COUNT(*) AS orders,
                       COALESCE(SUM(total), 0) AS sales
                FROM invoices{where}
                GROUP BY day
                ORDER BY day
                """,
                params,
            )
            rows = await cursor.fetchall()
            return [
                DailyTotal(
                    day=parse_date(row["day"]),
                    orders=int(row["orders"]),
                    sales=float(row["sales"]),
                )
                for row in rows
            ]

    async def best_sellers(
        self,
        limit: int = 5,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[ProductSales]:
        """Products by units sold, descending."""
        where, params = _filters(start_date, end_date, None, alias="i")
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT ii.product_id,
                       COALESCE(p.name, MAX(ii.product_name)) AS name,
                       SUM(ii.quantity) AS quantity,
                       SUM(ii.total) AS revenue
                FROM invoice_items ii
                JOIN invoices i ON i.id = ii.invoice_id
                LEFT JOIN products p ON p.id = ii.product_id
                {where}
                GROUP BY ii.product_id
                ORDER BY quantity DESC, revenue DESC, ii.product_id
                LIMIT ?
                """,
                [*params, limit],
            )
            rows = await cursor.fetchall()
            return [
                ProductSales(
                    product_id=row["product_id"],
                    name=row["name"],
                    quantity=int(row["quantity"]),
                    revenue=float(row["revenue"]),
                )
                for row in rows
            ]

    async def _load_items(
        self, conn: aiosqlite.Connection, invoice_ids: list[int]
    ) -> dict[int, list[InvoiceItem]]:
        """Load items for several invoices in one query."""
        if not invoice_ids:
            return {}
        placeholders = ",".join("?" for _ in invoice_ids)
        cursor = await conn.execute(
            f"""
            SELECT * FROM invoice_items
            WHERE invoice_id IN ({placeholders})
            ORDER BY invoice_id, id
            """,
            invoice_ids,
        )
        grouped: dict[int, list[InvoiceItem]] = {}
        for row in await cursor.fetchall():
            grouped.setdefault(row["invoice_id"], []).append(self._row_to_item(row))
        return grouped

    @staticmethod
    def _row_to_invoice(row: aiosqlite.Row, items: list[InvoiceItem]) -> Invoice:
        """Convert a database row to an Invoice entity."""
        invoice = Invoice(
            id=row["id"],
            invoice_number=row["invoice_number"],
            items=items,
            subtotal=float(row["subtotal"]),
            payment_method=PaymentMethod(row["payment_method"]),
            staff_id=row["staff_id"],
            staff_name=row["staff_name"],
            created_at=parse_timestamp(row["created_at"]),
        )
        # Stored figures win over recomputation
        invoice.subtotal = float(row["subtotal"])
        invoice.total = float(row["total"])
        return invoice

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> InvoiceItem:
        """Convert a database row to an InvoiceItem entity."""
        return InvoiceItem(
            id=row["id"],
            invoice_id=row["invoice_id"],
            product_id=row["product_id"],
            product_name=row["product_name"],
            quantity=int(row["quantity"]),
            unit_price=float(row["unit_price"]),
        )
