"""SQLite implementation of expense storage."""

from datetime import UTC, date, datetime
from typing import Any

import aiosqlite

from retail_pos.config import get_logger
from retail_pos.core.entities.expense import Expense
from retail_pos.core.exceptions import ExpenseNotFoundError
from retail_pos.core.interfaces.change_feed import IChangeFeed
from retail_pos.core.interfaces.expense_store import IExpenseStore
from retail_pos.core.services.change_feed import TOPIC_EXPENSES
from retail_pos.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from retail_pos.infrastructure.storage.sqlite.rows import parse_date, parse_timestamp

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("title", "amount", "date", "notes")


def _date_filters(start_date: date | None, end_date: date | None) -> tuple[str, list[Any]]:
    clauses: list[str] = []
    params: list[Any] = []
    if start_date:
        clauses.append("date >= ?")
        params.append(start_date.isoformat())
    if end_date:
        clauses.append("date <= ?")
        params.append(end_date.isoformat())
    where = " WHERE " + " AND ".join(clauses) if clauses else ""
    return where, params


class SQLiteExpenseStore(IExpenseStore):
    """SQLite implementation of expense storage."""

    def __init__(self, change_feed: IChangeFeed | None = None):
        self._change_feed = change_feed

    def _notify(self) -> None:
        if self._change_feed is not None:
            self._change_feed.notify(TOPIC_EXPENSES)

    async def create_expense(self, expense: Expense) -> Expense:
        """Record a new expense."""
        expense.created_at = datetime.now(UTC)
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO expenses (title, amount, date, notes, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    expense.title,
                    expense.amount,
                    expense.date.isoformat(),
                    expense.notes,
                    expense.created_at.isoformat(),
                ),
            )
            expense.id = cursor.lastrowid

        logger.info("expense_created", expense_id=expense.id, amount=expense.amount)
        self._notify()
        return expense

    async def get_expense(self, expense_id: int) -> Expense | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM expenses WHERE id = ?", (expense_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_expense(row) if row else None

    async def update_expense(self, expense_id: int, changes: dict[str, Any]) -> Expense:
        """Apply a partial update and return the stored expense."""
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update expense fields: {sorted(unknown)}")

        async with get_transaction() as conn:
            cursor = await conn.execute(
                "SELECT * FROM expenses WHERE id = ?", (expense_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                raise ExpenseNotFoundError(expense_id)

            merged = Expense.model_validate(
                {**self._row_to_expense(row).model_dump(), **changes}
            )
            await conn.execute(
                """
                UPDATE expenses SET title = ?, amount = ?, date = ?, notes = ?
                WHERE id = ?
                """,
                (
                    merged.title,
                    merged.amount,
                    merged.date.isoformat(),
                    merged.notes,
                    expense_id,
                ),
            )

        logger.info("expense_updated", expense_id=expense_id, fields=sorted(changes))
        self._notify()
        return merged

    async def delete_expense(self, expense_id: int) -> None:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM expenses WHERE id = ?", (expense_id,)
            )
            if cursor.rowcount == 0:
                raise ExpenseNotFoundError(expense_id)

        logger.info("expense_deleted", expense_id=expense_id)
        self._notify()

    async def list_expenses(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Expense]:
        """List expenses by date DESC."""
        where, params = _date_filters(start_date, end_date)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM expenses{where}
                ORDER BY date DESC, created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                [*params, limit, offset],
            )
            rows = await cursor.fetchall()
            return [self._row_to_expense(row) for row in rows]

    async def scan_expenses(
        self,
        start_date: date,
        end_date: date,
        after_id: int = 0,
        limit: int = 500,
    ) -> list[Expense]:
        """Keyset page over a date range, ascending by id."""
        where, params = _date_filters(start_date, end_date)
        where += " AND id > ?" if where else " WHERE id > ?"
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM expenses{where} ORDER BY id LIMIT ?",
                [*params, after_id, limit],
            )
            rows = await cursor.fetchall()
            return [self._row_to_expense(row) for row in rows]

    async def summarize(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> tuple[int, float]:
        """Return (count, total amount) for the range."""
        where, params = _date_filters(start_date, end_date)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT COUNT(*), COALESCE(SUM(amount), 0) FROM expenses{where}",
                params,
            )
            row = await cursor.fetchone()
            return int(row[0]), float(row[1])

    @staticmethod
    def _row_to_expense(row: aiosqlite.Row) -> Expense:
        """Convert a database row to an Expense entity."""
        return Expense(
            id=row["id"],
            title=row["title"],
            amount=float(row["amount"]),
            date=parse_date(row["date"]),
            notes=row["notes"] or "",
            created_at=parse_timestamp(row["created_at"]),
        )
