"""Abstract interface for expense storage."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any

from retail_pos.core.entities.expense import Expense


class IExpenseStore(ABC):
    """Interface for expense persistence."""

    @abstractmethod
    async def create_expense(self, expense: Expense) -> Expense:
        pass

    @abstractmethod
    async def get_expense(self, expense_id: int) -> Expense | None:
        pass

    @abstractmethod
    async def update_expense(self, expense_id: int, changes: dict[str, Any]) -> Expense:
        pass

    @abstractmethod
    async def delete_expense(self, expense_id: int) -> None:
        pass

    @abstractmethod
    async def list_expenses(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Expense]:
        """List expenses by date DESC."""
        pass

    @abstractmethod
    async def scan_expenses(
        self,
        start_date: date,
        end_date: date,
        after_id: int = 0,
        limit: int = 500,
    ) -> list[Expense]:
        """Expenses in the range with id above after_id, ascending by id."""
        pass

    @abstractmethod
    async def summarize(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> tuple[int, float]:
        """Return (count, total amount) for the range."""
        pass
