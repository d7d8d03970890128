"""Expense endpoints (admin only)."""

from datetime import UTC, date, datetime

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from retail_pos.api.dependencies import StaffIdentity, get_exp_store, require_admin
from retail_pos.application.dto.requests import (
    CreateExpenseRequest,
    UpdateExpenseRequest,
)
from retail_pos.application.dto.responses import (
    ErrorResponse,
    ExpenseListResponse,
    ExpenseResponse,
    ExpenseSummaryResponse,
    TodayExpensesResponse,
)
from retail_pos.core.entities.expense import Expense
from retail_pos.core.exceptions import ExpenseNotFoundError
from retail_pos.infrastructure.storage.sqlite import SQLiteExpenseStore

router = APIRouter(
    prefix="/api/expenses",
    tags=["expenses"],
    dependencies=[Depends(require_admin)],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)


def _to_response(expense: Expense) -> ExpenseResponse:
    return ExpenseResponse(
        id=expense.id,  # type: ignore[arg-type]
        title=expense.title,
        amount=expense.amount,
        date=expense.date,
        notes=expense.notes,
        created_at=expense.created_at,
    )


@router.get("", response_model=ExpenseListResponse)
async def list_expenses(
    start_date: date | None = None,
    end_date: date | None = None,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    store: SQLiteExpenseStore = Depends(get_exp_store),
) -> ExpenseListResponse:
    """List expenses by date, newest first, with a summary of the range."""
    expenses = await store.list_expenses(
        start_date=start_date, end_date=end_date, limit=limit, offset=offset
    )
    count, total = await store.summarize(start_date, end_date)
    return ExpenseListResponse(
        expenses=[_to_response(e) for e in expenses],
        summary=ExpenseSummaryResponse(count=count, total=total),
        total=count,
        limit=limit,
        offset=offset,
        has_more=offset + len(expenses) < count,
    )


@router.get("/stats/today", response_model=TodayExpensesResponse)
async def today_expenses(
    store: SQLiteExpenseStore = Depends(get_exp_store),
) -> TodayExpensesResponse:
    """Expense count and total for today (UTC)."""
    today = datetime.now(UTC).date()
    count, total = await store.summarize(today, today)
    return TodayExpensesResponse(day=today, count=count, total=total)


@router.get(
    "/{expense_id}",
    response_model=ExpenseResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_expense(
    expense_id: int,
    store: SQLiteExpenseStore = Depends(get_exp_store),
) -> ExpenseResponse:
    expense = await store.get_expense(expense_id)
    if expense is None:
        raise ExpenseNotFoundError(expense_id)
    return _to_response(expense)


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    request: CreateExpenseRequest,
    store: SQLiteExpenseStore = Depends(get_exp_store),
) -> ExpenseResponse:
    """Record an expense."""
    expense = await store.create_expense(Expense(**request.model_dump()))
    return _to_response(expense)


@router.put(
    "/{expense_id}",
    response_model=ExpenseResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_expense(
    expense_id: int,
    request: UpdateExpenseRequest,
    store: SQLiteExpenseStore = Depends(get_exp_store),
) -> ExpenseResponse:
    changes = request.model_dump(exclude_unset=True, exclude_none=True)
    expense = await store.update_expense(expense_id, changes)
    return _to_response(expense)


@router.delete(
    "/{expense_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_expense(
    expense_id: int,
    store: SQLiteExpenseStore = Depends(get_exp_store),
) -> Response:
    await store.delete_expense(expense_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
