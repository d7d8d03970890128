"""Expense entity."""

import datetime as dt

from pydantic import BaseModel, Field


class Expense(BaseModel):
    """A business expense. Only related to invoices through profit figures."""

    id: int | None = None
    title: str
    amount: float = Field(gt=0)
    date: dt.date
    notes: str = ""
    created_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.UTC))
