# jewelbook/schemas/expense_schemas.py

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class ExpenseBase(BaseModel):
    date: dt.date
    category: str = Field(..., min_length=1, max_length=120)
    amount: Decimal = Field(gt=0)
    description: Optional[str] = None

    class Config:
        extra = "forbid"


class ExpenseCreate(ExpenseBase):
    pass


class ExpenseUpdate(BaseModel):
    date: Optional[dt.date] = None
    category: Optional[str] = Field(default=None, min_length=1, max_length=120)
    amount: Optional[Decimal] = Field(default=None, gt=0)  # keep Decimal, not float
    description: Optional[str] = None

    class Config:
        extra = "forbid"


class ExpenseOut(BaseModel):
    id: int
    date: dt.date
    category: str
    amount: float
    description: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class CategoryTotalOut(BaseModel):
    category: str
    total: float


class ExpenseSummaryOut(BaseModel):
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    total: float
    count: int
    by_category: list[CategoryTotalOut]
