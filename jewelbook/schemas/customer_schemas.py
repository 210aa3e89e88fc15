# jewelbook/schemas/customer_schemas.py

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def _blank_to_none(v):
    if v is None:
        return None
    v = str(v).strip()
    return v or None


class CustomerBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    mobile_no: str = Field(..., min_length=1, max_length=20)
    city: Optional[str] = None
    gst_no: Optional[str] = None
    address: Optional[str] = None

    @field_validator("city", "gst_no", "address", mode="before")
    def empty_to_none(cls, v):
        return _blank_to_none(v)

    class Config:
        extra = "forbid"


class CustomerCreate(CustomerBase):
    opening_amount: Decimal = Decimal("0")
    opening_fine: Decimal = Decimal("0")


class CustomerUpdate(BaseModel):
    # closing balances are deliberately absent: only the ledger moves them
    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    mobile_no: Optional[str] = Field(default=None, min_length=1, max_length=20)
    city: Optional[str] = None
    gst_no: Optional[str] = None
    address: Optional[str] = None
    opening_amount: Optional[Decimal] = None
    opening_fine: Optional[Decimal] = None

    @field_validator("city", "gst_no", "address", mode="before")
    def empty_to_none(cls, v):
        return _blank_to_none(v)

    class Config:
        extra = "forbid"


class CustomerOut(BaseModel):
    id: int
    name: str
    mobile_no: str
    city: Optional[str] = None
    gst_no: Optional[str] = None
    address: Optional[str] = None

    opening_amount: float
    opening_fine: float
    closing_amount: float
    closing_fine: float

    # DR / CR
    amount_side: str
    fine_side: str

    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class StatementEntryOut(BaseModel):
    kind: str
    id: int
    invoice_no: str
    date: dt.date
    description: Optional[str] = None
    amount: float
    fine: float
    amount_delta: float
    fine_delta: float
    balance_amount: float
    balance_fine: float
    remarks: Optional[str] = None


class CustomerStatementOut(BaseModel):
    customer_id: int
    customer_name: str
    opening_amount: float
    opening_fine: float
    closing_amount: float
    closing_fine: float
    entries: list[StatementEntryOut]


class BalanceCheckOut(BaseModel):
    customer_id: int
    stored_amount: float
    stored_fine: float
    expected_amount: float
    expected_fine: float
    drift_amount: float
    drift_fine: float
    consistent: bool
