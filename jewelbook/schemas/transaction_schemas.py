# jewelbook/schemas/transaction_schemas.py

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class TransactionType(str, Enum):
    PAYMENT = "payment"
    RECEIPT = "receipt"


class PaymentType(str, Enum):
    FINE = "fine"
    CASH = "cash"
    BANK = "bank"
    RATE_CUT_FINE = "rate_cut_fine"
    RATE_CUT_AMOUNT = "rate_cut_amount"
    ROOPU = "roopu"


def _blank_to_none(v):
    if v is None:
        return None
    v = str(v).strip()
    return v or None


# ----------------------------
# Sale / Purchase lines
# ----------------------------
class BullionLineCreate(BaseModel):
    date: dt.date
    customer_id: int
    item_name: str = Field(..., min_length=1, max_length=120)

    weight: Optional[Decimal] = Field(default=None, ge=0)
    bag: Optional[Decimal] = Field(default=None, ge=0)
    net_weight: Optional[Decimal] = Field(default=None, ge=0)
    ghat_per_kg: Optional[Decimal] = None
    touch: Optional[Decimal] = None
    wastage: Optional[Decimal] = None
    pics: Optional[int] = Field(default=None, ge=0)
    rate: Optional[Decimal] = Field(default=None, ge=0)
    remarks: Optional[str] = None

    @field_validator("remarks", mode="before")
    def empty_to_none(cls, v):
        return _blank_to_none(v)

    class Config:
        extra = "forbid"


class SaleCreate(BullionLineCreate):
    pass


class PurchaseCreate(BullionLineCreate):
    pass


class CustomerMiniOut(BaseModel):
    id: int
    name: str
    mobile_no: Optional[str] = None

    class Config:
        from_attributes = True


class BullionLineOut(BaseModel):
    id: int
    invoice_no: str
    date: dt.date
    customer_id: int
    item_name: str

    weight: Optional[float] = None
    bag: Optional[float] = None
    net_weight: Optional[float] = None
    ghat_per_kg: Optional[float] = None
    total_ghat: float
    touch: Optional[float] = None
    wastage: Optional[float] = None
    fine: float
    pics: Optional[int] = None
    rate: Optional[float] = None
    amount: float
    remarks: Optional[str] = None

    customer: Optional[CustomerMiniOut] = None

    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class SaleOut(BullionLineOut):
    pass


class PurchaseOut(BullionLineOut):
    pass


# ----------------------------
# Payments / receipts
# ----------------------------
class PaymentCreate(BaseModel):
    date: dt.date
    customer_id: int
    transaction_type: TransactionType
    payment_type: PaymentType

    gross: Optional[Decimal] = Field(default=None, ge=0)
    purity: Optional[Decimal] = Field(default=None, ge=0)
    wast_badi_kg: Optional[Decimal] = None
    rate: Optional[Decimal] = Field(default=None, ge=0)
    amount: Optional[Decimal] = Field(default=None, ge=0)
    remarks: Optional[str] = None

    @field_validator("remarks", mode="before")
    def empty_to_none(cls, v):
        return _blank_to_none(v)

    class Config:
        extra = "forbid"
        use_enum_values = True


class PaymentOut(BaseModel):
    id: int
    invoice_no: str
    date: dt.date
    customer_id: int
    transaction_type: str
    payment_type: str

    gross: Optional[float] = None
    purity: Optional[float] = None
    wast_badi_kg: Optional[float] = None
    fine: float
    rate: Optional[float] = None
    amount: float
    # advisory, not stored and not posted to balances
    rate_cut_fine: float
    remarks: Optional[str] = None

    customer: Optional[CustomerMiniOut] = None

    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


# ----------------------------
# Shared
# ----------------------------
class RemarksPatch(BaseModel):
    remarks: Optional[str] = None

    @field_validator("remarks", mode="before")
    def empty_to_none(cls, v):
        return _blank_to_none(v)

    class Config:
        extra = "forbid"


class DeleteResult(BaseModel):
    message: str
    invoice_no: str
