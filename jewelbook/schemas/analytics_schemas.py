# jewelbook/schemas/analytics_schemas.py

import datetime as dt

from pydantic import BaseModel

from jewelbook.schemas.transaction_schemas import PaymentOut, PurchaseOut, SaleOut


class TotalCountOut(BaseModel):
    total: float = 0
    count: int = 0


class DailySummaryOut(BaseModel):
    date: dt.date
    sales: TotalCountOut
    purchases: TotalCountOut


class DashboardSummaryOut(BaseModel):
    today_sales: float
    today_purchases: float
    sales_count: int
    purchases_count: int
    total_cash: float
    total_bank: float


class MonthlyTrendOut(BaseModel):
    month: str  # YYYY-MM
    sales: float
    purchases: float
    profit: float


class DayBookOut(BaseModel):
    date: dt.date
    sales: list[SaleOut]
    purchases: list[PurchaseOut]
    payments: list[PaymentOut]
    total_sales: float
    total_purchases: float
    total_payments: float
    total_receipts: float
    net_cash_flow: float
