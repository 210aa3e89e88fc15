# jewelbook/services/analytics_service.py

import calendar
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from jewelbook.core.security import TenantContext
from jewelbook.repositories.expense_repository import ExpenseRepository
from jewelbook.repositories.transaction_repositories import (
    PaymentRepository,
    PurchaseRepository,
    SaleRepository,
)
from jewelbook.utils.calculations import money

CASH_BUCKETS = ("cash", "bank")


# -------------------------------------------------
# Helpers
# -------------------------------------------------
def months_back(today: date, months: int) -> date:
    """Same day `months` calendar months earlier, clamped to the month's last day."""
    index = today.year * 12 + (today.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    day = min(today.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _sum_amounts(rows) -> Decimal:
    return money(sum((money(r.amount) for r in rows), money(0)))


def _summary(rows) -> dict:
    return {"total": _sum_amounts(rows), "count": len(rows)}


# -------------------------------------------------
# Daily
# -------------------------------------------------
def daily_sales_summary(db: Session, ctx: TenantContext, on_date: date) -> dict:
    return _summary(SaleRepository(db, ctx).list(start_date=on_date, end_date=on_date))


def daily_purchases_summary(db: Session, ctx: TenantContext, on_date: date) -> dict:
    return _summary(PurchaseRepository(db, ctx).list(start_date=on_date, end_date=on_date))


def daily_summary(db: Session, ctx: TenantContext, on_date: date) -> dict:
    return {
        "date": on_date,
        "sales": daily_sales_summary(db, ctx, on_date),
        "purchases": daily_purchases_summary(db, ctx, on_date),
    }


def cash_bank_totals(db: Session, ctx: TenantContext) -> dict:
    """
    receipts add, payments subtract; only cash and bank payment types count.
    """
    totals = {bucket: money(0) for bucket in CASH_BUCKETS}
    for p in PaymentRepository(db, ctx).list():
        if p.payment_type not in totals:
            continue
        sign = 1 if p.transaction_type == "receipt" else -1
        totals[p.payment_type] += money(p.amount) * sign
    return {"total_cash": totals["cash"], "total_bank": totals["bank"]}


def dashboard_summary(db: Session, ctx: TenantContext, today: Optional[date] = None) -> dict:
    today = today or date.today()
    sales = daily_sales_summary(db, ctx, today)
    purchases = daily_purchases_summary(db, ctx, today)
    cash_bank = cash_bank_totals(db, ctx)

    return {
        "today_sales": sales["total"],
        "today_purchases": purchases["total"],
        "sales_count": sales["count"],
        "purchases_count": purchases["count"],
        "total_cash": cash_bank["total_cash"],
        "total_bank": cash_bank["total_bank"],
    }


def day_book(db: Session, ctx: TenantContext, on_date: date) -> dict:
    sales = SaleRepository(db, ctx).list(start_date=on_date, end_date=on_date)
    purchases = PurchaseRepository(db, ctx).list(start_date=on_date, end_date=on_date)
    payments = PaymentRepository(db, ctx).list(start_date=on_date, end_date=on_date)

    total_payments = _sum_amounts([p for p in payments if p.transaction_type == "payment"])
    total_receipts = _sum_amounts([p for p in payments if p.transaction_type == "receipt"])

    return {
        "date": on_date,
        "sales": sales,
        "purchases": purchases,
        "payments": payments,
        "total_sales": _sum_amounts(sales),
        "total_purchases": _sum_amounts(purchases),
        "total_payments": total_payments,
        "total_receipts": total_receipts,
        "net_cash_flow": total_receipts - total_payments,
    }


# -------------------------------------------------
# Monthly
# -------------------------------------------------
def monthly_trends(
        db: Session,
        ctx: TenantContext,
        months: int = 6,
        today: Optional[date] = None,
) -> list:
    """
    Sales vs purchases per YYYY-MM since `months` calendar months ago,
    ascending by month. profit = sales - purchases.
    """
    today = today or date.today()
    start = months_back(today, months)

    buckets = defaultdict(lambda: {"sales": money(0), "purchases": money(0)})
    for sale in SaleRepository(db, ctx).list(start_date=start):
        buckets[sale.date.strftime("%Y-%m")]["sales"] += money(sale.amount)
    for purchase in PurchaseRepository(db, ctx).list(start_date=start):
        buckets[purchase.date.strftime("%Y-%m")]["purchases"] += money(purchase.amount)

    return [
        {
            "month": month,
            "sales": data["sales"],
            "purchases": data["purchases"],
            "profit": data["sales"] - data["purchases"],
        }
        for month, data in sorted(buckets.items())
    ]


# -------------------------------------------------
# Expenses
# -------------------------------------------------
def expense_summary(
        db: Session,
        ctx: TenantContext,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
) -> dict:
    rows = ExpenseRepository(db, ctx).list(start_date=start_date, end_date=end_date)

    by_category = defaultdict(lambda: money(0))
    for e in rows:
        by_category[e.category] += money(e.amount)

    return {
        "start_date": start_date,
        "end_date": end_date,
        "total": _sum_amounts(rows),
        "count": len(rows),
        "by_category": [
            {"category": category, "total": total}
            for category, total in sorted(by_category.items())
        ],
    }
