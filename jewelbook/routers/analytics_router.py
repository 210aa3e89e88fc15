# jewelbook/routers/analytics_router.py

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jewelbook.core.security import TenantContext, get_tenant_context
from jewelbook.schemas.analytics_schemas import (
    DailySummaryOut,
    DashboardSummaryOut,
    DayBookOut,
    MonthlyTrendOut,
)
from jewelbook.services import analytics_service
from jewelbook.utils.database import get_db

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("/daily", response_model=DailySummaryOut)
def daily_summary(
        on: Optional[date] = Query(default=None, description="Defaults to today"),
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return analytics_service.daily_summary(db, ctx, on or date.today())


@router.get("/dashboard", response_model=DashboardSummaryOut)
def dashboard(
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return analytics_service.dashboard_summary(db, ctx)


@router.get("/monthly", response_model=list[MonthlyTrendOut])
def monthly_trends(
        months: int = Query(default=6, ge=1, le=120),
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return analytics_service.monthly_trends(db, ctx, months)


@router.get("/day-book", response_model=DayBookOut)
def day_book(
        on: Optional[date] = Query(default=None, description="Defaults to today"),
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return analytics_service.day_book(db, ctx, on or date.today())
