# jewelbook/routers/expenses_router.py

from typing import Optional
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from starlette import status

from jewelbook.core.security import TenantContext, get_tenant_context
from jewelbook.repositories.expense_repository import ExpenseRepository
from jewelbook.schemas.expense_schemas import (
    ExpenseCreate,
    ExpenseOut,
    ExpenseSummaryOut,
    ExpenseUpdate,
)
from jewelbook.services import analytics_service
from jewelbook.utils.database import atomic, get_db

router = APIRouter(prefix="/expenses", tags=["Expenses"])


@router.post("", response_model=ExpenseOut, status_code=status.HTTP_201_CREATED)
def create_expense(
        payload: ExpenseCreate,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    with atomic(db):
        exp = ExpenseRepository(db, ctx).insert(**payload.model_dump())
    db.refresh(exp)
    return exp


@router.get("", response_model=list[ExpenseOut])
def list_expenses(
        start_date: Optional[date] = Query(default=None),
        end_date: Optional[date] = Query(default=None),
        category: Optional[str] = Query(default=None),
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return ExpenseRepository(db, ctx).list(start_date=start_date, end_date=end_date, category=category)


# static route before /{expense_id}
@router.get("/summary", response_model=ExpenseSummaryOut)
def summarize_expenses(
        start_date: Optional[date] = Query(default=None),
        end_date: Optional[date] = Query(default=None),
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return analytics_service.expense_summary(db, ctx, start_date, end_date)


@router.get("/{expense_id}", response_model=ExpenseOut)
def get_expense(
        expense_id: int,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return ExpenseRepository(db, ctx).get(expense_id)


@router.put("/{expense_id}", response_model=ExpenseOut)
def update_expense(
        expense_id: int,
        payload: ExpenseUpdate,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    with atomic(db):
        data = payload.model_dump(exclude_unset=True)
        # only description may be cleared
        data = {k: v for k, v in data.items() if v is not None or k == "description"}
        exp = ExpenseRepository(db, ctx).update(expense_id, data)
    db.refresh(exp)
    return exp


@router.delete("/{expense_id}")
def delete_expense(
        expense_id: int,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    with atomic(db):
        ExpenseRepository(db, ctx).delete(expense_id)
    return {"message": "Expense deleted successfully"}
