# jewelbook/routers/sales_router.py

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from starlette import status

from jewelbook.core.security import TenantContext, get_tenant_context
from jewelbook.repositories.transaction_repositories import SaleRepository
from jewelbook.schemas.transaction_schemas import DeleteResult, RemarksPatch, SaleCreate, SaleOut
from jewelbook.services import ledger_service
from jewelbook.services.ledger_service import TransactionKind
from jewelbook.utils.database import get_db

router = APIRouter(prefix="/sales", tags=["Sales"])


@router.post("", response_model=SaleOut, status_code=status.HTTP_201_CREATED)
def create_sale(
        payload: SaleCreate,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return ledger_service.create_transaction(db, ctx, TransactionKind.SALE, payload)


@router.get("", response_model=list[SaleOut])
def list_sales(
        start_date: Optional[date] = Query(default=None),
        end_date: Optional[date] = Query(default=None),
        customer_id: Optional[int] = Query(default=None),
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return SaleRepository(db, ctx).list(start_date=start_date, end_date=end_date, customer_id=customer_id)


@router.get("/{sale_id}", response_model=SaleOut)
def get_sale(
        sale_id: int,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return SaleRepository(db, ctx).get(sale_id)


@router.patch("/{sale_id}", response_model=SaleOut)
def update_sale_remarks(
        sale_id: int,
        payload: RemarksPatch,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return ledger_service.update_remarks(db, ctx, TransactionKind.SALE, sale_id, payload.remarks)


@router.delete("/{sale_id}", response_model=DeleteResult)
def delete_sale(
        sale_id: int,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return ledger_service.delete_transaction(db, ctx, TransactionKind.SALE, sale_id)
