# jewelbook/routers/purchases_router.py

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from starlette import status

from jewelbook.core.security import TenantContext, get_tenant_context
from jewelbook.repositories.transaction_repositories import PurchaseRepository
from jewelbook.schemas.transaction_schemas import DeleteResult, RemarksPatch, PurchaseCreate, PurchaseOut
from jewelbook.services import ledger_service
from jewelbook.services.ledger_service import TransactionKind
from jewelbook.utils.database import get_db

router = APIRouter(prefix="/purchases", tags=["Purchases"])


@router.post("", response_model=PurchaseOut, status_code=status.HTTP_201_CREATED)
def create_purchase(
        payload: PurchaseCreate,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return ledger_service.create_transaction(db, ctx, TransactionKind.PURCHASE, payload)


@router.get("", response_model=list[PurchaseOut])
def list_purchases(
        start_date: Optional[date] = Query(default=None),
        end_date: Optional[date] = Query(default=None),
        customer_id: Optional[int] = Query(default=None),
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return PurchaseRepository(db, ctx).list(start_date=start_date, end_date=end_date, customer_id=customer_id)


@router.get("/{purchase_id}", response_model=PurchaseOut)
def get_purchase(
        purchase_id: int,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return PurchaseRepository(db, ctx).get(purchase_id)


@router.patch("/{purchase_id}", response_model=PurchaseOut)
def update_purchase_remarks(
        purchase_id: int,
        payload: RemarksPatch,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return ledger_service.update_remarks(db, ctx, TransactionKind.PURCHASE, purchase_id, payload.remarks)


@router.delete("/{purchase_id}", response_model=DeleteResult)
def delete_purchase(
        purchase_id: int,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return ledger_service.delete_transaction(db, ctx, TransactionKind.PURCHASE, purchase_id)
