# jewelbook/routers/payments_router.py

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from starlette import status

from jewelbook.core.security import TenantContext, get_tenant_context
from jewelbook.repositories.transaction_repositories import PaymentRepository
from jewelbook.schemas.transaction_schemas import (
    DeleteResult,
    PaymentCreate,
    PaymentOut,
    PaymentType,
    RemarksPatch,
    TransactionType,
)
from jewelbook.services import ledger_service
from jewelbook.services.ledger_service import TransactionKind
from jewelbook.utils.database import get_db

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post("", response_model=PaymentOut, status_code=status.HTTP_201_CREATED)
def create_payment(
        payload: PaymentCreate,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return ledger_service.create_transaction(db, ctx, TransactionKind.PAYMENT, payload)


@router.get("", response_model=list[PaymentOut])
def list_payments(
        start_date: Optional[date] = Query(default=None),
        end_date: Optional[date] = Query(default=None),
        customer_id: Optional[int] = Query(default=None),
        transaction_type: Optional[TransactionType] = Query(default=None),
        payment_type: Optional[PaymentType] = Query(default=None),
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return PaymentRepository(db, ctx).list(
        start_date=start_date,
        end_date=end_date,
        customer_id=customer_id,
        transaction_type=transaction_type.value if transaction_type else None,
        payment_type=payment_type.value if payment_type else None,
    )


@router.get("/{payment_id}", response_model=PaymentOut)
def get_payment(
        payment_id: int,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return PaymentRepository(db, ctx).get(payment_id)


@router.patch("/{payment_id}", response_model=PaymentOut)
def update_payment_remarks(
        payment_id: int,
        payload: RemarksPatch,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return ledger_service.update_remarks(db, ctx, TransactionKind.PAYMENT, payment_id, payload.remarks)


@router.delete("/{payment_id}", response_model=DeleteResult)
def delete_payment(
        payment_id: int,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return ledger_service.delete_transaction(db, ctx, TransactionKind.PAYMENT, payment_id)
