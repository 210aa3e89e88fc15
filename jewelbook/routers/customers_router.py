# jewelbook/routers/customers_router.py

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from starlette import status

from jewelbook.core.security import TenantContext, get_tenant_context
from jewelbook.repositories.customer_repository import CustomerRepository
from jewelbook.schemas.customer_schemas import (
    BalanceCheckOut,
    CustomerCreate,
    CustomerOut,
    CustomerStatementOut,
    CustomerUpdate,
)
from jewelbook.services import customer_service, ledger_service
from jewelbook.utils.database import get_db

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.post("", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
def create_customer(
        payload: CustomerCreate,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return customer_service.register_customer(db, ctx, payload)


@router.get("", response_model=list[CustomerOut])
def list_customers(
        q: Optional[str] = Query(default=None, description="Search by name or mobile"),
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    customers = CustomerRepository(db, ctx)
    if q:
        return customers.search(q)
    return customers.list()


@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer(
        customer_id: int,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return CustomerRepository(db, ctx).get(customer_id)


@router.put("/{customer_id}", response_model=CustomerOut)
def update_customer(
        customer_id: int,
        payload: CustomerUpdate,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return customer_service.update_customer(db, ctx, customer_id, payload)


@router.delete("/{customer_id}")
def delete_customer(
        customer_id: int,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return customer_service.delete_customer(db, ctx, customer_id)


@router.get("/{customer_id}/statement", response_model=CustomerStatementOut)
def customer_statement(
        customer_id: int,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return ledger_service.customer_statement(db, ctx, customer_id)


@router.get("/{customer_id}/verify", response_model=BalanceCheckOut)
def verify_customer_balance(
        customer_id: int,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return ledger_service.verify_customer_balance(db, ctx, customer_id)
