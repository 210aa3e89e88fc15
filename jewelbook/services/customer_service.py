# jewelbook/services/customer_service.py

import logging

from sqlalchemy.orm import Session

from jewelbook.core.errors import ValidationFailure
from jewelbook.core.security import TenantContext
from jewelbook.repositories.customer_repository import CustomerRepository
from jewelbook.repositories.transaction_repositories import (
    PaymentRepository,
    PurchaseRepository,
    SaleRepository,
)
from jewelbook.utils.calculations import money, weight
from jewelbook.utils.database import apply_together, atomic

logger = logging.getLogger(__name__)


def register_customer(db: Session, ctx: TenantContext, payload):
    """New customer starts with closing balances equal to the opening snapshot."""
    customers = CustomerRepository(db, ctx)
    data = payload.model_dump()
    data["opening_amount"] = money(data.get("opening_amount"))
    data["opening_fine"] = weight(data.get("opening_fine"))

    with atomic(db):
        customer = customers.insert(**data)
    db.refresh(customer)

    logger.info("Customer registered: tenant=%s id=%s name=%s", ctx.tenant_id, customer.id, customer.name)
    return customer


def update_customer(db: Session, ctx: TenantContext, customer_id: int, payload):
    """
    Profile fields are written as-is. An opening balance correction moves the
    closing balance by the same difference in the same unit of work, so
    closing = opening + sum(deltas) keeps holding.
    """
    customers = CustomerRepository(db, ctx)
    patch = payload.model_dump(exclude_unset=True)
    for required in ("name", "mobile_no"):
        if patch.get(required) is None:
            patch.pop(required, None)
    if patch.get("opening_amount") is not None:
        patch["opening_amount"] = money(patch["opening_amount"])
    else:
        patch.pop("opening_amount", None)
    if patch.get("opening_fine") is not None:
        patch["opening_fine"] = weight(patch["opening_fine"])
    else:
        patch.pop("opening_fine", None)

    shift = {"amount": money(0), "fine": weight(0)}

    def write_profile():
        # the difference is taken against the opening read under the lock
        locked = customers.lock(customer_id)
        if "opening_amount" in patch:
            shift["amount"] = patch["opening_amount"] - money(locked.opening_amount)
        if "opening_fine" in patch:
            shift["fine"] = patch["opening_fine"] - weight(locked.opening_fine)
        return customers.update(customer_id, patch)

    def write_balance():
        if shift["amount"] or shift["fine"]:
            customers.apply_balance_delta(customer_id, shift["amount"], shift["fine"])

    customer = apply_together(db, write_profile, write_balance)
    db.refresh(customer)

    if shift["amount"] or shift["fine"]:
        logger.info(
            "Opening balance corrected: tenant=%s customer=%s amount_shift=%s fine_shift=%s",
            ctx.tenant_id, customer_id, shift["amount"], shift["fine"],
        )
    return customer


def delete_customer(db: Session, ctx: TenantContext, customer_id: int) -> dict:
    customers = CustomerRepository(db, ctx)
    customers.get(customer_id)

    for repo_cls in (SaleRepository, PurchaseRepository, PaymentRepository):
        if repo_cls(db, ctx).list(customer_id=customer_id):
            raise ValidationFailure("Cannot delete customer: ledger entries exist")

    with atomic(db):
        customers.delete(customer_id)

    logger.info("Customer deleted: tenant=%s id=%s", ctx.tenant_id, customer_id)
    return {"message": "Customer deleted successfully"}
