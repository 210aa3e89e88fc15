# jewelbook/services/ledger_service.py
"""
Balance mutation protocol.

Every sale, purchase and payment is written together with the signed
delta it applies to the customer's running balances:

    kind                 create            delete
    sale                 +amount, +fine    -amount, -fine
    purchase             -amount, -fine    +amount, +fine
    payment (payment)    -amount, -fine    +amount, +fine
    payment (receipt)    +amount, +fine    -amount, -fine

Record and balance are one unit of work (apply_together); either both
land or neither does.
"""

import logging
from datetime import datetime
from enum import Enum

from sqlalchemy.orm import Session

from jewelbook.core.errors import PartialMutationFailure, ValidationFailure
from jewelbook.core.security import TenantContext
from jewelbook.repositories.customer_repository import CustomerRepository
from jewelbook.repositories.transaction_repositories import (
    PaymentRepository,
    PurchaseRepository,
    SaleRepository,
)
from jewelbook.services.invoice_service import next_invoice_number
from jewelbook.utils.calculations import (
    compute_payment_fine,
    derive_bullion_fields,
    money,
    weight,
)
from jewelbook.utils.database import apply_together, atomic

logger = logging.getLogger(__name__)


class TransactionKind(str, Enum):
    SALE = "sale"
    PURCHASE = "purchase"
    PAYMENT = "payment"


REPOSITORIES = {
    TransactionKind.SALE: SaleRepository,
    TransactionKind.PURCHASE: PurchaseRepository,
    TransactionKind.PAYMENT: PaymentRepository,
}

# order of same-day entries in a statement
KIND_ORDER = {
    TransactionKind.SALE: 0,
    TransactionKind.PURCHASE: 1,
    TransactionKind.PAYMENT: 2,
}


# -------------------------------------------------
# Helpers
# -------------------------------------------------
def repository_for(db: Session, ctx: TenantContext, kind):
    return REPOSITORIES[TransactionKind(kind)](db, ctx)


def balance_sign(kind, transaction_type: str = None) -> int:
    kind = TransactionKind(kind)
    if kind == TransactionKind.SALE:
        return 1
    if kind == TransactionKind.PURCHASE:
        return -1
    return 1 if transaction_type == "receipt" else -1


def balance_effect(kind, amount, fine, transaction_type: str = None):
    """(amount_delta, fine_delta) a newly created record applies."""
    sign = balance_sign(kind, transaction_type)
    return money(amount) * sign, weight(fine) * sign


def record_effect(kind, record):
    return balance_effect(
        kind,
        record.amount,
        record.fine,
        getattr(record, "transaction_type", None),
    )


def derive_fields(kind, payload: dict) -> dict:
    """Raw form input -> persisted column values (derived fields included)."""
    kind = TransactionKind(kind)
    data = dict(payload)

    if kind == TransactionKind.PAYMENT:
        data["fine"] = compute_payment_fine(data.get("gross"), data.get("purity"))
        data["amount"] = money(data.get("amount"))
        return data

    data.update(
        derive_bullion_fields(
            net_weight=data.get("net_weight"),
            ghat_per_kg=data.get("ghat_per_kg"),
            touch=data.get("touch"),
            wastage=data.get("wastage"),
            pics=data.get("pics"),
            rate=data.get("rate"),
        )
    )
    return data


def _payload_dict(payload) -> dict:
    if hasattr(payload, "model_dump"):
        return payload.model_dump()
    return dict(payload)


def _post_delta(customers: CustomerRepository, customer_id: int, amount_delta, fine_delta, what: str):
    touched = customers.apply_balance_delta(customer_id, amount_delta, fine_delta)
    if touched != 1:
        raise PartialMutationFailure(f"Balance update failed for customer {customer_id}; {what} was rolled back")


# -------------------------------------------------
# Create / delete
# -------------------------------------------------
def create_transaction(db: Session, ctx: TenantContext, kind, payload):
    """
    1. customer must exist in the caller's tenant
    2. derive total_ghat / fine / amount
    3. assign invoice number
    4. insert record + 5. post balance delta, as one unit
    """
    kind = TransactionKind(kind)
    repo = repository_for(db, ctx, kind)
    customers = CustomerRepository(db, ctx)

    fields = derive_fields(kind, _payload_dict(payload))
    customer_id = fields.get("customer_id")
    if customer_id is None:
        raise ValidationFailure("customer_id is required")

    amount_delta, fine_delta = balance_effect(
        kind, fields["amount"], fields["fine"], fields.get("transaction_type")
    )

    def write_record():
        customers.lock(customer_id)
        fields["invoice_no"] = next_invoice_number(db, ctx, kind.value)
        return repo.insert(**fields)

    def write_balance():
        _post_delta(customers, customer_id, amount_delta, fine_delta, f"{kind.value} create")

    record = apply_together(db, write_record, write_balance)
    db.refresh(record)

    logger.info(
        "%s created: tenant=%s invoice=%s customer=%s amount_delta=%s fine_delta=%s",
        kind.value, ctx.tenant_id, record.invoice_no, customer_id, amount_delta, fine_delta,
    )
    return record


def delete_transaction(db: Session, ctx: TenantContext, kind, record_id: int) -> dict:
    """Remove the record and post the inverse of the delta it applied, as one unit."""
    kind = TransactionKind(kind)
    repo = repository_for(db, ctx, kind)
    customers = CustomerRepository(db, ctx)

    existing = repo.get(record_id)
    customer_id = existing.customer_id
    removed = {}

    def remove_record():
        customers.lock(customer_id)
        # re-read under the customer lock; a concurrent delete leaves nothing here
        record = repo.get(record_id)
        amount_delta, fine_delta = record_effect(kind, record)
        removed.update(
            invoice_no=record.invoice_no,
            amount_delta=-amount_delta,
            fine_delta=-fine_delta,
        )
        db.delete(record)
        db.flush()

    def write_balance():
        _post_delta(
            customers,
            customer_id,
            removed["amount_delta"],
            removed["fine_delta"],
            f"{kind.value} delete",
        )

    apply_together(db, remove_record, write_balance)

    logger.info(
        "%s deleted: tenant=%s invoice=%s customer=%s amount_delta=%s fine_delta=%s",
        kind.value, ctx.tenant_id, removed["invoice_no"], customer_id,
        removed["amount_delta"], removed["fine_delta"],
    )
    return {"message": f"{kind.value.capitalize()} deleted successfully", "invoice_no": removed["invoice_no"]}


def update_remarks(db: Session, ctx: TenantContext, kind, record_id: int, remarks):
    """Remarks are the only field editable in place; they never touch balances."""
    repo = repository_for(db, ctx, kind)
    with atomic(db):
        record = repo.update(record_id, {"remarks": remarks})
    db.refresh(record)
    return record


# -------------------------------------------------
# Statement / consistency check
# -------------------------------------------------
def _customer_records(db: Session, ctx: TenantContext, customer_id: int):
    for kind in TransactionKind:
        for record in repository_for(db, ctx, kind).list(customer_id=customer_id):
            yield kind, record


def customer_statement(db: Session, ctx: TenantContext, customer_id: int) -> dict:
    """
    All ledger entries of one customer, oldest first, with the delta each
    applied and the running balance after it.
    """
    customer = CustomerRepository(db, ctx).get(customer_id)

    rows = list(_customer_records(db, ctx, customer_id))
    rows.sort(key=lambda kr: (kr[1].date, kr[1].created_at or datetime.min, KIND_ORDER[kr[0]], kr[1].id))

    running_amount = money(customer.opening_amount)
    running_fine = weight(customer.opening_fine)
    entries = []
    for kind, record in rows:
        amount_delta, fine_delta = record_effect(kind, record)
        running_amount += amount_delta
        running_fine += fine_delta
        entries.append(
            {
                "kind": kind.value,
                "id": record.id,
                "invoice_no": record.invoice_no,
                "date": record.date,
                "description": getattr(record, "item_name", None) or getattr(record, "transaction_type", None),
                "amount": money(record.amount),
                "fine": weight(record.fine),
                "amount_delta": amount_delta,
                "fine_delta": fine_delta,
                "balance_amount": running_amount,
                "balance_fine": running_fine,
                "remarks": record.remarks,
            }
        )

    return {
        "customer_id": customer.id,
        "customer_name": customer.name,
        "opening_amount": money(customer.opening_amount),
        "opening_fine": weight(customer.opening_fine),
        "closing_amount": running_amount,
        "closing_fine": running_fine,
        "entries": entries,
    }


def verify_customer_balance(db: Session, ctx: TenantContext, customer_id: int) -> dict:
    """Recompute closing balances from opening + live deltas and compare to the stored ones."""
    customer = CustomerRepository(db, ctx).get(customer_id)

    expected_amount = money(customer.opening_amount)
    expected_fine = weight(customer.opening_fine)
    for kind, record in _customer_records(db, ctx, customer_id):
        amount_delta, fine_delta = record_effect(kind, record)
        expected_amount += amount_delta
        expected_fine += fine_delta

    stored_amount = money(customer.closing_amount)
    stored_fine = weight(customer.closing_fine)
    drift_amount = stored_amount - expected_amount
    drift_fine = stored_fine - expected_fine
    consistent = drift_amount == 0 and drift_fine == 0

    if not consistent:
        logger.error(
            "Balance drift: tenant=%s customer=%s amount_drift=%s fine_drift=%s",
            ctx.tenant_id, customer_id, drift_amount, drift_fine,
        )

    return {
        "customer_id": customer.id,
        "stored_amount": stored_amount,
        "stored_fine": stored_fine,
        "expected_amount": expected_amount,
        "expected_fine": expected_fine,
        "drift_amount": drift_amount,
        "drift_fine": drift_fine,
        "consistent": consistent,
    }

