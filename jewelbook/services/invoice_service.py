# jewelbook/services/invoice_service.py

import re

from sqlalchemy import update
from sqlalchemy.orm import Session

from jewelbook.core.config import INVOICE_SEQUENCE_WIDTH
from jewelbook.core.errors import ValidationFailure
from jewelbook.core.security import TenantContext
from jewelbook.models.invoice_sequence_model import InvoiceSequence

INVOICE_PREFIXES = {
    "sale": "S",
    "purchase": "P",
    "payment": "PAY",
}


def tenant_fragment(tenant_id: str) -> str:
    fragment = re.sub(r"[^A-Za-z0-9]", "", tenant_id or "")[:4].upper()
    return fragment or "X"


def _bump_sequence(db: Session, tenant_id: str, kind: str) -> int:
    """
    Increment the (tenant, kind) counter inside the caller's transaction.
    The row is created on first use; two first uses racing each other hit
    the unique constraint and the losing unit of work is rolled back.
    """
    result = db.execute(
        update(InvoiceSequence)
        .where(InvoiceSequence.tenant_id == tenant_id, InvoiceSequence.kind == kind)
        .values(last_value=InvoiceSequence.last_value + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.add(InvoiceSequence(tenant_id=tenant_id, kind=kind, last_value=1))
        db.flush()
        return 1

    return (
        db.query(InvoiceSequence.last_value)
        .filter(InvoiceSequence.tenant_id == tenant_id, InvoiceSequence.kind == kind)
        .scalar()
    )


def next_invoice_number(db: Session, ctx: TenantContext, kind: str) -> str:
    """
    e.g. S-ACME-000042

    Must run inside the same unit of work as the record insert so a
    rolled back create gives its number back.
    """
    prefix = INVOICE_PREFIXES.get(kind)
    if prefix is None:
        raise ValidationFailure(f"Unknown transaction kind: {kind}")

    value = _bump_sequence(db, ctx.tenant_id, kind)
    return f"{prefix}-{tenant_fragment(ctx.tenant_id)}-{value:0{INVOICE_SEQUENCE_WIDTH}d}"
