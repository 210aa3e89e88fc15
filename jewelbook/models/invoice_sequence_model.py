# jewelbook/models/invoice_sequence_model.py

from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.sql import func

from jewelbook.utils.database import Base


class InvoiceSequence(Base):
    __tablename__ = "invoice_sequences"

    __table_args__ = (
        UniqueConstraint("tenant_id", "kind", name="ux_invoice_sequences_tenant_kind"),
    )

    sequence_id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String(64), nullable=False)
    kind = Column(String(20), nullable=False)  # sale / purchase / payment
    last_value = Column(Integer, nullable=False, default=0)

    updated_on = Column(DateTime, server_default=func.now(), onupdate=func.now())
