# jewelbook/models/mixins.py

from sqlalchemy import Column, Integer, String, Date, DateTime, Numeric, Text, ForeignKey
from sqlalchemy.orm import declared_attr
from sqlalchemy.sql import func

# grams to the milligram / currency to the paisa
WEIGHT = Numeric(14, 3)
MONEY = Numeric(14, 2)


class TenantMixin:
    # stamped from the caller's token, never from request payloads
    tenant_id = Column(String(64), nullable=False, index=True)


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class LedgerEntryMixin(TenantMixin, TimestampMixin):
    """Columns shared by every record that moves a customer balance."""

    id = Column(Integer, primary_key=True, index=True)
    invoice_no = Column(String(40), nullable=False)
    date = Column(Date, nullable=False, index=True)

    @declared_attr
    def customer_id(cls):
        return Column(
            Integer,
            ForeignKey("customers.id", ondelete="RESTRICT"),
            nullable=False,
            index=True,
        )

    fine = Column(WEIGHT, nullable=False, default=0)
    amount = Column(MONEY, nullable=False, default=0)
    remarks = Column(Text, nullable=True)


class BullionLineMixin(LedgerEntryMixin):
    """Sale and purchase lines share the same weighing inputs."""

    item_name = Column(String(120), nullable=False)

    weight = Column(WEIGHT, nullable=True)  # gross
    bag = Column(WEIGHT, nullable=True)
    net_weight = Column(WEIGHT, nullable=True)
    ghat_per_kg = Column(WEIGHT, nullable=True)
    total_ghat = Column(WEIGHT, nullable=False, default=0)

    touch = Column(Numeric(7, 3), nullable=True)
    wastage = Column(Numeric(7, 3), nullable=True)

    pics = Column(Integer, nullable=True)
    rate = Column(MONEY, nullable=True)
