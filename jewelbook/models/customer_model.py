# jewelbook/models/customer_model.py

from sqlalchemy import Column, Integer, String, Text, Index

from jewelbook.models.mixins import MONEY, WEIGHT, TenantMixin, TimestampMixin
from jewelbook.utils.calculations import balance_side
from jewelbook.utils.database import Base


class Customer(TenantMixin, TimestampMixin, Base):
    __tablename__ = "customers"

    __table_args__ = (
        Index("ix_customers_tenant_name", "tenant_id", "name"),
    )

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(150), nullable=False)
    mobile_no = Column(String(20), nullable=False)
    city = Column(String(100), nullable=True)
    gst_no = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)

    # onboarding snapshot
    opening_amount = Column(MONEY, nullable=False, default=0)
    opening_fine = Column(WEIGHT, nullable=False, default=0)

    # running balances, only moved by the ledger service
    closing_amount = Column(MONEY, nullable=False, default=0)
    closing_fine = Column(WEIGHT, nullable=False, default=0)

    @property
    def amount_side(self) -> str:
        return balance_side(self.closing_amount)

    @property
    def fine_side(self) -> str:
        return balance_side(self.closing_fine)

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, name={self.name}, tenant={self.tenant_id})>"
