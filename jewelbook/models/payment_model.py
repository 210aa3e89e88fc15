# jewelbook/models/payment_model.py

from sqlalchemy import Column, String, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from jewelbook.models.mixins import MONEY, WEIGHT, LedgerEntryMixin
from jewelbook.utils.calculations import compute_rate_cut_fine
from jewelbook.utils.database import Base


class Payment(LedgerEntryMixin, Base):
    __tablename__ = "payments"

    __table_args__ = (
        UniqueConstraint("tenant_id", "invoice_no", name="ux_payments_tenant_invoice"),
        Index("ix_payments_tenant_date", "tenant_id", "date"),
    )

    # payment / receipt
    transaction_type = Column(String(10), nullable=False)
    # fine / cash / bank / rate_cut_fine / rate_cut_amount / roopu
    payment_type = Column(String(20), nullable=False)

    gross = Column(WEIGHT, nullable=True)
    purity = Column(WEIGHT, nullable=True)
    wast_badi_kg = Column(WEIGHT, nullable=True)
    rate = Column(MONEY, nullable=True)

    customer = relationship("Customer", lazy="joined")

    @property
    def rate_cut_fine(self):
        return compute_rate_cut_fine(self.fine, self.rate)
