# jewelbook/models/purchase_model.py

from sqlalchemy import Index, UniqueConstraint
from sqlalchemy.orm import relationship

from jewelbook.models.mixins import BullionLineMixin
from jewelbook.utils.database import Base


class Purchase(BullionLineMixin, Base):
    __tablename__ = "purchases"

    __table_args__ = (
        UniqueConstraint("tenant_id", "invoice_no", name="ux_purchases_tenant_invoice"),
        Index("ix_purchases_tenant_date", "tenant_id", "date"),
    )

    customer = relationship("Customer", lazy="joined")
