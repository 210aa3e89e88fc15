# jewelbook/models/sale_model.py

from sqlalchemy import Index, UniqueConstraint
from sqlalchemy.orm import relationship

from jewelbook.models.mixins import BullionLineMixin
from jewelbook.utils.database import Base


class Sale(BullionLineMixin, Base):
    __tablename__ = "sales"

    __table_args__ = (
        UniqueConstraint("tenant_id", "invoice_no", name="ux_sales_tenant_invoice"),
        Index("ix_sales_tenant_date", "tenant_id", "date"),
    )

    customer = relationship("Customer", lazy="joined")
