# jewelbook/models/item_model.py

from sqlalchemy import Column, Integer, String, Text, UniqueConstraint

from jewelbook.models.mixins import TenantMixin, TimestampMixin
from jewelbook.utils.database import Base


class Item(TenantMixin, TimestampMixin, Base):
    __tablename__ = "items"

    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="ux_items_tenant_name"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, name={self.name})>"
