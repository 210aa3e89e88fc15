# jewelbook/models/expense_model.py

from sqlalchemy import Column, Integer, String, Date, Text, Index

from jewelbook.models.mixins import MONEY, TenantMixin, TimestampMixin
from jewelbook.utils.database import Base


class Expense(TenantMixin, TimestampMixin, Base):
    __tablename__ = "expenses"

    __table_args__ = (
        Index("ix_expenses_tenant_date", "tenant_id", "date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False)
    category = Column(String(120), nullable=False, index=True)
    amount = Column(MONEY, nullable=False)
    description = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Expense(id={self.id}, category={self.category}, amount={self.amount})>"
