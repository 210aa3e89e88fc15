# jewelbook/repositories/customer_repository.py

from decimal import Decimal

from sqlalchemy import update

from jewelbook.models.customer_model import Customer
from jewelbook.repositories.base import TenantRepository

# closing balances move only through apply_balance_delta()
BALANCE_FIELDS = {"closing_amount", "closing_fine"}


class CustomerRepository(TenantRepository):
    model = Customer
    label = "Customer"

    def ordering(self):
        return [Customer.name.asc(), Customer.id.asc()]

    def search(self, term: str):
        like = f"%{term.strip()}%"
        return (
            self.query()
            .filter((Customer.name.ilike(like)) | (Customer.mobile_no.ilike(like)))
            .order_by(*self.ordering())
            .all()
        )

    def insert(self, **fields):
        fields = {k: v for k, v in fields.items() if k not in BALANCE_FIELDS}
        opening_amount = fields.get("opening_amount") or Decimal("0")
        opening_fine = fields.get("opening_fine") or Decimal("0")
        fields["opening_amount"] = opening_amount
        fields["opening_fine"] = opening_fine
        return super().insert(
            closing_amount=opening_amount,
            closing_fine=opening_fine,
            **fields,
        )

    def update(self, record_id: int, patch: dict):
        patch = {k: v for k, v in patch.items() if k not in BALANCE_FIELDS}
        return super().update(record_id, patch)

    def lock(self, customer_id: int) -> Customer:
        """Row lock held until the surrounding unit of work ends (no-op on SQLite)."""
        return self.get(customer_id, for_update=True)

    def apply_balance_delta(self, customer_id: int, amount_delta, fine_delta) -> int:
        """
        closing_amount += amount_delta, closing_fine += fine_delta,
        evaluated by the database so concurrent deltas never overwrite each other.

        Returns the number of rows touched (1 on success).
        """
        result = self.db.execute(
            update(Customer)
            .where(
                Customer.id == customer_id,
                Customer.tenant_id == self.ctx.tenant_id,
            )
            .values(
                closing_amount=Customer.closing_amount + amount_delta,
                closing_fine=Customer.closing_fine + fine_delta,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
