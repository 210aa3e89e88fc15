# jewelbook/repositories/base.py

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from jewelbook.core.errors import AccessDenied, NotFound
from jewelbook.core.security import TenantContext

logger = logging.getLogger(__name__)

# never writable through insert()/update() payloads
PROTECTED_FIELDS = {"id", "tenant_id", "created_at", "updated_at"}


class TenantRepository:
    """
    CRUD for one model, scoped to the caller's tenant.

    Repositories only flush; committing is the caller's unit of work
    (see jewelbook.utils.database.atomic).
    """

    model = None
    label = "Record"

    def __init__(self, db: Session, ctx: TenantContext):
        self.db = db
        self.ctx = ctx

    # ---------------------
    # reads
    # ---------------------
    def query(self):
        return self.db.query(self.model).filter(self.model.tenant_id == self.ctx.tenant_id)

    def get(self, record_id: int, for_update: bool = False):
        q = self.db.query(self.model).filter(self.model.id == record_id)
        if for_update:
            # refresh the identity map copy with the row as read under the lock
            q = q.populate_existing().with_for_update()
        obj = q.first()
        if not obj:
            raise NotFound(f"{self.label} not found")
        if obj.tenant_id != self.ctx.tenant_id:
            logger.warning(
                "Cross-tenant access blocked: tenant=%s user=%s %s id=%s",
                self.ctx.tenant_id, self.ctx.user_id, self.label, record_id,
            )
            raise AccessDenied("Access denied")
        return obj

    def ordering(self):
        return [self.model.id.desc()]

    def list(
            self,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None,
            **filters,
    ):
        q = self.query()

        if start_date is not None:
            q = q.filter(self.model.date >= start_date)
        if end_date is not None:
            q = q.filter(self.model.date <= end_date)

        for field, value in filters.items():
            if value is not None:
                q = q.filter(getattr(self.model, field) == value)

        return q.order_by(*self.ordering()).all()

    # ---------------------
    # writes
    # ---------------------
    def insert(self, **fields):
        data = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
        obj = self.model(tenant_id=self.ctx.tenant_id, **data)
        self.db.add(obj)
        self.db.flush()  # gives obj.id
        return obj

    def update(self, record_id: int, patch: dict):
        obj = self.get(record_id)
        for k, v in patch.items():
            if k in PROTECTED_FIELDS:
                continue
            setattr(obj, k, v)
        self.db.flush()
        return obj

    def delete(self, record_id: int):
        obj = self.get(record_id)
        self.db.delete(obj)
        self.db.flush()
        return obj


class DatedRepository(TenantRepository):
    """Most recent first: date desc, then creation time desc."""

    def ordering(self):
        return [
            self.model.date.desc(),
            self.model.created_at.desc(),
            self.model.id.desc(),
        ]
