# jewelbook/repositories/company_repository.py

from typing import Optional

from jewelbook.models.company_settings_model import CompanySettings
from jewelbook.repositories.base import PROTECTED_FIELDS, TenantRepository


class CompanySettingsRepository(TenantRepository):
    model = CompanySettings
    label = "Company settings"

    def current(self) -> Optional[CompanySettings]:
        return self.query().first()

    def upsert(self, fields: dict) -> CompanySettings:
        """Created on first save, updated in place afterwards."""
        existing = self.current()
        if existing is None:
            return self.insert(**fields)

        for k, v in fields.items():
            if k not in PROTECTED_FIELDS:
                setattr(existing, k, v)
        self.db.flush()
        return existing
