# jewelbook/models/company_settings_model.py

from sqlalchemy import Column, Integer, String, Text

from jewelbook.models.mixins import TimestampMixin
from jewelbook.utils.database import Base


class CompanySettings(TimestampMixin, Base):
    __tablename__ = "company_settings"

    id = Column(Integer, primary_key=True, index=True)

    # one row per tenant
    tenant_id = Column(String(64), nullable=False, unique=True, index=True)

    company_name = Column(String(200), nullable=False)
    address = Column(Text, nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(150), nullable=True)
    gst_no = Column(String(20), nullable=True)
    logo_url = Column(String(500), nullable=True)
