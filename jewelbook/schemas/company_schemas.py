# jewelbook/schemas/company_schemas.py

from typing import Optional

from pydantic import BaseModel, Field


class CompanySettingsIn(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=200)
    address: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=20)
    email: Optional[str] = Field(default=None, max_length=150)
    gst_no: Optional[str] = Field(default=None, max_length=20)
    logo_url: Optional[str] = Field(default=None, max_length=500)

    class Config:
        extra = "forbid"


class CompanySettingsOut(CompanySettingsIn):
    id: int

    class Config:
        from_attributes = True
