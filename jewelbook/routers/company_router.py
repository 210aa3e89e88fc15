# jewelbook/routers/company_router.py

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jewelbook.core.security import TenantContext, get_tenant_context
from jewelbook.repositories.company_repository import CompanySettingsRepository
from jewelbook.schemas.company_schemas import CompanySettingsIn, CompanySettingsOut
from jewelbook.utils.database import atomic, get_db

router = APIRouter(prefix="/company", tags=["Company"])


@router.get("", response_model=Optional[CompanySettingsOut])
def get_company_settings(
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    # null until the first save
    return CompanySettingsRepository(db, ctx).current()


@router.put("", response_model=CompanySettingsOut)
def save_company_settings(
        payload: CompanySettingsIn,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    with atomic(db):
        obj = CompanySettingsRepository(db, ctx).upsert(payload.model_dump())
    db.refresh(obj)
    return obj
