# jewelbook/routers/items_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from starlette import status

from jewelbook.core.errors import ValidationFailure
from jewelbook.core.security import TenantContext, get_tenant_context
from jewelbook.repositories.item_repository import ItemRepository
from jewelbook.schemas.item_schemas import ItemCreate, ItemOut, ItemUpdate
from jewelbook.utils.database import atomic, get_db

router = APIRouter(prefix="/items", tags=["Items"])


@router.post("", response_model=ItemOut, status_code=status.HTTP_201_CREATED)
def create_item(
        payload: ItemCreate,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    items = ItemRepository(db, ctx)
    if items.find_by_name(payload.name):
        raise ValidationFailure("Item name already exists")

    with atomic(db):
        item = items.insert(**payload.model_dump())
    db.refresh(item)
    return item


@router.get("", response_model=list[ItemOut])
def list_items(
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return ItemRepository(db, ctx).list()


@router.get("/{item_id}", response_model=ItemOut)
def get_item(
        item_id: int,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    return ItemRepository(db, ctx).get(item_id)


@router.put("/{item_id}", response_model=ItemOut)
def update_item(
        item_id: int,
        payload: ItemUpdate,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    items = ItemRepository(db, ctx)
    data = payload.model_dump(exclude_unset=True)
    if data.get("name") is None:
        data.pop("name", None)

    if "name" in data and items.find_by_name(data["name"], exclude_id=item_id):
        raise ValidationFailure("Item name already in use")

    with atomic(db):
        item = items.update(item_id, data)
    db.refresh(item)
    return item


@router.delete("/{item_id}")
def delete_item(
        item_id: int,
        db: Session = Depends(get_db),
        ctx: TenantContext = Depends(get_tenant_context),
):
    with atomic(db):
        ItemRepository(db, ctx).delete(item_id)
    return {"message": "Item deleted successfully"}
