# jewelbook/schemas/item_schemas.py

from typing import Optional

from pydantic import BaseModel, Field


class ItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = None

    class Config:
        extra = "forbid"


class ItemCreate(ItemBase):
    pass


class ItemUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    description: Optional[str] = None

    class Config:
        extra = "forbid"


class ItemOut(ItemBase):
    id: int

    class Config:
        from_attributes = True
