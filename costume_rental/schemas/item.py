from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from costume_rental.models.item import ItemStatus, ItemType
from costume_rental.schemas.category import Category


class ItemBase(BaseModel):
    name: str = Field(..., min_length=1)
    item_type: ItemType
    description: Optional[str] = None
    category_id: Optional[str] = None
    size: Optional[str] = None
    theme: Optional[str] = None
    price_per_day: Decimal = Field(
        gt=0, description="Daily rental price must be greater than 0"
    )
    image_url: Optional[str] = None


class ItemCreate(ItemBase):
    id: Optional[str] = Field(
        None, min_length=1, max_length=36, description="Optional caller-chosen id"
    )
    status: ItemStatus = ItemStatus.AVAILABLE


class ItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    item_type: Optional[ItemType] = None
    description: Optional[str] = None
    category_id: Optional[str] = None
    size: Optional[str] = None
    theme: Optional[str] = None
    price_per_day: Optional[Decimal] = Field(None, gt=0)
    status: Optional[ItemStatus] = None
    image_url: Optional[str] = None


class Item(ItemBase):
    id: str
    status: ItemStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ItemWithCategory(Item):
    """Item with its category details"""

    category: Optional[Category] = None
