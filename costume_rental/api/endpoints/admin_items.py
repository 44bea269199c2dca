from typing import List, Optional

from fastapi import APIRouter, Query, status

from costume_rental.core.common_deps import AdminDep, ItemServiceDep
from costume_rental.core.service_utils import ensure_exists
from costume_rental.models.item import ItemStatus, ItemType
from costume_rental.schemas.item import ItemCreate, ItemUpdate, ItemWithCategory
from costume_rental.schemas.responses import MessageResponse

router = APIRouter()


@router.post("", response_model=ItemWithCategory, status_code=status.HTTP_201_CREATED)
async def create_item(
    item_data: ItemCreate,
    service: ItemServiceDep,
    current_admin: AdminDep,
):
    """Create a new costume or accessory"""
    return await service.create_item(item_data)


@router.get("", response_model=List[ItemWithCategory])
async def get_items(
    service: ItemServiceDep,
    current_admin: AdminDep,
    item_type: Optional[ItemType] = Query(None, description="costume or accessory"),
    category: Optional[str] = Query(None, description="Filter by category ID"),
    size: Optional[str] = Query(None),
    theme: Optional[str] = Query(None),
    status: Optional[ItemStatus] = Query(None),
    search: Optional[str] = Query(None),
):
    """Get the whole inventory with optional filters"""
    return await service.get_items(item_type, category, size, theme, status, search)


@router.get("/{item_id}", response_model=ItemWithCategory)
async def get_item(item_id: str, service: ItemServiceDep, current_admin: AdminDep):
    """Get item by ID"""
    return ensure_exists(await service.get_item(item_id), "Item", item_id)


@router.put("/{item_id}", response_model=ItemWithCategory)
async def update_item(
    item_id: str,
    item_data: ItemUpdate,
    service: ItemServiceDep,
    current_admin: AdminDep,
):
    """Update item"""
    return await service.update_item(item_id, item_data)


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_item(item_id: str, service: ItemServiceDep, current_admin: AdminDep):
    """Delete item (only if no booking references it)"""
    await service.delete_item(item_id)
    return MessageResponse(message="Item deleted successfully")
