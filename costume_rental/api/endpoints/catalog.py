from typing import List, Optional

from fastapi import APIRouter, Query

from costume_rental.core.common_deps import CategoryServiceDep, ItemServiceDep
from costume_rental.models.category import CategoryType
from costume_rental.models.item import ItemStatus, ItemType
from costume_rental.schemas.category import Category
from costume_rental.schemas.item import ItemWithCategory

router = APIRouter()


async def _list_items(
    service: ItemServiceDep,
    item_type: ItemType,
    category: Optional[str],
    size: Optional[str],
    theme: Optional[str],
    status: Optional[ItemStatus],
    search: Optional[str],
):
    return await service.get_items(
        item_type=item_type,
        category_id=category,
        size=size,
        theme=theme,
        status=status,
        search=search,
    )


@router.get("/categories", response_model=List[Category], tags=["catalog"])
async def get_categories(
    service: CategoryServiceDep,
    type: Optional[CategoryType] = Query(None, description="Filter by category type"),
):
    """List catalog categories"""
    return await service.get_all(type)


@router.get("/costumes", response_model=List[ItemWithCategory], tags=["catalog"])
async def get_costumes(
    service: ItemServiceDep,
    category: Optional[str] = Query(None, description="Filter by category ID"),
    size: Optional[str] = Query(None),
    theme: Optional[str] = Query(None),
    status: Optional[ItemStatus] = Query(None),
    search: Optional[str] = Query(None, description="Match name or description"),
):
    """List costumes matching every given filter"""
    return await _list_items(
        service, ItemType.COSTUME, category, size, theme, status, search
    )


@router.get("/costumes/{item_id}", response_model=ItemWithCategory, tags=["catalog"])
async def get_costume(item_id: str, service: ItemServiceDep):
    """Get costume by ID"""
    return await service.get_item_of_type(item_id, ItemType.COSTUME)


@router.get("/accessories", response_model=List[ItemWithCategory], tags=["catalog"])
async def get_accessories(
    service: ItemServiceDep,
    category: Optional[str] = Query(None, description="Filter by category ID"),
    size: Optional[str] = Query(None),
    theme: Optional[str] = Query(None),
    status: Optional[ItemStatus] = Query(None),
    search: Optional[str] = Query(None, description="Match name or description"),
):
    """List accessories matching every given filter"""
    return await _list_items(
        service, ItemType.ACCESSORY, category, size, theme, status, search
    )


@router.get(
    "/accessories/{item_id}", response_model=ItemWithCategory, tags=["catalog"]
)
async def get_accessory(item_id: str, service: ItemServiceDep):
    """Get accessory by ID"""
    return await service.get_item_of_type(item_id, ItemType.ACCESSORY)
