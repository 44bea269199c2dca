from typing import List, Optional

from fastapi import APIRouter, Query, status

from costume_rental.core.common_deps import AdminDep, CategoryServiceDep
from costume_rental.core.service_utils import ensure_exists
from costume_rental.models.category import CategoryType
from costume_rental.schemas.category import Category, CategoryCreate, CategoryUpdate
from costume_rental.schemas.responses import MessageResponse

router = APIRouter()


@router.post("", response_model=Category, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    service: CategoryServiceDep,
    current_admin: AdminDep,
):
    """Create a new category"""
    return await service.create(category_data)


@router.get("", response_model=List[Category])
async def get_categories(
    service: CategoryServiceDep,
    current_admin: AdminDep,
    type: Optional[CategoryType] = Query(None, description="Filter by category type"),
):
    return await service.get_all(type)


@router.get("/{category_id}", response_model=Category)
async def get_category(
    category_id: str, service: CategoryServiceDep, current_admin: AdminDep
):
    return ensure_exists(await service.get_by_id(category_id), "Category", category_id)


@router.put("/{category_id}", response_model=Category)
async def update_category(
    category_id: str,
    category_data: CategoryUpdate,
    service: CategoryServiceDep,
    current_admin: AdminDep,
):
    return await service.update(category_id, category_data)


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: str, service: CategoryServiceDep, current_admin: AdminDep
):
    """Delete category (refused while items still reference it)"""
    await service.delete(category_id)
    return MessageResponse(message="Category deleted successfully")
