from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from costume_rental.core.exceptions import EntityNotFoundError, ValidationError
from costume_rental.core.query_builders import ItemQueryBuilder
from costume_rental.core.service_utils import (
    ensure_exists,
    ensure_no_related_records,
    validate_unique_field,
)
from costume_rental.models.booking import BookingItem
from costume_rental.models.category import Category
from costume_rental.models.item import Item, ItemStatus, ItemType
from costume_rental.schemas.item import ItemCreate, ItemUpdate


class ItemService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _ensure_category_matches(
        self, category_id: Optional[str], item_type: ItemType
    ) -> None:
        """A categorized item must share its category's costume/accessory type."""
        if not category_id:
            return
        category = ensure_exists(
            await self.db.get(Category, category_id), "Category", category_id
        )
        if category.type.value != item_type.value:
            raise ValidationError(
                f"Category '{category.name}' holds {category.type.value} items, "
                f"not {item_type.value} items",
                "category_id",
                category_id,
            )

    async def create_item(self, item_data: ItemCreate) -> Item:
        """Create a new catalog item"""
        await self._ensure_category_matches(item_data.category_id, item_data.item_type)

        if item_data.id:
            validate_unique_field(
                await self.db.get(Item, item_data.id), "id", item_data.id, "Item"
            )

        db_item = Item(**item_data.model_dump(exclude_none=True))
        self.db.add(db_item)
        await self.db.commit()
        return await self.get_item(db_item.id)

    async def get_items(
        self,
        item_type: Optional[ItemType] = None,
        category_id: Optional[str] = None,
        size: Optional[str] = None,
        theme: Optional[str] = None,
        status: Optional[ItemStatus] = None,
        search: Optional[str] = None,
    ) -> List[Item]:
        """List items matching every given filter, newest first"""
        query = (
            ItemQueryBuilder()
            .filter_by_type(item_type)
            .filter_by_category(category_id)
            .filter_by_size(size)
            .filter_by_theme(theme)
            .filter_by_status(status)
            .search(search)
            .newest_first()
            .build()
        )

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_item(self, item_id: str) -> Optional[Item]:
        result = await self.db.execute(
            select(Item)
            .options(selectinload(Item.category))
            .where(Item.id == item_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_item_of_type(self, item_id: str, item_type: ItemType) -> Item:
        """Get an item, treating one of the other type as missing"""
        item = await self.get_item(item_id)
        entity_name = item_type.value.capitalize()
        if item is None or item.item_type != item_type:
            raise EntityNotFoundError(entity_name, item_id)
        return item

    async def update_item(self, item_id: str, item_data: ItemUpdate) -> Item:
        db_item = ensure_exists(await self.get_item(item_id), "Item", item_id)

        update_data = item_data.model_dump(exclude_unset=True)
        if "category_id" in update_data or "item_type" in update_data:
            await self._ensure_category_matches(
                update_data.get("category_id", db_item.category_id),
                update_data.get("item_type") or db_item.item_type,
            )

        for field, value in update_data.items():
            setattr(db_item, field, value)

        await self.db.commit()
        return await self.get_item(item_id)

    async def delete_item(self, item_id: str) -> None:
        """Delete an item that no booking references"""
        db_item = ensure_exists(await self.get_item(item_id), "Item", item_id)

        result = await self.db.execute(
            select(func.count(BookingItem.id)).where(BookingItem.item_id == item_id)
        )
        ensure_no_related_records(result.scalar(), "item", "bookings")

        await self.db.delete(db_item)
        await self.db.commit()
