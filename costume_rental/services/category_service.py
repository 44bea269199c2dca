import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from costume_rental.core.exceptions import ConflictError
from costume_rental.core.service_utils import (
    ensure_exists,
    ensure_no_related_records,
    validate_unique_field,
)
from costume_rental.models.category import Category, CategoryType
from costume_rental.models.item import Item, ItemType
from costume_rental.schemas.category import (
    CategoryCreate,
    CategorySeedResult,
    CategoryUpdate,
)

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    # Costume categories
    ("Traditional Hindu Deities", "Costumes of Hindu gods and goddesses", CategoryType.COSTUME),
    ("Regional Folk Costumes", "Traditional costumes from different regions", CategoryType.COSTUME),
    ("Festival Costumes", "Costumes for various festivals", CategoryType.COSTUME),
    ("Historical Characters", "Costumes of historical figures", CategoryType.COSTUME),
    ("Modern Characters", "Contemporary character costumes", CategoryType.COSTUME),
    # Accessory categories
    ("Crowns & Headwear", "Crowns, tiaras, and traditional headgear", CategoryType.ACCESSORY),
    ("Jewelry & Ornaments", "Traditional jewelry and ornaments", CategoryType.ACCESSORY),
    ("Weapons & Props", "Traditional weapons and character props", CategoryType.ACCESSORY),
    ("Musical Instruments", "Traditional musical instruments as props", CategoryType.ACCESSORY),
    ("Footwear", "Traditional and character footwear", CategoryType.ACCESSORY),
]


class CategoryService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(
        self, category_type: Optional[CategoryType] = None
    ) -> List[Category]:
        query = select(Category)
        if category_type:
            query = query.where(Category.type == category_type)
        query = query.order_by(Category.type, Category.name)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, category_id: str) -> Optional[Category]:
        return await self.db.get(Category, category_id)

    async def get_by_name(self, name: str) -> Optional[Category]:
        result = await self.db.execute(select(Category).where(Category.name == name))
        return result.scalar_one_or_none()

    async def create(self, category_data: CategoryCreate) -> Category:
        validate_unique_field(
            await self.get_by_name(category_data.name),
            "name",
            category_data.name,
            "Category",
        )

        db_category = Category(**category_data.model_dump())
        self.db.add(db_category)
        await self.db.commit()
        await self.db.refresh(db_category)
        return db_category

    async def update(
        self, category_id: str, category_data: CategoryUpdate
    ) -> Category:
        db_category = ensure_exists(
            await self.get_by_id(category_id), "Category", category_id
        )

        update_data = category_data.model_dump(exclude_unset=True)
        if "name" in update_data and update_data["name"] != db_category.name:
            validate_unique_field(
                await self.get_by_name(update_data["name"]),
                "name",
                update_data["name"],
                "Category",
            )
        if update_data.get("type") and update_data["type"] != db_category.type:
            await self._ensure_items_match_type(category_id, update_data["type"])

        for field, value in update_data.items():
            setattr(db_category, field, value)

        await self.db.commit()
        await self.db.refresh(db_category)
        return db_category

    async def _ensure_items_match_type(
        self, category_id: str, category_type: CategoryType
    ) -> None:
        # Items keep their own type, so a category cannot change under them
        result = await self.db.execute(
            select(func.count(Item.id)).where(
                Item.category_id == category_id,
                Item.item_type != ItemType(category_type.value),
            )
        )
        mismatched = result.scalar()
        if mismatched:
            raise ConflictError(
                f"Cannot change category type to {category_type.value} while "
                f"{mismatched} item(s) of another type use it",
                "Item",
                {"field": "type", "value": category_type.value},
            )

    async def delete(self, category_id: str) -> None:
        """Delete a category that no item references."""
        db_category = ensure_exists(
            await self.get_by_id(category_id), "Category", category_id
        )

        result = await self.db.execute(
            select(func.count(Item.id)).where(Item.category_id == category_id)
        )
        ensure_no_related_records(result.scalar(), "category", "items")

        await self.db.delete(db_category)
        await self.db.commit()

    async def seed_defaults(self) -> List[CategorySeedResult]:
        """Insert each default category unless one with the same name exists."""
        results = []
        for name, description, category_type in DEFAULT_CATEGORIES:
            created = False
            if await self.get_by_name(name) is None:
                self.db.add(
                    Category(name=name, description=description, type=category_type)
                )
                await self.db.flush()
                created = True
                logger.info(f"Created category: {name} ({category_type.value})")
            results.append(
                CategorySeedResult(name=name, type=category_type, created=created)
            )

        await self.db.commit()
        return results
