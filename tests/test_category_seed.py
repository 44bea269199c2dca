from sqlalchemy import func, select

from costume_rental.models import Category, CategoryType
from costume_rental.services.category_service import DEFAULT_CATEGORIES, CategoryService


async def count_categories(db):
    result = await db.execute(select(func.count(Category.id)))
    return result.scalar()


async def test_seed_creates_defaults(db):
    results = await CategoryService(db).seed_defaults()

    assert len(results) == 10
    assert all(result.created for result in results)
    assert await count_categories(db) == 10

    costume = await CategoryService(db).get_all(CategoryType.COSTUME)
    accessory = await CategoryService(db).get_all(CategoryType.ACCESSORY)
    assert len(costume) == 5
    assert len(accessory) == 5


async def test_seed_is_idempotent(db):
    service = CategoryService(db)
    await service.seed_defaults()

    results = await service.seed_defaults()

    assert not any(result.created for result in results)
    assert [result.name for result in results] == [name for name, _, _ in DEFAULT_CATEGORIES]
    assert await count_categories(db) == 10


async def test_seed_keeps_existing_category(db):
    existing = Category(
        name="Footwear", description="Custom description", type=CategoryType.ACCESSORY
    )
    db.add(existing)
    await db.commit()

    results = await CategoryService(db).seed_defaults()

    footwear = next(result for result in results if result.name == "Footwear")
    assert footwear.created is False
    assert sum(result.created for result in results) == 9
    await db.refresh(existing)
    assert existing.description == "Custom description"
