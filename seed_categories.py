#!/usr/bin/env python3
"""
Seed the default costume and accessory categories.
Safe to run repeatedly: existing categories are left untouched.
"""

import asyncio
import sys

from costume_rental.core.database import AsyncSessionLocal, async_engine
from costume_rental.models import Base
from costume_rental.services.category_service import CategoryService


async def seed_categories():
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        results = await CategoryService(db).seed_defaults()

    for result in results:
        if result.created:
            print(f"✅ Created category: {result.name} ({result.type.value})")
        else:
            print(f"⏭️  Category already exists: {result.name}")

    created = sum(1 for result in results if result.created)
    print()
    print(f"🎭 Categories seeded: {created} created, {len(results) - created} existing")


async def main():
    print("🌱 Seeding categories...")
    try:
        await seed_categories()
    finally:
        await async_engine.dispose()
    sys.exit(0)


if __name__ == "__main__":
    asyncio.run(main())
