#!/usr/bin/env python3
"""
Script to create an admin user for the costume rental back office.
Run this script once to create the first administrator.
"""

import asyncio
import sys

from pydantic import ValidationError

from costume_rental.core.database import AsyncSessionLocal, async_engine
from costume_rental.core.exceptions import ConflictError
from costume_rental.models import Base
from costume_rental.models.admin_user import AdminRole
from costume_rental.schemas.admin_user import AdminUserCreate
from costume_rental.services.auth_service import AuthService

MIN_PASSWORD_LENGTH = 8


def prompt_admin_data():
    email = input("Enter admin email: ").strip()
    if not email:
        print("❌ Email cannot be empty")
        return None

    first_name = input("Enter first name: ").strip()
    last_name = input("Enter last name: ").strip()
    if not first_name or not last_name:
        print("❌ First and last name are required")
        return None

    password = input("Enter admin password: ").strip()
    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"❌ Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        return None

    password_confirm = input("Confirm password: ").strip()
    if password != password_confirm:
        print("❌ Passwords do not match")
        return None

    superadmin = input("Superadmin? [y/N]: ").strip().lower() == "y"

    try:
        return AdminUserCreate(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            role=AdminRole.SUPERADMIN if superadmin else AdminRole.ADMIN,
        )
    except ValidationError as e:
        print(f"❌ Invalid admin details: {e.errors()[0]['msg']}")
        return None


async def create_admin_user():
    print("🔧 Creating admin user for Costume Rental")
    print("-" * 40)

    admin_data = prompt_admin_data()
    if admin_data is None:
        return False

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        try:
            admin = await AuthService(db).create_admin(admin_data)
        except ConflictError as e:
            print(f"❌ {e.message}")
            return False

    print("✅ Admin user created successfully!")
    print(f"   Email: {admin.email}")
    print(f"   Name: {admin.first_name} {admin.last_name}")
    print(f"   Role: {admin.role.value}")
    print(f"   User ID: {admin.id}")
    print()
    print("🚀 You can now log in to the admin dashboard with these credentials.")
    return True


async def main():
    print("=" * 50)
    print("🎭 COSTUME RENTAL - ADMIN USER CREATOR")
    print("=" * 50)
    print()

    try:
        success = await create_admin_user()
    except KeyboardInterrupt:
        print("\n\n❌ Setup cancelled by user")
        sys.exit(1)
    finally:
        await async_engine.dispose()

    print("\n" + "=" * 50)
    print("✅ SETUP COMPLETE!" if success else "❌ SETUP FAILED!")
    print("=" * 50)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    asyncio.run(main())
