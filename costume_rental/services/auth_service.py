import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from costume_rental.core.exceptions import InactiveUserError, UnauthorizedError
from costume_rental.core.security import get_password_hash, verify_password
from costume_rental.core.service_utils import validate_unique_field
from costume_rental.models.admin_user import AdminUser
from costume_rental.schemas.admin_user import AdminLoginRequest, AdminUserCreate

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> Optional[AdminUser]:
        result = await self.db.execute(
            select(AdminUser).where(AdminUser.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def authenticate(self, email: str, password: str) -> Optional[AdminUser]:
        admin = await self.get_by_email(email)

        if not admin:
            return None
        if not verify_password(password, admin.hashed_password):
            return None
        return admin

    async def login(self, login_data: AdminLoginRequest) -> AdminUser:
        admin = await self.authenticate(login_data.email, login_data.password)
        if not admin:
            logger.warning(f"Failed admin login for {login_data.email}")
            raise UnauthorizedError("Invalid email or password")

        if not admin.is_active:
            raise InactiveUserError()

        admin.last_login_at = datetime.utcnow()
        await self.db.commit()
        await self.db.refresh(admin)
        logger.info(f"Admin {admin.email} logged in")
        return admin

    async def create_admin(self, admin_data: AdminUserCreate) -> AdminUser:
        validate_unique_field(
            await self.get_by_email(admin_data.email),
            "email",
            admin_data.email,
            "Admin user",
        )

        db_admin = AdminUser(
            email=admin_data.email.lower(),
            hashed_password=get_password_hash(admin_data.password),
            first_name=admin_data.first_name,
            last_name=admin_data.last_name,
            role=admin_data.role,
            is_active=True,
        )

        self.db.add(db_admin)
        await self.db.commit()
        await self.db.refresh(db_admin)
        return db_admin
