"""Password hashing and session-cookie authentication."""

from fastapi import Depends, Request
from pwdlib import PasswordHash
from sqlalchemy.ext.asyncio import AsyncSession

from costume_rental.core.database import get_db
from costume_rental.core.exceptions import UnauthorizedError
from costume_rental.models.admin_user import AdminUser

SESSION_ADMIN_KEY = "admin_id"

password_hash = PasswordHash.recommended()


def get_password_hash(password: str) -> str:
    return password_hash.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return password_hash.verify(plain_password, hashed_password)


def start_admin_session(request: Request, admin: AdminUser) -> None:
    request.session.clear()
    request.session[SESSION_ADMIN_KEY] = admin.id


def end_admin_session(request: Request) -> None:
    request.session.clear()


async def get_current_admin(
    request: Request, db: AsyncSession = Depends(get_db)
) -> AdminUser:
    """Resolve the admin user bound to the session cookie."""
    admin_id = request.session.get(SESSION_ADMIN_KEY)
    if not admin_id:
        raise UnauthorizedError("Please log in to access this resource")

    admin = await db.get(AdminUser, admin_id)
    if admin is None:
        # Session outlived the account
        end_admin_session(request)
        raise UnauthorizedError("Please log in to access this resource")
    return admin
