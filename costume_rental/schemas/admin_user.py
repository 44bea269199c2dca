from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from costume_rental.models.admin_user import AdminRole


class AdminLoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AdminUserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    role: AdminRole = AdminRole.ADMIN


class AdminUser(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    role: AdminRole
    is_active: bool
    last_login_at: Optional[datetime] = None

    class Config:
        from_attributes = True
