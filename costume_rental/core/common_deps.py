"""
Annotated dependencies used in endpoint signatures.

Admin endpoints declare ``current_admin: AdminDep``; a request without an
active admin session fails with 401 (or 403 for a deactivated admin) before
the endpoint body runs.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from costume_rental.core.database import get_db
from costume_rental.core.security import get_current_admin
from costume_rental.core.service_deps import (
    GetAuthService,
    GetBookingService,
    GetCategoryService,
    GetDashboardService,
    GetItemService,
)
from costume_rental.core.service_utils import ensure_active_user
from costume_rental.models.admin_user import AdminUser


def get_active_admin(
    current_admin: AdminUser = Depends(get_current_admin),
) -> AdminUser:
    return ensure_active_user(current_admin)


DatabaseDep = Annotated[AsyncSession, Depends(get_db)]
AdminDep = Annotated[AdminUser, Depends(get_active_admin)]

AuthServiceDep = GetAuthService
BookingServiceDep = GetBookingService
CategoryServiceDep = GetCategoryService
DashboardServiceDep = GetDashboardService
ItemServiceDep = GetItemService
