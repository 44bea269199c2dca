from fastapi import APIRouter

from costume_rental.api.endpoints import (
    admin_auth,
    admin_bookings,
    admin_categories,
    admin_dashboard,
    admin_items,
    bookings,
    catalog,
)

api_router = APIRouter()

api_router.include_router(catalog.router)
api_router.include_router(bookings.router, tags=["bookings"])
api_router.include_router(
    admin_auth.router, prefix="/admin/auth", tags=["admin-auth"]
)
api_router.include_router(
    admin_dashboard.router, prefix="/admin/dashboard", tags=["admin-dashboard"]
)
api_router.include_router(admin_items.router, prefix="/admin/items", tags=["admin-items"])
api_router.include_router(
    admin_categories.router, prefix="/admin/categories", tags=["admin-categories"]
)
api_router.include_router(
    admin_bookings.router, prefix="/admin/bookings", tags=["admin-bookings"]
)
