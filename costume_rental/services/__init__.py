from .auth_service import AuthService
from .booking_service import BookingService
from .category_service import CategoryService
from .dashboard_service import DashboardService
from .item_service import ItemService

__all__ = [
    "AuthService",
    "BookingService",
    "CategoryService",
    "DashboardService",
    "ItemService",
]
