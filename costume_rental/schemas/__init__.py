from .admin_user import AdminLoginRequest, AdminUser, AdminUserCreate
from .booking import (
    AvailabilityRequest,
    Booking,
    BookingCreate,
    BookingItem,
    BookingItemRequest,
    BookingStatusUpdate,
    BookingUpdate,
)
from .category import Category, CategoryCreate, CategorySeedResult, CategoryUpdate
from .item import Item, ItemCreate, ItemUpdate, ItemWithCategory

__all__ = [
    # Admin schemas
    "AdminLoginRequest", "AdminUser", "AdminUserCreate",
    # Category schemas
    "Category", "CategoryCreate", "CategoryUpdate", "CategorySeedResult",
    # Item schemas
    "Item", "ItemCreate", "ItemUpdate", "ItemWithCategory",
    # Booking schemas
    "Booking", "BookingCreate", "BookingItem", "BookingItemRequest",
    "BookingUpdate", "BookingStatusUpdate", "AvailabilityRequest",
]
