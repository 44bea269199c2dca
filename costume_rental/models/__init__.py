from costume_rental.models.admin_user import AdminRole, AdminUser
from costume_rental.models.base import Base
from costume_rental.models.booking import (
    Booking,
    BookingItem,
    BookingStatus,
    PaymentStatus,
)
from costume_rental.models.category import Category, CategoryType
from costume_rental.models.item import Item, ItemStatus, ItemType

__all__ = [
    "Base",
    "AdminUser",
    "AdminRole",
    "Category",
    "CategoryType",
    "Item",
    "ItemType",
    "ItemStatus",
    "Booking",
    "BookingItem",
    "BookingStatus",
    "PaymentStatus",
]
