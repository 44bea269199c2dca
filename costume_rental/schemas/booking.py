from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from costume_rental.models.booking import BookingStatus, PaymentStatus
from costume_rental.models.item import ItemType


class BookingItemRequest(BaseModel):
    item_id: str
    quantity: int = Field(
        1, gt=0, description="Quantity must be greater than 0"
    )
    size: Optional[str] = None


class BookingCreate(BaseModel):
    """Checkout payload. Totals are always computed server-side."""

    customer_name: str
    customer_email: EmailStr
    customer_phone: Optional[str] = None
    start_date: date
    end_date: date
    notes: Optional[str] = None
    items: List[BookingItemRequest]


class BookingUpdate(BaseModel):
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = None
    payment_status: Optional[PaymentStatus] = None
    notes: Optional[str] = None


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingItem(BaseModel):
    id: int
    item_id: str
    item_type: ItemType
    item_name: str
    size: Optional[str] = None
    price_per_day: Decimal
    quantity: int

    class Config:
        from_attributes = True


class Booking(BaseModel):
    id: str
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    start_date: date
    end_date: date
    total_amount: Decimal
    security_deposit: Decimal
    status: BookingStatus
    payment_status: PaymentStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    items: List[BookingItem] = []

    class Config:
        from_attributes = True


class AvailabilityRequest(BaseModel):
    item_id: str
    start_date: date
    end_date: date
