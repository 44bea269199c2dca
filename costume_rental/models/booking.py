import enum
from datetime import datetime

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from costume_rental.models.base import Base, generate_uuid
from costume_rental.models.item import ItemType


class BookingStatus(enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class PaymentStatus(enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (Index("idx_bookings_dates_range", "start_date", "end_date"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)

    # Customer details
    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String, nullable=True)

    # Rental period
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    status = Column(
        Enum(BookingStatus),
        default=BookingStatus.ACTIVE,
        nullable=False,
        index=True,
    )
    payment_status = Column(
        Enum(PaymentStatus),
        default=PaymentStatus.PENDING,
        nullable=False,
    )

    # Financial information, always computed server-side
    total_amount = Column(Numeric(10, 2), nullable=False)
    security_deposit = Column(Numeric(10, 2), nullable=False)

    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    items = relationship(
        "BookingItem",
        back_populates="booking",
        order_by="BookingItem.position",
        cascade="all, delete-orphan",
    )


class BookingItem(Base):
    __tablename__ = "booking_items"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=False)
    item_id = Column(String(36), ForeignKey("items.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    # Snapshot of the item at booking time
    item_type = Column(Enum(ItemType), nullable=False)
    item_name = Column(String, nullable=False)
    size = Column(String)
    price_per_day = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    booking = relationship("Booking", back_populates="items")
    item = relationship("Item", back_populates="booking_items")
