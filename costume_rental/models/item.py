import enum
from datetime import datetime

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship

from costume_rental.models.base import Base, generate_uuid


class ItemType(enum.Enum):
    COSTUME = "costume"
    ACCESSORY = "accessory"


class ItemStatus(enum.Enum):
    AVAILABLE = "available"
    RENTED = "rented"
    CLEANING = "cleaning"
    DAMAGED = "damaged"


class Item(Base):
    """A rentable costume or accessory."""

    __tablename__ = "items"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    item_type = Column(
        Enum(ItemType),
        nullable=False,
        index=True,
    )
    name = Column(String, nullable=False)
    description = Column(Text)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=True)
    size = Column(String, index=True)
    theme = Column(String, index=True)
    price_per_day = Column(Numeric(10, 2), nullable=False)
    status = Column(
        Enum(ItemStatus),
        default=ItemStatus.AVAILABLE,
        nullable=False,
        index=True,
    )
    image_url = Column(String)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    category = relationship("Category", back_populates="items")
    booking_items = relationship("BookingItem", back_populates="item")
