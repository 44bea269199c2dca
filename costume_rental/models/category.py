import enum

from sqlalchemy import Column, Enum, String, Text
from sqlalchemy.orm import relationship

from costume_rental.models.base import Base, generate_uuid


class CategoryType(enum.Enum):
    COSTUME = "costume"
    ACCESSORY = "accessory"


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False, unique=True)
    description = Column(Text)
    type = Column(Enum(CategoryType), nullable=False)

    items = relationship("Item", back_populates="category")
