"""Composable catalog and booking queries; every filter given as ``None`` or ``""`` is skipped."""

from typing import List, Optional

from sqlalchemy import Select, and_, func, or_, select
from sqlalchemy.orm import selectinload

from costume_rental.models.booking import Booking, BookingStatus
from costume_rental.models.item import Item, ItemStatus, ItemType


class BaseQueryBuilder:
    def __init__(self, model_class):
        self.model_class = model_class
        self.conditions = []
        self.ordering = []
        self.loaders = []

    def where_equals(self, column, value):
        if value not in (None, ""):
            self.conditions.append(column == value)
        return self

    def where_text_search(self, columns: List, text: Optional[str]):
        """Case-insensitive substring match on any of ``columns``."""
        if text:
            needle = text.lower()
            self.conditions.append(
                or_(*(func.lower(column).contains(needle) for column in columns))
            )
        return self

    def include(self, *relationships):
        self.loaders.extend(selectinload(relationship) for relationship in relationships)
        return self

    def order_by(self, column, direction: str = "asc"):
        self.ordering.append(column.desc() if direction == "desc" else column.asc())
        return self

    def build(self) -> Select:
        query = select(self.model_class)
        if self.loaders:
            query = query.options(*self.loaders)
        if self.conditions:
            query = query.where(and_(*self.conditions))
        if self.ordering:
            query = query.order_by(*self.ordering)
        return query


class ItemQueryBuilder(BaseQueryBuilder):
    """Catalog filtering: exact-match conjunction plus optional free-text search."""

    def __init__(self):
        super().__init__(Item)
        self.include(Item.category)

    def filter_by_type(self, item_type: Optional[ItemType]):
        return self.where_equals(Item.item_type, item_type)

    def filter_by_category(self, category_id: Optional[str]):
        return self.where_equals(Item.category_id, category_id)

    def filter_by_size(self, size: Optional[str]):
        return self.where_equals(Item.size, size)

    def filter_by_theme(self, theme: Optional[str]):
        return self.where_equals(Item.theme, theme)

    def filter_by_status(self, status: Optional[ItemStatus]):
        return self.where_equals(Item.status, status)

    def search(self, text: Optional[str]):
        return self.where_text_search([Item.name, Item.description], text)

    def newest_first(self):
        return self.order_by(Item.created_at, "desc").order_by(Item.id)


class BookingQueryBuilder(BaseQueryBuilder):
    """Specialized query builder for booking listings."""

    def __init__(self):
        super().__init__(Booking)
        self.include(Booking.items)

    def filter_by_status(self, status: Optional[BookingStatus]):
        return self.where_equals(Booking.status, status)

    def newest_first(self):
        return self.order_by(Booking.created_at, "desc").order_by(Booking.id)
