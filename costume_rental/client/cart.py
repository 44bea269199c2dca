"""Customer cart: a per-session selection of items that becomes a booking."""

from collections import OrderedDict
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional

import requests

from costume_rental.client.api_client import BOOKINGS, ApiClient
from costume_rental.client.errors import ApiError, ConflictError, ValidationError


@dataclass
class CartItem:
    id: str
    type: str
    name: str
    price_per_day: Decimal
    size: Optional[str] = None
    quantity: int = 1
    image_url: Optional[str] = None

    @classmethod
    def from_item(
        cls, item: Dict[str, Any], size: Optional[str] = None, quantity: int = 1
    ) -> "CartItem":
        """Build a cart entry from an item as returned by the catalog API."""
        return cls(
            id=item["id"],
            type=item["item_type"],
            name=item["name"],
            price_per_day=Decimal(str(item["price_per_day"])),
            size=size or item.get("size"),
            quantity=quantity,
            image_url=item.get("image_url"),
        )

    @property
    def daily_total(self) -> Decimal:
        return self.price_per_day * self.quantity


@dataclass
class CustomerDetails:
    name: str
    email: str
    phone: Optional[str] = None


@dataclass
class CheckoutResult:
    success: bool
    booking: Optional[Dict[str, Any]] = None
    message: Optional[str] = None
    error_field: Optional[str] = None
    unavailable_item_ids: List[str] = field(default_factory=list)


class Cart:
    """Mapping of item id to ``CartItem``; adding an item twice raises its quantity."""

    def __init__(self):
        self._items: "OrderedDict[str, CartItem]" = OrderedDict()

    def add(self, item: CartItem) -> CartItem:
        if item.quantity < 1:
            raise ValueError("quantity must be at least 1")

        existing = self._items.get(item.id)
        if existing is None:
            entry = replace(item)
            self._items[item.id] = entry
            return entry

        existing.quantity += item.quantity
        if item.size:
            existing.size = item.size
        return existing

    def set_quantity(self, item_id: str, quantity: int) -> None:
        """Change a line's quantity; zero or less removes the line."""
        if item_id not in self._items:
            raise KeyError(item_id)
        if quantity <= 0:
            del self._items[item_id]
        else:
            self._items[item_id].quantity = quantity

    def remove(self, item_id: str) -> None:
        self._items.pop(item_id, None)

    def clear(self) -> None:
        self._items.clear()

    @property
    def items(self) -> List[CartItem]:
        return list(self._items.values())

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self._items.values())

    def daily_rate(self) -> Decimal:
        return sum((item.daily_total for item in self._items.values()), Decimal(0))

    def subtotal(self, days: int) -> Decimal:
        """Rental cost before the security deposit."""
        return self.daily_rate() * days

    def to_booking_draft(
        self,
        customer: CustomerDetails,
        start_date: date,
        end_date: date,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        """JSON body for a booking submission. Totals are left to the server."""
        return {
            "customer_name": customer.name,
            "customer_email": customer.email,
            "customer_phone": customer.phone or None,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "notes": notes,
            "items": [
                {"item_id": item.id, "quantity": item.quantity, "size": item.size}
                for item in self._items.values()
            ],
        }

    def submit(
        self,
        client: ApiClient,
        customer: CustomerDetails,
        start_date: date,
        end_date: date,
        notes: Optional[str] = None,
    ) -> CheckoutResult:
        """
        Send the cart as a booking.

        On success the cart is emptied. On any failure the cart is kept so the
        customer can correct it or try again.
        """
        if not self._items:
            return CheckoutResult(False, message="Your cart is empty", error_field="items")
        if end_date <= start_date:
            return CheckoutResult(
                False, message="End date must be after start date", error_field="end_date"
            )

        draft = self.to_booking_draft(customer, start_date, end_date, notes)
        try:
            booking = client.post(BOOKINGS, json=draft)
        except ConflictError as exc:
            return CheckoutResult(
                False, message=exc.detail, unavailable_item_ids=exc.item_ids
            )
        except ValidationError as exc:
            return CheckoutResult(False, message=exc.detail, error_field=exc.field)
        except ApiError as exc:
            return CheckoutResult(False, message=exc.detail)
        except requests.RequestException:
            return CheckoutResult(
                False, message="Could not reach the booking service, please try again"
            )

        self.clear()
        return CheckoutResult(True, booking=booking)

    def __contains__(self, item_id: str) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[CartItem]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)
