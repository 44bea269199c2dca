import logging
from collections import OrderedDict
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from costume_rental.core.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    ItemUnavailableError,
    ValidationError,
)
from costume_rental.core.query_builders import BookingQueryBuilder
from costume_rental.core.service_utils import (
    ensure_exists,
    to_cents,
    validate_date_range,
    validate_non_empty_string,
)
from costume_rental.models.booking import Booking, BookingItem, BookingStatus
from costume_rental.models.item import Item, ItemStatus
from costume_rental.schemas.booking import BookingCreate, BookingUpdate

logger = logging.getLogger(__name__)

# Bookings that still hold their items
HOLDING_STATUSES = (BookingStatus.ACTIVE, BookingStatus.OVERDUE)

ALLOWED_TRANSITIONS = {
    BookingStatus.ACTIVE: {
        BookingStatus.COMPLETED,
        BookingStatus.OVERDUE,
        BookingStatus.CANCELLED,
    },
    BookingStatus.OVERDUE: {BookingStatus.COMPLETED, BookingStatus.CANCELLED},
    BookingStatus.COMPLETED: set(),
    BookingStatus.CANCELLED: set(),
}

RELEASING_STATUSES = (BookingStatus.COMPLETED, BookingStatus.CANCELLED)


def rental_days(start_date: date, end_date: date) -> int:
    return (end_date - start_date).days


def calculate_totals(
    lines: List[Tuple[Decimal, int]], days: int, deposit_rate: Decimal
) -> Tuple[Decimal, Decimal]:
    """
    Compute the booking total and security deposit.

    Args:
        lines: (price_per_day, quantity) pairs
        days: Number of rental days
        deposit_rate: Fraction of the total held as deposit

    Returns:
        (total_amount, security_deposit), both rounded to cents
    """
    total = sum(
        (Decimal(price) * days * quantity for price, quantity in lines), Decimal(0)
    )
    return to_cents(total), to_cents(total * deposit_rate)


class BookingService:
    def __init__(self, db: AsyncSession, deposit_rate: float = 0.5):
        self.db = db
        self.deposit_rate = Decimal(str(deposit_rate))

    async def get_all(self, status: Optional[BookingStatus] = None) -> List[Booking]:
        query = BookingQueryBuilder().filter_by_status(status).newest_first().build()
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, booking_id: str) -> Optional[Booking]:
        stmt = (
            select(Booking)
            .options(selectinload(Booking.items))
            .where(Booking.id == booking_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def _has_overlapping_booking(
        self,
        item_id: str,
        start_date: date,
        end_date: date,
        exclude_booking_id: Optional[str] = None,
    ) -> bool:
        conditions = [
            BookingItem.item_id == item_id,
            Booking.status.in_(HOLDING_STATUSES),
            Booking.start_date < end_date,
            Booking.end_date > start_date,
        ]
        if exclude_booking_id:
            conditions.append(Booking.id != exclude_booking_id)

        stmt = (
            select(func.count(Booking.id))
            .join(BookingItem, BookingItem.booking_id == Booking.id)
            .where(and_(*conditions))
        )
        result = await self.db.execute(stmt)
        return result.scalar() > 0

    async def check_availability(
        self, item_id: str, start_date: date, end_date: date
    ) -> bool:
        """Check if an item can be rented for the given dates"""
        validate_date_range(start_date, end_date)
        item = ensure_exists(await self.db.get(Item, item_id), "Item", item_id)

        if item.status != ItemStatus.AVAILABLE:
            return False
        return not await self._has_overlapping_booking(item_id, start_date, end_date)

    def _validate_booking_request(self, booking_data: BookingCreate) -> None:
        validate_non_empty_string(booking_data.customer_name, "customer_name")
        validate_non_empty_string(booking_data.customer_email, "customer_email")
        validate_date_range(booking_data.start_date, booking_data.end_date)
        if not booking_data.items:
            raise ValidationError("At least one item is required", "items")

    @staticmethod
    def _merge_lines(booking_data: BookingCreate) -> "OrderedDict[str, Dict]":
        """Collapse repeated item ids into one line, keeping first-seen order."""
        lines = OrderedDict()
        for requested in booking_data.items:
            if requested.item_id in lines:
                lines[requested.item_id]["quantity"] += requested.quantity
            else:
                lines[requested.item_id] = {
                    "quantity": requested.quantity,
                    "size": requested.size,
                }
        return lines

    async def create(self, booking_data: BookingCreate) -> Booking:
        """
        Create a booking and mark its items rented in one transaction.

        The referenced item rows are locked for the duration of the transaction.
        If any item is missing or unavailable nothing is written.

        Raises:
            ValidationError: Bad dates, missing customer fields or no items
            EntityNotFoundError: An item id does not exist
            ItemUnavailableError: One or more items cannot be rented
        """
        self._validate_booking_request(booking_data)
        lines = self._merge_lines(booking_data)
        item_ids = list(lines)

        try:
            result = await self.db.execute(
                select(Item).where(Item.id.in_(item_ids)).with_for_update()
            )
            items = {item.id: item for item in result.scalars().all()}

            for item_id in item_ids:
                if item_id not in items:
                    raise EntityNotFoundError("Item", item_id)

            unavailable = []
            for item_id in item_ids:
                item = items[item_id]
                if item.status != ItemStatus.AVAILABLE or (
                    await self._has_overlapping_booking(
                        item_id, booking_data.start_date, booking_data.end_date
                    )
                ):
                    unavailable.append(item)
            if unavailable:
                raise ItemUnavailableError(
                    [item.id for item in unavailable],
                    [item.name for item in unavailable],
                )

            days = rental_days(booking_data.start_date, booking_data.end_date)
            total_amount, security_deposit = calculate_totals(
                [
                    (items[item_id].price_per_day, line["quantity"])
                    for item_id, line in lines.items()
                ],
                days,
                self.deposit_rate,
            )

            db_booking = Booking(
                customer_name=booking_data.customer_name.strip(),
                customer_email=booking_data.customer_email,
                customer_phone=booking_data.customer_phone or None,
                start_date=booking_data.start_date,
                end_date=booking_data.end_date,
                notes=booking_data.notes,
                total_amount=total_amount,
                security_deposit=security_deposit,
                status=BookingStatus.ACTIVE,
            )
            db_booking.items = [
                BookingItem(
                    item_id=item_id,
                    position=position,
                    item_type=items[item_id].item_type,
                    item_name=items[item_id].name,
                    size=line["size"] or items[item_id].size,
                    price_per_day=items[item_id].price_per_day,
                    quantity=line["quantity"],
                )
                for position, (item_id, line) in enumerate(lines.items())
            ]

            for item in items.values():
                item.status = ItemStatus.RENTED

            self.db.add(db_booking)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            f"Booking {db_booking.id} created for {len(item_ids)} item(s), "
            f"total {total_amount}"
        )
        return await self.get_by_id(db_booking.id)

    async def update(self, booking_id: str, booking_data: BookingUpdate) -> Booking:
        """Update customer details, notes or payment status"""
        db_booking = ensure_exists(
            await self.get_by_id(booking_id), "Booking", booking_id
        )

        update_data = booking_data.model_dump(exclude_unset=True)
        if "customer_name" in update_data:
            update_data["customer_name"] = validate_non_empty_string(
                update_data["customer_name"], "customer_name"
            )

        for field, value in update_data.items():
            setattr(db_booking, field, value)

        await self.db.commit()
        return await self.get_by_id(booking_id)

    async def update_status(
        self, booking_id: str, new_status: BookingStatus
    ) -> Booking:
        """
        Move a booking to a new status.

        Completing or cancelling a booking returns its rented items to the shelf.
        Items an admin has since flagged (cleaning, damaged) keep their status.
        """
        db_booking = ensure_exists(
            await self.get_by_id(booking_id), "Booking", booking_id
        )
        current_status = db_booking.status

        if new_status == current_status:
            return db_booking

        if new_status not in ALLOWED_TRANSITIONS[current_status]:
            raise BusinessRuleViolationError(
                "booking_status_transition",
                f"Cannot change booking status from {current_status.value} "
                f"to {new_status.value}",
                {"current_status": current_status.value, "status": new_status.value},
            )

        try:
            db_booking.status = new_status

            if new_status in RELEASING_STATUSES:
                item_ids = [booking_item.item_id for booking_item in db_booking.items]
                result = await self.db.execute(
                    select(Item).where(Item.id.in_(item_ids)).with_for_update()
                )
                for item in result.scalars().all():
                    if item.status == ItemStatus.RENTED:
                        item.status = ItemStatus.AVAILABLE

            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            f"Booking {booking_id} moved from {current_status.value} "
            f"to {new_status.value}"
        )
        return await self.get_by_id(booking_id)
