from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from costume_rental.core.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    ItemUnavailableError,
    ValidationError,
)
from costume_rental.models import Booking, BookingStatus, ItemStatus, ItemType
from costume_rental.schemas.booking import BookingCreate, BookingItemRequest
from costume_rental.services.booking_service import (
    BookingService,
    calculate_totals,
    rental_days,
)


def booking_request(*item_ids, start=date(2026, 3, 1), end=date(2026, 3, 4), **kwargs):
    items = kwargs.pop(
        "items", [BookingItemRequest(item_id=item_id) for item_id in item_ids]
    )
    return BookingCreate(
        customer_name="Meera Shah",
        customer_email="meera@example.com",
        customer_phone="555-0101",
        start_date=start,
        end_date=end,
        items=items,
        **kwargs,
    )


async def count_bookings(db):
    result = await db.execute(select(func.count(Booking.id)))
    return result.scalar()


def test_rental_days_counts_nights():
    assert rental_days(date(2026, 3, 1), date(2026, 3, 4)) == 3
    assert rental_days(date(2026, 3, 1), date(2026, 3, 2)) == 1


def test_calculate_totals_applies_deposit_rate():
    total, deposit = calculate_totals(
        [(Decimal("500.00"), 2), (Decimal("120.50"), 1)], 3, Decimal("0.5")
    )
    assert total == Decimal("3361.50")
    assert deposit == Decimal("1680.75")


def test_calculate_totals_rounds_to_cents():
    total, deposit = calculate_totals([(Decimal("33.33"), 1)], 1, Decimal("0.333"))
    assert total == Decimal("33.33")
    assert deposit == Decimal("11.10")


async def test_create_computes_totals_server_side(db, make_item):
    item = await make_item(price="500.00")
    service = BookingService(db, deposit_rate=0.5)

    booking = await service.create(
        booking_request(items=[BookingItemRequest(item_id=item.id, quantity=2)])
    )

    assert booking.total_amount == Decimal("3000.00")
    assert booking.security_deposit == Decimal("1500.00")
    assert booking.status == BookingStatus.ACTIVE
    assert [line.item_id for line in booking.items] == [item.id]
    assert booking.items[0].price_per_day == Decimal("500.00")
    assert booking.items[0].quantity == 2


async def test_create_marks_items_rented(db, make_item):
    costume = await make_item()
    crown = await make_item(name="Golden Crown", item_type=ItemType.ACCESSORY, price="150")

    await BookingService(db).create(booking_request(costume.id, crown.id))

    await db.refresh(costume)
    await db.refresh(crown)
    assert costume.status == ItemStatus.RENTED
    assert crown.status == ItemStatus.RENTED


async def test_create_keeps_item_order_and_snapshots(db, make_item):
    first = await make_item(name="Shiva Costume", size="L")
    second = await make_item(name="Trident", item_type=ItemType.ACCESSORY, price="80")

    booking = await BookingService(db).create(
        booking_request(
            items=[
                BookingItemRequest(item_id=second.id),
                BookingItemRequest(item_id=first.id, size="XL"),
            ]
        )
    )

    assert [line.item_name for line in booking.items] == ["Trident", "Shiva Costume"]
    assert booking.items[0].item_type == ItemType.ACCESSORY
    assert booking.items[1].size == "XL"


async def test_create_merges_repeated_items(db, make_item):
    item = await make_item(price="100")

    booking = await BookingService(db).create(
        booking_request(
            items=[
                BookingItemRequest(item_id=item.id),
                BookingItemRequest(item_id=item.id, quantity=2),
            ]
        )
    )

    assert len(booking.items) == 1
    assert booking.items[0].quantity == 3
    assert booking.total_amount == Decimal("900.00")


@pytest.mark.parametrize(
    "start, end",
    [
        (date(2026, 3, 4), date(2026, 3, 4)),
        (date(2026, 3, 5), date(2026, 3, 4)),
    ],
)
async def test_create_rejects_bad_date_range(db, make_item, start, end):
    item = await make_item()

    with pytest.raises(ValidationError):
        await BookingService(db).create(booking_request(item.id, start=start, end=end))

    await db.refresh(item)
    assert item.status == ItemStatus.AVAILABLE
    assert await count_bookings(db) == 0


async def test_create_rejects_empty_item_list(db):
    with pytest.raises(ValidationError) as exc_info:
        await BookingService(db).create(booking_request())
    assert exc_info.value.field == "items"


async def test_create_rejects_unavailable_item_atomically(db, make_item):
    free = await make_item(name="Durga Costume")
    taken = await make_item(name="Ravana Costume", status=ItemStatus.RENTED)
    free_id, taken_id = free.id, taken.id

    with pytest.raises(ItemUnavailableError) as exc_info:
        await BookingService(db).create(booking_request(free_id, taken_id))

    assert exc_info.value.details["item_ids"] == [taken_id]
    assert "Ravana Costume" in exc_info.value.message
    await db.refresh(free)
    assert free.status == ItemStatus.AVAILABLE
    await db.refresh(taken)
    assert taken.status == ItemStatus.RENTED
    assert await count_bookings(db) == 0


async def test_create_rejects_unknown_item(db, make_item):
    item = await make_item()

    with pytest.raises(EntityNotFoundError):
        await BookingService(db).create(booking_request(item.id, "missing"))

    await db.refresh(item)
    assert item.status == ItemStatus.AVAILABLE


async def test_second_booking_of_same_item_conflicts(db, make_item):
    item = await make_item()
    service = BookingService(db)
    await service.create(booking_request(item.id))

    with pytest.raises(ItemUnavailableError):
        await service.create(
            booking_request(item.id, start=date(2026, 4, 1), end=date(2026, 4, 3))
        )
    assert await count_bookings(db) == 1


async def test_check_availability(db, make_item):
    item = await make_item()
    service = BookingService(db)

    assert await service.check_availability(item.id, date(2026, 3, 1), date(2026, 3, 2))

    await service.create(booking_request(item.id))
    assert not await service.check_availability(
        item.id, date(2026, 3, 2), date(2026, 3, 3)
    )


async def test_check_availability_unknown_item(db):
    with pytest.raises(EntityNotFoundError):
        await BookingService(db).check_availability(
            "missing", date(2026, 3, 1), date(2026, 3, 2)
        )


@pytest.mark.parametrize("final_status", [BookingStatus.COMPLETED, BookingStatus.CANCELLED])
async def test_closing_booking_releases_items(db, make_item, final_status):
    item = await make_item()
    service = BookingService(db)
    booking = await service.create(booking_request(item.id))

    updated = await service.update_status(booking.id, final_status)

    assert updated.status == final_status
    await db.refresh(item)
    assert item.status == ItemStatus.AVAILABLE


async def test_closing_booking_keeps_flagged_items(db, make_item):
    item = await make_item()
    service = BookingService(db)
    booking = await service.create(booking_request(item.id))

    item.status = ItemStatus.CLEANING
    await db.commit()
    await service.update_status(booking.id, BookingStatus.COMPLETED)

    await db.refresh(item)
    assert item.status == ItemStatus.CLEANING


async def test_overdue_booking_keeps_items_rented(db, make_item):
    item = await make_item()
    service = BookingService(db)
    booking = await service.create(booking_request(item.id))

    await service.update_status(booking.id, BookingStatus.OVERDUE)

    await db.refresh(item)
    assert item.status == ItemStatus.RENTED


async def test_terminal_status_cannot_change(db, make_item):
    item = await make_item()
    service = BookingService(db)
    booking = await service.create(booking_request(item.id))
    await service.update_status(booking.id, BookingStatus.CANCELLED)

    with pytest.raises(BusinessRuleViolationError):
        await service.update_status(booking.id, BookingStatus.ACTIVE)


async def test_get_all_filters_by_status(db, make_item):
    service = BookingService(db)
    first = await service.create(booking_request((await make_item()).id))
    await service.create(booking_request((await make_item(name="Rama Costume")).id))
    await service.update_status(first.id, BookingStatus.COMPLETED)

    active = await service.get_all(BookingStatus.ACTIVE)
    completed = await service.get_all(BookingStatus.COMPLETED)

    assert len(active) == 1
    assert [b.id for b in completed] == [first.id]
    assert len(await service.get_all()) == 2
