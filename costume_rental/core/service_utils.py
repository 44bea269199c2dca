"""
Guards shared by the rental services.

Each helper either returns its (possibly normalized) input or raises the
domain exception the API layer maps to a status code.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, TypeVar

from costume_rental.core.exceptions import (
    ConflictError,
    EntityNotFoundError,
    InactiveUserError,
    ValidationError,
)
from costume_rental.models.admin_user import AdminUser

T = TypeVar("T")

CENTS = Decimal("0.01")


def ensure_exists(
    entity: Optional[T], entity_name: str, entity_id: Optional[str] = None
) -> T:
    """
    Return ``entity``, or raise EntityNotFoundError when a lookup came back empty.

    Args:
        entity: Result of a lookup
        entity_name: Name used in the error, e.g. "Booking"
        entity_id: Id that was looked up
    """
    if entity is None:
        raise EntityNotFoundError(entity_name, entity_id)
    return entity


def ensure_active_user(admin: AdminUser) -> AdminUser:
    if not admin.is_active:
        raise InactiveUserError()
    return admin


def validate_non_empty_string(value: Optional[str], field_name: str) -> str:
    """Strip ``value``; blank or missing values raise ValidationError."""
    stripped = (value or "").strip()
    if not stripped:
        raise ValidationError(f"{field_name} cannot be empty", field_name, value)
    return stripped


def validate_date_range(
    start_date: date,
    end_date: date,
    start_field: str = "start_date",
    end_field: str = "end_date",
) -> int:
    """
    Check that a rental period runs forward.

    Returns:
        The number of days between the two dates

    Raises:
        ValidationError: On ``end_field`` when the end is not after the start
    """
    days = (end_date - start_date).days
    if days <= 0:
        raise ValidationError(
            f"{end_field} must be after {start_field}",
            end_field,
            f"{end_date} (start: {start_date})",
        )
    return days


def ensure_no_related_records(
    count: int, entity_name: str, related_entity: str
) -> None:
    # Deletes are refused while anything still points at the row
    if count:
        raise ConflictError(
            f"Cannot delete {entity_name} with existing {related_entity}",
            related_entity,
        )


def validate_unique_field(
    existing_entity: Optional[Any], field_name: str, field_value: str, entity_name: str
) -> None:
    if existing_entity is not None:
        raise ConflictError(
            f"{entity_name} with this {field_name} already exists",
            entity_name,
            {"field": field_name, "value": field_value},
        )


def to_cents(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
