"""
Rental store errors.

Services raise these; ``core.exception_handlers`` turns them into HTTP
responses. Endpoints never build error responses for business failures.
"""

from typing import List, Optional


class DomainException(Exception):
    """Root of the rental store errors; ``details`` is sent to the client as-is."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class EntityNotFoundError(DomainException):
    def __init__(self, entity_name: str, entity_id: Optional[str] = None):
        self.entity_name = entity_name
        self.entity_id = entity_id
        message = (
            f"{entity_name} with id {entity_id} not found"
            if entity_id
            else f"{entity_name} not found"
        )
        super().__init__(message, {"entity_name": entity_name, "entity_id": entity_id})


class UnauthorizedError(DomainException):
    """No admin session, or the session's admin no longer exists."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class InactiveUserError(DomainException):
    def __init__(self):
        super().__init__("User account is inactive")


class ValidationError(DomainException):
    """Input that parses but breaks a rule, e.g. an end date before the start."""

    def __init__(
        self, message: str, field: Optional[str] = None, value: Optional[str] = None
    ):
        self.field = field
        self.value = value
        super().__init__(message, {"field": field, "value": value})


class ConflictError(DomainException):
    """The request clashes with stored data: duplicates, rows still in use."""

    def __init__(
        self,
        message: str,
        conflicting_entity: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.conflicting_entity = conflicting_entity
        super().__init__(
            message, {"conflicting_entity": conflicting_entity, **(details or {})}
        )


class ItemUnavailableError(ConflictError):
    """
    One or more items of a booking cannot be rented.

    ``details["item_ids"]`` lists every offending item so the storefront can
    point at them in the cart.
    """

    def __init__(self, item_ids: List[str], item_names: Optional[List[str]] = None):
        self.item_ids = list(item_ids)
        names = item_names or self.item_ids
        if len(names) == 1:
            message = f'Item "{names[0]}" is not available for the selected dates'
        else:
            quoted = ", ".join(f'"{name}"' for name in names)
            message = f"Items not available for the selected dates: {quoted}"
        super().__init__(message, "Item", {"item_ids": self.item_ids})


class BusinessRuleViolationError(DomainException):
    def __init__(self, rule_name: str, message: str, context: Optional[dict] = None):
        self.rule_name = rule_name
        super().__init__(message, {"rule_name": rule_name, **(context or {})})
