"""
Errors raised by the API client.

Every error renders as ``"<status>: <text>"``. For 5xx the text is the reason
phrase, for 401 it is the reason phrase followed by ``" Unauthorized"``, and for
any other status it is the response body (or the reason phrase when the body is
empty). The parsed JSON body, when there is one, is kept on ``payload``.
"""

from typing import Any, List, Optional

import requests


class ApiError(Exception):
    """Base class for non-2xx API responses."""

    def __init__(self, status_code: int, message: str, payload: Any = None):
        self.status_code = status_code
        self.message = message
        self.payload = payload
        super().__init__(f"{status_code}: {message}")

    @property
    def detail(self) -> str:
        """User-facing message, preferring the server's ``detail`` field."""
        if isinstance(self.payload, dict):
            detail = self.payload.get("detail") or self.payload.get("message")
            if isinstance(detail, str):
                return detail
        return self.message

    @property
    def details(self) -> dict:
        if isinstance(self.payload, dict) and isinstance(
            self.payload.get("details"), dict
        ):
            return self.payload["details"]
        return {}


class ServerError(ApiError):
    """5xx responses."""


class UnauthorizedError(ApiError):
    """401 responses; the admin UI sends the user back to the login route."""


class NotFoundError(ApiError):
    """404 responses."""


class ValidationError(ApiError):
    """400 and 422 responses."""

    @property
    def field(self) -> Optional[str]:
        """Name of the offending input field, when the server reported one."""
        if self.details.get("field"):
            return self.details["field"]
        validation_errors = self.details.get("validation_errors") or []
        if validation_errors:
            location = validation_errors[0].get("loc") or []
            if location:
                return str(location[-1])
        return None


class ConflictError(ApiError):
    """409 responses, e.g. an item that is no longer available."""

    @property
    def item_ids(self) -> List[str]:
        return list(self.details.get("item_ids") or [])


STATUS_ERRORS = {
    400: ValidationError,
    401: UnauthorizedError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
}


def _parse_payload(response: requests.Response) -> Any:
    if "application/json" not in response.headers.get("Content-Type", ""):
        return None
    try:
        return response.json()
    except ValueError:
        return None


def error_from_response(response: requests.Response) -> ApiError:
    """Build the error matching a non-2xx response."""
    status_code = response.status_code
    reason = response.reason or ""
    payload = _parse_payload(response)

    if status_code >= 500:
        return ServerError(status_code, reason, payload)
    if status_code == 401:
        return UnauthorizedError(status_code, f"{reason} Unauthorized", payload)

    error_class = STATUS_ERRORS.get(status_code, ApiError)
    return error_class(status_code, response.text or reason, payload)
