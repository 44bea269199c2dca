"""
Admin route gating.

The gate performs a one-shot lookup of the current admin and keeps a
three-state result. Route resolution is a pure function of the path and that
state, so the admin page only has to render what it is told.
"""

import enum
from dataclasses import dataclass
from typing import Any, Optional

from costume_rental.client.api_client import AUTH, AUTH_USER, ApiClient
from costume_rental.client.errors import UnauthorizedError

ADMIN_ROOT = "/admin"
LOGIN_ROUTE = "/admin/login"


class AuthState(enum.Enum):
    UNKNOWN = "unknown"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class AdminTab(enum.Enum):
    DASHBOARD = "dashboard"
    INVENTORY = "inventory"
    BOOKINGS = "bookings"
    CUSTOMERS = "customers"
    REPORTS = "reports"
    SETTINGS = "settings"

    @property
    def route(self) -> str:
        return f"{ADMIN_ROOT}/{self.value}"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class RouteDecision:
    """What the admin page should do for a path."""

    tab: Optional[AdminTab] = None
    redirect: Optional[str] = None
    show_login: bool = False
    loading: bool = False


def is_admin_route(path: str) -> bool:
    return path == ADMIN_ROOT or path.startswith(ADMIN_ROOT + "/")


def resolve_admin_route(path: str, state: AuthState) -> RouteDecision:
    path = path.split("?", 1)[0].rstrip("/") or "/"
    if not is_admin_route(path):
        raise ValueError(f"{path} is not an admin route")

    if state == AuthState.UNKNOWN:
        return RouteDecision(loading=True)

    if path == LOGIN_ROUTE:
        if state == AuthState.AUTHENTICATED:
            return RouteDecision(redirect=ADMIN_ROOT)
        return RouteDecision(show_login=True)

    if state == AuthState.UNAUTHENTICATED:
        return RouteDecision(redirect=LOGIN_ROUTE)

    if path == ADMIN_ROOT:
        return RouteDecision(tab=AdminTab.DASHBOARD)

    segment = path[len(ADMIN_ROOT) + 1:]
    try:
        return RouteDecision(tab=AdminTab(segment))
    except ValueError:
        return RouteDecision(redirect=ADMIN_ROOT)


class AuthGate:
    def __init__(self, client: ApiClient):
        self.client = client
        self.state = AuthState.UNKNOWN
        self.user: Optional[dict] = None

    def check(self) -> AuthState:
        """
        Look up the current admin once, without retrying.

        A 401 or an empty response means unauthenticated. Any other failure
        propagates and leaves the state as it was.
        """
        try:
            user = self.client.request("GET", AUTH_USER)
        except UnauthorizedError:
            user = None

        self._set_user(user or None)
        return self.state

    def _set_user(self, user: Optional[Any]) -> None:
        self.user = user
        self.state = AuthState.AUTHENTICATED if user else AuthState.UNAUTHENTICATED

    def login(self, email: str, password: str) -> dict:
        user = self.client.post(
            f"{AUTH}/login", json={"email": email, "password": password}
        )
        self._set_user(user)
        return user

    def logout(self) -> None:
        try:
            self.client.post(f"{AUTH}/logout")
        finally:
            self.mark_unauthenticated()

    def mark_unauthenticated(self) -> None:
        """Drop the session locally, e.g. after any admin request came back 401."""
        self.client.cache.clear()
        self._set_user(None)

    def resolve(self, path: str) -> RouteDecision:
        return resolve_admin_route(path, self.state)
