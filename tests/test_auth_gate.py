import pytest
import requests

from costume_rental.client.api_client import COSTUMES, DASHBOARD_STATS, ApiClient
from costume_rental.client.auth_gate import (
    ADMIN_ROOT,
    LOGIN_ROUTE,
    AdminTab,
    AuthGate,
    AuthState,
    RouteDecision,
    resolve_admin_route,
)
from costume_rental.client.errors import ServerError, UnauthorizedError
from tests.fakes import FakeSession, make_response

ADMIN = {"id": "a1", "email": "admin@example.com", "first_name": "Ada", "last_name": "Admin"}


def make_gate(*responses):
    session = FakeSession(*responses)
    return AuthGate(ApiClient("http://api.test", session=session)), session


# --------
# Route resolution
# --------


def test_unauthenticated_admin_route_redirects_to_login():
    decision = resolve_admin_route("/admin/bookings", AuthState.UNAUTHENTICATED)
    assert decision == RouteDecision(redirect=LOGIN_ROUTE)


def test_authenticated_tab_route_renders_tab():
    decision = resolve_admin_route("/admin/bookings", AuthState.AUTHENTICATED)
    assert decision == RouteDecision(tab=AdminTab.BOOKINGS)


def test_admin_root_renders_dashboard():
    decision = resolve_admin_route(ADMIN_ROOT, AuthState.AUTHENTICATED)
    assert decision.tab == AdminTab.DASHBOARD


def test_login_route_renders_login_when_unauthenticated():
    decision = resolve_admin_route(LOGIN_ROUTE, AuthState.UNAUTHENTICATED)
    assert decision.show_login
    assert decision.redirect is None


def test_login_route_redirects_when_authenticated():
    decision = resolve_admin_route(LOGIN_ROUTE, AuthState.AUTHENTICATED)
    assert decision.redirect == ADMIN_ROOT


def test_unknown_tab_redirects_to_admin_root():
    decision = resolve_admin_route("/admin/payroll", AuthState.AUTHENTICATED)
    assert decision.redirect == ADMIN_ROOT


def test_unknown_state_is_loading():
    decision = resolve_admin_route("/admin/inventory", AuthState.UNKNOWN)
    assert decision == RouteDecision(loading=True)


def test_trailing_slash_and_query_are_ignored():
    decision = resolve_admin_route("/admin/reports/?range=month", AuthState.AUTHENTICATED)
    assert decision.tab == AdminTab.REPORTS


def test_non_admin_route_is_rejected():
    with pytest.raises(ValueError):
        resolve_admin_route("/administrator", AuthState.AUTHENTICATED)


@pytest.mark.parametrize("tab", list(AdminTab))
def test_every_tab_route_resolves_to_itself(tab):
    assert resolve_admin_route(tab.route, AuthState.AUTHENTICATED).tab == tab


# --------
# Gate
# --------


def test_check_with_user_authenticates():
    gate, session = make_gate(make_response(body=ADMIN))

    assert gate.check() == AuthState.AUTHENTICATED
    assert gate.user == ADMIN
    assert len(session.requests) == 1


def test_check_with_401_is_unauthenticated():
    gate, session = make_gate(make_response(status_code=401, body={"detail": "Please log in"}))

    assert gate.check() == AuthState.UNAUTHENTICATED
    assert gate.user is None
    assert len(session.requests) == 1


def test_check_with_empty_body_is_unauthenticated():
    gate, _ = make_gate(make_response(body=None))
    assert gate.check() == AuthState.UNAUTHENTICATED


def test_check_is_not_cached():
    gate, session = make_gate(
        make_response(body=ADMIN), make_response(status_code=401, body={})
    )

    gate.check()
    assert gate.check() == AuthState.UNAUTHENTICATED
    assert len(session.requests) == 2


def test_check_server_error_leaves_state_unknown():
    gate, _ = make_gate(make_response(status_code=500, body={}))

    with pytest.raises(ServerError):
        gate.check()
    assert gate.state == AuthState.UNKNOWN


def test_login_then_resolve():
    gate, session = make_gate(make_response(body=ADMIN))

    gate.login("admin@example.com", "correct-horse")

    assert gate.state == AuthState.AUTHENTICATED
    assert session.requests[0]["json"] == {
        "email": "admin@example.com",
        "password": "correct-horse",
    }
    assert gate.resolve("/admin/inventory").tab == AdminTab.INVENTORY


def test_logout_clears_cache():
    gate, _ = make_gate(
        make_response(body=ADMIN),
        make_response(body=[{"id": "c1"}]),
        make_response(body={"message": "Logged out successfully"}),
    )
    gate.login("admin@example.com", "correct-horse")
    gate.client.get(COSTUMES)

    gate.logout()

    assert len(gate.client.cache) == 0
    assert gate.state == AuthState.UNAUTHENTICATED
    assert gate.resolve("/admin/bookings").redirect == LOGIN_ROUTE


def test_expired_session_sends_admin_to_login():
    gate, _ = make_gate(
        make_response(body=ADMIN),
        make_response(body=[{"id": "c1"}]),
        make_response(status_code=401, body={"detail": "Authentication required"}),
    )
    gate.login("admin@example.com", "correct-horse")
    gate.client.get(COSTUMES)

    with pytest.raises(UnauthorizedError):
        gate.client.get(DASHBOARD_STATS)
    gate.mark_unauthenticated()

    assert gate.state == AuthState.UNAUTHENTICATED
    assert gate.user is None
    assert len(gate.client.cache) == 0
    assert gate.resolve("/admin/dashboard").redirect == LOGIN_ROUTE


def test_check_connection_error_leaves_state_unknown():
    gate, _ = make_gate(requests.ConnectionError("connection refused"))

    with pytest.raises(requests.RequestException):
        gate.check()
    assert gate.state == AuthState.UNKNOWN
