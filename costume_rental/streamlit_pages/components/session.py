"""Per-browser-session objects, created on first use and kept in ``st.session_state``."""

import streamlit as st

from costume_rental.client.api_client import ApiClient
from costume_rental.client.auth_gate import AuthGate
from costume_rental.client.cart import Cart
from costume_rental.core.config import settings


def get_client() -> ApiClient:
    if "api_client" not in st.session_state:
        st.session_state["api_client"] = ApiClient(settings.API_BASE_URL)
    return st.session_state["api_client"]


def get_gate() -> AuthGate:
    if "auth_gate" not in st.session_state:
        st.session_state["auth_gate"] = AuthGate(get_client())
    return st.session_state["auth_gate"]


def get_cart() -> Cart:
    if "cart" not in st.session_state:
        st.session_state["cart"] = Cart()
    return st.session_state["cart"]
