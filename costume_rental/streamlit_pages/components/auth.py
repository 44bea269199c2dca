import requests
import streamlit as st

from costume_rental.client.auth_gate import AuthGate
from costume_rental.client.errors import ApiError


class AuthComponent:
    def __init__(self, gate: AuthGate):
        self.gate = gate

    def login(self, email: str, password: str) -> bool:
        """Log in; the session cookie is kept by the client's session"""
        try:
            self.gate.login(email, password)
            return True
        except ApiError as e:
            st.error(e.detail)
            return False
        except requests.RequestException as e:
            st.error(f"Could not reach the API: {e}")
            return False

    def logout(self):
        """Log out and drop every cached read"""
        try:
            self.gate.logout()
        except ApiError as e:
            st.warning(f"Logout request failed: {e.detail}")
        except requests.RequestException as e:
            st.warning(f"Logout request failed: {e}")

    def render_login_form(self) -> bool:
        """Render login form; returns True once the admin has logged in"""
        st.header("🔐 Admin Login")

        with st.form("login_form"):
            email = st.text_input("Email")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Login")

        if submitted:
            if email and password:
                if self.login(email, password):
                    st.success("Login successful!")
                    return True
            else:
                st.error("Please enter both email and password")
        return False

    def render_user_info(self):
        """Render user info and logout button in sidebar"""
        user_info = self.gate.user
        if user_info:
            st.sidebar.write(
                f"👤 Logged in as: **{user_info['first_name']} {user_info['last_name']}**"
            )
            st.sidebar.write(f"🏷️ Role: **{user_info['role']}**")

            if st.sidebar.button("Logout"):
                self.logout()
                st.query_params["tab"] = "login"
                st.rerun()
