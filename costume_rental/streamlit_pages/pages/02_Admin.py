from decimal import Decimal

import pandas as pd
import requests
import streamlit as st

from costume_rental.client.api_client import (
    ADMIN_BOOKINGS,
    ADMIN_CATEGORIES,
    ADMIN_ITEMS,
    DASHBOARD_STATS,
)
from costume_rental.client.auth_gate import ADMIN_ROOT, LOGIN_ROUTE, AdminTab, AuthState
from costume_rental.client.errors import ApiError, UnauthorizedError
from costume_rental.streamlit_pages.components.auth import AuthComponent
from costume_rental.streamlit_pages.components.session import get_client, get_gate

st.set_page_config(
    page_title="Admin",
    page_icon="🛠️",
    layout="wide"
)

client = get_client()
gate = get_gate()
auth = AuthComponent(gate)

ITEM_STATUSES = ["available", "rented", "cleaning", "damaged"]
BOOKING_STATUSES = ["active", "completed", "overdue", "cancelled"]
PAYMENT_STATUSES = ["pending", "paid", "refunded"]


def current_path():
    """Admin route encoded in the ``tab`` query parameter"""
    tab = st.query_params.get("tab")
    return f"{ADMIN_ROOT}/{tab}" if tab else ADMIN_ROOT


def navigate(route):
    if route == ADMIN_ROOT:
        st.query_params.clear()
    else:
        st.query_params["tab"] = route[len(ADMIN_ROOT) + 1:]
    st.rerun()


def session_expired():
    gate.mark_unauthenticated()
    navigate(LOGIN_ROUTE)


def fetch(path, params=None, default=None):
    """Cached read; errors are shown and replaced by ``default``"""
    try:
        return client.get(path, params)
    except UnauthorizedError:
        session_expired()
        return default
    except requests.RequestException as e:
        st.error(f"Could not reach the API: {e}")
        return default
    except ApiError as e:
        st.error(f"Failed to load {path}: {e.detail}")
        return default


def mutate(action, *args, success="Saved"):
    try:
        result = action(*args)
    except UnauthorizedError:
        session_expired()
        return None
    except (ApiError, requests.RequestException) as e:
        st.error(str(e))
        return None
    st.success(success)
    return result


def money(value):
    return f"₹{Decimal(str(value)):,.2f}"


def render_dashboard():
    st.header("📊 Dashboard")

    stats = fetch(DASHBOARD_STATS, default={})
    if not stats:
        return

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Total Revenue", money(stats["total_revenue"]))
    with col2:
        st.metric("Active Rentals", stats["active_rentals"])
    with col3:
        st.metric("Available Items", stats["available_items"])
    with col4:
        st.metric("Overdue Returns", stats["overdue_returns"])

    bookings = fetch(ADMIN_BOOKINGS, default=[])
    if bookings:
        st.subheader("Recent Bookings")
        df = pd.DataFrame(bookings[:10])
        st.dataframe(
            df[["id", "customer_name", "start_date", "end_date", "status", "total_amount"]],
            use_container_width=True,
        )


def render_item_form(categories, item=None):
    """Create form, or edit form when ``item`` is given"""
    key = item["id"] if item else "new"
    with st.form(f"item_form_{key}"):
        col1, col2 = st.columns(2)
        with col1:
            item_type = st.selectbox(
                "Type", ["costume", "accessory"],
                index=["costume", "accessory"].index(item["item_type"]) if item else 0,
                disabled=item is not None,
            )
            name = st.text_input("Name *", value=item["name"] if item else "")
            description = st.text_area(
                "Description", value=(item.get("description") or "") if item else ""
            )
            image_url = st.text_input(
                "Image URL", value=(item.get("image_url") or "") if item else ""
            )
        with col2:
            matching = [c for c in categories if c["type"] == item_type]
            options = {"No category": None}
            options.update({c["name"]: c["id"] for c in matching})
            current = next(
                (label for label, cid in options.items()
                 if item and cid == item.get("category_id")),
                "No category",
            )
            category_label = st.selectbox(
                "Category", list(options), index=list(options).index(current)
            )
            size = st.text_input("Size", value=(item.get("size") or "") if item else "")
            theme = st.text_input("Theme", value=(item.get("theme") or "") if item else "")
            price = st.number_input(
                "Price per day *", min_value=0.01, step=50.0,
                value=float(item["price_per_day"]) if item else 100.0,
            )
            status = st.selectbox(
                "Status", ITEM_STATUSES,
                index=ITEM_STATUSES.index(item["status"]) if item else 0,
            )

        submitted = st.form_submit_button("Update Item" if item else "Create Item")

    if not submitted:
        return
    if not name.strip():
        st.error("Name is required")
        return

    data = {
        "name": name.strip(),
        "description": description or None,
        "category_id": options[category_label],
        "size": size or None,
        "theme": theme or None,
        "price_per_day": str(price),
        "status": status,
        "image_url": image_url or None,
    }
    if item:
        mutate(client.put, f"{ADMIN_ITEMS}/{item['id']}", data, success="Item updated")
    else:
        data["item_type"] = item_type
        mutate(client.post, ADMIN_ITEMS, data, success="Item created")


def render_categories(categories):
    st.subheader("Categories")

    if categories:
        st.dataframe(
            pd.DataFrame(categories)[["name", "type", "description"]],
            use_container_width=True,
        )

    with st.form("category_form"):
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Category name")
            category_type = st.selectbox("Category type", ["costume", "accessory"])
        with col2:
            description = st.text_area("Category description")
        if st.form_submit_button("Add Category") and name.strip():
            mutate(
                client.post,
                ADMIN_CATEGORIES,
                {"name": name.strip(), "type": category_type, "description": description or None},
                success="Category created",
            )

    if categories:
        labels = {c["name"]: c["id"] for c in categories}
        col1, col2 = st.columns([3, 1])
        with col1:
            to_delete = st.selectbox("Delete category", list(labels))
        with col2:
            if st.button("Delete", key="delete_category"):
                mutate(
                    client.delete, f"{ADMIN_CATEGORIES}/{labels[to_delete]}",
                    success="Category deleted",
                )


def render_inventory():
    st.header("📦 Inventory")

    categories = fetch(ADMIN_CATEGORIES, default=[])

    col1, col2 = st.columns(2)
    with col1:
        type_filter = st.selectbox("Type", ["All", "costume", "accessory"])
    with col2:
        status_filter = st.selectbox("Status", ["All"] + ITEM_STATUSES)

    items = fetch(ADMIN_ITEMS, {
        "item_type": None if type_filter == "All" else type_filter,
        "status": None if status_filter == "All" else status_filter,
    }, default=[])

    if items:
        df = pd.DataFrame(items)
        df["category"] = df["category"].apply(lambda c: c["name"] if c else "")
        st.dataframe(
            df[["id", "item_type", "name", "category", "size", "theme",
                "price_per_day", "status"]],
            use_container_width=True,
        )
    else:
        st.info("No items found")

    tab1, tab2, tab3 = st.tabs(["Add Item", "Edit Item", "Categories"])

    with tab1:
        render_item_form(categories)

    with tab2:
        if items:
            labels = {f"{i['name']} ({i['id']})": i for i in items}
            selected = labels[st.selectbox("Item", list(labels))]
            render_item_form(categories, selected)
            if st.button("Delete Item", key=f"delete_{selected['id']}"):
                mutate(client.delete, f"{ADMIN_ITEMS}/{selected['id']}", success="Item deleted")

    with tab3:
        render_categories(categories)


def render_bookings():
    st.header("📅 Bookings")

    status_filter = st.selectbox("Filter by Status", ["All"] + BOOKING_STATUSES)
    bookings = fetch(
        ADMIN_BOOKINGS,
        {"status": None if status_filter == "All" else status_filter},
        default=[],
    )

    if not bookings:
        st.info("No bookings found")
        return

    for booking in bookings:
        with st.expander(
            f"{booking['customer_name']} · {booking['start_date']} → {booking['end_date']} "
            f"· {booking['status']}"
        ):
            col1, col2, col3 = st.columns(3)
            with col1:
                st.write(f"**Email:** {booking['customer_email']}")
                st.write(f"**Phone:** {booking.get('customer_phone') or '-'}")
            with col2:
                st.write(f"**Total:** {money(booking['total_amount'])}")
                st.write(f"**Deposit:** {money(booking['security_deposit'])}")
            with col3:
                st.write(f"**Payment:** {booking['payment_status']}")
                if booking.get("notes"):
                    st.write(f"**Notes:** {booking['notes']}")

            st.dataframe(
                pd.DataFrame(booking["items"])[
                    ["item_name", "item_type", "size", "price_per_day", "quantity"]
                ],
                use_container_width=True,
            )

            col1, col2 = st.columns(2)
            with col1:
                new_status = st.selectbox(
                    "Status", BOOKING_STATUSES,
                    index=BOOKING_STATUSES.index(booking["status"]),
                    key=f"status_{booking['id']}",
                )
                if st.button("Update Status", key=f"update_status_{booking['id']}"):
                    mutate(
                        client.patch, f"{ADMIN_BOOKINGS}/{booking['id']}/status",
                        {"status": new_status}, success="Status updated",
                    )
            with col2:
                new_payment = st.selectbox(
                    "Payment", PAYMENT_STATUSES,
                    index=PAYMENT_STATUSES.index(booking["payment_status"]),
                    key=f"payment_{booking['id']}",
                )
                if st.button("Update Payment", key=f"update_payment_{booking['id']}"):
                    mutate(
                        client.put, f"{ADMIN_BOOKINGS}/{booking['id']}",
                        {"payment_status": new_payment}, success="Payment updated",
                    )


def render_customers():
    st.header("👥 Customers")

    bookings = fetch(ADMIN_BOOKINGS, default=[])
    if not bookings:
        st.info("No customers yet")
        return

    df = pd.DataFrame(bookings)
    df["total_amount"] = df["total_amount"].astype(float)
    customers = (
        df.groupby(["customer_email", "customer_name"])
        .agg(bookings=("id", "count"), spent=("total_amount", "sum"),
             last_rental=("start_date", "max"))
        .reset_index()
        .sort_values("last_rental", ascending=False)
    )
    st.dataframe(customers, use_container_width=True)


def render_reports():
    st.header("📈 Reports")

    bookings = fetch(ADMIN_BOOKINGS, default=[])
    if not bookings:
        st.info("No bookings to report on")
        return

    df = pd.DataFrame(bookings)
    df["total_amount"] = df["total_amount"].astype(float)

    st.subheader("Revenue by booking status")
    st.bar_chart(df.groupby("status")["total_amount"].sum())

    st.subheader("Bookings by payment status")
    st.dataframe(
        df.groupby("payment_status").agg(
            bookings=("id", "count"), amount=("total_amount", "sum")
        ),
        use_container_width=True,
    )


def render_settings():
    st.header("⚙️ Settings")
    st.info("Store settings are configured through environment variables.")
    st.write(f"API: `{client.base_url}`")


RENDERERS = {
    AdminTab.DASHBOARD: render_dashboard,
    AdminTab.INVENTORY: render_inventory,
    AdminTab.BOOKINGS: render_bookings,
    AdminTab.CUSTOMERS: render_customers,
    AdminTab.REPORTS: render_reports,
    AdminTab.SETTINGS: render_settings,
}


def render_navigation(active):
    st.sidebar.header("Admin")
    for tab in AdminTab:
        if st.sidebar.button(tab.label, key=f"nav_{tab.value}",
                             type="primary" if tab == active else "secondary"):
            navigate(tab.route)


def main():
    if gate.state == AuthState.UNKNOWN:
        try:
            gate.check()
        except (ApiError, requests.RequestException) as e:
            st.error(f"Could not reach the API: {e}")
            return

    decision = gate.resolve(current_path())

    if decision.loading:
        st.info("Checking session...")
        return

    if decision.redirect:
        navigate(decision.redirect)
        return

    if decision.show_login:
        if auth.render_login_form():
            navigate(ADMIN_ROOT)
        return

    auth.render_user_info()
    render_navigation(decision.tab)
    RENDERERS[decision.tab]()


if __name__ == "__main__":
    main()
