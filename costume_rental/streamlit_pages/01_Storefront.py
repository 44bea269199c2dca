from datetime import date, timedelta
from decimal import Decimal

import requests
import streamlit as st

from costume_rental.client.api_client import ACCESSORIES, CATEGORIES, COSTUMES
from costume_rental.client.cart import CartItem, CustomerDetails
from costume_rental.client.errors import ApiError
from costume_rental.core.config import settings
from costume_rental.streamlit_pages.components.session import get_cart, get_client

st.set_page_config(
    page_title="Costume Rental",
    page_icon="🎭",
    layout="wide"
)

client = get_client()
cart = get_cart()


def get_categories(item_type):
    """Fetch categories of one type"""
    try:
        return client.get(CATEGORIES, {"type": item_type})
    except (ApiError, requests.RequestException) as e:
        st.error(f"Could not load categories: {e}")
        return []


def get_items(item_type, filters):
    """Fetch costumes or accessories matching the filters"""
    path = COSTUMES if item_type == "costume" else ACCESSORIES
    try:
        return client.get(path, filters)
    except (ApiError, requests.RequestException) as e:
        st.error(f"Could not load catalog: {e}")
        return []


def render_filters():
    """Sidebar filters; every filter is an exact match"""
    st.sidebar.header("🔎 Filters")

    item_type = st.sidebar.radio(
        "Browse",
        ["costume", "accessory"],
        format_func=lambda value: "Costumes" if value == "costume" else "Accessories",
    )

    categories = get_categories(item_type)
    category_options = {"All categories": None}
    category_options.update({c["name"]: c["id"] for c in categories})
    category_label = st.sidebar.selectbox("Category", list(category_options))

    size = st.sidebar.text_input("Size", placeholder="e.g. M")
    theme = st.sidebar.text_input("Theme", placeholder="e.g. Mythology")
    search = st.sidebar.text_input("Search", placeholder="Name or description")
    only_available = st.sidebar.checkbox("Available only", value=True)

    filters = {
        "category": category_options[category_label],
        "size": size.strip(),
        "theme": theme.strip(),
        "search": search.strip(),
        "status": "available" if only_available else None,
    }
    return item_type, filters


def render_catalog(items):
    """Render the item grid with add-to-cart controls"""
    if not items:
        st.info("No items match these filters.")
        return

    columns = st.columns(3)
    for index, item in enumerate(items):
        with columns[index % 3]:
            with st.container(border=True):
                if item.get("image_url"):
                    st.image(item["image_url"], use_container_width=True)
                st.subheader(item["name"])
                if item.get("description"):
                    st.caption(item["description"])
                details = [
                    f"Size: {item['size']}" if item.get("size") else None,
                    f"Theme: {item['theme']}" if item.get("theme") else None,
                    f"Status: {item['status']}",
                ]
                st.write(" · ".join(d for d in details if d))
                st.write(f"**₹{Decimal(str(item['price_per_day'])):.2f} / day**")

                quantity = st.number_input(
                    "Quantity", min_value=1, max_value=10, value=1,
                    key=f"qty_{item['id']}"
                )
                if st.button(
                    "Add to cart",
                    key=f"add_{item['id']}",
                    disabled=item["status"] != "available",
                ):
                    cart.add(CartItem.from_item(item, quantity=int(quantity)))
                    st.success(f"Added {item['name']} to cart")
                    st.rerun()


def render_cart():
    """Cart contents in the sidebar"""
    st.sidebar.markdown("---")
    st.sidebar.header(f"🛒 Cart ({cart.total_quantity})")

    if not len(cart):
        st.sidebar.write("Your cart is empty.")
        return

    for item in cart:
        col1, col2 = st.sidebar.columns([3, 1])
        with col1:
            new_quantity = st.number_input(
                f"{item.name}" + (f" ({item.size})" if item.size else ""),
                min_value=0, max_value=10, value=item.quantity,
                key=f"cart_qty_{item.id}"
            )
            if new_quantity != item.quantity:
                cart.set_quantity(item.id, int(new_quantity))
                st.rerun()
        with col2:
            if st.button("✖", key=f"remove_{item.id}"):
                cart.remove(item.id)
                st.rerun()

    st.sidebar.write(f"Daily rate: **₹{cart.daily_rate():.2f}**")


def render_checkout():
    """Checkout form; the server computes the final totals"""
    st.markdown("---")
    st.subheader("📝 Checkout")

    if not len(cart):
        st.info("Add items to your cart to book them.")
        return

    with st.form("checkout_form"):
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Full Name *")
            email = st.text_input("Email *")
            phone = st.text_input("Phone")
        with col2:
            start_date = st.date_input("Start Date *", value=date.today() + timedelta(days=1))
            end_date = st.date_input("End Date *", value=date.today() + timedelta(days=2))
            notes = st.text_area("Notes", placeholder="Fitting requests, pickup time...")

        days = max((end_date - start_date).days, 0)
        subtotal = cart.subtotal(days)
        deposit = subtotal * Decimal(str(settings.SECURITY_DEPOSIT_RATE))
        st.write(f"Rental duration: **{days} day(s)**")
        st.write(f"Subtotal: **₹{subtotal:.2f}**")
        st.write(f"Security deposit: **₹{deposit:.2f}**")
        st.write(f"Estimated total due: **₹{subtotal + deposit:.2f}**")

        submitted = st.form_submit_button("Confirm Booking", type="primary")

    if submitted:
        result = cart.submit(
            client,
            CustomerDetails(name=name, email=email, phone=phone),
            start_date,
            end_date,
            notes or None,
        )
        if result.success:
            booking = result.booking
            st.success(
                f"Booking confirmed! Reference {booking['id']}. "
                f"Total ₹{booking['total_amount']}, deposit ₹{booking['security_deposit']}."
            )
        elif result.unavailable_item_ids:
            names = [item.name for item in cart if item.id in result.unavailable_item_ids]
            st.error(f"{result.message}. Please remove or replace: {', '.join(names)}")
        else:
            field = f" ({result.error_field})" if result.error_field else ""
            st.error(f"{result.message}{field}")


def main():
    st.title("🎭 Costume & Accessory Rental")

    item_type, filters = render_filters()
    render_cart()

    items = get_items(item_type, filters)
    render_catalog(items)
    render_checkout()


if __name__ == "__main__":
    main()
