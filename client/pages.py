"""
Project: Digital Menu marketplace

Description:
Pages of the client shell. Each page loads what it shows through the
services and returns it as a plain dict; actions update that dict in
place. A failed call shows an error toast and leaves the page as it was.
"""

import logging

from client.api_client import ServiceError
from client.router import Redirect

logger = logging.getLogger(__name__)

DEFAULT_RESTAURANT_IMAGE = "https://images.unsplash.com/photo-1517248135467-4c7edcad34c4?w=600"
DEFAULT_MENU_IMAGE = "https://images.unsplash.com/photo-1546069901-ba9599a7e63c?w=600"
RESTAURANT_FIELDS = ("name", "description", "address", "phone", "cuisine")
MENU_ITEM_FIELDS = ("name", "description", "price", "category")


def _missing(form, fields):
    return [f for f in fields if form.get(f) in (None, "")]


def _checked(value):
    # form values arrive as strings, "false" and "off" mean unchecked
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def home(shell):
    try:
        restaurants = shell.restaurants.list()
    except ServiceError as exc:
        logger.error("Error fetching restaurants: %s", exc)
        shell.toaster.error("Failed to load restaurants")
        restaurants = []
    return {"restaurants": restaurants}


def restaurant_details(shell, id):
    try:
        restaurant = shell.restaurants.get(id)
        menu_items = shell.menu_items.list(id)
    except ServiceError as exc:
        logger.error("Error fetching restaurant %s: %s", id, exc)
        shell.toaster.error("Failed to load restaurant")
        return {"restaurant": None, "menu_items": []}
    return {"restaurant": restaurant, "menu_items": menu_items}


def cart(shell):
    return {"items": shell.cart.items, "restaurant_id": shell.cart.restaurant_id,
            "total_items": shell.cart.total_items, "total_amount": shell.cart.total_amount}


def place_order(shell):
    """Checkout: returns a Redirect on success or when login is needed, else None."""
    user = shell.session.user
    if user is None:
        shell.toaster.info("Please log in to place an order")
        return Redirect("/login")
    if not shell.cart.items:
        shell.toaster.error("Your cart is empty")
        return None
    try:
        if not shell.cart.restaurant_id:
            raise ServiceError("Restaurant ID is missing")
        shell.orders.create(user["id"], shell.cart.restaurant_id, shell.cart.items)
    except ServiceError as exc:
        logger.error("Error placing order: %s", exc)
        shell.toaster.error("Failed to place order. Please try again.")
        return None
    shell.cart.clear()
    shell.toaster.success("Order placed successfully!")
    return Redirect("/orders")


def orders(shell):
    try:
        data = shell.orders.by_customer(shell.session.user["id"])
    except ServiceError as exc:
        logger.error("Error fetching orders: %s", exc)
        shell.toaster.error("Failed to load order history")
        data = []
    return {"orders": data}


def login(shell):
    return {"fields": ("email", "password"), "error": None}


def submit_login(shell, page, form):
    """Returns Redirect("/") once signed in, otherwise the page with ``error`` set."""
    page["error"] = None
    email, password = form.get("email"), form.get("password")
    if not email or not password:
        page["error"] = "Email and password are required"
        return page
    try:
        shell.session.login(email, password)
    except ServiceError as exc:
        logger.error("Login failed: %s", exc)
        page["error"] = str(exc) or "Failed to login"
        return page
    return Redirect("/")


def admin_demo_login(shell, page):
    page["error"] = None
    try:
        shell.session.login("admin", "admin")
    except ServiceError as exc:
        logger.error("Admin demo login failed: %s", exc)
        page["error"] = str(exc) or "Failed to login"
        return page
    return Redirect("/admin")


def register(shell):
    return {"fields": ("name", "email", "password", "confirm_password", "role"),
            "roles": ("customer", "restaurant"), "error": None}


def submit_register(shell, page, form):
    """Customers land on the home page signed in; restaurant accounts go back to /login."""
    page["error"] = None
    name, email, password = form.get("name"), form.get("email"), form.get("password")
    if not name or not email or not password:
        page["error"] = "All fields are required"
        return page
    if password != form.get("confirm_password"):
        page["error"] = "Passwords do not match"
        return page
    role = form.get("role") or "customer"
    try:
        shell.session.register(email, password, name, role)
    except ServiceError as exc:
        logger.error("Registration failed: %s", exc)
        page["error"] = str(exc) or "Failed to register"
        return page
    return Redirect("/") if role == "customer" else Redirect("/login")


def not_found(shell):
    return {"message": "Page not found"}


# ---------- ADMIN ----------

def admin_dashboard(shell):
    try:
        users = shell.users.list()
        restaurants = shell.restaurants.list()
    except ServiceError as exc:
        logger.error("Error fetching admin data: %s", exc)
        shell.toaster.error("Failed to load dashboard data")
        users, restaurants = [], []
    return {
        "users": users,
        "restaurants": restaurants,
        "restaurant_users": [u for u in users if u["role"] == "restaurant"],
        "customer_users": [u for u in users if u["role"] == "customer"],
    }


def _swap(records, updated):
    return [updated if str(r["id"]) == str(updated["id"]) else r for r in records]


def toggle_user_active(shell, page, user_id):
    try:
        updated = shell.users.toggle_active(user_id)
    except ServiceError as exc:
        logger.error("Error toggling user status: %s", exc)
        shell.toaster.error("Failed to update user status")
        return page
    page["users"] = _swap(page["users"], updated)
    page["restaurant_users"] = [u for u in page["users"] if u["role"] == "restaurant"]
    page["customer_users"] = [u for u in page["users"] if u["role"] == "customer"]
    shell.toaster.success(f"User {'activated' if updated['is_active'] else 'deactivated'} successfully")
    return page


def toggle_restaurant_active(shell, page, restaurant_id):
    try:
        updated = shell.restaurants.toggle_active(restaurant_id)
    except ServiceError as exc:
        logger.error("Error toggling restaurant status: %s", exc)
        shell.toaster.error("Failed to update restaurant status")
        return page
    page["restaurants"] = _swap(page["restaurants"], updated)
    shell.toaster.success(f"Restaurant {'activated' if updated['is_active'] else 'deactivated'} successfully")
    return page


def admin_statistics(shell):
    try:
        return {"stats": shell.statistics.admin()}
    except ServiceError as exc:
        logger.error("Error fetching statistics: %s", exc)
        shell.toaster.error("Failed to load statistics")
        return {"stats": None}


# ---------- RESTAURANT OWNER ----------

def restaurant_dashboard(shell, restaurant_id=None):
    page = {"restaurants": [], "active_restaurant_id": None, "menu_items": [], "orders": []}
    try:
        page["restaurants"] = shell.restaurants.by_owner(shell.session.user["id"])
        if page["restaurants"]:
            page["active_restaurant_id"] = restaurant_id or page["restaurants"][0]["id"]
            page["menu_items"] = shell.menu_items.list(page["active_restaurant_id"])
            page["orders"] = shell.orders.by_restaurant(page["active_restaurant_id"])
    except ServiceError as exc:
        logger.error("Error fetching restaurant data: %s", exc)
        shell.toaster.error("Failed to load restaurant data")
    return page


def switch_restaurant(shell, page, restaurant_id):
    page["active_restaurant_id"] = restaurant_id
    try:
        menu_items = shell.menu_items.list(restaurant_id)
        orders_ = shell.orders.by_restaurant(restaurant_id)
    except ServiceError as exc:
        logger.error("Error fetching restaurant data: %s", exc)
        shell.toaster.error("Failed to load restaurant data")
        return page
    page["menu_items"], page["orders"] = menu_items, orders_
    return page


def create_restaurant(shell, page, form):
    if _missing(form, RESTAURANT_FIELDS):
        shell.toaster.error("Please fill in all required fields")
        return page
    fields = {f: form[f] for f in RESTAURANT_FIELDS}
    fields["image"] = form.get("image") or DEFAULT_RESTAURANT_IMAGE
    try:
        created = shell.restaurants.create(shell.session.user["id"], fields)
    except ServiceError as exc:
        logger.error("Error creating restaurant: %s", exc)
        shell.toaster.error("Failed to create restaurant")
        return page
    page["restaurants"] = page["restaurants"] + [created]
    page.update(active_restaurant_id=created["id"], menu_items=[], orders=[])
    shell.toaster.success("Restaurant created successfully")
    return page


def save_menu_item(shell, page, form, editing=None):
    """Create a menu item, or update ``editing`` (an existing item dict)."""
    if not page.get("active_restaurant_id"):
        return page
    if _missing(form, MENU_ITEM_FIELDS):
        shell.toaster.error("Please fill in all required fields")
        return page
    try:
        fields = {
            "name": form["name"],
            "description": form["description"],
            "price": float(form["price"]),
            "category": form["category"],
        }
        if editing is not None:
            fields["image"] = form.get("image") or editing.get("image")
            fields["is_available"] = _checked(form.get("is_available", True))
            updated = shell.menu_items.update(editing["id"], fields)
            page["menu_items"] = _swap(page["menu_items"], updated)
            shell.toaster.success("Menu item updated successfully")
        else:
            fields["restaurant_id"] = page["active_restaurant_id"]
            fields["image"] = form.get("image") or DEFAULT_MENU_IMAGE
            created = shell.menu_items.create(fields)
            page["menu_items"] = page["menu_items"] + [created]
            shell.toaster.success("Menu item created successfully")
    except (ServiceError, ValueError) as exc:
        logger.error("Error saving menu item: %s", exc)
        shell.toaster.error("Failed to save menu item")
    return page


def delete_menu_item(shell, page, menu_item_id):
    if not shell.confirm("Are you sure you want to delete this menu item?"):
        return page
    try:
        shell.menu_items.delete(menu_item_id)
    except ServiceError as exc:
        logger.error("Error deleting menu item: %s", exc)
        shell.toaster.error("Failed to delete menu item")
        return page
    page["menu_items"] = [m for m in page["menu_items"] if str(m["id"]) != str(menu_item_id)]
    shell.toaster.success("Menu item deleted successfully")
    return page


def update_order_status(shell, page, order_id, status):
    try:
        updated = shell.orders.update_status(order_id, status)
    except ServiceError as exc:
        logger.error("Error updating order status: %s", exc)
        shell.toaster.error("Failed to update order status")
        return page
    page["orders"] = [{**o, **updated} if str(o["id"]) == str(order_id) else o for o in page["orders"]]
    shell.toaster.success("Order status updated successfully")
    return page


def restaurant_statistics(shell, restaurant_id=None):
    try:
        if restaurant_id is None:
            owned = shell.restaurants.by_owner(shell.session.user["id"])
            if not owned:
                return {"stats": None}
            restaurant_id = owned[0]["id"]
        return {"stats": shell.statistics.restaurant(restaurant_id)}
    except ServiceError as exc:
        logger.error("Error fetching statistics: %s", exc)
        shell.toaster.error("Failed to load statistics")
        return {"stats": None}
