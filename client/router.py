"""
Project: Digital Menu marketplace

Description:
Client-side routes. Protected pages send anonymous visitors to /login and
users with the wrong role back to /.
"""

from collections import namedtuple

from werkzeug.exceptions import NotFound
from werkzeug.routing import Map, Rule

Match = namedtuple("Match", "page params")
Redirect = namedtuple("Redirect", "to")

# page name -> roles allowed to open it (empty: public)
PAGE_ROLES = {
    "home": (),
    "restaurant_details": (),
    "cart": (),
    "login": (),
    "register": (),
    "orders": ("customer",),
    "admin_dashboard": ("admin",),
    "restaurant_dashboard": ("restaurant",),
    "admin_statistics": ("admin",),
    "restaurant_statistics": ("restaurant",),
}

url_map = Map([
    Rule("/", endpoint="home"),
    Rule("/restaurant/<id>", endpoint="restaurant_details"),
    Rule("/cart", endpoint="cart"),
    Rule("/login", endpoint="login"),
    Rule("/register", endpoint="register"),
    Rule("/orders", endpoint="orders"),
    Rule("/admin", endpoint="admin_dashboard"),
    Rule("/admin/statistics", endpoint="admin_statistics"),
    Rule("/restaurant", endpoint="restaurant_dashboard"),
    Rule("/restaurant/statistics", endpoint="restaurant_statistics"),
], strict_slashes=False)


def resolve(path, user, login_path="/login"):
    """Map ``path`` to a page for ``user``: a Match, or a Redirect."""
    adapter = url_map.bind("localhost")
    try:
        page, params = adapter.match(path)
    except NotFound:
        return Match("not_found", {})

    allowed = PAGE_ROLES.get(page, ())
    if allowed:
        if user is None:
            return Redirect(login_path)
        if user["role"] not in allowed:
            return Redirect("/")
    return Match(page, params)
