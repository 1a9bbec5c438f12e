import pytest
import requests

from client.router import Redirect, resolve
from client.shell import Shell
from client.storage import TOKEN, AUTH_USER

BASE = "http://api.test/api"


class OfflineSession:
    """Every request fails as if the API were down."""

    def request(self, method, url, **kwargs):
        raise requests.ConnectionError("connection refused")


class FlaskSession:
    """Routes requests into a Flask test client."""

    def __init__(self, flask_client):
        self.flask_client = flask_client

    def request(self, method, url, json=None, headers=None, timeout=None):
        path = url[len("http://api.test"):]
        r = self.flask_client.open(path, method=method, json=json, headers=headers)
        resp = requests.Response()
        resp.status_code = r.status_code
        resp._content = r.data
        resp.headers.update(dict(r.headers))
        return resp


@pytest.fixture
def offline(tmp_path):
    return Shell(api_base_url=BASE, storage_path=str(tmp_path / "s.json"), http_session=OfflineSession())


@pytest.fixture
def online(tmp_path, client):
    return Shell(api_base_url=BASE, storage_path=str(tmp_path / "s.json"), http_session=FlaskSession(client))


# ---------- router ----------

def test_router_gates_by_role():
    customer = {"id": 1, "role": "customer"}
    assert resolve("/", None).page == "home"
    assert resolve("/restaurant/7", None).params == {"id": "7"}
    assert resolve("/orders", None) == Redirect("/login")
    assert resolve("/admin", customer) == Redirect("/")
    assert resolve("/orders", customer).page == "orders"
    assert resolve("/restaurant", {"id": 2, "role": "restaurant"}).page == "restaurant_dashboard"
    assert resolve("/nowhere", customer).page == "not_found"


# ---------- offline fallback ----------

def test_offline_home_uses_mock_data(offline):
    path, page, data = offline.open("/")
    assert page == "home"
    assert [r["name"] for r in data["restaurants"]] == ["Trattoria Roma", "Sakura House"]


def test_offline_admin_login_and_dashboard(offline):
    offline.session.login("admin", "admin")
    path, page, data = offline.open("/admin")
    assert page == "admin_dashboard"
    assert {u["email"] for u in data["restaurant_users"]} == {"marco@trattoria.example.com", "yuki@sakura.example.com"}

    from client import pages
    pages.toggle_user_active(offline, data, "user_3")
    assert next(u for u in data["users"] if u["id"] == "user_3")["is_active"] is True
    assert offline.toaster.last.kind == "success"


def test_offline_register_restaurant_is_pending(offline):
    assert offline.session.register("new@example.com", "secret1", "New", "restaurant") is None
    assert offline.session.user is None
    assert offline.toaster.last.kind == "info"
    with pytest.raises(Exception):
        offline.session.login("new@example.com", "secret1")


def test_offline_duplicate_register_fails(offline):
    with pytest.raises(Exception):
        offline.session.register("jane@example.com", "secret1", "Jane", "customer")
    assert offline.toaster.last.kind == "error"


def test_offline_checkout(offline):
    offline.session.login("jane@example.com", "whatever")
    _, _, details = offline.open("/restaurant/restaurant_1")
    pizza = details["menu_items"][0]
    offline.cart.add(pizza, 3)

    from client import pages
    assert pages.place_order(offline) == Redirect("/orders")
    assert offline.cart.items == []
    _, page, data = offline.open("/orders")
    newest = data["orders"][-1]
    assert newest["total_amount"] == 35.97
    assert newest["items"][0]["name"] == "Margherita Pizza"


def test_protected_page_redirects_to_login(offline):
    path, page, _ = offline.open("/orders")
    assert (path, page) == ("/login", "login")


def test_checkout_requires_login(offline):
    from client import pages
    assert pages.place_order(offline) == Redirect("/login")


# ---------- against the API ----------

def test_online_customer_flow(online, app):
    user = online.session.register("c@example.com", "secret1", "C", "customer")
    assert user["role"] == "customer"
    assert online.storage.get_item(TOKEN)

    online.session.logout()
    assert online.storage.get_item(TOKEN) is None
    assert online.storage.get_item(AUTH_USER) is None


def test_online_api_errors_do_not_fall_back(online):
    from client.api_client import ApiError
    with pytest.raises(ApiError) as err:
        online.auth.login("nobody@example.com", "secret1")
    assert err.value.status_code == 422


def test_online_admin_toggles_restaurant(online, owner, restaurant):
    online.session.login("admin", "admin")
    _, page, data = online.open("/admin")
    assert page == "admin_dashboard"
    from client import pages
    pages.toggle_restaurant_active(online, data, restaurant["id"])
    assert data["restaurants"][0]["is_active"] is False
    pages.toggle_restaurant_active(online, data, restaurant["id"])
    assert data["restaurants"][0]["is_active"] is True


def test_online_owner_dashboard(online, owner, restaurant, menu_item):
    online.session.login("marco@example.com", "secret1")
    _, page, data = online.open("/restaurant")
    assert page == "restaurant_dashboard"
    assert data["active_restaurant_id"] == restaurant["id"]
    assert [m["name"] for m in data["menu_items"]] == ["Lasagna"]

    from client import pages
    pages.save_menu_item(online, data, {"name": "Soup", "description": "Hot", "price": "4.5",
                                        "category": "Starters"})
    assert [m["name"] for m in data["menu_items"]] == ["Lasagna", "Soup"]
    pages.save_menu_item(online, data, {"name": "", "price": "1"})
    assert online.toaster.last.message == "Please fill in all required fields"


# ---------- login and register pages ----------

def test_login_page_requires_both_fields(offline):
    from client import pages
    _, _, page = offline.open("/login")
    assert pages.submit_login(offline, page, {"email": "jane@example.com", "password": ""}) is page
    assert page["error"] == "Email and password are required"
    assert offline.session.user is None


def test_login_page_signs_in_and_goes_home(offline):
    from client import pages
    _, _, page = offline.open("/login")
    result = pages.submit_login(offline, page, {"email": "jane@example.com", "password": "secret1"})
    assert result == Redirect("/")
    assert offline.session.user["email"] == "jane@example.com"


def test_login_page_shows_api_error(online):
    from client import pages
    _, _, page = online.open("/login")
    result = pages.submit_login(online, page, {"email": "nobody@example.com", "password": "secret1"})
    assert result is page
    assert page["error"] == "The provided credentials are incorrect."
    assert online.session.user is None
    assert online.storage.get_item(TOKEN) is None


def test_admin_demo_login(online):
    from client import pages
    _, _, page = online.open("/login")
    assert pages.admin_demo_login(online, page) == Redirect("/admin")
    assert online.session.role == "admin"
    assert online.open("/admin")[1] == "admin_dashboard"


def test_register_page_validation(offline):
    from client import pages
    _, _, page = offline.open("/register")
    pages.submit_register(offline, page, {"name": "", "email": "a@example.com", "password": "secret1"})
    assert page["error"] == "All fields are required"

    pages.submit_register(offline, page, {"name": "A", "email": "a@example.com", "password": "secret1",
                                          "confirm_password": "secret2"})
    assert page["error"] == "Passwords do not match"
    assert offline.session.user is None


def test_register_page_customer_goes_home(online):
    from client import pages
    _, _, page = online.open("/register")
    form = {"name": "Ana", "email": "ana@example.com", "password": "secret1",
            "confirm_password": "secret1", "role": "customer"}
    assert pages.submit_register(online, page, form) == Redirect("/")
    assert online.session.user["email"] == "ana@example.com"


def test_register_page_owner_goes_to_login(online):
    from client import pages
    _, _, page = online.open("/register")
    form = {"name": "Owner", "email": "own@example.com", "password": "secret1",
            "confirm_password": "secret1", "role": "restaurant"}
    assert pages.submit_register(online, page, form) == Redirect("/login")
    assert online.session.user is None
    assert online.toaster.last.kind == "info"


def test_register_page_shows_duplicate_email(online, customer):
    from client import pages
    _, _, page = online.open("/register")
    form = {"name": "Jane", "email": "jane@example.com", "password": "secret1",
            "confirm_password": "secret1", "role": "customer"}
    assert pages.submit_register(online, page, form) is page
    assert page["error"] == "The email has already been taken."


def test_menu_item_availability_reads_form_strings(online, owner, restaurant, menu_item):
    from client import pages
    online.session.login("marco@example.com", "secret1")
    _, _, data = online.open("/restaurant")
    item = data["menu_items"][0]
    form = {"name": item["name"], "description": item["description"], "price": "9.99",
            "category": item["category"], "is_available": "false"}
    pages.save_menu_item(online, data, form, editing=item)
    assert data["menu_items"][0]["is_available"] is False


class HangingSession:
    def request(self, method, url, timeout=None, **kwargs):
        raise requests.Timeout("read timed out")


def test_timeout_falls_back_to_local_storage(tmp_path):
    shell = Shell(api_base_url=BASE, storage_path=str(tmp_path / "s.json"), http_session=HangingSession())
    _, page, data = shell.open("/")
    assert page == "home"
    assert len(data["restaurants"]) == 2
