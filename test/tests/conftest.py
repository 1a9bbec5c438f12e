"""
Project: Digital Menu marketplace

Description:
Shared fixtures: an app on in-memory SQLite, its test client, and signed-in
admin, restaurant owner and customer accounts.
"""

import os
import sys

import pytest
from werkzeug.security import generate_password_hash

# --- Make sure project root is importable ---
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from app import create_app  # noqa: E402
from models import db, User  # noqa: E402

ADMIN_PASSWORD = "not-the-literal-admin"


@pytest.fixture
def app():
    app = create_app(testing=True)
    with app.app_context():
        db.drop_all()
        db.create_all()
        db.session.add(User(name="Admin", email="admin", role="admin", is_active=True,
                            password_hash=generate_password_hash(ADMIN_PASSWORD)))
        db.session.commit()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def login(client, email, password):
    resp = client.post("/api/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()


@pytest.fixture
def admin_headers(client):
    return bearer(login(client, "admin", "admin")["token"])


@pytest.fixture
def customer(client):
    resp = client.post("/api/register", json={"email": "jane@example.com", "password": "secret1",
                                              "name": "Jane", "role": "customer"})
    assert resp.status_code == 201
    data = resp.get_json()
    return {"user": data["user"], "headers": bearer(data["token"])}


@pytest.fixture
def owner(client, app, admin_headers):
    resp = client.post("/api/register", json={"email": "marco@example.com", "password": "secret1",
                                              "name": "Marco", "role": "restaurant"})
    assert resp.status_code == 201
    with app.app_context():
        owner_id = User.query.filter_by(email="marco@example.com").one().id
    client.post(f"/api/users/{owner_id}/toggle-active", headers=admin_headers)
    data = login(client, "marco@example.com", "secret1")
    return {"user": data["user"], "headers": bearer(data["token"])}


RESTAURANT = {"name": "Trattoria", "description": "Pasta", "address": "1 Main St",
              "phone": "555-0101", "image": "http://img/t.png", "cuisine": "Italian"}


@pytest.fixture
def restaurant(client, owner):
    resp = client.post("/api/restaurants", json=RESTAURANT, headers=owner["headers"])
    assert resp.status_code == 201
    return resp.get_json()


@pytest.fixture
def menu_item(client, owner, restaurant):
    resp = client.post("/api/menu-items", json={
        "restaurant_id": restaurant["id"], "name": "Lasagna", "description": "Layers",
        "price": 9.99, "image": "http://img/l.png", "category": "Pasta",
    }, headers=owner["headers"])
    assert resp.status_code == 201
    return resp.get_json()
