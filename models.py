"""
Project: Digital Menu marketplace

Description:
Relational models for accounts, restaurants, menu items and orders, plus
the issued bearer tokens. Prices are stored as 2-decimal numerics.
"""

from flask_sqlalchemy import SQLAlchemy
from datetime import datetime
from decimal import Decimal

db = SQLAlchemy()

ORDER_STATUSES = ("pending", "confirmed", "preparing", "ready", "delivered", "cancelled")


def _money(value):
    return float(value) if value is not None else None


def _iso(value):
    return value.isoformat() if value else None


class TimestampMixin:
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class User(TimestampMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), default="customer", nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    restaurants = db.relationship("Restaurant", backref="owner", lazy=True)
    tokens = db.relationship("ApiToken", backref="user", cascade="all, delete-orphan", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "is_active": self.is_active,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


class ApiToken(db.Model):
    """One row per issued bearer token; deleting the row revokes it."""

    __tablename__ = "api_tokens"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    name = db.Column(db.String(80), nullable=False)
    jti = db.Column(db.String(64), unique=True, nullable=False, index=True)
    last_used_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)


class Restaurant(TimestampMixin, db.Model):
    __tablename__ = "restaurants"

    id = db.Column(db.Integer, primary_key=True)
    owner_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    address = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(40), nullable=False)
    image = db.Column(db.String(500), nullable=False)
    cuisine = db.Column(db.String(80), nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    menu_items = db.relationship("MenuItem", backref="restaurant", cascade="all, delete-orphan",
                                 passive_deletes=True, lazy=True)
    orders = db.relationship("Order", backref="restaurant", lazy=True)

    def to_dict(self, with_owner=False, with_menu=False):
        data = {
            "id": self.id,
            "owner_id": self.owner_id,
            "name": self.name,
            "description": self.description,
            "address": self.address,
            "phone": self.phone,
            "image": self.image,
            "cuisine": self.cuisine,
            "is_active": self.is_active,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }
        if with_owner:
            data["owner"] = self.owner.to_dict() if self.owner else None
        if with_menu:
            data["menu_items"] = [m.to_dict() for m in self.menu_items]
        return data


class MenuItem(TimestampMixin, db.Model):
    __tablename__ = "menu_items"

    id = db.Column(db.Integer, primary_key=True)
    restaurant_id = db.Column(db.Integer, db.ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    image = db.Column(db.String(500), nullable=False)
    category = db.Column(db.String(80), nullable=False)
    is_available = db.Column(db.Boolean, default=True, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "restaurant_id": self.restaurant_id,
            "name": self.name,
            "description": self.description,
            "price": _money(self.price),
            "image": self.image,
            "category": self.category,
            "is_available": self.is_available,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


class Order(TimestampMixin, db.Model):
    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    restaurant_id = db.Column(db.Integer, db.ForeignKey("restaurants.id"), nullable=False)
    status = db.Column(db.String(20), default="pending", nullable=False)
    total_amount = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal("0.00"))

    customer = db.relationship("User", foreign_keys=[customer_id], lazy=True)
    items = db.relationship("OrderItem", backref="order", cascade="all, delete-orphan", lazy=True)

    def to_dict(self, with_items=True, with_restaurant=False, with_customer=False):
        data = {
            "id": self.id,
            "customer_id": self.customer_id,
            "restaurant_id": self.restaurant_id,
            "status": self.status,
            "total_amount": _money(self.total_amount),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }
        if with_items:
            data["items"] = [i.to_dict() for i in self.items]
        if with_restaurant:
            data["restaurant"] = self.restaurant.to_dict() if self.restaurant else None
        if with_customer:
            data["customer"] = self.customer.to_dict() if self.customer else None
        return data


class OrderItem(TimestampMixin, db.Model):
    # name and price are copied from the menu item when the order is placed
    __tablename__ = "order_items"

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id"), nullable=False)
    menu_item_id = db.Column(db.Integer, db.ForeignKey("menu_items.id", ondelete="SET NULL"), nullable=True)
    name = db.Column(db.String(255), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    quantity = db.Column(db.Integer, default=1, nullable=False)

    def to_dict(self):
        return {"id": self.id, "order_id": self.order_id, "menu_item_id": self.menu_item_id,
                "name": self.name, "price": _money(self.price), "quantity": self.quantity}
