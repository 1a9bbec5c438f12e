"""
Project: Digital Menu marketplace

Description:
Orders. Customers place them from their cart, owners and admins move the
status along, and each side can list the orders that concern it.
"""

import logging
from decimal import Decimal

from flask import Blueprint, jsonify
from sqlalchemy.orm import joinedload, selectinload

from models import db, MenuItem, Order, OrderItem, Restaurant
from api.errors import ValidationFailed
from api.events import broadcast
from api.schemas import OrderCreate, StatusUpdate, parse_body
from api.tokens import current_user, role_required

logger = logging.getLogger(__name__)

bp = Blueprint("orders", __name__)


def _orders():
    return Order.query.options(selectinload(Order.items)).order_by(Order.id.desc())


@bp.get("/orders")
@role_required("admin")
def list_orders():
    orders = _orders().options(joinedload(Order.restaurant)).all()
    return jsonify([o.to_dict(with_restaurant=True) for o in orders])


@bp.get("/restaurants/<int:restaurant_id>/orders")
@role_required("restaurant")
def orders_by_restaurant(restaurant_id):
    orders = _orders().options(joinedload(Order.customer)).filter_by(restaurant_id=restaurant_id).all()
    return jsonify([o.to_dict(with_customer=True) for o in orders])


@bp.get("/users/<int:customer_id>/orders")
@role_required("customer")
def orders_by_customer(customer_id):
    orders = _orders().options(joinedload(Order.restaurant)).filter_by(customer_id=customer_id).all()
    return jsonify([o.to_dict(with_restaurant=True) for o in orders])


@bp.post("/orders")
@role_required("customer")
def create_order():
    body = parse_body(OrderCreate)
    if db.session.get(Restaurant, body.restaurant_id) is None:
        raise ValidationFailed.for_field("restaurant_id", "The selected restaurant id is invalid.")

    # price every line from the stored menu item, never from the client
    priced = []
    for idx, line in enumerate(body.items):
        mi = db.session.get(MenuItem, line.menu_item_id)
        if mi is None:
            raise ValidationFailed.for_field(f"items.{idx}.menu_item_id",
                                             "The selected menu item id is invalid.")
        priced.append((mi, line.quantity))
    total = sum((Decimal(mi.price) * qty for mi, qty in priced), Decimal("0.00"))

    o = Order(customer_id=current_user().id, restaurant_id=body.restaurant_id,
              status="pending", total_amount=total)
    db.session.add(o)
    db.session.flush()
    for mi, qty in priced:
        db.session.add(OrderItem(order_id=o.id, menu_item_id=mi.id, name=mi.name,
                                 price=mi.price, quantity=qty))
    db.session.commit()
    logger.info("Order %s placed by customer %s at restaurant %s, total %s",
                o.id, o.customer_id, o.restaurant_id, total)
    broadcast("order.created", order=o.to_dict())
    return jsonify(o.to_dict(with_restaurant=True)), 201


@bp.post("/orders/<int:order_id>/status")
@role_required("restaurant", "admin")
def update_order_status(order_id):
    order = db.get_or_404(Order, order_id)
    body = parse_body(StatusUpdate)
    previous, order.status = order.status, body.status
    db.session.commit()
    logger.info("Order %s status %s -> %s", order.id, previous, order.status)
    broadcast("order.status_changed", order=order.to_dict())
    return jsonify(order.to_dict())
