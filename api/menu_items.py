"""
Project: Digital Menu marketplace

Description:
Menu items of a restaurant: public listing, owner create/update/delete.
"""

import logging

from flask import Blueprint, jsonify

from models import db, MenuItem, Restaurant
from api.errors import ValidationFailed
from api.events import broadcast
from api.schemas import MenuItemCreate, MenuItemUpdate, parse_body
from api.tokens import role_required

logger = logging.getLogger(__name__)

bp = Blueprint("menu_items", __name__)


@bp.get("/restaurants/<int:restaurant_id>/menu-items")
def list_menu_items(restaurant_id):
    items = MenuItem.query.filter_by(restaurant_id=restaurant_id).order_by(MenuItem.id).all()
    return jsonify([m.to_dict() for m in items])


@bp.post("/menu-items")
@role_required("restaurant")
def create_menu_item():
    body = parse_body(MenuItemCreate)
    if db.session.get(Restaurant, body.restaurant_id) is None:
        raise ValidationFailed.for_field("restaurant_id", "The selected restaurant id is invalid.")
    m = MenuItem(is_available=True, **body.model_dump())
    db.session.add(m)
    db.session.commit()
    broadcast("menu.created", item=m.to_dict())
    return jsonify(m.to_dict()), 201


@bp.put("/menu-items/<int:item_id>")
@role_required("restaurant")
def update_menu_item(item_id):
    m = db.get_or_404(MenuItem, item_id)
    body = parse_body(MenuItemUpdate)
    for k, v in body.changes().items():
        setattr(m, k, v)
    db.session.commit()
    broadcast("menu.updated", item=m.to_dict())
    return jsonify(m.to_dict())


@bp.delete("/menu-items/<int:item_id>")
@role_required("restaurant")
def delete_menu_item(item_id):
    m = db.get_or_404(MenuItem, item_id)
    db.session.delete(m)
    db.session.commit()
    logger.info("Menu item %s deleted", item_id)
    broadcast("menu.deleted", id=item_id)
    return "", 204
