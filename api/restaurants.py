"""
Project: Digital Menu marketplace

Description:
Restaurant listings. Anyone can browse active restaurants; owners create
and edit their own listings; admins toggle the active flag.
"""

import logging

from flask import Blueprint, jsonify
from sqlalchemy.orm import joinedload

from models import db, Restaurant
from api.events import broadcast
from api.schemas import RestaurantCreate, RestaurantUpdate, parse_body
from api.tokens import current_user, role_required

logger = logging.getLogger(__name__)

bp = Blueprint("restaurants", __name__)


@bp.get("/restaurants")
def list_restaurants():
    query = Restaurant.query.options(joinedload(Restaurant.owner)).order_by(Restaurant.id)
    viewer = current_user()
    # admins see suspended and unapproved listings too
    if viewer is None or viewer.role != "admin":
        query = query.filter(Restaurant.is_active.is_(True))
    return jsonify([r.to_dict(with_owner=True) for r in query.all()])


@bp.get("/restaurants/<int:restaurant_id>")
def get_restaurant(restaurant_id):
    restaurant = db.get_or_404(Restaurant, restaurant_id)
    return jsonify(restaurant.to_dict(with_owner=True, with_menu=True))


@bp.post("/restaurants")
@role_required("restaurant")
def create_restaurant():
    body = parse_body(RestaurantCreate)
    owner = current_user()
    restaurant = Restaurant(owner_id=owner.id, is_active=True, **body.model_dump())
    db.session.add(restaurant)
    db.session.commit()
    logger.info("Restaurant %s created by owner %s", restaurant.id, owner.id)
    broadcast("restaurant.created", restaurant=restaurant.to_dict())
    return jsonify(restaurant.to_dict()), 201


@bp.put("/restaurants/<int:restaurant_id>")
@role_required("restaurant")
def update_restaurant(restaurant_id):
    restaurant = db.get_or_404(Restaurant, restaurant_id)
    body = parse_body(RestaurantUpdate)
    for k, v in body.changes().items():
        setattr(restaurant, k, v)
    db.session.commit()
    broadcast("restaurant.updated", restaurant=restaurant.to_dict())
    return jsonify(restaurant.to_dict())


@bp.post("/restaurants/<int:restaurant_id>/toggle-active")
@role_required("admin")
def toggle_restaurant_active(restaurant_id):
    restaurant = db.get_or_404(Restaurant, restaurant_id)
    restaurant.is_active = not restaurant.is_active
    db.session.commit()
    logger.info("Restaurant %s is_active -> %s", restaurant.id, restaurant.is_active)
    broadcast("restaurant.updated", restaurant=restaurant.to_dict())
    return jsonify(restaurant.to_dict())


@bp.get("/users/<int:owner_id>/restaurants")
@role_required("restaurant")
def restaurants_by_owner(owner_id):
    restaurants = Restaurant.query.filter_by(owner_id=owner_id).order_by(Restaurant.id).all()
    return jsonify([r.to_dict() for r in restaurants])
