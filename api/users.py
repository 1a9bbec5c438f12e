"""
Project: Digital Menu marketplace

Description:
Admin account management: list users and flip the active flag, which is
how restaurant owners get approved (and later suspended).
"""

import logging

from flask import Blueprint, jsonify

from models import db, User
from api.events import broadcast
from api.tokens import role_required

logger = logging.getLogger(__name__)

bp = Blueprint("users", __name__)


@bp.get("/users")
@role_required("admin")
def list_users():
    users = User.query.order_by(User.id).all()
    return jsonify([u.to_dict() for u in users])


@bp.post("/users/<int:user_id>/toggle-active")
@role_required("admin")
def toggle_user_active(user_id):
    user = db.get_or_404(User, user_id)
    user.is_active = not user.is_active
    db.session.commit()
    logger.info("User %s is_active -> %s", user.id, user.is_active)
    broadcast("user.updated", user=user.to_dict())
    return jsonify(user.to_dict())
