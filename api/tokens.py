"""
Project: Digital Menu marketplace

Description:
Bearer tokens and role gates. Tokens are signed JWTs whose jti must still
have a row in api_tokens, so logging out revokes exactly one token.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from functools import wraps

from flask import current_app, g, request
from jose import JWTError, jwt

from models import db, ApiToken, User
from api.errors import Forbidden, Unauthenticated

logger = logging.getLogger(__name__)


def issue_token(user):
    """Create and record a token for ``user``; returns the plain text token."""
    cfg = current_app.config
    now = datetime.now(timezone.utc)
    jti = uuid.uuid4().hex
    payload = {"sub": str(user.id), "jti": jti, "iat": now}
    if cfg.get("TOKEN_EXPIRE_MINUTES"):
        payload["exp"] = now + timedelta(minutes=cfg["TOKEN_EXPIRE_MINUTES"])
    db.session.add(ApiToken(user_id=user.id, name=cfg.get("TOKEN_NAME", "auth_token"), jti=jti))
    db.session.commit()
    return jwt.encode(payload, cfg["JWT_SECRET"], algorithm=cfg["JWT_ALGORITHM"])


def _bearer():
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def resolve_token():
    """Return (user, token_row) for the request's bearer token, or (None, None)."""
    if "auth" in g:
        return g.auth
    g.auth = (None, None)
    raw = _bearer()
    if not raw:
        return g.auth
    cfg = current_app.config
    try:
        claims = jwt.decode(raw, cfg["JWT_SECRET"], algorithms=[cfg["JWT_ALGORITHM"]])
    except JWTError as exc:
        logger.info("Rejected bearer token: %s", exc)
        return g.auth
    row = ApiToken.query.filter_by(jti=claims.get("jti")).first()
    if row is None or str(row.user_id) != claims.get("sub"):
        return g.auth
    user = db.session.get(User, row.user_id)
    if user is None:
        return g.auth
    row.last_used_at = datetime.utcnow()
    db.session.commit()
    g.auth = (user, row)
    return g.auth


def current_user():
    return resolve_token()[0]


def revoke_current_token():
    user, row = resolve_token()
    if row is None:
        raise Unauthenticated()
    db.session.delete(row)
    db.session.commit()
    g.auth = (None, None)
    logger.info("Token %s revoked for user %s", row.id, user.id)


def auth_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            raise Unauthenticated()
        return view(*args, **kwargs)
    return wrapper


def role_required(*roles):
    """Only callers whose role is one of ``roles`` get through."""
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = current_user()
            if user is None:
                raise Unauthenticated()
            if user.role not in roles:
                logger.info("User %s (%s) denied, needs %s", user.id, user.role, "/".join(roles))
                raise Forbidden()
            return view(*args, **kwargs)
        return wrapper
    return decorator
