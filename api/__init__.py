"""
Project: Digital Menu marketplace

Description:
REST API blueprints, mounted under /api by the application factory.
"""

from werkzeug.routing import IntegerConverter

from api import auth, menu_items, orders, restaurants, statistics, users
from api.schemas import MAX_ID

BLUEPRINTS = (auth.bp, users.bp, restaurants.bp, menu_items.bp, orders.bp, statistics.bp)


class RecordIdConverter(IntegerConverter):
    """``<int:...>`` path segments beyond a 64-bit key do not match (404)."""

    def __init__(self, map, *args, **kwargs):
        kwargs.setdefault("max", MAX_ID)
        super().__init__(map, *args, **kwargs)


def register_blueprints(app, url_prefix="/api"):
    app.url_map.converters["int"] = RecordIdConverter
    for bp in BLUEPRINTS:
        app.register_blueprint(bp, url_prefix=url_prefix)
