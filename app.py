"""
Project: Digital Menu marketplace

Description:
Main application entry point. Initializes Flask, database, and Socket.IO,
registers the API blueprints and JSON error handlers, and launches the app.
"""

import logging

from flask import Flask, jsonify

from config import Config
from models import db
from api import register_blueprints
from api.errors import register_error_handlers
from api.events import socketio


def configure_logging(app):
    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def create_app(testing: bool = False):
    app = Flask(__name__)
    app.config.from_object(Config)

    if testing:
        app.config["TESTING"] = True
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///:memory:"
        app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False

    configure_logging(app)
    db.init_app(app)
    socketio.init_app(  # <-- bind socketio to this app
        app,
        async_mode=app.config["SOCKETIO_ASYNC_MODE"],
        cors_allowed_origins=app.config["CORS_ALLOWED_ORIGINS"],
    )

    register_blueprints(app)
    register_error_handlers(app)

    # ---------- HEALTH ----------
    @app.get("/api/health")
    def health():
        return jsonify({"status": "ok"})

    return app


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
    socketio.run(app, host="0.0.0.0", port=app.config["PORT"], debug=True, allow_unsafe_werkzeug=True)
