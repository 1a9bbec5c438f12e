"""
Project: Digital Menu marketplace

Description:
JSON error responses. Validation failures come back as 422 with a
field -> messages map; everything else as {"message": ...}.
"""

import logging

from flask import jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from models import db

logger = logging.getLogger(__name__)


class APIError(Exception):
    status_code = 400

    def __init__(self, message, status_code=None, errors=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.errors = errors

    def to_dict(self):
        data = {"message": self.message}
        if self.errors:
            data["errors"] = self.errors
        return data


class ValidationFailed(APIError):
    status_code = 422

    @classmethod
    def for_field(cls, field, message):
        return cls(message, errors={field: [message]})


class Unauthenticated(APIError):
    status_code = 401

    def __init__(self, message="Unauthenticated."):
        super().__init__(message)


class Forbidden(APIError):
    status_code = 403

    def __init__(self, message="Unauthorized."):
        super().__init__(message)


def _field_path(loc):
    return ".".join(str(part) for part in loc) or "body"


def from_validation_error(exc):
    errors = {}
    for err in exc.errors():
        errors.setdefault(_field_path(err["loc"]), []).append(err["msg"])
    first = next(iter(errors.values()))[0] if errors else "The given data was invalid."
    return ValidationFailed(first, errors=errors)


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def handle_api_error(err):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc):
        err = from_validation_error(exc)
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({"message": exc.name}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc):
        db.session.rollback()
        logger.exception("Unhandled error: %s", exc)
        return jsonify({"message": "Server Error"}), 500
