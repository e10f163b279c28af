import json
import logging
from functools import wraps
from typing import Optional

from flask import g, jsonify, request, session
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from tariffsmart.web.db import db
from tariffsmart.web.db.models import User

logger = logging.getLogger(__name__)

UNAUTHORIZED = {
    "error": "Unauthorized",
    "message": "You must be signed in to access this resource",
}


def load_logged_in_user():
    user_id = session.get("user_id")
    g.user = User.find_by(id=user_id) if user_id is not None else None


def login_required(view):
    @wraps(view)
    def wrapped_view(*args, **kwargs):
        if g.user is None:
            logger.info("Authentication required for %s %s", request.method, request.path)
            return jsonify(UNAUTHORIZED), 401
        return view(*args, **kwargs)

    return wrapped_view


def role_required(required_role: str):
    """Allow users whose role ranks at or above required_role."""

    def decorator(view):
        @wraps(view)
        @login_required
        def wrapped_view(*args, **kwargs):
            if not g.user.has_role(required_role):
                logger.info(
                    "Insufficient permissions: user has role %s, but %s is required",
                    g.user.role,
                    required_role,
                )
                return jsonify({
                    "error": "Forbidden",
                    "message": f"This action requires {required_role} permissions",
                }), 403
            return view(*args, **kwargs)

        return wrapped_view

    return decorator


admin_required = role_required("admin")
editor_required = role_required("editor")


def premium_required(view):
    @wraps(view)
    @login_required
    def wrapped_view(*args, **kwargs):
        if not g.user.can_access_premium:
            logger.info("Premium access denied for user with role %s", g.user.role)
            return jsonify({
                "error": "Forbidden",
                "message": "This feature requires a premium subscription",
            }), 403
        return view(*args, **kwargs)

    return wrapped_view


def load_model(Model, label: Optional[str] = None):
    """
    Resolve the single URL argument to a Model row by integer id.

    Responds 400 for a non-integer id and 404 when no row matches; otherwise
    the view receives the instance instead of the raw id.
    """
    label = label or Model.__name__.lower()

    def decorator(view):
        @wraps(view)
        def wrapped_view(**kwargs):
            raw_id = next(iter(kwargs.values()))
            try:
                model_id = int(raw_id)
            except (TypeError, ValueError):
                return jsonify({"message": f"Invalid {label} ID"}), 400

            instance = db.session.get(Model, model_id)
            if instance is None:
                return jsonify({"message": f"{label.capitalize()} not found"}), 404
            return view(instance)

        return wrapped_view

    return decorator


def add_headers(response):
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


def handle_validation_error(err: ValidationError):
    # err.json() serializes constraint context that errors() may leave as objects
    errors = json.loads(err.json(include_url=False))
    return jsonify({"message": "Invalid input", "errors": errors}), 400


def handle_error(err):
    if isinstance(err, HTTPException):
        return jsonify({"message": err.description}), err.code

    logger.exception("Unhandled error on %s %s", request.method, request.path)
    db.session.rollback()
    return jsonify({"message": "Internal server error", "error": str(err)}), 500
