import logging

from flask import Blueprint, g, jsonify, session

from tariffsmart.web.db.models import User
from tariffsmart.web.hooks import login_required
from tariffsmart.web.schemas import SigninRequest, SignupRequest, parse_body

logger = logging.getLogger(__name__)

bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@bp.route("/me", methods=["GET"])
def get_me():
    if g.user is None:
        return jsonify({"user": None})
    return jsonify({"user": {**g.user.as_dict(), "isAuthenticated": True}})


@bp.route("/signup", methods=["POST"])
def signup():
    data = parse_body(SignupRequest)

    if User.find_by(username=data.username):
        return jsonify({"message": "Username already taken"}), 400
    if data.email and User.find_by(email=data.email):
        return jsonify({"message": "Email already registered"}), 400

    user = User.register(username=data.username, password=data.password, email=data.email)
    session.clear()
    session["user_id"] = user.id
    logger.info("New user registered: id=%s", user.id)

    return jsonify({"user": user.as_dict()}), 201


@bp.route("/signin", methods=["POST"])
def signin():
    data = parse_body(SigninRequest)

    user = User.find_by(username=data.username)
    if not user or not user.check_password(data.password):
        return jsonify({"message": "Incorrect username or password"}), 401

    session.clear()
    session["user_id"] = user.id
    return jsonify({"user": user.as_dict()})


@bp.route("/signout", methods=["POST"])
def signout():
    session.clear()
    return jsonify({"success": True})


@bp.route("/can-access-premium", methods=["GET"])
@login_required
def can_access_premium():
    return jsonify({"canAccessPremium": g.user.can_access_premium})
