import logging

from flask import Blueprint, jsonify

from tariffsmart.web.db.models import FeatureFlag
from tariffsmart.web.hooks import admin_required
from tariffsmart.web.schemas import FeatureFlagUpdate, parse_body

logger = logging.getLogger(__name__)

bp = Blueprint("feature_flag", __name__, url_prefix="/api")


@bp.route("/feature-flags", methods=["GET"])
def list_flags():
    flags = FeatureFlag.query.order_by(FeatureFlag.id).all()
    return jsonify({"flags": FeatureFlag.as_dicts(flags)})


@bp.route("/feature-flags/<string:name>", methods=["GET"])
def get_flag(name):
    flag = FeatureFlag.find_by(name=name)
    if not flag:
        return jsonify({"message": "Feature flag not found"}), 404
    return jsonify({"flag": flag.as_dict()})


@bp.route("/admin/feature-flags/<string:name>", methods=["PATCH"])
@admin_required
def update_flag(name):
    """
    Toggle a feature flag.

    Body:
        isEnabled: true | false
    """
    data = parse_body(FeatureFlagUpdate)

    flag = FeatureFlag.find_by(name=name)
    if not flag:
        return jsonify({"message": "Feature flag not found"}), 404

    flag.update(is_enabled=data.is_enabled)
    logger.info("Feature flag %s set to %s", name, data.is_enabled)
    return jsonify({"flag": flag.as_dict(), "message": "Feature flag updated successfully"})
