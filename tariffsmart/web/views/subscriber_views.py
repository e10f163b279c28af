import logging

from flask import Blueprint, jsonify, request

from tariffsmart.web.db.models import EmailSubscriber
from tariffsmart.web.hooks import admin_required
from tariffsmart.web.schemas import SubscribeRequest, SubscriberStatusUpdate, parse_body

logger = logging.getLogger(__name__)

bp = Blueprint("subscriber", __name__, url_prefix="/api")


def _client_ip():
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr


@bp.route("/subscribe", methods=["POST"])
def subscribe():
    data = parse_body(SubscribeRequest)

    subscriber = EmailSubscriber.subscribe(
        data.email,
        gdpr_consent=data.gdpr_consent,
        source=data.source,
        ip_address=data.ip_address or _client_ip(),
    )
    logger.info("Subscriber added: id=%s source=%s", subscriber.id, subscriber.source)

    return jsonify({
        "success": True,
        "message": "Thank you for subscribing!",
        "subscriber": subscriber.as_dict(),
    })


@bp.route("/unsubscribe/<string:email>", methods=["GET"])
def unsubscribe(email):
    # TODO: require a signed unsubscribe token once emails carry one
    subscriber = EmailSubscriber.find_by(email=email)
    if not subscriber:
        return jsonify({"message": "Subscriber not found"}), 404

    subscriber.update(status="unsubscribed")
    return jsonify({"success": True, "message": "You have been unsubscribed successfully"})


@bp.route("/admin/subscribers", methods=["GET"])
@admin_required
def list_subscribers():
    subscribers = EmailSubscriber.query.order_by(EmailSubscriber.id).all()
    return jsonify({"subscribers": EmailSubscriber.as_dicts(subscribers)})


@bp.route("/admin/subscribers/<string:email>", methods=["PATCH"])
@admin_required
def update_subscriber(email):
    data = parse_body(SubscriberStatusUpdate)

    subscriber = EmailSubscriber.find_by(email=email)
    if not subscriber:
        return jsonify({"message": "Subscriber not found"}), 404

    subscriber.update(status=data.status)
    return jsonify({
        "subscriber": subscriber.as_dict(),
        "message": "Subscriber status updated successfully",
    })
