from flask import Blueprint, jsonify

from tariffsmart.web.db.models import Country

bp = Blueprint("country", __name__, url_prefix="/api/countries")


@bp.route("/", methods=["GET"])
def list_countries():
    """Full rate table, as used by the calculator's country lookup."""
    countries = Country.query.order_by(Country.id).all()
    return jsonify({"countries": Country.as_dicts(countries)})


@bp.route("/<string:name>", methods=["GET"])
def get_country(name):
    """Exact, case-sensitive lookup by country name."""
    country = Country.get_by_name(name)
    if not country:
        return jsonify({"message": "Country not found"}), 404
    return jsonify({"country": country.as_dict()})
