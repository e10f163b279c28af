from flask import Blueprint, g, jsonify

from tariffsmart.web.db.models import SavedCalculation
from tariffsmart.web.hooks import login_required
from tariffsmart.web.schemas import SaveCalculationRequest, parse_body

bp = Blueprint("user", __name__, url_prefix="/api/user")


@bp.route("/profile", methods=["GET"])
@login_required
def profile():
    return jsonify({"user": g.user.as_dict()})


@bp.route("/save-calculation", methods=["POST"])
@login_required
def save_calculation():
    """
    Keep a calculator result on the user's profile.

    Body:
        {
            "name": "Q3 household budget",
            "calculationData": {
                "items": [{"category": ..., "amount": ..., "country": ...}],
                "totalSpending": 100,
                "totalIncrease": "55.00",
                "percentageIncrease": "55.00"
            }
        }
    """
    data = parse_body(SaveCalculationRequest)

    saved = SavedCalculation.create(
        user_id=g.user.id,
        name=data.name,
        data=data.calculation_data.model_dump(by_alias=True),
    )

    return jsonify({
        "success": True,
        "message": "Calculation saved successfully",
        "savedCalculation": saved.as_dict(),
    })


@bp.route("/calculations", methods=["GET"])
@login_required
def list_calculations():
    calculations = (
        SavedCalculation.query
        .filter_by(user_id=g.user.id)
        .order_by(SavedCalculation.created_at.desc(), SavedCalculation.id.desc())
        .all()
    )
    return jsonify({"calculations": SavedCalculation.as_dicts(calculations)})
