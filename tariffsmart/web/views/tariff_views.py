"""
Tariff Impact Calculator API Views.

Both endpoints share one estimator run; the premium endpoint only changes the
presentation options.
"""

from flask import Blueprint, current_app, g, jsonify

from tariffsmart.logging_utils import log_calculation_event
from tariffsmart.services.tariff_calculator import (
    CountryRateTable,
    EstimatorOptions,
    estimate_impact,
    to_decimal,
)
from tariffsmart.web.db.models import Country
from tariffsmart.web.hooks import premium_required
from tariffsmart.web.schemas import CalculationRequest, parse_body

bp = Blueprint("tariff", __name__, url_prefix="/api")


def _run_estimate(event_type: str, options: EstimatorOptions):
    request_data = parse_body(CalculationRequest)

    rates = CountryRateTable.from_countries(Country.query.all())
    summary = estimate_impact(request_data.line_items(), rates)

    log_calculation_event(event_type, summary, user_id=g.user.id if g.user else None)
    return jsonify(summary.as_dict(options))


@bp.route("/calculate-tariff-impact", methods=["POST"])
def calculate_tariff_impact():
    """
    Estimate the cost increase of a spending basket.

    Request body:
        {"items": [{"category": "Electronics", "amount": 100, "country": "China"}]}

    Returns:
        {
            "calculations": [...],
            "totalSpending": 100,
            "totalIncrease": "55.00",
            "percentageIncrease": "55.00"
        }
    """
    return _run_estimate("calculate", EstimatorOptions())


@bp.route("/premium/detailed-analysis", methods=["POST"])
@premium_required
def detailed_analysis():
    """Same request as the calculator, with per-item price/retail impact and projections."""
    options = EstimatorOptions(
        detailed=True,
        retail_markup=to_decimal(current_app.config["RETAIL_MARKUP"]),
        projection_months=current_app.config["PROJECTION_MONTHS"],
    )
    return _run_estimate("detailed_analysis", options)
