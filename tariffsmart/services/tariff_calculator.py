"""
Tariff Impact Estimator - Deterministic Calculation Service

Pure functions over plain records; no database access and no request state.
The view layer builds a CountryRateTable from the countries table and hands
it in together with the validated line items.

Algorithm:
1. LOOKUP    - Resolve each item's country to (base, reciprocal) percentages
2. LINE ITEM - increase = amount * (base + reciprocal) / 100
3. AGGREGATE - Sum spending and increase over the items that resolved

Design Principles:
- Exact country name match (case-sensitive, no fuzzy matching)
- Unknown country marks that item only; the batch still completes
- Decimal arithmetic end to end, rounding only when formatting for output
- percentageIncrease is 0 when nothing was spent
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Mapping, Optional

logger = logging.getLogger(__name__)

COUNTRY_NOT_FOUND = "Country not found"

HUNDRED = Decimal("100")
ZERO = Decimal("0")
CENTS = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """Convert int/float/str/Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def format_amount(value: Decimal) -> str:
    """Two-decimal string, e.g. Decimal('55') -> '55.00'."""
    return str(value.quantize(CENTS, rounding=ROUND_HALF_UP))


def as_json_number(value: Decimal):
    """Integral values render as int, everything else as float."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


# =============================================================================
# Records
# =============================================================================

@dataclass(frozen=True)
class CountryRate:
    """Reference tariff data for one country (read-only at request time)."""
    name: str
    base_tariff_percent: Decimal
    reciprocal_tariff_percent: Decimal
    effective_date: Optional[str] = None
    impact_level: Optional[str] = None

    @property
    def total_tariff_percent(self) -> Decimal:
        return self.base_tariff_percent + self.reciprocal_tariff_percent

    @classmethod
    def from_country(cls, country) -> "CountryRate":
        """Build from a Country model row (or anything with the same attributes)."""
        return cls(
            name=country.name,
            base_tariff_percent=to_decimal(country.base_tariff),
            reciprocal_tariff_percent=to_decimal(country.reciprocal_tariff),
            effective_date=country.effective_date,
            impact_level=country.impact_level,
        )


@dataclass(frozen=True)
class LineItem:
    """One row of calculator input; amount is already validated as > 0."""
    category: str
    amount: Decimal
    country: str

    @classmethod
    def build(cls, category: str, amount, country: str) -> "LineItem":
        return cls(category=category, amount=to_decimal(amount), country=country)


@dataclass(frozen=True)
class EstimatorOptions:
    """
    Presentation options for a calculation run.

    detailed: include premium per-line fields and summary insights
    retail_markup: multiplier from import cost increase to shelf price increase
    projection_months: horizon for the spending projection
    """
    detailed: bool = False
    retail_markup: Decimal = Decimal("1.3")
    projection_months: int = 12


@dataclass(frozen=True)
class LineItemResult:
    category: str
    amount: Decimal
    country: str
    base_tariff_percent: Optional[Decimal] = None
    reciprocal_tariff_percent: Optional[Decimal] = None
    increase_amount: Decimal = ZERO
    effective_date: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def total_tariff_percent(self) -> Optional[Decimal]:
        if not self.ok:
            return None
        return self.base_tariff_percent + self.reciprocal_tariff_percent

    def as_dict(self, options: Optional[EstimatorOptions] = None) -> Dict[str, Any]:
        """Wire format used by the calculator endpoints."""
        options = options or EstimatorOptions()
        result: Dict[str, Any] = {
            "category": self.category,
            "amount": as_json_number(self.amount),
            "country": self.country,
        }

        if not self.ok:
            result["increase"] = 0
            result["error"] = self.error
            return result

        result["originalTariff"] = as_json_number(self.base_tariff_percent)
        result["reciprocalTariff"] = as_json_number(self.reciprocal_tariff_percent)
        result["totalTariff"] = as_json_number(self.total_tariff_percent)
        result["increase"] = format_amount(self.increase_amount)

        if options.detailed:
            price_impact = self.increase_amount / self.amount * HUNDRED
            result["priceImpact"] = format_amount(price_impact) + "%"
            result["effectiveDate"] = self.effective_date
            result["estimatedRetailImpact"] = format_amount(
                self.increase_amount * options.retail_markup
            )

        return result


@dataclass
class CalculationSummary:
    line_results: List[LineItemResult] = field(default_factory=list)
    total_spending: Decimal = ZERO
    total_increase: Decimal = ZERO

    @property
    def percentage_increase(self) -> Decimal:
        if self.total_spending == ZERO:
            return ZERO
        return self.total_increase / self.total_spending * HUNDRED

    @property
    def errors(self) -> List[LineItemResult]:
        return [r for r in self.line_results if not r.ok]

    def as_dict(self, options: Optional[EstimatorOptions] = None) -> Dict[str, Any]:
        options = options or EstimatorOptions()
        result: Dict[str, Any] = {
            "calculations": [r.as_dict(options) for r in self.line_results],
            "totalSpending": as_json_number(self.total_spending),
            "totalIncrease": format_amount(self.total_increase),
            "percentageIncrease": format_amount(self.percentage_increase),
        }
        if options.detailed:
            result["premiumInsights"] = {
                "monthlyProjection": format_amount(
                    self.total_increase * options.projection_months
                ),
            }
        return result


# =============================================================================
# Country Rate Lookup
# =============================================================================

class CountryRateTable:
    """
    Preloaded name -> CountryRate map.

    Built once per request from the countries table; lookups are exact and
    case-sensitive.
    """

    def __init__(self, rates: Iterable[CountryRate] = ()):
        self._rates: Dict[str, CountryRate] = {r.name: r for r in rates}

    @classmethod
    def from_countries(cls, countries) -> "CountryRateTable":
        return cls(CountryRate.from_country(c) for c in countries)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Mapping[str, Any]]) -> "CountryRateTable":
        """Build from {"China": {"base": 10, "reciprocal": 45}, ...}."""
        return cls(
            CountryRate(
                name=name,
                base_tariff_percent=to_decimal(values["base"]),
                reciprocal_tariff_percent=to_decimal(values["reciprocal"]),
                effective_date=values.get("effective_date"),
            )
            for name, values in mapping.items()
        )

    def get(self, name: str) -> Optional[CountryRate]:
        return self._rates.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._rates

    def __len__(self) -> int:
        return len(self._rates)


# =============================================================================
# Line-Item Calculator + Aggregator
# =============================================================================

def calculate_line_item(item: LineItem, rate: Optional[CountryRate]) -> LineItemResult:
    """Apply base + reciprocal tariff to one item, or mark it if the country is unknown."""
    if rate is None:
        return LineItemResult(
            category=item.category,
            amount=item.amount,
            country=item.country,
            error=COUNTRY_NOT_FOUND,
        )

    increase = item.amount * rate.total_tariff_percent / HUNDRED
    return LineItemResult(
        category=item.category,
        amount=item.amount,
        country=item.country,
        base_tariff_percent=rate.base_tariff_percent,
        reciprocal_tariff_percent=rate.reciprocal_tariff_percent,
        increase_amount=increase,
        effective_date=rate.effective_date,
    )


def aggregate(results: Iterable[LineItemResult]) -> CalculationSummary:
    """Fold line results into totals; error-marked results are listed but not summed."""
    summary = CalculationSummary()
    for result in results:
        summary.line_results.append(result)
        if not result.ok:
            continue
        summary.total_spending += result.amount
        summary.total_increase += result.increase_amount
    return summary


def estimate_impact(items: Iterable[LineItem], rates: CountryRateTable) -> CalculationSummary:
    """Run the full estimate: lookup, per-item calculation, aggregation."""
    summary = aggregate(calculate_line_item(item, rates.get(item.country)) for item in items)
    if summary.errors:
        logger.info(
            "Tariff estimate: %d item(s) with unknown country: %s",
            len(summary.errors),
            sorted({r.country for r in summary.errors}),
        )
    return summary
