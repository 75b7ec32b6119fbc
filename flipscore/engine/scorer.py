"""Flip deal scoring engine.

Pure function: DealInput in, ScoreResult out. No I/O.

Scoring dimensions (0-100 total):
  Profit potential:        0-40
  Repair efficiency:       0-20
  Market & location:       0-20
  Deal velocity:           0-10
  Comparables confidence:  0-10
"""

from decimal import Decimal

from flipscore.engine.money import money_context, round_whole, to_decimal
from flipscore.models.deal import DealInput
from flipscore.models.score import (
    ScoreBreakdown,
    ScoreComponent,
    ScoreMetrics,
    ScoreResult,
    SubScore,
)

HUNDRED = Decimal("100")

MAX_POINTS: dict[ScoreComponent, Decimal] = {
    ScoreComponent.PROFIT_POTENTIAL: Decimal("40"),
    ScoreComponent.REPAIR_EFFICIENCY: Decimal("20"),
    ScoreComponent.MARKET_LOCATION: Decimal("20"),
    ScoreComponent.DEAL_VELOCITY: Decimal("10"),
    ScoreComponent.COMPARABLES_CONFIDENCE: Decimal("10"),
}

# (threshold, points), checked top-down, first match wins.
PROFIT_MARGIN_TIERS: tuple[tuple[Decimal, Decimal], ...] = (
    (Decimal("30"), Decimal("40")),
    (Decimal("20"), Decimal("30")),
    (Decimal("10"), Decimal("20")),
    (Decimal("0"), Decimal("10")),
)
REPAIR_RATIO_TIERS: tuple[tuple[Decimal, Decimal], ...] = (
    (Decimal("10"), Decimal("20")),
    (Decimal("20"), Decimal("15")),
    (Decimal("30"), Decimal("10")),
)
DAYS_ON_MARKET_TIERS: tuple[tuple[int, Decimal], ...] = (
    (90, Decimal("10")),
    (60, Decimal("7")),
    (30, Decimal("5")),
    (7, Decimal("3")),
)
COMPARABLE_SALES_TIERS: tuple[tuple[int, Decimal], ...] = (
    (5, Decimal("10")),
    (3, Decimal("7")),
    (1, Decimal("4")),
)

MAX_OFFER_ARV_PCT = Decimal("0.70")  # 70% rule


def _at_least(value, tiers, floor: Decimal) -> Decimal:
    if isinstance(value, Decimal) and value.is_nan():
        return floor
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return floor


def _at_most(value, tiers, floor: Decimal) -> Decimal:
    if isinstance(value, Decimal) and value.is_nan():
        return floor
    for threshold, points in tiers:
        if value <= threshold:
            return points
    return floor


def _profit_potential_score(profit_margin: Decimal) -> Decimal:
    """Score 0-40, stepped on profit margin %. Negative margin scores 0."""
    return _at_least(profit_margin, PROFIT_MARGIN_TIERS, Decimal("0"))


def _repair_efficiency_score(repair_ratio: Decimal) -> Decimal:
    """Score 5-20 on repair cost as % of ARV. Some rehab is normal, so never 0."""
    return _at_most(repair_ratio, REPAIR_RATIO_TIERS, Decimal("5"))


def _market_location_score(location_score: int, market_trend: int, rental_demand: int) -> Decimal:
    """Score 0-20, linear in the 1-10 ratings.

    Half from location, half from the average of trend and rental demand.
    """
    location = to_decimal(location_score) / 10 * 10
    market = (to_decimal(market_trend) + to_decimal(rental_demand)) / 20 * 10
    return location + market


def _deal_velocity_score(days_on_market: int) -> Decimal:
    """Score 1-10. Longer on market means more negotiating leverage."""
    return _at_least(days_on_market, DAYS_ON_MARKET_TIERS, Decimal("1"))


def _comparables_confidence_score(comparable_sales_count: int) -> Decimal:
    """Score 0-10. No comps means no confidence in the ARV."""
    return _at_least(comparable_sales_count, COMPARABLE_SALES_TIERS, Decimal("0"))


def _sub_score(component: ScoreComponent, points: Decimal) -> SubScore:
    return SubScore(component=component, points=points, max_points=MAX_POINTS[component])


def score_deal(deal: DealInput) -> ScoreResult | None:
    """Compute the weighted flip score and deal metrics.

    Returns None when ARV is absent, zero, negative or not finite, including
    an ARV too large to do arithmetic with. Other fields are not
    range-checked; callers validate first.
    """
    if deal.after_repair_value is None:
        return None

    with money_context():
        # Unary plus applies the context, so an overflowing ARV becomes Infinity.
        arv = +to_decimal(deal.after_repair_value)
        if not arv.is_finite() or arv <= 0:
            return None

        purchase_price = to_decimal(deal.purchase_price)
        repair_costs = to_decimal(deal.repair_costs)

        total_cost = purchase_price + repair_costs
        expected_profit = arv - total_cost
        profit_margin = expected_profit / arv * HUNDRED
        repair_ratio = repair_costs / arv * HUNDRED

        breakdown_points = (
            _sub_score(ScoreComponent.PROFIT_POTENTIAL, _profit_potential_score(profit_margin)),
            _sub_score(ScoreComponent.REPAIR_EFFICIENCY, _repair_efficiency_score(repair_ratio)),
            _sub_score(
                ScoreComponent.MARKET_LOCATION,
                _market_location_score(deal.location_score, deal.market_trend, deal.rental_demand),
            ),
            _sub_score(ScoreComponent.DEAL_VELOCITY, _deal_velocity_score(deal.days_on_market)),
            _sub_score(
                ScoreComponent.COMPARABLES_CONFIDENCE,
                _comparables_confidence_score(deal.comparable_sales_count),
            ),
        )

        raw_total = sum((s.points for s in breakdown_points), Decimal("0"))
        # Maxima already sum to 100; the clamp only guards future tier changes.
        total_score = min(100, round_whole(raw_total))

        breakdown = ScoreBreakdown(*breakdown_points, total_score=total_score)

        metrics = ScoreMetrics(
            total_cost=total_cost,
            expected_profit=expected_profit,
            profit_margin=round_whole(profit_margin) if profit_margin.is_finite() else 0,
            profit_margin_raw=profit_margin,
            repair_ratio=round_whole(repair_ratio) if repair_ratio.is_finite() else 0,
        )

    return ScoreResult(breakdown=breakdown, metrics=metrics)


def compute_max_offer(after_repair_value, repair_costs) -> Decimal:
    """Maximum recommended purchase price: ARV x 70% - repairs, whole dollars.

    Missing or non-finite inputs give 0, as does a result too large to
    represent. Never negative.
    """
    if after_repair_value is None or repair_costs is None:
        return Decimal("0")

    with money_context():
        arv = +to_decimal(after_repair_value)
        repairs = to_decimal(repair_costs)
        offer = arv * MAX_OFFER_ARV_PCT - repairs
        if not offer.is_finite():
            return Decimal("0")
        offer = Decimal(round_whole(offer))

    return max(Decimal("0"), offer)
