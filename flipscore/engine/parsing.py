"""Raw form input to typed DealInput.

First stage of the scoring pipeline: the scorer only ever sees parsed values.
"""

from dataclasses import dataclass

from flipscore.engine.money import parse_money
from flipscore.engine.validator import validate_deal
from flipscore.models.deal import DealInput, RawDealInput


@dataclass(frozen=True)
class ParsedDeal:
    deal: DealInput | None = None
    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.deal is not None


def parse_deal(raw: RawDealInput) -> ParsedDeal:
    """Validate and parse a raw deal. Returns errors instead of raising."""
    errors = validate_deal(raw)
    if errors:
        return ParsedDeal(errors=tuple(errors))

    deal = DealInput(
        after_repair_value=parse_money(raw.after_repair_value),
        purchase_price=parse_money(raw.purchase_price),
        repair_costs=parse_money(raw.repair_costs),
        location_score=raw.location_score,
        market_trend=raw.market_trend,
        rental_demand=raw.rental_demand,
        days_on_market=raw.days_on_market or 0,
        comparable_sales_count=raw.comparable_sales_count,
    )
    return ParsedDeal(deal=deal)
