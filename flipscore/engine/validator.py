"""Deal input validation.

Pure function: RawDealInput in, ordered list of messages out. Every field is
checked independently so all problems are reported at once.
"""

from flipscore.engine.money import parse_money
from flipscore.models.deal import RawDealInput

ARV_ERROR = "ARV must be greater than 0"
PURCHASE_PRICE_ERROR = "Purchase price cannot be negative"
REPAIR_COSTS_ERROR = "Repair costs cannot be negative"
DAYS_ON_MARKET_ERROR = "Days on market must be positive"


def validate_deal(raw: RawDealInput) -> list[str]:
    """Return validation messages in field order. Empty list means valid.

    Rating sliders and the comparable-sales select are range-constrained by
    the input widgets, so they are not checked here.
    """
    errors: list[str] = []

    arv = parse_money(raw.after_repair_value)
    if arv is None or arv <= 0:
        errors.append(ARV_ERROR)

    purchase_price = parse_money(raw.purchase_price)
    if purchase_price is None or purchase_price < 0:
        errors.append(PURCHASE_PRICE_ERROR)

    repair_costs = parse_money(raw.repair_costs)
    if repair_costs is None or repair_costs < 0:
        errors.append(REPAIR_COSTS_ERROR)

    if raw.days_on_market is not None and raw.days_on_market < 0:
        errors.append(DAYS_ON_MARKET_ERROR)

    return errors
