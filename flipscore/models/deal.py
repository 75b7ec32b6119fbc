"""Deal input data types."""

from dataclasses import dataclass
from decimal import Decimal

# Raw money fields arrive as free text from form inputs, or as numbers from JSON.
MoneyText = str | int | float | Decimal | None

# Canonical comparable-sales buckets: 0, 1-2, 3-4, 5+
COMPARABLE_SALES_BUCKETS: tuple[int, ...] = (0, 1, 3, 5)

COMPARABLE_SALES_LABELS: dict[int, str] = {
    0: "0",
    1: "1-2",
    3: "3-4",
    5: "5+",
}


def comparable_sales_bucket(count: int) -> int:
    """Map a raw count of comparable sales onto its canonical bucket."""
    for bucket in reversed(COMPARABLE_SALES_BUCKETS):
        if count >= bucket:
            return bucket
    return 0


@dataclass(frozen=True)
class RawDealInput:
    """Deal as entered by the user, money fields not yet parsed."""
    after_repair_value: MoneyText = ""
    purchase_price: MoneyText = ""
    repair_costs: MoneyText = ""
    location_score: int = 5  # 1-10
    market_trend: int = 5  # 1-10
    rental_demand: int = 5  # 1-10
    days_on_market: int | None = 0
    comparable_sales_count: int = 0  # one of COMPARABLE_SALES_BUCKETS


@dataclass(frozen=True)
class DealInput:
    """Fully parsed deal. Values are not range-checked here."""
    after_repair_value: Decimal
    purchase_price: Decimal = Decimal("0")
    repair_costs: Decimal = Decimal("0")
    location_score: int = 5
    market_trend: int = 5
    rental_demand: int = 5
    days_on_market: int = 0
    comparable_sales_count: int = 0

    @property
    def total_cost(self) -> Decimal:
        return self.purchase_price + self.repair_costs
