"""Score result data types."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class ScoreComponent(Enum):
    PROFIT_POTENTIAL = "Profit Potential"
    REPAIR_EFFICIENCY = "Repair Efficiency"
    MARKET_LOCATION = "Market & Location"
    DEAL_VELOCITY = "Deal Velocity"
    COMPARABLES_CONFIDENCE = "Comparables Confidence"


@dataclass(frozen=True)
class SubScore:
    component: ScoreComponent
    points: Decimal
    max_points: Decimal

    @property
    def label(self) -> str:
        return self.component.value

    @property
    def fraction(self) -> Decimal:
        """Achieved share of the component's budget, 0-1."""
        if self.max_points == 0:
            return Decimal("0")
        return self.points / self.max_points


@dataclass(frozen=True)
class ScoreBreakdown:
    profit_potential: SubScore
    repair_efficiency: SubScore
    market_location: SubScore
    deal_velocity: SubScore
    comparables_confidence: SubScore
    total_score: int  # 0-100

    @property
    def components(self) -> tuple[SubScore, ...]:
        return (
            self.profit_potential,
            self.repair_efficiency,
            self.market_location,
            self.deal_velocity,
            self.comparables_confidence,
        )

    @property
    def max_total(self) -> Decimal:
        return sum((c.max_points for c in self.components), Decimal("0"))


@dataclass(frozen=True)
class ScoreMetrics:
    total_cost: Decimal
    expected_profit: Decimal  # Negative = loss
    profit_margin: int  # Rounded, for display
    profit_margin_raw: Decimal  # Unrounded, for threshold comparisons
    repair_ratio: int  # Rounded, for display


@dataclass(frozen=True)
class ScoreResult:
    breakdown: ScoreBreakdown
    metrics: ScoreMetrics

    @property
    def total_score(self) -> int:
        return self.breakdown.total_score
