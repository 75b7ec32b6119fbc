"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from flipscore.models.deal import RawDealInput


# ---- Request schemas ----

class DealRequest(BaseModel):
    """Raw deal as entered. Money fields may be text ("$300,000") or numbers."""
    arv: str | Decimal | None = Field(None, description="After-repair value")
    purchase_price: str | Decimal | None = None
    repair_costs: str | Decimal | None = None

    # Ratings are range-checked here, not by the validator
    location_score: int = Field(5, ge=1, le=10)
    market_trend: int = Field(5, ge=1, le=10)
    rental_demand: int = Field(5, ge=1, le=10)

    days_on_market: int | None = 0
    comparable_sales_count: int = Field(0, ge=0)

    def to_raw(self) -> RawDealInput:
        return RawDealInput(
            after_repair_value=self.arv,
            purchase_price=self.purchase_price,
            repair_costs=self.repair_costs,
            location_score=self.location_score,
            market_trend=self.market_trend,
            rental_demand=self.rental_demand,
            days_on_market=self.days_on_market,
            comparable_sales_count=self.comparable_sales_count,
        )


class AdviceRequest(DealRequest):
    question: str = Field(..., min_length=1)


# ---- Response schemas ----

class ValidationResponse(BaseModel):
    errors: list[str]


class SubScoreResponse(BaseModel):
    name: str
    points: Decimal
    max_points: Decimal


class MetricsResponse(BaseModel):
    total_cost: Decimal
    expected_profit: Decimal
    profit_margin: int
    profit_margin_raw: Decimal
    repair_ratio: int


class ScoreResultResponse(BaseModel):
    total_score: int
    label: str
    breakdown: list[SubScoreResponse]
    metrics: MetricsResponse


class ScoreResponse(BaseModel):
    errors: list[str] = []
    result: ScoreResultResponse | None = None
    max_offer: Decimal


class MaxOfferResponse(BaseModel):
    max_offer: Decimal


class ShareResponse(BaseModel):
    text: str
    links: dict[str, str]


class AdviceResponse(BaseModel):
    advice: str | None = None
