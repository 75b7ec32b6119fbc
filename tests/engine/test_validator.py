"""Unit tests for deal input validation."""

from dataclasses import replace

from flipscore.engine.validator import (
    ARV_ERROR,
    DAYS_ON_MARKET_ERROR,
    PURCHASE_PRICE_ERROR,
    REPAIR_COSTS_ERROR,
    validate_deal,
)
from flipscore.models.deal import RawDealInput


class TestValidateDeal:
    def test_valid_deal_has_no_errors(self, canonical_raw):
        assert validate_deal(canonical_raw) == []

    def test_mixed_invalid_input(self):
        """Bad ARV, negative price and days; repair costs are fine."""
        raw = RawDealInput(
            after_repair_value="abc",
            purchase_price=-5,
            repair_costs=0,
            days_on_market=-1,
        )
        assert validate_deal(raw) == [ARV_ERROR, PURCHASE_PRICE_ERROR, DAYS_ON_MARKET_ERROR]

    def test_empty_form_reports_every_money_field(self):
        assert validate_deal(RawDealInput()) == [ARV_ERROR, PURCHASE_PRICE_ERROR, REPAIR_COSTS_ERROR]

    def test_zero_arv_rejected(self, canonical_raw):
        raw = replace(canonical_raw, after_repair_value="0")
        assert validate_deal(raw) == [ARV_ERROR]

    def test_astronomical_arv_rejected(self, canonical_raw):
        raw = replace(canonical_raw, after_repair_value="1e1000000")
        assert validate_deal(raw) == [ARV_ERROR]

    def test_zero_price_and_repairs_allowed(self, canonical_raw):
        raw = replace(canonical_raw, purchase_price="0", repair_costs=0)
        assert validate_deal(raw) == []

    def test_negative_repairs(self, canonical_raw):
        raw = replace(canonical_raw, repair_costs="-1")
        assert validate_deal(raw) == [REPAIR_COSTS_ERROR]

    def test_unparseable_repairs(self, canonical_raw):
        raw = replace(canonical_raw, repair_costs="lots")
        assert validate_deal(raw) == [REPAIR_COSTS_ERROR]

    def test_non_finite_arv_rejected(self, canonical_raw):
        raw = replace(canonical_raw, after_repair_value="Infinity")
        assert validate_deal(raw) == [ARV_ERROR]

    def test_missing_days_on_market_allowed(self, canonical_raw):
        raw = replace(canonical_raw, days_on_market=None)
        assert validate_deal(raw) == []

    def test_ratings_not_range_checked(self, canonical_raw):
        raw = replace(canonical_raw, location_score=0, market_trend=11, comparable_sales_count=-2)
        assert validate_deal(raw) == []

    def test_deterministic(self):
        raw = RawDealInput(after_repair_value="", purchase_price="-1", repair_costs="x", days_on_market=-3)
        first = validate_deal(raw)
        assert len(first) == 4
        for _ in range(5):
            assert validate_deal(raw) == first
