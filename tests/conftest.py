"""Canonical test fixtures used across engine, data and API tests.

Fixture deal: $300K ARV, $150K purchase, $50K repairs, solid market, 45 days
on market, 5+ comps. Scores 85/100 with a $160K max offer.
"""

import pytest
from decimal import Decimal

from flipscore.models.deal import DealInput, RawDealInput


@pytest.fixture
def canonical_deal() -> DealInput:
    return DealInput(
        after_repair_value=Decimal("300000"),
        purchase_price=Decimal("150000"),
        repair_costs=Decimal("50000"),
        location_score=8,
        market_trend=7,
        rental_demand=6,
        days_on_market=45,
        comparable_sales_count=5,
    )


@pytest.fixture
def canonical_raw() -> RawDealInput:
    """Same deal as entered in the form, money still textual."""
    return RawDealInput(
        after_repair_value="$300,000",
        purchase_price="150000",
        repair_costs="50,000",
        location_score=8,
        market_trend=7,
        rental_demand=6,
        days_on_market=45,
        comparable_sales_count=5,
    )


@pytest.fixture
def canonical_payload() -> dict:
    """Same deal as an API request body."""
    return {
        "arv": "300000",
        "purchase_price": 150000,
        "repair_costs": "50000",
        "location_score": 8,
        "market_trend": 7,
        "rental_demand": 6,
        "days_on_market": 45,
        "comparable_sales_count": 5,
    }
