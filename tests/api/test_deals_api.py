"""API tests for the deal routes."""

from decimal import Decimal
from types import SimpleNamespace

import anthropic
import pytest
from fastapi.testclient import TestClient

from flipscore.api.app import app
from flipscore.config import settings


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestValidate:
    def test_valid(self, client, canonical_payload):
        resp = client.post("/api/v1/deals/validate", json=canonical_payload)
        assert resp.status_code == 200
        assert resp.json() == {"errors": []}

    def test_invalid(self, client):
        resp = client.post("/api/v1/deals/validate", json={
            "arv": "abc", "purchase_price": -5, "repair_costs": 0, "days_on_market": -1,
        })
        assert resp.json()["errors"] == [
            "ARV must be greater than 0",
            "Purchase price cannot be negative",
            "Days on market must be positive",
        ]


class TestScore:
    def test_canonical(self, client, canonical_payload):
        resp = client.post("/api/v1/deals/score", json=canonical_payload)
        assert resp.status_code == 200
        body = resp.json()
        assert body["errors"] == []
        assert Decimal(body["max_offer"]) == Decimal("160000")

        result = body["result"]
        assert result["total_score"] == 85
        assert result["label"] == "Excellent Deal"
        assert [s["name"] for s in result["breakdown"]] == [
            "Profit Potential",
            "Repair Efficiency",
            "Market & Location",
            "Deal Velocity",
            "Comparables Confidence",
        ]
        market = result["breakdown"][2]
        assert Decimal(market["points"]) == Decimal("14.5")
        assert Decimal(market["max_points"]) == Decimal("20")

        metrics = result["metrics"]
        assert Decimal(metrics["expected_profit"]) == Decimal("100000")
        assert metrics["profit_margin"] == 33
        assert metrics["repair_ratio"] == 17

    def test_invalid_input_is_not_an_http_error(self, client):
        resp = client.post("/api/v1/deals/score", json={"arv": "0", "purchase_price": "100", "repair_costs": "0"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["result"] is None
        assert body["errors"] == ["ARV must be greater than 0"]

    def test_astronomical_arv_reported_as_field_error(self, client):
        resp = client.post("/api/v1/deals/score", json={"arv": "1e1000000", "purchase_price": "0", "repair_costs": "0"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["result"] is None
        assert body["errors"] == ["ARV must be greater than 0"]
        assert Decimal(body["max_offer"]) == Decimal("0")

    def test_rating_out_of_range_rejected_by_schema(self, client, canonical_payload):
        resp = client.post("/api/v1/deals/score", json={**canonical_payload, "location_score": 11})
        assert resp.status_code == 422

    def test_losing_deal(self, client):
        resp = client.post("/api/v1/deals/score", json={
            "arv": 100000, "purchase_price": 90000, "repair_costs": 20000,
        })
        metrics = resp.json()["result"]["metrics"]
        assert Decimal(metrics["expected_profit"]) == Decimal("-10000")
        assert metrics["profit_margin"] == -10


class TestMaxOffer:
    def test_max_offer(self, client):
        resp = client.post("/api/v1/deals/max-offer", json={"arv": "300000", "repair_costs": "50000"})
        assert Decimal(resp.json()["max_offer"]) == Decimal("160000")

    def test_missing_repairs(self, client):
        resp = client.post("/api/v1/deals/max-offer", json={"arv": "300000"})
        assert Decimal(resp.json()["max_offer"]) == Decimal("0")

    def test_astronomical_arv(self, client):
        resp = client.post("/api/v1/deals/max-offer", json={"arv": "1e1000000", "repair_costs": "0"})
        assert resp.status_code == 200
        assert Decimal(resp.json()["max_offer"]) == Decimal("0")


class TestExport:
    def test_csv(self, client, canonical_payload):
        resp = client.post("/api/v1/deals/export", json=canonical_payload)
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        assert resp.text.splitlines() == [
            "ARV,PurchasePrice,RepairCosts,Score,ProfitMargin%",
            "300000,150000,50000,85,33",
        ]

    def test_invalid(self, client):
        resp = client.post("/api/v1/deals/export", json={"arv": "", "purchase_price": "1", "repair_costs": "1"})
        assert resp.status_code == 422


class TestShare:
    def test_share(self, client, canonical_payload):
        resp = client.post("/api/v1/deals/share", json=canonical_payload)
        assert resp.status_code == 200
        body = resp.json()
        assert body["text"].startswith("My flip deal scored 85/100!")
        assert "x" in body["links"]
        assert body["links"]["email"].startswith("mailto:")

    def test_unscoreable(self, client, canonical_payload):
        resp = client.post("/api/v1/deals/share", json={**canonical_payload, "arv": "0"})
        assert resp.status_code == 422


class TestAdvice:
    def test_without_api_key(self, client, monkeypatch, canonical_payload):
        monkeypatch.setattr(settings, "anthropic_api_key", "")
        resp = client.post("/api/v1/deals/advice", json={**canonical_payload, "question": "Offer lower?"})
        assert resp.status_code == 200
        assert resp.json() == {"advice": None}

    def test_question_required(self, client, canonical_payload):
        resp = client.post("/api/v1/deals/advice", json=canonical_payload)
        assert resp.status_code == 422

    def test_empty_model_response_is_not_an_http_error(self, client, monkeypatch, canonical_payload):
        class EmptyMessages:
            async def create(self, **kwargs):
                return SimpleNamespace(content=[])

        class EmptyClient:
            def __init__(self, **kwargs):
                self.messages = EmptyMessages()

        monkeypatch.setattr(settings, "anthropic_api_key", "test-key")
        monkeypatch.setattr(anthropic, "AsyncAnthropic", EmptyClient)
        resp = client.post("/api/v1/deals/advice", json={**canonical_payload, "question": "Offer lower?"})
        assert resp.status_code == 200
        assert resp.json() == {"advice": None}
