"""Plain-text key/value codec for browser-local session state.

The dashboard keeps the encoded dict in a local dcc.Store. Stored data is
untrusted: missing or malformed entries fall back to defaults.
"""

import logging
from collections.abc import Mapping
from dataclasses import replace

from flipscore.models.deal import RawDealInput
from flipscore.models.session import SessionState

logger = logging.getLogger(__name__)

KEY_PREFIX = "flipscore."

KEY_ARV = KEY_PREFIX + "arv"
KEY_PURCHASE_PRICE = KEY_PREFIX + "purchase_price"
KEY_REPAIR_COSTS = KEY_PREFIX + "repair_costs"
KEY_LOCATION_SCORE = KEY_PREFIX + "location_score"
KEY_MARKET_TREND = KEY_PREFIX + "market_trend"
KEY_RENTAL_DEMAND = KEY_PREFIX + "rental_demand"
KEY_DAYS_ON_MARKET = KEY_PREFIX + "days_on_market"
KEY_COMPARABLE_SALES = KEY_PREFIX + "comparable_sales_count"
KEY_SHARE_COUNT = KEY_PREFIX + "share_count"
KEY_SEEN_TUTORIAL = KEY_PREFIX + "seen_tutorial"

_TRUE_VALUES = {"true", "1", "yes"}


def _text(value) -> str:
    return "" if value is None else str(value)


def _read_int(data: Mapping[str, str], key: str, default: int | None) -> int | None:
    raw = data.get(key)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        logger.warning("Ignoring malformed stored value for %s: %r", key, raw)
        return default


def encode_session(state: SessionState) -> dict[str, str]:
    """Flatten session state into plain-text keys and values."""
    deal = state.deal
    return {
        KEY_ARV: _text(deal.after_repair_value),
        KEY_PURCHASE_PRICE: _text(deal.purchase_price),
        KEY_REPAIR_COSTS: _text(deal.repair_costs),
        KEY_LOCATION_SCORE: str(deal.location_score),
        KEY_MARKET_TREND: str(deal.market_trend),
        KEY_RENTAL_DEMAND: str(deal.rental_demand),
        KEY_DAYS_ON_MARKET: _text(deal.days_on_market),
        KEY_COMPARABLE_SALES: str(deal.comparable_sales_count),
        KEY_SHARE_COUNT: str(state.share_count),
        KEY_SEEN_TUTORIAL: "true" if state.seen_tutorial else "false",
    }


def decode_session(data: Mapping[str, str] | None) -> SessionState:
    """Rebuild session state from stored key/values. Never raises on bad data."""
    if not data:
        return SessionState()

    defaults = RawDealInput()
    deal = RawDealInput(
        after_repair_value=_text(data.get(KEY_ARV)),
        purchase_price=_text(data.get(KEY_PURCHASE_PRICE)),
        repair_costs=_text(data.get(KEY_REPAIR_COSTS)),
        location_score=_read_int(data, KEY_LOCATION_SCORE, defaults.location_score),
        market_trend=_read_int(data, KEY_MARKET_TREND, defaults.market_trend),
        rental_demand=_read_int(data, KEY_RENTAL_DEMAND, defaults.rental_demand),
        days_on_market=_read_int(data, KEY_DAYS_ON_MARKET, None),
        comparable_sales_count=_read_int(
            data, KEY_COMPARABLE_SALES, defaults.comparable_sales_count
        ),
    )

    share_count = _read_int(data, KEY_SHARE_COUNT, 0)
    if share_count < 0:
        logger.warning("Ignoring negative stored share count: %d", share_count)
        share_count = 0

    seen = str(data.get(KEY_SEEN_TUTORIAL, "")).strip().lower() in _TRUE_VALUES

    return SessionState(deal=deal, share_count=share_count, seen_tutorial=seen)


def mark_tutorial_seen(state: SessionState) -> SessionState:
    return replace(state, seen_tutorial=True)
