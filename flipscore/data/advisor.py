"""Claude API client for the deal assistant box."""

import logging
from decimal import Decimal

import anthropic

from flipscore.config import settings
from flipscore.engine.formatting import format_currency
from flipscore.models.deal import COMPARABLE_SALES_LABELS, DealInput

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an experienced house-flipping advisor. Answer the investor's "
    "question about the deal below in 2-3 short paragraphs. Be direct and "
    "practical. The ratings are the investor's own opinions on a 1-10 scale, "
    "not market data."
)


def build_advisor_context(deal: DealInput, max_offer: Decimal) -> str:
    """Plain-text summary of the deal handed to the assistant."""
    comps = COMPARABLE_SALES_LABELS.get(deal.comparable_sales_count, str(deal.comparable_sales_count))
    lines = [
        f"After-repair value (ARV): {format_currency(deal.after_repair_value)}",
        f"Purchase price: {format_currency(deal.purchase_price)}",
        f"Repair costs: {format_currency(deal.repair_costs)}",
        f"Location score: {deal.location_score}/10",
        f"Market trend: {deal.market_trend}/10",
        f"Rental demand: {deal.rental_demand}/10",
        f"Days on market: {deal.days_on_market}",
        f"Comparable sales: {comps}",
        f"Max offer (70% rule): {format_currency(max_offer)}",
    ]
    return "\n".join(lines)


async def ask_advisor(question: str, deal: DealInput, max_offer: Decimal) -> str | None:
    """Ask Claude about the deal.

    Returns None if the API key is missing, the question is blank, or the call fails.
    """
    api_key = settings.anthropic_api_key
    if not api_key:
        logger.debug("Anthropic API key not configured, skipping advice")
        return None

    if not question or not question.strip():
        return None

    prompt = f"""Deal:
{build_advisor_context(deal, max_offer)}

Question: {question.strip()}"""

    try:
        client = anthropic.AsyncAnthropic(api_key=api_key)
        message = await client.messages.create(
            model=settings.assistant_model,
            max_tokens=settings.assistant_max_tokens,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )
    except Exception as e:
        logger.warning("Claude advice request failed: %s", e)
        return None

    blocks = getattr(message, "content", None) or []
    text = next((block.text for block in blocks if getattr(block, "type", None) == "text"), None)
    if not text:
        logger.warning("Claude advice response had no text content")
        return None
    return text
