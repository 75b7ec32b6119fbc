"""Share text and social platform links for a scored deal."""

from dataclasses import replace
from decimal import Decimal
from urllib.parse import quote, urlencode

from flipscore.engine.formatting import format_currency
from flipscore.models.score import ScoreResult
from flipscore.models.session import SessionState

SHARE_PLATFORMS: tuple[str, ...] = ("x", "facebook", "linkedin", "whatsapp", "reddit", "email")

EMAIL_SUBJECT = "Check out this flip deal"


def build_share_text(result: ScoreResult, max_offer: Decimal) -> str:
    metrics = result.metrics
    return (
        f"My flip deal scored {result.total_score}/100! "
        f"Profit margin: {metrics.profit_margin}% | "
        f"Expected profit: {format_currency(metrics.expected_profit)} | "
        f"Max offer (70% rule): {format_currency(max_offer)}"
    )


def build_share_links(text: str, url: str, hashtags: str = "") -> dict[str, str]:
    """Platform share URLs keyed by SHARE_PLATFORMS entries."""
    x_params = {"text": text, "url": url}
    if hashtags:
        x_params["hashtags"] = hashtags
    body = f"{text}\n\n{url}"
    return {
        "x": "https://twitter.com/intent/tweet?" + urlencode(x_params),
        "facebook": "https://www.facebook.com/sharer/sharer.php?" + urlencode({"u": url, "quote": text}),
        "linkedin": "https://www.linkedin.com/sharing/share-offsite/?" + urlencode({"url": url}),
        "whatsapp": "https://wa.me/?" + urlencode({"text": f"{text} {url}"}),
        "reddit": "https://www.reddit.com/submit?" + urlencode({"url": url, "title": text}),
        "email": f"mailto:?subject={quote(EMAIL_SUBJECT)}&body={quote(body)}",
    }


def record_share(state: SessionState) -> SessionState:
    return replace(state, share_count=state.share_count + 1)
