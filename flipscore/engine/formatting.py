"""Display formatting and colour bands for scores and metrics."""

from decimal import Decimal

from flipscore.engine.money import round_whole, to_decimal

# Score label thresholds (total score, 0-100)
SCORE_LABELS: tuple[tuple[int, str], ...] = (
    (80, "Excellent Deal"),
    (60, "Good Deal"),
    (40, "Fair Deal"),
)
DEFAULT_SCORE_LABEL = "Risky Deal"

# Profit margin bands, compared against the unrounded margin
MARGIN_BANDS: tuple[tuple[Decimal, str], ...] = (
    (Decimal("20"), "good"),
    (Decimal("10"), "fair"),
)
DEFAULT_MARGIN_BAND = "poor"

BAND_COLORS = {
    "good": "#2ecc71",
    "fair": "#f39c12",
    "poor": "#e94560",
}


def format_currency(amount) -> str:
    """Whole-dollar currency, e.g. $160,000 or -$10,000."""
    value = round_whole(to_decimal(amount))
    if value < 0:
        return f"-${-value:,}"
    return f"${value:,}"


def format_percent(value) -> str:
    return f"{round_whole(to_decimal(value))}%"


def score_label(total_score: int) -> str:
    for threshold, label in SCORE_LABELS:
        if total_score >= threshold:
            return label
    return DEFAULT_SCORE_LABEL


def score_color(total_score: int) -> str:
    if total_score >= 60:
        return BAND_COLORS["good"]
    if total_score >= 40:
        return BAND_COLORS["fair"]
    return BAND_COLORS["poor"]


def margin_band(profit_margin_raw: Decimal) -> str:
    """Colour band for a profit margin. Uses the raw margin so 19.6% is not 'good'."""
    if profit_margin_raw.is_nan():
        return DEFAULT_MARGIN_BAND
    for threshold, band in MARGIN_BANDS:
        if profit_margin_raw >= threshold:
            return band
    return DEFAULT_MARGIN_BAND
