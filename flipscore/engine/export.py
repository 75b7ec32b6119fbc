"""CSV export of a single deal and its score."""

import csv
import io
from decimal import Decimal

from flipscore.models.deal import DealInput
from flipscore.models.score import ScoreResult

CSV_HEADER: tuple[str, ...] = ("ARV", "PurchasePrice", "RepairCosts", "Score", "ProfitMargin%")


def _plain_number(value: Decimal) -> str:
    """Render without exponent or separators: 300000, 1500.5."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def export_row(deal: DealInput, result: ScoreResult | None) -> list[str]:
    score = str(result.total_score) if result is not None else ""
    margin = str(result.metrics.profit_margin) if result is not None else ""
    return [
        _plain_number(deal.after_repair_value),
        _plain_number(deal.purchase_price),
        _plain_number(deal.repair_costs),
        score,
        margin,
    ]


def export_csv(deal: DealInput, result: ScoreResult | None) -> str:
    """Header line plus one data line, newline-terminated."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerow(export_row(deal, result))
    return buf.getvalue()
