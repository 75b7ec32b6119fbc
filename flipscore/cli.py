"""CLI for scoring a single flip deal.

Usage:
    python -m flipscore.cli --arv 300000 --price 150000 --repairs 50000 --location 8 --trend 7 --demand 6 --days 45 --comps 5
    python -m flipscore.cli --arv '$250,000' --price 180000 --repairs 30000 --csv
"""

import argparse
import logging
import sys

from flipscore.config import settings
from flipscore.engine.export import export_csv
from flipscore.engine.formatting import format_currency, format_percent, score_label
from flipscore.engine.parsing import parse_deal
from flipscore.engine.scorer import compute_max_offer, score_deal
from flipscore.engine.share import build_share_links, build_share_text
from flipscore.models.deal import RawDealInput, comparable_sales_bucket


def _header(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def print_report(result, max_offer) -> None:
    _header(f"Flip Score: {result.total_score}/100  ({score_label(result.total_score)})")
    for sub in result.breakdown.components:
        print(f"  {sub.label:<24} {sub.points:>5} / {sub.max_points}")

    m = result.metrics
    _header("Deal Metrics")
    print(f"  Total Cost:       {format_currency(m.total_cost)}")
    print(f"  Expected Profit:  {format_currency(m.expected_profit)}")
    print(f"  Profit Margin:    {format_percent(m.profit_margin)}")
    print(f"  Repair Ratio:     {format_percent(m.repair_ratio)}")
    print(f"  Max Offer (70%):  {format_currency(max_offer)}")
    print()


def print_share(result, max_offer) -> None:
    text = build_share_text(result, max_offer)
    _header("Share")
    print(f"  {text}")
    print()
    for platform, url in build_share_links(text, settings.share_url, settings.share_hashtags).items():
        print(f"  {platform:>9}: {url}")
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Score a house flip deal")
    parser.add_argument("--arv", required=True, help="After-repair value, e.g. 300000 or '$300,000'")
    parser.add_argument("--price", required=True, help="Purchase price")
    parser.add_argument("--repairs", required=True, help="Repair costs")
    parser.add_argument("--location", type=int, default=5, choices=range(1, 11), metavar="1-10", help="Location score (default: 5)")
    parser.add_argument("--trend", type=int, default=5, choices=range(1, 11), metavar="1-10", help="Market trend (default: 5)")
    parser.add_argument("--demand", type=int, default=5, choices=range(1, 11), metavar="1-10", help="Rental demand (default: 5)")
    parser.add_argument("--days", type=int, default=0, help="Days on market (default: 0)")
    parser.add_argument("--comps", type=int, default=0, help="Number of comparable sales (default: 0)")
    parser.add_argument("--csv", action="store_true", help="Print a CSV row instead of the report")
    parser.add_argument("--share", action="store_true", help="Also print share text and links")
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.log_level)
    args = build_parser().parse_args(argv)

    raw = RawDealInput(
        after_repair_value=args.arv,
        purchase_price=args.price,
        repair_costs=args.repairs,
        location_score=args.location,
        market_trend=args.trend,
        rental_demand=args.demand,
        days_on_market=args.days,
        comparable_sales_count=comparable_sales_bucket(args.comps),
    )

    parsed = parse_deal(raw)
    if not parsed.ok:
        for error in parsed.errors:
            print(f"error: {error}", file=sys.stderr)
        return 1

    deal = parsed.deal
    result = score_deal(deal)
    max_offer = compute_max_offer(deal.after_repair_value, deal.repair_costs)

    if args.csv:
        sys.stdout.write(export_csv(deal, result))
        return 0

    print_report(result, max_offer)
    if args.share:
        print_share(result, max_offer)
    return 0


if __name__ == "__main__":
    sys.exit(main())
