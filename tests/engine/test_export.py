from dataclasses import replace
from decimal import Decimal

from flipscore.engine.export import CSV_HEADER, export_csv, export_row
from flipscore.engine.scorer import score_deal


class TestExport:
    def test_header(self):
        assert ",".join(CSV_HEADER) == "ARV,PurchasePrice,RepairCosts,Score,ProfitMargin%"

    def test_canonical_csv(self, canonical_deal):
        csv_text = export_csv(canonical_deal, score_deal(canonical_deal))
        assert csv_text == (
            "ARV,PurchasePrice,RepairCosts,Score,ProfitMargin%\n"
            "300000,150000,50000,85,33\n"
        )

    def test_fractional_money(self, canonical_deal):
        deal = replace(canonical_deal, repair_costs=Decimal("50000.50"))
        row = export_row(deal, score_deal(deal))
        assert row[2] == "50000.5"

    def test_negative_margin(self, canonical_deal):
        deal = replace(canonical_deal, purchase_price=Decimal("280000"))
        row = export_row(deal, score_deal(deal))
        assert row[4] == "-10"

    def test_no_result_leaves_score_blank(self, canonical_deal):
        assert export_row(canonical_deal, None) == ["300000", "150000", "50000", "", ""]
