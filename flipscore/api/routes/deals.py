"""Deal scoring routes."""

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from flipscore.api.schemas import (
    AdviceRequest,
    AdviceResponse,
    DealRequest,
    MaxOfferResponse,
    MetricsResponse,
    ScoreResponse,
    ScoreResultResponse,
    ShareResponse,
    SubScoreResponse,
    ValidationResponse,
)
from flipscore.config import settings
from flipscore.data.advisor import ask_advisor
from flipscore.engine.export import export_csv
from flipscore.engine.formatting import score_label
from flipscore.engine.money import parse_money
from flipscore.engine.parsing import parse_deal
from flipscore.engine.scorer import compute_max_offer, score_deal
from flipscore.engine.share import build_share_links, build_share_text
from flipscore.engine.validator import validate_deal
from flipscore.models.score import ScoreResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/deals", tags=["deals"])


def _max_offer(req: DealRequest):
    return compute_max_offer(parse_money(req.arv), parse_money(req.repair_costs))


def _result_to_response(result: ScoreResult) -> ScoreResultResponse:
    m = result.metrics
    return ScoreResultResponse(
        total_score=result.total_score,
        label=score_label(result.total_score),
        breakdown=[
            SubScoreResponse(name=s.label, points=s.points, max_points=s.max_points)
            for s in result.breakdown.components
        ],
        metrics=MetricsResponse(
            total_cost=m.total_cost,
            expected_profit=m.expected_profit,
            profit_margin=m.profit_margin,
            profit_margin_raw=m.profit_margin_raw,
            repair_ratio=m.repair_ratio,
        ),
    )


@router.post("/validate", response_model=ValidationResponse)
async def validate(req: DealRequest):
    return ValidationResponse(errors=validate_deal(req.to_raw()))


@router.post("/score", response_model=ScoreResponse)
async def score(req: DealRequest):
    """Validate then score. Invalid input is reported in `errors`, not as an HTTP error."""
    parsed = parse_deal(req.to_raw())
    max_offer = _max_offer(req)
    if not parsed.ok:
        return ScoreResponse(errors=list(parsed.errors), result=None, max_offer=max_offer)

    result = score_deal(parsed.deal)
    return ScoreResponse(
        result=_result_to_response(result) if result is not None else None,
        max_offer=max_offer,
    )


@router.post("/max-offer", response_model=MaxOfferResponse)
async def max_offer(req: DealRequest):
    return MaxOfferResponse(max_offer=_max_offer(req))


@router.post("/export", response_class=PlainTextResponse)
async def export(req: DealRequest):
    """One-row CSV: ARV,PurchasePrice,RepairCosts,Score,ProfitMargin%."""
    parsed = parse_deal(req.to_raw())
    if not parsed.ok:
        raise HTTPException(status_code=422, detail=list(parsed.errors))

    result = score_deal(parsed.deal)
    return PlainTextResponse(
        export_csv(parsed.deal, result),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="flip-deal.csv"'},
    )


@router.post("/share", response_model=ShareResponse)
async def share(req: DealRequest):
    parsed = parse_deal(req.to_raw())
    result = score_deal(parsed.deal) if parsed.ok else None
    if result is None:
        raise HTTPException(status_code=422, detail=list(parsed.errors) or "Deal cannot be scored")

    text = build_share_text(result, _max_offer(req))
    return ShareResponse(
        text=text,
        links=build_share_links(text, settings.share_url, settings.share_hashtags),
    )


@router.post("/advice", response_model=AdviceResponse)
async def advice(req: AdviceRequest):
    parsed = parse_deal(req.to_raw())
    if not parsed.ok:
        raise HTTPException(status_code=422, detail=list(parsed.errors))

    answer = await ask_advisor(req.question, parsed.deal, _max_offer(req))
    if answer is None:
        logger.info("No advice available for request")
    return AdviceResponse(advice=answer)
