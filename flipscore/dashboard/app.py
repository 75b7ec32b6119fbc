"""Plotly Dash application: single-page flip deal calculator.

Form state, share count and the seen-tutorial flag live in a browser-local
dcc.Store, encoded with the session codec.
"""

import asyncio
import logging

from dash import ALL, Dash, Input, Output, State, callback, ctx, dcc, html, no_update

from flipscore.config import settings
from flipscore.dashboard.figures import breakdown_chart, score_gauge
from flipscore.data.advisor import ask_advisor
from flipscore.data.session_codec import decode_session, encode_session, mark_tutorial_seen
from flipscore.engine.export import export_csv
from flipscore.engine.formatting import (
    BAND_COLORS,
    format_currency,
    format_percent,
    margin_band,
    score_label,
)
from flipscore.engine.money import parse_money
from flipscore.engine.parsing import parse_deal
from flipscore.engine.scorer import compute_max_offer, score_deal
from flipscore.engine.share import build_share_links, build_share_text, record_share
from flipscore.models.deal import COMPARABLE_SALES_BUCKETS, COMPARABLE_SALES_LABELS, RawDealInput
from flipscore.models.session import SessionState

logger = logging.getLogger(__name__)

FIELD_STYLE = {"width": "100%", "padding": "0.5rem", "fontSize": "0.95rem"}

BTN_STYLE = {
    "padding": "0.75rem 2rem",
    "fontSize": "1rem",
    "backgroundColor": "#1a1a2e",
    "color": "white",
    "border": "none",
    "cursor": "pointer",
}

CARD_STYLE = {
    "flex": "1",
    "padding": "1rem",
    "border": "1px solid #e0e0e0",
    "borderRadius": "6px",
    "textAlign": "center",
}

TUTORIAL_STYLE = {
    "padding": "1rem",
    "backgroundColor": "#eef2ff",
    "border": "1px solid #c7d2fe",
    "borderRadius": "6px",
    "marginBottom": "1.5rem",
}

PROMO_STYLE = {
    "display": "flex",
    "alignItems": "center",
    "justifyContent": "space-between",
    "padding": "1rem",
    "backgroundColor": "#ecfdf3",
    "border": "1px solid #a7f3d0",
    "borderRadius": "6px",
    "marginTop": "2rem",
}

SHARE_LABELS = {
    "x": "X / Twitter",
    "facebook": "Facebook",
    "linkedin": "LinkedIn",
    "whatsapp": "WhatsApp",
    "reddit": "Reddit",
    "email": "Email",
}

FORM_FIELDS = [
    ("arv-input", "value"),
    ("price-input", "value"),
    ("repairs-input", "value"),
    ("location-slider", "value"),
    ("trend-slider", "value"),
    ("demand-slider", "value"),
    ("days-input", "value"),
    ("comps-select", "value"),
]

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def _field(label, component):
    return html.Div([
        html.Label(label, style={"fontSize": "0.85rem", "marginBottom": "0.25rem", "display": "block"}),
        component,
    ], style={"flex": "1", "minWidth": "160px"})


def _slider(id_, label):
    return _field(label, dcc.Slider(
        id=id_, min=1, max=10, step=1, value=5,
        marks={i: str(i) for i in range(1, 11)},
    ))


def _card(title, value, color=None):
    return html.Div([
        html.Div(title, style={"fontSize": "0.8rem", "color": "#666"}),
        html.Div(value, style={"fontSize": "1.4rem", "fontWeight": "bold", "color": color or "#1a1a2e"}),
    ], style=CARD_STYLE)


def _promo_block(url: str, text: str):
    """Promotional call-to-action under the results; hidden when no URL is configured."""
    if not url:
        return html.Div(id="promo-cta", style={"display": "none"})
    return html.Div([
        html.Span(text, style={"marginRight": "1rem"}),
        html.A("Learn more", href=url, target="_blank", style={**BTN_STYLE, "textDecoration": "none"}),
    ], id="promo-cta", style=PROMO_STYLE)


layout = html.Div([
    dcc.Location(id="url"),
    dcc.Store(id="session-store", storage_type="local"),
    dcc.Download(id="export-download"),

    html.H2("Flip Deal Score Calculator"),

    html.Div(id="tutorial", children=[
        html.H4("How it works", style={"marginTop": "0"}),
        html.Ol([
            html.Li("Enter the after-repair value, purchase price and repair costs."),
            html.Li("Rate location, market trend and rental demand from 1 to 10."),
            html.Li("Add days on market and how many comparable sales back your ARV."),
            html.Li("Your score updates as you type. 80+ is an excellent deal."),
        ]),
        html.Button("Got it", id="tutorial-dismiss", n_clicks=0, style=BTN_STYLE),
    ], style={"display": "none"}),

    html.H4("Financials"),
    html.Div([
        _field("After-Repair Value ($)", dcc.Input(id="arv-input", type="text", inputMode="numeric", placeholder="300000", debounce=True, style=FIELD_STYLE)),
        _field("Purchase Price ($)", dcc.Input(id="price-input", type="text", inputMode="numeric", placeholder="150000", debounce=True, style=FIELD_STYLE)),
        _field("Repair Costs ($)", dcc.Input(id="repairs-input", type="text", inputMode="numeric", placeholder="50000", debounce=True, style=FIELD_STYLE)),
    ], style={"display": "flex", "gap": "1rem", "marginBottom": "1rem"}),

    html.H4("Market"),
    html.Div([
        _slider("location-slider", "Location Score"),
        _slider("trend-slider", "Market Trend"),
        _slider("demand-slider", "Rental Demand"),
    ], style={"display": "flex", "gap": "1rem", "marginBottom": "1rem"}),
    html.Div([
        _field("Days on Market", dcc.Input(id="days-input", type="number", value=0, step=1, style=FIELD_STYLE)),
        _field("Comparable Sales", dcc.Dropdown(
            id="comps-select",
            options=[{"label": COMPARABLE_SALES_LABELS[b], "value": b} for b in COMPARABLE_SALES_BUCKETS],
            value=0,
            clearable=False,
        )),
    ], style={"display": "flex", "gap": "1rem", "marginBottom": "1rem"}),

    html.Ul(id="validation-errors", style={"color": BAND_COLORS["poor"]}),

    html.Div(id="results-container"),

    html.Div([
        html.H4("Max Offer (70% Rule)"),
        html.Div(id="max-offer", style={"fontSize": "1.6rem", "fontWeight": "bold"}),
    ], style={"marginTop": "1.5rem"}),

    html.Div([
        html.H4("Share"),
        html.Div(id="share-links", style={"display": "flex", "gap": "1rem", "flexWrap": "wrap"}),
        html.Div(id="share-count", style={"fontSize": "0.85rem", "color": "#666", "marginTop": "0.5rem"}),
        html.Button("Export CSV", id="export-btn", n_clicks=0, style={**BTN_STYLE, "marginTop": "1rem"}),
    ], style={"marginTop": "1.5rem"}),

    _promo_block(settings.promo_url, settings.promo_text),

    html.Details([
        html.Summary("Ask the Deal Assistant", style={"cursor": "pointer", "fontWeight": "bold"}),
        html.Div([
            dcc.Textarea(id="advisor-question", placeholder="Should I negotiate harder on this one?", style={**FIELD_STYLE, "height": "80px"}),
            html.Button("Ask", id="advisor-btn", n_clicks=0, style={**BTN_STYLE, "marginTop": "0.5rem"}),
            dcc.Loading(html.Div(id="advisor-answer", style={"whiteSpace": "pre-wrap", "marginTop": "1rem"})),
        ], style={"marginTop": "0.75rem"}),
    ], style={"marginTop": "2rem", "marginBottom": "3rem"}),
], style={"maxWidth": "1000px", "margin": "0 auto", "padding": "0 1rem"})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _raw_from_form(arv, price, repairs, location, trend, demand, days, comps) -> RawDealInput:
    return RawDealInput(
        after_repair_value=arv or "",
        purchase_price=price or "",
        repair_costs=repairs or "",
        location_score=int(location or 5),
        market_trend=int(trend or 5),
        rental_demand=int(demand or 5),
        days_on_market=int(days) if days is not None else None,
        comparable_sales_count=int(comps or 0),
    )


def _max_offer(raw: RawDealInput):
    return compute_max_offer(parse_money(raw.after_repair_value), parse_money(raw.repair_costs))


def _render_result(result):
    metrics = result.metrics
    band_color = BAND_COLORS[margin_band(metrics.profit_margin_raw)]
    return html.Div([
        html.H3(score_label(result.total_score), style={"textAlign": "center"}),
        html.Div([
            html.Div(dcc.Graph(figure=score_gauge(result.total_score), config={"displayModeBar": False}), style={"flex": "1"}),
            html.Div(dcc.Graph(figure=breakdown_chart(result), config={"displayModeBar": False}), style={"flex": "1.4"}),
        ], style={"display": "flex", "gap": "1rem", "flexWrap": "wrap"}),
        html.Div([
            _card("Total Cost", format_currency(metrics.total_cost)),
            _card("Expected Profit", format_currency(metrics.expected_profit), band_color),
            _card("Profit Margin", format_percent(metrics.profit_margin), band_color),
            _card("Repair Ratio", format_percent(metrics.repair_ratio)),
        ], style={"display": "flex", "gap": "1rem", "marginTop": "1rem"}),
    ])


def _render_share_links(result, max_offer):
    text = build_share_text(result, max_offer)
    links = build_share_links(text, settings.share_url, settings.share_hashtags)
    return [
        html.A(
            SHARE_LABELS[platform],
            id={"type": "share-link", "platform": platform},
            href=url,
            target="_blank",
            n_clicks=0,
        )
        for platform, url in links.items()
    ]


def _share_count_text(state: SessionState) -> str:
    if state.share_count == 0:
        return ""
    times = "time" if state.share_count == 1 else "times"
    return f"You've shared {state.share_count} {times}."


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------


@callback(
    [Output(id_, prop) for id_, prop in FORM_FIELDS] + [Output("tutorial", "style")],
    Input("url", "pathname"),
    State("session-store", "data"),
)
def restore_session(_pathname, stored):
    state = decode_session(stored)
    deal = state.deal
    tutorial_style = {"display": "none"} if state.seen_tutorial else TUTORIAL_STYLE
    return [
        deal.after_repair_value,
        deal.purchase_price,
        deal.repair_costs,
        deal.location_score,
        deal.market_trend,
        deal.rental_demand,
        deal.days_on_market,
        deal.comparable_sales_count,
        tutorial_style,
    ]


@callback(
    [
        Output("validation-errors", "children"),
        Output("results-container", "children"),
        Output("max-offer", "children"),
        Output("share-links", "children"),
        Output("share-count", "children"),
        Output("session-store", "data"),
    ],
    [Input(id_, prop) for id_, prop in FORM_FIELDS],
    State("session-store", "data"),
)
def update_score(arv, price, repairs, location, trend, demand, days, comps, stored):
    raw = _raw_from_form(arv, price, repairs, location, trend, demand, days, comps)
    previous = decode_session(stored)
    state = SessionState(
        deal=raw,
        share_count=previous.share_count,
        seen_tutorial=previous.seen_tutorial,
    )
    max_offer = _max_offer(raw)

    parsed = parse_deal(raw)
    result = score_deal(parsed.deal) if parsed.ok else None

    # Untouched form: nothing to show yet, no error list either
    untouched = not any([arv, price, repairs])
    errors = [] if untouched else [html.Li(e) for e in parsed.errors]

    if result is None:
        return errors, None, format_currency(max_offer), [], _share_count_text(state), encode_session(state)

    return (
        errors,
        _render_result(result),
        format_currency(max_offer),
        _render_share_links(result, max_offer),
        _share_count_text(state),
        encode_session(state),
    )


@callback(
    Output("session-store", "data", allow_duplicate=True),
    Output("share-count", "children", allow_duplicate=True),
    Input({"type": "share-link", "platform": ALL}, "n_clicks"),
    State("session-store", "data"),
    prevent_initial_call=True,
)
def count_share(clicks, stored):
    if not ctx.triggered_id or not any(clicks):
        return no_update, no_update
    state = record_share(decode_session(stored))
    logger.debug("Share via %s", ctx.triggered_id["platform"])
    return encode_session(state), _share_count_text(state)


@callback(
    Output("tutorial", "style", allow_duplicate=True),
    Output("session-store", "data", allow_duplicate=True),
    Input("tutorial-dismiss", "n_clicks"),
    State("session-store", "data"),
    prevent_initial_call=True,
)
def dismiss_tutorial(n_clicks, stored):
    if not n_clicks:
        return no_update, no_update
    state = mark_tutorial_seen(decode_session(stored))
    return {"display": "none"}, encode_session(state)


@callback(
    Output("export-download", "data"),
    Input("export-btn", "n_clicks"),
    [State(id_, prop) for id_, prop in FORM_FIELDS],
    prevent_initial_call=True,
)
def export_deal(n_clicks, arv, price, repairs, location, trend, demand, days, comps):
    parsed = parse_deal(_raw_from_form(arv, price, repairs, location, trend, demand, days, comps))
    if not n_clicks or not parsed.ok:
        return no_update
    content = export_csv(parsed.deal, score_deal(parsed.deal))
    return dict(content=content, filename="flip-deal.csv")


@callback(
    Output("advisor-answer", "children"),
    Input("advisor-btn", "n_clicks"),
    [State("advisor-question", "value")] + [State(id_, prop) for id_, prop in FORM_FIELDS],
    prevent_initial_call=True,
)
def ask_assistant(n_clicks, question, arv, price, repairs, location, trend, demand, days, comps):
    raw = _raw_from_form(arv, price, repairs, location, trend, demand, days, comps)
    parsed = parse_deal(raw)
    if not parsed.ok:
        return "Fix the highlighted inputs first."

    answer = asyncio.run(ask_advisor(question or "", parsed.deal, _max_offer(raw)))
    if answer is None:
        return "The assistant is unavailable right now."
    return answer


app = Dash(
    __name__,
    title="Flip Deal Score",
    suppress_callback_exceptions=True,
)
app.layout = layout


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level)
    app.run(debug=settings.debug, port=settings.dashboard_port)
