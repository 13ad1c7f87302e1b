"""Calculator page: loan inputs, payment summary, stacked principal/interest chart.

Features:
  - Principal snaps into range when the field loses focus
  - Payment summary updates live; chart updates on Apply
  - Excel download of the charted schedule
  - Reset to configured defaults
  - Last-used inputs and theme restored from the SQLite store
"""

import logging

import dash
from dash import html, dcc, callback, Input, Output, State, no_update

from loan_calculator.config import settings
from loan_calculator.dashboard.charts import (
    SCALE_LABELS,
    THEMES,
    empty_figure,
    payment_summary,
    schedule_figure,
    with_commas,
)
from loan_calculator.data.export import (
    entries_from_records,
    entries_to_records,
    export_filename,
    schedule_to_bytes,
)
from loan_calculator.data.store import default_store, load_inputs, load_theme, save_inputs, save_theme
from loan_calculator.engine.periods import as_decimal
from loan_calculator.engine.schedule import generate_schedule
from loan_calculator.engine.validation import clamp_principal, validate
from loan_calculator.models.loan import DisplayScale, Frequency, LoanTerms

logger = logging.getLogger(__name__)

dash.register_page(__name__, path="/", name="Calculator")

INVALID_MESSAGE = "Please ensure all input values are within their valid ranges"

BTN_STYLE = {
    "padding": ".5em 2em",
    "fontSize": "1rem",
    "backgroundColor": "#d4896b",
    "color": "black",
    "border": "none",
    "cursor": "pointer",
}

FIELD_STYLE = {"width": "100%", "padding": "0.5rem", "fontSize": "0.95rem"}

FREQUENCY_OPTIONS = [{"label": f.value.capitalize(), "value": f.value} for f in Frequency]
SCALE_OPTIONS = [{"label": SCALE_LABELS[s], "value": s.value} for s in DisplayScale]

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def _field(label, component):
    return html.Div([
        html.Label(label, style={"fontSize": "0.85rem", "marginBottom": "0.25rem", "display": "block"}),
        component,
    ], style={"marginBottom": "1.5rem"})


def _page_style(theme: str) -> dict:
    colors = THEMES.get(theme, THEMES["light"])
    return {
        "backgroundColor": colors["background"],
        "color": colors["text"],
        "padding": "2rem",
        "minHeight": "100vh",
    }


def layout():
    """Built per page load so stored inputs are read fresh."""
    store = default_store()
    terms, scale = load_inputs(store)
    theme = load_theme(store)
    bounds = settings.loan_bounds

    form = html.Div([
        _field("Loan Amount ($)", dcc.Input(
            id="loan-amount", type="number", value=float(terms.principal),
            debounce=True, style=FIELD_STYLE,
        )),
        html.Div(id="loan-amount-error", style={"color": "#e94560", "fontSize": "0.85rem"}),
        _field("Interest Rate (%)", dcc.Slider(
            id="interest-rate",
            min=float(bounds.min_rate_percent),
            max=float(bounds.max_rate_percent),
            step=0.1,
            value=float(terms.annual_rate_percent),
            marks={i: f"{i}%" for i in range(int(bounds.min_rate_percent), int(bounds.max_rate_percent) + 1)},
            tooltip={"placement": "bottom", "always_visible": False},
        )),
        _field("Loan Term (years)", dcc.Slider(
            id="loan-term",
            min=bounds.min_term_years,
            max=bounds.max_term_years,
            step=1,
            value=terms.term_years,
            marks={i: str(i) for i in range(bounds.min_term_years, bounds.max_term_years + 1, 5)},
            tooltip={"placement": "bottom", "always_visible": False},
        )),
        _field("Repayment Period", dcc.Dropdown(
            id="repayment-frequency", options=FREQUENCY_OPTIONS,
            value=terms.frequency.value, clearable=False,
        )),
        html.Div(id="payment-summary"),
    ], style={"flex": "1", "minWidth": "300px"})

    breakdown = html.Div([
        html.H3("Payment Breakdown"),
        _field("Chart Time Scale", dcc.Dropdown(
            id="chart-scale", options=SCALE_OPTIONS, value=scale.value, clearable=False,
        )),
        dcc.Checklist(
            id="align-schedule",
            options=[{"label": " Amortize at repayment frequency", "value": "aligned"}],
            value=[],
            style={"marginBottom": "1rem"},
        ),
        html.Div([
            html.Button("Apply Changes", id="apply-btn", n_clicks=0, style=BTN_STYLE),
            html.Button("Download Excel", id="download-btn", n_clicks=0, style=BTN_STYLE),
            html.Button("Reset", id="reset-btn", n_clicks=0, style=BTN_STYLE),
        ], style={"display": "flex", "gap": "1rem", "marginBottom": "1rem"}),
        dcc.Graph(id="schedule-chart", figure=empty_figure(theme)),
        html.Div(id="validation-message", style={"color": "#e94560", "marginTop": "1rem"}),
        dcc.Download(id="schedule-download"),
        dcc.Store(id="schedule-store"),
    ], style={"flex": "1", "minWidth": "300px"})

    return html.Div(id="calculator-root", children=[
        html.Div([
            html.H2("Loan Calculator", style={"margin": "0"}),
            dcc.RadioItems(
                id="theme-toggle",
                options=[{"label": " Light", "value": "light"}, {"label": " Dark", "value": "dark"}],
                value=theme,
                inline=True,
            ),
        ], style={"display": "flex", "justifyContent": "space-between", "alignItems": "center",
                  "marginBottom": "1.5rem"}),
        html.Div([form, breakdown], style={"display": "flex", "gap": "2rem", "flexWrap": "wrap"}),
    ], style=_page_style(theme))


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------


@callback(
    [
        Output("payment-summary", "children"),
        Output("payment-summary", "style"),
        Output("loan-amount-error", "children"),
    ],
    [
        Input("loan-amount", "value"),
        Input("interest-rate", "value"),
        Input("loan-term", "value"),
        Input("repayment-frequency", "value"),
    ],
)
def update_summary(amount, rate, years, frequency):
    bounds = settings.loan_bounds
    amount_error = ""
    if amount is None or not (bounds.min_principal <= as_decimal(amount) <= bounds.max_principal):
        amount_error = (
            f"Enter an amount between ${with_commas(bounds.min_principal)} "
            f"and ${with_commas(bounds.max_principal)}"
        )

    if not validate(amount, rate, years):
        return no_update, {"opacity": 0}, amount_error

    lines = payment_summary(amount, rate, int(years), Frequency(frequency))
    children = [
        html.H4(lines[0]),
        html.Div([html.Div(line) for line in lines[1:]], style={"fontStyle": "italic"}),
    ]
    return children, {"opacity": 1}, amount_error


@callback(
    [
        Output("loan-amount", "value"),
        Output("interest-rate", "value"),
        Output("loan-term", "value"),
        Output("repayment-frequency", "value"),
        Output("chart-scale", "value"),
    ],
    [Input("reset-btn", "n_clicks"), Input("loan-amount", "n_blur")],
    State("loan-amount", "value"),
    prevent_initial_call=True,
)
def reset_or_clamp(reset_clicks, amount_blurs, amount):
    if dash.ctx.triggered_id == "reset-btn":
        terms = settings.default_terms
        return (
            float(terms.principal),
            float(terms.annual_rate_percent),
            terms.term_years,
            terms.frequency.value,
            settings.default_scale.value,
        )
    if amount is None:
        return float(settings.loan_bounds.min_principal), no_update, no_update, no_update, no_update
    clamped = clamp_principal(amount)
    if clamped == as_decimal(amount):
        return no_update, no_update, no_update, no_update, no_update
    return float(clamped), no_update, no_update, no_update, no_update


@callback(
    [
        Output("schedule-chart", "figure"),
        Output("validation-message", "children"),
        Output("schedule-store", "data"),
        Output("download-btn", "disabled"),
    ],
    [Input("apply-btn", "n_clicks"), Input("reset-btn", "n_clicks")],
    [
        State("loan-amount", "value"),
        State("interest-rate", "value"),
        State("loan-term", "value"),
        State("repayment-frequency", "value"),
        State("chart-scale", "value"),
        State("align-schedule", "value"),
        State("theme-toggle", "value"),
    ],
)
def apply_changes(apply_clicks, reset_clicks, amount, rate, years, frequency, scale, aligned, theme):
    if dash.ctx.triggered_id == "reset-btn":
        terms = settings.default_terms
        amount, rate, years = terms.principal, terms.annual_rate_percent, terms.term_years
        frequency, scale = terms.frequency.value, settings.default_scale.value

    if not validate(amount, rate, years):
        return empty_figure(theme), INVALID_MESSAGE, None, True

    terms = LoanTerms(
        principal=as_decimal(amount),
        annual_rate_percent=as_decimal(rate),
        term_years=int(years),
        frequency=Frequency(frequency),
    )
    display_scale = DisplayScale(scale)
    entries = generate_schedule(
        terms.principal, terms.annual_rate_percent, terms.term_years,
        terms.frequency, display_scale, aligned="aligned" in (aligned or []),
    )
    save_inputs(default_store(), terms, display_scale)

    data = {"scale": display_scale.value, "entries": entries_to_records(entries)}
    return schedule_figure(entries, display_scale, theme), "", data, not entries


@callback(
    Output("schedule-download", "data"),
    Input("download-btn", "n_clicks"),
    State("schedule-store", "data"),
    prevent_initial_call=True,
)
def download_schedule(n_clicks, data):
    if not data or not data.get("entries"):
        return no_update
    entries = entries_from_records(data["entries"])
    scale = DisplayScale(data["scale"])
    logger.info("Downloading %d-row %s schedule", len(entries), scale.value)
    return dcc.send_bytes(schedule_to_bytes(entries, "xlsx"), export_filename(scale, "xlsx"))


@callback(
    [Output("calculator-root", "style"), Output("schedule-chart", "figure", allow_duplicate=True)],
    Input("theme-toggle", "value"),
    State("schedule-store", "data"),
    prevent_initial_call=True,
)
def switch_theme(theme, data):
    save_theme(default_store(), theme)
    if not data or not data.get("entries"):
        return _page_style(theme), empty_figure(theme)
    entries = entries_from_records(data["entries"])
    return _page_style(theme), schedule_figure(entries, DisplayScale(data["scale"]), theme)
