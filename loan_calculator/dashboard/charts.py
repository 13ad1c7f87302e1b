"""Figure and text builders for the calculator page.

Kept free of Dash callbacks so they can be used without a running app.
"""

import plotly.graph_objects as go

from loan_calculator.engine.payment import compute_payment, total_interest
from loan_calculator.engine.periods import as_decimal, round2
from loan_calculator.models.loan import DisplayScale, Frequency, ScheduleEntry

THEMES = {
    "light": {
        "principal": "#d4896b",
        "interest": "#a06c66",
        "background": "#fffaf8",
        "paper": "#ffffff",
        "text": "#000000",
        "muted": "#666666",
        "template": "plotly_white",
    },
    "dark": {
        "principal": "#ffb4a1",
        "interest": "#ffb4ab",
        "background": "#2c2c2c",
        "paper": "#383838",
        "text": "#e1e1e1",
        "muted": "#a0a0a0",
        "template": "plotly_dark",
    },
}

SCALE_LABELS = {
    DisplayScale.WEEK: "Weekly",
    DisplayScale.FORTNIGHT: "Fortnightly",
    DisplayScale.MONTH: "Monthly",
    DisplayScale.YEAR: "Yearly",
}


def with_commas(value) -> str:
    """1234567 -> '1,234,567'; keeps up to two decimals when present."""
    value = as_decimal(value)
    if value == value.to_integral_value():
        return f"{int(value):,}"
    return f"{round2(value):,}"


def payment_summary(
    principal,
    annual_rate_percent,
    term_years: int,
    frequency: Frequency,
) -> list[str]:
    """Lines shown under the form: payment, what it pays off, total interest.

    Inputs must already be validated.
    """
    payment = compute_payment(principal, annual_rate_percent, term_years, frequency)
    interest = total_interest(principal, annual_rate_percent, term_years, frequency)
    plural = "s" if term_years > 1 else ""
    rate = as_decimal(annual_rate_percent).normalize()
    return [
        f"{frequency.value.capitalize()} Payment: ${round2(payment)}",
        f"To pay off ${with_commas(principal)} over {term_years} year{plural} with a {rate:f}% interest",
        f"Total Interest Paid: ${with_commas(round2(interest))}",
    ]


def schedule_figure(entries: list[ScheduleEntry], scale: DisplayScale, theme: str = "light") -> go.Figure:
    """Stacked principal/interest bar chart, one bar per schedule entry."""
    colors = THEMES.get(theme, THEMES["light"])
    periods = [e.index for e in entries]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=periods,
        y=[float(e.principal_portion) for e in entries],
        name="Principal",
        marker_color=colors["principal"],
        hovertemplate="Principal: $%{y:.2f}<extra></extra>",
    ))
    fig.add_trace(go.Bar(
        x=periods,
        y=[float(e.interest_portion) for e in entries],
        name="Interest",
        marker_color=colors["interest"],
        hovertemplate="Interest: $%{y:.2f}<extra></extra>",
    ))
    fig.update_layout(
        title="Payment Breakdown",
        barmode="stack",
        xaxis_title=scale.value.capitalize(),
        yaxis_title="$",
        template=colors["template"],
        paper_bgcolor=colors["paper"],
        plot_bgcolor=colors["paper"],
        hovermode="x unified",
    )
    return fig


def empty_figure(theme: str = "light") -> go.Figure:
    colors = THEMES.get(theme, THEMES["light"])
    fig = go.Figure()
    fig.update_layout(
        template=colors["template"],
        paper_bgcolor=colors["paper"],
        plot_bgcolor=colors["paper"],
        xaxis={"visible": False},
        yaxis={"visible": False},
    )
    return fig
