from decimal import Decimal

from loan_calculator.dashboard.charts import (
    empty_figure,
    payment_summary,
    schedule_figure,
    with_commas,
)
from loan_calculator.engine.schedule import generate_schedule
from loan_calculator.models.loan import DisplayScale, Frequency


class TestWithCommas:
    def test_integer(self):
        assert with_commas(Decimal("950000")) == "950,000"

    def test_decimal(self):
        assert with_commas(Decimal("1234.5")) == "1,234.50"

    def test_small(self):
        assert with_commas(500) == "500"


class TestPaymentSummary:
    def test_monthly(self):
        lines = payment_summary(Decimal("50000"), Decimal("5"), 5, Frequency.MONTHLY)
        assert lines[0] == "Monthly Payment: $943.56"
        assert lines[1] == "To pay off $50,000 over 5 years with a 5% interest"
        assert lines[2].startswith("Total Interest Paid: $6,6")

    def test_fractional_rate(self):
        lines = payment_summary(Decimal("100000"), Decimal("6.5"), 10, Frequency.WEEKLY)
        assert lines[0].startswith("Weekly Payment: $")
        assert "with a 6.5% interest" in lines[1]

    def test_whole_rate_above_nine(self):
        lines = payment_summary(Decimal("100000"), Decimal("10"), 10, Frequency.FORTNIGHTLY)
        assert "with a 10% interest" in lines[1]


class TestScheduleFigure:
    def test_stacked_traces(self):
        entries = generate_schedule(Decimal("50000"), Decimal("5"), 5, Frequency.MONTHLY, DisplayScale.YEAR)
        fig = schedule_figure(entries, DisplayScale.YEAR)
        assert [t.name for t in fig.data] == ["Principal", "Interest"]
        assert list(fig.data[0].x) == [1, 2, 3, 4, 5]
        assert fig.data[1].y[0] == 208.33
        assert fig.layout.barmode == "stack"
        assert fig.layout.xaxis.title.text == "Year"

    def test_dark_theme_colors(self):
        entries = generate_schedule(Decimal("50000"), Decimal("5"), 5, Frequency.MONTHLY, DisplayScale.YEAR)
        fig = schedule_figure(entries, DisplayScale.YEAR, theme="dark")
        assert fig.layout.paper_bgcolor == "#383838"

    def test_empty_figure(self):
        assert len(empty_figure().data) == 0
