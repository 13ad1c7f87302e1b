"""Plotly Dash application: loan calculator UI."""

import sys
from pathlib import Path

# Ensure project root is on sys.path so `loan_calculator.*` imports work
# even when Dash's reloader spawns a child process.
_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from dash import Dash, html, page_container

from loan_calculator.config import settings
from loan_calculator.log import setup_logging

setup_logging(settings.log_level)

app = Dash(
    __name__,
    use_pages=True,
    suppress_callback_exceptions=True,
    title="Loan Calculator",
)

app.layout = html.Div(
    page_container,
    style={"maxWidth": "1200px", "margin": "0 auto"},
)


if __name__ == "__main__":
    app.run(debug=settings.debug, port=8050)
