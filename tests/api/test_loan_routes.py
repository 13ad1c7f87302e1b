from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from loan_calculator.api.app import app

STANDARD = {"principal": 50000, "annual_rate_percent": 5, "term_years": 5}


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestHealthAndBounds:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_bounds(self, client):
        data = client.get("/api/v1/loan/bounds").json()
        assert Decimal(data["min_principal"]) == 50000
        assert Decimal(data["max_principal"]) == 950000
        assert Decimal(data["max_rate_percent"]) == 10
        assert data["min_term_years"] == 5
        assert data["max_term_years"] == 30


class TestValidateRoute:
    def test_valid(self, client):
        resp = client.post("/api/v1/loan/validate", json=STANDARD)
        assert resp.status_code == 200
        assert resp.json() == {"valid": True}

    def test_invalid(self, client):
        resp = client.post("/api/v1/loan/validate", json={**STANDARD, "principal": 49999})
        assert resp.json() == {"valid": False}

    def test_numeric_strings(self, client):
        resp = client.post(
            "/api/v1/loan/validate",
            json={"principal": "950000", "annual_rate_percent": "10", "term_years": 30},
        )
        assert resp.json() == {"valid": True}


class TestPaymentRoute:
    def test_monthly(self, client):
        resp = client.post("/api/v1/loan/payment", json={**STANDARD, "frequency": "monthly"})
        assert resp.status_code == 200
        data = resp.json()
        assert Decimal(data["payment_rounded"]) == Decimal("943.56")
        assert data["total_periods"] == 60
        assert data["frequency"] == "monthly"
        assert Decimal("6600") < Decimal(data["total_interest"]) < Decimal("6630")

    def test_default_frequency_is_monthly(self, client):
        data = client.post("/api/v1/loan/payment", json=STANDARD).json()
        assert data["frequency"] == "monthly"

    def test_out_of_range(self, client):
        resp = client.post("/api/v1/loan/payment", json={**STANDARD, "annual_rate_percent": 4.9})
        assert resp.status_code == 422
        assert resp.json()["detail"] == "Please ensure all input values are within their valid ranges"

    def test_unknown_frequency(self, client):
        resp = client.post("/api/v1/loan/payment", json={**STANDARD, "frequency": "daily"})
        assert resp.status_code == 422


class TestScheduleRoute:
    def test_year_scale(self, client):
        data = client.post("/api/v1/loan/schedule", json={**STANDARD, "scale": "year"}).json()
        assert len(data["entries"]) == 5
        assert data["aligned"] is False
        first = data["entries"][0]
        assert first["index"] == 1
        assert Decimal(first["interest_portion"]) == Decimal("208.33")

    def test_month_scale(self, client):
        data = client.post("/api/v1/loan/schedule", json={**STANDARD, "scale": "month"}).json()
        assert [e["index"] for e in data["entries"]] == list(range(1, 61))

    def test_aligned(self, client):
        data = client.post(
            "/api/v1/loan/schedule",
            json={**STANDARD, "frequency": "monthly", "scale": "year", "aligned": True},
        ).json()
        total_principal = sum(Decimal(e["principal_portion"]) for e in data["entries"])
        assert abs(total_principal - 50000) <= Decimal("0.05")

    def test_out_of_range(self, client):
        resp = client.post("/api/v1/loan/schedule", json={**STANDARD, "term_years": 31})
        assert resp.status_code == 422


class TestExportRoute:
    def test_csv(self, client):
        resp = client.post("/api/v1/loan/schedule/export?fmt=csv", json={**STANDARD, "scale": "year"})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        assert resp.headers["content-disposition"].endswith(' year Loan Calculator.csv"')
        assert resp.text.splitlines()[0] == "period,Principal,Interest"

    def test_xlsx_default(self, client):
        resp = client.post("/api/v1/loan/schedule/export", json={**STANDARD, "scale": "month"})
        assert resp.status_code == 200
        assert "month Loan Calculator.xlsx" in resp.headers["content-disposition"]
        assert resp.content[:2] == b"PK"

    def test_unknown_format(self, client):
        resp = client.post("/api/v1/loan/schedule/export?fmt=pdf", json=STANDARD)
        assert resp.status_code == 422

    def test_out_of_range(self, client):
        resp = client.post("/api/v1/loan/schedule/export?fmt=csv", json={**STANDARD, "principal": 10})
        assert resp.status_code == 422
