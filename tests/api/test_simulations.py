"""Tests for the stateless simulation endpoint."""

import importlib
import logging
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from src.api.app import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def payload() -> dict:
    return {
        "loan_amount": "100000",
        "annual_interest_rate": "0.08",
        "interest_rate_type": "effective",
        "loan_term_years": 1,
        "start_date": "2025-01-15",
    }


class TestHealth:
    def test_ok(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestCalculate:
    def test_basic_schedule(self, client, payload):
        resp = client.post("/api/v1/simulations/calculate", json=payload)
        assert resp.status_code == 200
        data = resp.json()
        assert len(data["payment_schedule"]) == 12
        assert Decimal(data["payment_schedule"][-1]["ending_balance"]) == 0
        assert Decimal(data["tea"]) == Decimal("0.08")
        assert Decimal(data["fixed_installment"]) == Decimal("8685.94")
        assert data["payment_schedule"][0]["payment_date"] == "2025-02-15"
        assert data["tir_converged"] is True
        assert data["currency"] == "PEN"
        assert data["initial_payment_pct"] is None

    def test_yearly_summary(self, client, payload):
        payload["loan_term_years"] = 3
        data = client.post("/api/v1/simulations/calculate", json=payload).json()
        assert [y["year"] for y in data["yearly_summary"]] == [1, 2, 3]

    def test_loan_amount_from_property(self, client, payload):
        del payload["loan_amount"]
        payload.update({
            "property_price": "380000",
            "initial_payment": "76000",
            "housing_bonus": "4000",
            "currency": "USD",
        })
        data = client.post("/api/v1/simulations/calculate", json=payload).json()
        assert Decimal(data["loan_amount"]) == Decimal("300000.00")
        assert data["currency"] == "USD"
        assert Decimal(data["initial_payment_pct"]) == Decimal("0.2")

    def test_total_grace(self, client, payload):
        payload.update({"grace_period_type": "total", "grace_period_months": 3})
        data = client.post("/api/v1/simulations/calculate", json=payload).json()
        grace = data["payment_schedule"][:3]
        assert all(p["grace_period"] for p in grace)
        assert all(Decimal(p["total_payment"]) == 0 for p in grace)

    def test_missing_amount_and_price(self, client, payload):
        del payload["loan_amount"]
        resp = client.post("/api/v1/simulations/calculate", json=payload)
        assert resp.status_code == 400

    def test_amount_and_price_together_rejected(self, client, payload):
        payload.update({"property_price": "380000", "initial_payment": "76000"})
        resp = client.post("/api/v1/simulations/calculate", json=payload)
        assert resp.status_code == 400
        assert "not both" in resp.json()["detail"]

    def test_invalid_grace_rejected(self, client, payload):
        payload.update({"grace_period_type": "partial", "grace_period_months": 12})
        resp = client.post("/api/v1/simulations/calculate", json=payload)
        assert resp.status_code == 400
        assert "Grace period" in resp.json()["detail"]

    def test_unknown_capitalization_is_validation_error(self, client, payload):
        payload.update({"interest_rate_type": "nominal", "capitalization": "daily"})
        resp = client.post("/api/v1/simulations/calculate", json=payload)
        assert resp.status_code == 422


class TestAppImport:
    def test_import_leaves_logging_alone(self, monkeypatch):
        import src.api.app as app_module

        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        importlib.reload(app_module)
        assert calls == []
