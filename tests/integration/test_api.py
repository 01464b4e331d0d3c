"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def borrower_payload():
    """Near-prime auto loan with nothing unusual"""
    return {
        "credit_score": 700,
        "annual_income": 60000,
        "monthly_debt": 1500,
        "employment_type": "EMPLOYED",
        "years_employed": 3,
        "late_payment_history": 1,
        "loan_amount": 18000,
        "loan_purpose": "AUTO_LOAN",
    }


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "tycoon-bank"}


def test_metrics_endpoint(client: TestClient, borrower_payload):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/risk/default-probability", json={"profile": borrower_payload})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "tycoon_bank_risk_evaluations_total" in response.text
    assert "http_request_duration_seconds" in response.text


def test_unmatched_paths_share_one_metrics_label(client: TestClient):
    assert client.get("/no/such/page-8c1f").status_code == 404

    text = client.get("/metrics").text
    assert 'endpoint="unmatched"' in text
    assert "page-8c1f" not in text


def test_request_id_is_propagated(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_request_id_is_generated(client: TestClient):
    response = client.get("/health")
    assert response.headers["X-Request-ID"]


def test_default_probability_endpoint(client: TestClient, borrower_payload):
    """Test POST /v1/risk/default-probability"""
    response = client.post("/v1/risk/default-probability", json={"profile": borrower_payload})

    assert response.status_code == 200
    data = response.json()
    assert data["base_rate"] == 0.04
    assert data["adjusted_rate"] == pytest.approx(0.02)
    assert data["risk_tier"] == "NEAR_PRIME"
    assert data["recommendation"] == "APPROVE"
    assert [f["name"] for f in data["factors"]] == ["Credit Score", "Loan Purpose"]
    assert 0 < data["monthly_default_rate"] < data["adjusted_rate"]


def test_default_probability_with_economic_conditions(client: TestClient, borrower_payload):
    response = client.post(
        "/v1/risk/default-probability",
        json={
            "profile": borrower_payload,
            "economic_conditions": {"unemployment_rate": 0.1, "recession": True},
        },
    )

    assert response.status_code == 200
    data = response.json()
    names = [f["name"] for f in data["factors"]]
    assert "Recession" in names
    assert "High Unemployment" in names
    assert data["recommendation"] == "REVIEW"


def test_default_probability_rejects_unknown_purpose(client: TestClient, borrower_payload):
    borrower_payload["loan_purpose"] = "VACATION"
    response = client.post("/v1/risk/default-probability", json={"profile": borrower_payload})
    assert response.status_code == 422


def test_default_probability_rejects_out_of_range_score(client: TestClient, borrower_payload):
    borrower_payload["credit_score"] = 900
    response = client.post("/v1/risk/default-probability", json={"profile": borrower_payload})
    assert response.status_code == 422


def test_payment_endpoint(client: TestClient):
    """Test POST /v1/loans/payment"""
    response = client.post(
        "/v1/loans/payment",
        json={"principal": 200000, "annual_rate": 0.06, "term_months": 360},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["monthly_payment"] == pytest.approx(1199.10, abs=0.01)
    assert data["total_paid"] == pytest.approx(data["monthly_payment"] * 360, abs=2)
    assert data["total_interest"] == pytest.approx(data["total_paid"] - 200000, abs=0.01)


def test_amortization_endpoint(client: TestClient):
    """Test POST /v1/loans/amortization"""
    response = client.post(
        "/v1/loans/amortization",
        json={
            "principal": 12000,
            "annual_rate": 0.12,
            "term_months": 12,
            "start_date": "2025-01-01",
        },
    )

    assert response.status_code == 200
    data = response.json()
    rows = data["rows"]
    assert len(rows) == 12
    assert rows[0]["interest"] == 120.0
    assert rows[0]["due_date"] == "2025-01-01"
    assert rows[1]["due_date"] == "2025-01-31"
    assert rows[-1]["balance"] == 0.0
    assert rows[-1]["cumulative_interest"] == pytest.approx(data["total_interest"], abs=0.01)


def test_amortization_rejects_zero_term(client: TestClient):
    response = client.post(
        "/v1/loans/amortization",
        json={"principal": 12000, "annual_rate": 0.12, "term_months": 0},
    )
    assert response.status_code == 422


def test_max_amount_endpoint(client: TestClient):
    """Test POST /v1/loans/max-amount"""
    response = client.post(
        "/v1/loans/max-amount",
        json={"monthly_payment": 500, "annual_rate": 0.0, "term_months": 24},
    )

    assert response.status_code == 200
    assert response.json()["max_loan_amount"] == 12000.0


def test_rate_conversion_endpoint(client: TestClient):
    """Test POST /v1/rates/convert in both directions"""
    to_apy = client.post("/v1/rates/convert", json={"rate": 0.12, "frequency": "MONTHLY"})
    assert to_apy.status_code == 200
    apy = to_apy.json()["apy"]
    assert apy == pytest.approx(0.126825, abs=1e-6)

    to_apr = client.post(
        "/v1/rates/convert",
        json={"rate": apy, "direction": "apy_to_apr", "frequency": "MONTHLY"},
    )
    assert to_apr.status_code == 200
    assert to_apr.json()["apr"] == pytest.approx(0.12, abs=1e-5)


def test_rate_conversion_rejects_unknown_frequency(client: TestClient):
    response = client.post("/v1/rates/convert", json={"rate": 0.05, "frequency": "WEEKLY"})
    assert response.status_code == 422


def test_applicants_endpoint(client: TestClient):
    """Test POST /v1/bank/applicants"""
    response = client.post("/v1/bank/applicants", json={"bank": {"level": 3}, "count": 4})

    assert response.status_code == 200
    applicants = response.json()["applicants"]
    assert len(applicants) == 4
    for applicant in applicants:
        assert 300 <= applicant["credit_score"] <= 850
        assert applicant["risk_tier"] in {"PRIME", "NEAR_PRIME", "SUBPRIME", "DEEP_SUBPRIME"}


def test_applicants_endpoint_is_deterministic_with_pinned_seed(client: TestClient):
    payload = {"bank": {"level": 2, "reputation": 40}, "count": 3}

    first = client.post("/v1/bank/applicants", json=payload).json()
    second = client.post("/v1/bank/applicants", json=payload).json()

    assert first == second


def test_applicants_endpoint_daily_flow(client: TestClient):
    response = client.post("/v1/bank/applicants", json={"bank": {"level": 1}})

    assert response.status_code == 200
    assert 2 <= len(response.json()["applicants"]) <= 5


def test_applicants_endpoint_caps_count(client: TestClient):
    response = client.post("/v1/bank/applicants", json={"bank": {"level": 1}, "count": 10_000})
    assert response.status_code == 422


def test_depositors_endpoint(client: TestClient):
    """Test POST /v1/bank/depositors"""
    response = client.post("/v1/bank/depositors", json={"bank": {"level": 5}, "count": 6})

    assert response.status_code == 200
    depositors = response.json()["depositors"]
    assert len(depositors) == 6
    assert all(d["initial_deposit"] >= 500 for d in depositors)
    assert all(0 < d["interest_rate"] < 0.06 for d in depositors)


def test_level_endpoint(client: TestClient):
    """Test POST /v1/bank/level"""
    response = client.post("/v1/bank/level", json={"xp": 1000})

    assert response.status_code == 200
    data = response.json()
    assert data["level"] == 5
    assert data["max_loans"] == 30
    assert data["xp_to_next"] == 600
    assert "marketing_campaigns" in data["unlocks"]
    assert data["credit_distribution"]["PRIME"] == 0.10
    assert data["deposit_products"] == [
        "CHECKING", "SAVINGS", "MONEY_MARKET", "CD_3_MONTH", "CD_6_MONTH", "CD_12_MONTH",
    ]


def test_xp_endpoint(client: TestClient):
    """Test POST /v1/bank/xp"""
    response = client.post("/v1/bank/xp", json={"action": "LOAN_APPROVED", "quantity": 2, "streak_days": 7})

    assert response.status_code == 200
    assert response.json() == {"xp": 80, "streak_multiplier": 2.0}


def test_xp_endpoint_rejects_unknown_action(client: TestClient):
    response = client.post("/v1/bank/xp", json={"action": "LOGGED_IN"})
    assert response.status_code == 422


def test_portfolio_simulation_endpoint(client: TestClient):
    """Test POST /v1/portfolio/simulate"""
    response = client.post(
        "/v1/portfolio/simulate",
        json={
            "loans": [
                {"amount": 10000, "default_probability": 1.0},
                {"amount": 5000, "default_probability": 0.0},
            ],
            "simulations": 100,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["mean_loss"] == 6000.0
    assert data["standard_deviation"] == 0.0
    assert data["expected_loss_rate"] == 40.0


def test_portfolio_simulation_requires_loans(client: TestClient):
    response = client.post("/v1/portfolio/simulate", json={"loans": []})
    assert response.status_code == 422


def test_portfolio_simulation_rejects_zero_simulations(client: TestClient):
    response = client.post(
        "/v1/portfolio/simulate",
        json={"loans": [{"amount": 1000, "default_probability": 0.1}], "simulations": 0},
    )
    assert response.status_code == 422
