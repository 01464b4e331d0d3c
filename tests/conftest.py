"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient

from tycoon_bank.api.dependencies import get_random_source
from tycoon_bank.api.main import create_app
from tycoon_bank.domain.models import (
    BankProfile,
    BorrowerProfile,
    EmploymentType,
    LoanPurpose,
)
from tycoon_bank.domain.random_source import PythonRandomSource

TEST_SEED = 20251205


@pytest.fixture
def rng() -> PythonRandomSource:
    """Deterministic random source"""
    return PythonRandomSource(seed=TEST_SEED)


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client with a pinned random source"""
    app = create_app()
    app.dependency_overrides[get_random_source] = lambda: PythonRandomSource(seed=TEST_SEED)
    return TestClient(app)


@pytest.fixture
def prime_borrower() -> BorrowerProfile:
    """Excellent credit, long tenure, well-collateralized mortgage"""
    return BorrowerProfile(
        credit_score=800,
        annual_income=300_000,
        monthly_debt=300,
        employment_type=EmploymentType.EMPLOYED,
        years_employed=10,
        bankruptcy_history=False,
        late_payment_history=0,
        loan_amount=200_000,
        loan_purpose=LoanPurpose.HOME_MORTGAGE,
        has_collateral=True,
        collateral_value=200_000 / 0.7,
    )


@pytest.fixture
def distressed_borrower() -> BorrowerProfile:
    """Deep subprime, unemployed, bankrupt, chronically late"""
    return BorrowerProfile(
        credit_score=500,
        annual_income=20_000,
        monthly_debt=600,
        employment_type=EmploymentType.UNEMPLOYED,
        years_employed=0,
        bankruptcy_history=True,
        late_payment_history=8,
        loan_amount=10_000,
        loan_purpose=LoanPurpose.PERSONAL_EXPENSE,
    )


@pytest.fixture
def starter_bank() -> BankProfile:
    return BankProfile(level=1, reputation=0, marketing_budget=0)
