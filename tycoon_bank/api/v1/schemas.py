"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from tycoon_bank.config import settings
from tycoon_bank.domain.models import (
    AccountType,
    CompoundingFrequency,
    CustomerType,
    EmploymentType,
    HousingMarket,
    InterestRateEnvironment,
    LoanPurpose,
    Recommendation,
    RiskTier,
    XpAction,
)


class BorrowerProfileSchema(BaseModel):
    """Borrower fields scored by the default risk model"""

    credit_score: int = Field(..., ge=300, le=850)
    annual_income: float = Field(..., ge=0)
    monthly_debt: float = Field(0, ge=0)
    employment_type: EmploymentType
    years_employed: float = Field(0, ge=0)
    bankruptcy_history: bool = False
    late_payment_history: int = Field(0, ge=0)
    loan_amount: float = Field(..., gt=0)
    loan_purpose: LoanPurpose
    has_collateral: bool = False
    collateral_value: Optional[float] = Field(None, gt=0)


class EconomicConditionsSchema(BaseModel):
    unemployment_rate: float = Field(..., ge=0, le=1, description="0.05 == 5%")
    interest_rate_environment: InterestRateEnvironment = InterestRateEnvironment.NORMAL
    housing_market: HousingMarket = HousingMarket.STABLE
    recession: bool = False


class DefaultProbabilityRequest(BaseModel):
    """Request body for POST /v1/risk/default-probability"""

    profile: BorrowerProfileSchema
    economic_conditions: Optional[EconomicConditionsSchema] = None


class DefaultFactorSchema(BaseModel):
    name: str
    impact: float
    description: str


class DefaultProbabilityResponse(BaseModel):
    base_rate: float
    adjusted_rate: float
    factors: List[DefaultFactorSchema]
    risk_tier: RiskTier
    recommendation: Recommendation
    monthly_default_rate: float


class LoanTermsRequest(BaseModel):
    """Request body for payment and amortization endpoints"""

    principal: float = Field(..., gt=0)
    annual_rate: float = Field(..., ge=0, le=1)
    term_months: int = Field(..., gt=0, le=600)
    start_date: Optional[date] = None


class MonthlyPaymentResponse(BaseModel):
    monthly_payment: float
    total_interest: float
    total_paid: float


class AmortizationRowSchema(BaseModel):
    payment_number: int
    payment: float
    principal: float
    interest: float
    balance: float
    cumulative_interest: float
    due_date: Optional[date] = None


class AmortizationResponse(BaseModel):
    monthly_payment: float
    total_interest: float
    rows: List[AmortizationRowSchema]


class MaxLoanRequest(BaseModel):
    """Request body for POST /v1/loans/max-amount"""

    monthly_payment: float = Field(..., gt=0)
    annual_rate: float = Field(..., ge=0, le=1)
    term_months: int = Field(..., gt=0, le=600)


class MaxLoanResponse(BaseModel):
    max_loan_amount: float


class RateConversionRequest(BaseModel):
    """Request body for POST /v1/rates/convert"""

    rate: float = Field(..., ge=0, le=1)
    direction: Literal["apr_to_apy", "apy_to_apr"] = "apr_to_apy"
    frequency: CompoundingFrequency = CompoundingFrequency.MONTHLY


class RateConversionResponse(BaseModel):
    apr: float
    apy: float
    frequency: CompoundingFrequency


class BankProfileSchema(BaseModel):
    level: int = Field(1, ge=1)
    reputation: float = Field(0, ge=0, le=100)
    marketing_budget: float = Field(0, ge=0)


class GenerationRequest(BaseModel):
    """Request body for applicant/depositor generation; count defaults to the daily flow"""

    bank: BankProfileSchema
    count: Optional[int] = Field(None, ge=1, le=settings.max_generated)


class ApplicantSchema(BaseModel):
    name: str
    age: int
    employment_type: EmploymentType
    employer: Optional[str] = None
    years_employed: int
    credit_score: int
    annual_income: float
    monthly_debt: float
    assets: float
    bankruptcy_history: bool
    late_payment_history: int
    requested_amount: float
    purpose: LoanPurpose
    requested_term_months: int
    collateral_offered: Optional[str] = None
    risk_tier: RiskTier
    default_probability: float
    recommended_rate: float


class ApplicantsResponse(BaseModel):
    applicants: List[ApplicantSchema]


class DepositorSchema(BaseModel):
    name: str
    customer_type: CustomerType
    account_type: AccountType
    initial_deposit: float
    interest_rate: float


class DepositorsResponse(BaseModel):
    depositors: List[DepositorSchema]


class LevelRequest(BaseModel):
    """Request body for POST /v1/bank/level"""

    xp: int = Field(..., ge=0)


class LevelResponse(BaseModel):
    level: int
    max_loans: int
    max_deposits: int
    xp_required: int
    xp_to_next: Optional[int] = None
    unlocks: List[str]
    credit_distribution: Dict[RiskTier, float]
    deposit_products: List[AccountType]


class XpRewardRequest(BaseModel):
    """Request body for POST /v1/bank/xp"""

    action: XpAction
    quantity: float = Field(1, ge=0, description="Occurrences, or deposit amount for DEPOSIT_VOLUME")
    streak_days: int = Field(1, ge=1)


class XpRewardResponse(BaseModel):
    xp: int
    streak_multiplier: float


class PortfolioLoanSchema(BaseModel):
    amount: float = Field(..., gt=0)
    default_probability: float = Field(..., ge=0, le=1)
    loss_given_default: Optional[float] = Field(None, ge=0, le=1)


class PortfolioSimulationRequest(BaseModel):
    """Request body for POST /v1/portfolio/simulate"""

    loans: List[PortfolioLoanSchema] = Field(..., min_length=1)
    simulations: int = Field(settings.default_simulations, ge=1, le=settings.max_simulations)


class PortfolioSimulationResponse(BaseModel):
    mean_loss: float
    standard_deviation: float
    worst_case: float
    best_case: float
    expected_loss_rate: float
