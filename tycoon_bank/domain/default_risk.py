"""Default risk model - rule-based annual default probability for borrowers"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from tycoon_bank.domain.exceptions import InvalidArgumentError
from tycoon_bank.domain.models import (
    BorrowerProfile,
    DefaultFactor,
    DefaultProbabilityResult,
    EconomicConditions,
    EmploymentType,
    HousingMarket,
    InterestRateEnvironment,
    LoanPurpose,
    Recommendation,
    RiskAdjustedReturn,
    RiskTier,
    coerce_enum,
)
from tycoon_bank.domain.random_source import PythonRandomSource, RandomSource, chance

MIN_DEFAULT_RATE = 0.01
MAX_DEFAULT_RATE = 0.95
DEFAULT_LOSS_GIVEN_DEFAULT = 0.60

# (minimum score, annual base rate); the last bucket catches everything below 550
BASE_DEFAULT_RATES: List[Tuple[int, float]] = [
    (800, 0.01),
    (750, 0.02),
    (700, 0.04),
    (650, 0.08),
    (600, 0.15),
    (550, 0.25),
    (300, 0.40),
]

RISK_TIER_THRESHOLDS: List[Tuple[int, RiskTier]] = [
    (750, RiskTier.PRIME),
    (650, RiskTier.NEAR_PRIME),
    (550, RiskTier.SUBPRIME),
]

# (max adjusted rate, recommendation)
RECOMMENDATION_THRESHOLDS: List[Tuple[float, Recommendation]] = [
    (0.10, Recommendation.APPROVE),
    (0.25, Recommendation.REVIEW),
]

LOAN_PURPOSE_RISK: Dict[LoanPurpose, float] = {
    LoanPurpose.HOME_MORTGAGE: -0.03,
    LoanPurpose.AUTO_LOAN: -0.02,
    LoanPurpose.BUSINESS_EXPANSION: 0.05,
    LoanPurpose.STARTUP: 0.10,
    LoanPurpose.DEBT_CONSOLIDATION: 0.03,
    LoanPurpose.MEDICAL_EMERGENCY: 0.02,
    LoanPurpose.EDUCATION: -0.01,
    LoanPurpose.PERSONAL_EXPENSE: 0.04,
}

# Applied cumulatively: 1 month late x1.5, 2 months x3, 3+ months x9
DELINQUENCY_ESCALATORS: List[Tuple[int, float]] = [
    (1, 1.5),
    (2, 2.0),
    (3, 3.0),
]


@dataclass(frozen=True)
class Band:
    """One rung of a mutually exclusive threshold ladder"""

    name: str
    impact: float
    applies: Callable[[float], bool]
    describe: Callable[[float], str]


def first_matching_band(bands: Sequence[Band], value: float) -> Optional[Band]:
    """Evaluate bands top-down; the first match wins and nothing stacks"""
    for band in bands:
        if band.applies(value):
            return band
    return None


DTI_BANDS: List[Band] = [
    Band("High DTI Ratio", 0.15, lambda dti: dti > 0.50,
         lambda dti: f"DTI of {dti * 100:.1f}% is very high"),
    Band("Elevated DTI Ratio", 0.08, lambda dti: dti > 0.43,
         lambda dti: f"DTI of {dti * 100:.1f}% is above preferred"),
    Band("Low DTI Ratio", -0.02, lambda dti: dti < 0.28,
         lambda dti: f"DTI of {dti * 100:.1f}% is healthy"),
]

LATE_PAYMENT_BANDS: List[Band] = [
    Band("Many Late Payments", 0.12, lambda n: n > 5,
         lambda n: f"{n:g} late payments in history"),
    Band("Some Late Payments", 0.05, lambda n: n > 2,
         lambda n: f"{n:g} late payments in history"),
    Band("Perfect Payment History", -0.02, lambda n: n == 0,
         lambda n: "No late payments on record"),
]

COLLATERAL_BANDS: List[Band] = [
    Band("Strong Collateral", -0.05, lambda ltv: ltv <= 0.8,
         lambda ltv: f"LTV of {ltv * 100:.0f}%"),
    Band("Adequate Collateral", -0.02, lambda ltv: ltv <= 1.0,
         lambda ltv: f"LTV of {ltv * 100:.0f}%"),
]

LOAN_TO_INCOME_BANDS: List[Band] = [
    Band("High Loan-to-Income", 0.10, lambda lti: lti > 5,
         lambda lti: f"Loan is {lti:.1f}x annual income"),
    Band("Elevated Loan-to-Income", 0.05, lambda lti: lti > 3,
         lambda lti: f"Loan is {lti:.1f}x annual income"),
]


def get_base_default_rate(credit_score: float) -> float:
    """Annual base default probability for a credit score bucket"""
    for min_score, rate in BASE_DEFAULT_RATES:
        if credit_score >= min_score:
            return rate
    return BASE_DEFAULT_RATES[-1][1]


def determine_risk_tier(credit_score: float) -> RiskTier:
    """Risk tier from credit score alone"""
    for min_score, tier in RISK_TIER_THRESHOLDS:
        if credit_score >= min_score:
            return tier
    return RiskTier.DEEP_SUBPRIME


def determine_recommendation(adjusted_rate: float) -> Recommendation:
    for max_rate, recommendation in RECOMMENDATION_THRESHOLDS:
        if adjusted_rate <= max_rate:
            return recommendation
    return Recommendation.DENY


def debt_to_income(profile: BorrowerProfile) -> float:
    """
    Monthly debt service including the new loan over total monthly income.

    The new loan's payment is approximated as a 36-month straight split.
    No income counts as a fully burdened borrower.
    """
    monthly_income = profile.annual_income / 12
    if monthly_income <= 0:
        return 1.0
    proposed_payment = profile.loan_amount / 36
    return (profile.monthly_debt + proposed_payment) / monthly_income


def loan_purpose_risk(purpose: LoanPurpose | str) -> float:
    """
    Signed risk adjustment for a loan purpose.

    Raises:
        InvalidArgumentError: Unknown loan purpose
    """
    return LOAN_PURPOSE_RISK[coerce_enum(LoanPurpose, purpose)]


def _employment_factors(profile: BorrowerProfile) -> List[DefaultFactor]:
    employment_type = coerce_enum(EmploymentType, profile.employment_type)
    factors = []

    if employment_type is EmploymentType.UNEMPLOYED:
        factors.append(DefaultFactor("Unemployment", 0.25, "Currently unemployed"))
    elif employment_type is EmploymentType.BUSINESS_OWNER and profile.years_employed >= 2:
        factors.append(DefaultFactor("Established Business Owner", -0.03, "Stable self-employment"))

    if profile.years_employed < 1 and employment_type is not EmploymentType.UNEMPLOYED:
        factors.append(DefaultFactor("Short Employment", 0.05, "Less than 1 year at current job"))
    elif profile.years_employed >= 5:
        factors.append(
            DefaultFactor("Long Employment", -0.02, f"{profile.years_employed:g} years at current job")
        )

    return factors


def _economic_factors(
    purpose: LoanPurpose,
    conditions: EconomicConditions,
) -> List[DefaultFactor]:
    factors = []

    if conditions.recession:
        factors.append(DefaultFactor("Recession", 0.15, "Economic recession in progress"))

    if conditions.unemployment_rate > 0.08:
        factors.append(
            DefaultFactor(
                "High Unemployment",
                0.05,
                f"National unemployment at {conditions.unemployment_rate * 100:.1f}%",
            )
        )

    rate_environment = coerce_enum(InterestRateEnvironment, conditions.interest_rate_environment)
    if rate_environment is InterestRateEnvironment.HIGH:
        factors.append(
            DefaultFactor("High Interest Environment", 0.03, "Rising rates increase default risk")
        )

    if purpose is LoanPurpose.HOME_MORTGAGE:
        housing = coerce_enum(HousingMarket, conditions.housing_market)
        if housing is HousingMarket.DECLINING:
            factors.append(
                DefaultFactor("Declining Housing Market", 0.08, "Underwater mortgages more likely")
            )
        elif housing is HousingMarket.BOOM:
            factors.append(
                DefaultFactor("Strong Housing Market", -0.02, "Property values supporting loans")
            )

    return factors


def _band_factor(bands: Sequence[Band], value: float) -> List[DefaultFactor]:
    band = first_matching_band(bands, value)
    if band is None:
        return []
    return [DefaultFactor(band.name, band.impact, band.describe(value))]


def calculate_default_probability(
    profile: BorrowerProfile,
    economic_conditions: Optional[EconomicConditions] = None,
) -> DefaultProbabilityResult:
    """
    Annual default probability with a factor-by-factor breakdown.

    Starts from the credit-score base rate and adds each independent
    adjustment in a fixed order: DTI, employment, bankruptcy, late payments,
    loan purpose, collateral, loan-to-income and (when supplied) the
    economic overlay. The sum is clamped to [0.01, 0.95].

    The risk tier depends on credit score only; the recommendation on the
    clamped probability.

    Raises:
        InvalidArgumentError: Unknown enumeration value in the profile
    """
    purpose = coerce_enum(LoanPurpose, profile.loan_purpose)
    base_rate = get_base_default_rate(profile.credit_score)

    factors: List[DefaultFactor] = [
        DefaultFactor("Credit Score", 0.0, f"Credit score of {profile.credit_score}")
    ]

    factors += _band_factor(DTI_BANDS, debt_to_income(profile))
    factors += _employment_factors(profile)

    if profile.bankruptcy_history:
        factors.append(DefaultFactor("Bankruptcy History", 0.20, "Previous bankruptcy on record"))

    factors += _band_factor(LATE_PAYMENT_BANDS, profile.late_payment_history)

    purpose_impact = loan_purpose_risk(purpose)
    if purpose_impact != 0:
        factors.append(
            DefaultFactor("Loan Purpose", purpose_impact, purpose.value.replace("_", " ").lower())
        )

    if profile.has_collateral and profile.collateral_value:
        ltv = profile.loan_amount / profile.collateral_value
        factors += _band_factor(COLLATERAL_BANDS, ltv)

    if profile.annual_income > 0:
        loan_to_income = profile.loan_amount / profile.annual_income
    else:
        loan_to_income = float("inf")
    factors += _band_factor(LOAN_TO_INCOME_BANDS, loan_to_income)

    if economic_conditions is not None:
        factors += _economic_factors(purpose, economic_conditions)

    probability = base_rate + sum(f.impact for f in factors)
    adjusted_rate = max(MIN_DEFAULT_RATE, min(MAX_DEFAULT_RATE, probability))

    return DefaultProbabilityResult(
        base_rate=base_rate,
        adjusted_rate=adjusted_rate,
        factors=factors,
        risk_tier=determine_risk_tier(profile.credit_score),
        recommendation=determine_recommendation(adjusted_rate),
    )


def should_default_this_month(
    monthly_default_probability: float,
    months_delinquent: int = 0,
    rng: Optional[RandomSource] = None,
) -> bool:
    """One Bernoulli trial for a loan's monthly default, escalated by delinquency"""
    rng = rng or PythonRandomSource()
    probability = monthly_default_probability
    for min_months, multiplier in DELINQUENCY_ESCALATORS:
        if months_delinquent >= min_months:
            probability *= multiplier
    return chance(rng, probability)


def annual_to_monthly_default_rate(annual_rate: float) -> float:
    """
    Monthly hazard with the same one-year survival probability.

    1 - annual = (1 - monthly)^12
    """
    return 1 - (1 - annual_rate) ** (1 / 12)


def calculate_expected_loss(
    loan_amount: float,
    default_probability: float,
    loss_given_default: float = DEFAULT_LOSS_GIVEN_DEFAULT,
) -> float:
    """EL = EAD * PD * LGD"""
    return loan_amount * default_probability * loss_given_default


def calculate_risk_adjusted_return(
    loan_amount: float,
    interest_rate: float,
    term_months: int,
    default_probability: float,
    loss_given_default: float = DEFAULT_LOSS_GIVEN_DEFAULT,
) -> RiskAdjustedReturn:
    """
    Interest earned net of expected credit loss.

    Interest accrues on a straight-line declining balance. The break-even
    rate is the annual rate that just covers the expected loss.
    """
    if loan_amount <= 0 or term_months <= 0:
        raise InvalidArgumentError("Loan amount and term must be positive")

    monthly_rate = interest_rate / 12
    principal_step = loan_amount / term_months
    expected_interest = sum(
        (loan_amount - month * principal_step) * monthly_rate for month in range(term_months)
    )

    expected_loss = calculate_expected_loss(loan_amount, default_probability, loss_given_default)
    break_even_rate = (expected_loss / loan_amount) / (term_months / 12)

    return RiskAdjustedReturn(
        expected_interest=round(expected_interest, 2),
        expected_loss=round(expected_loss, 2),
        risk_adjusted_return=round(expected_interest - expected_loss, 2),
        break_even_rate=round(break_even_rate, 4),
    )
