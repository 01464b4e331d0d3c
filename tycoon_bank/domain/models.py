"""Domain models - pure Python dataclasses and enums for the banking game"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Type, TypeVar

from tycoon_bank.domain.exceptions import InvalidArgumentError


class EmploymentType(str, Enum):
    EMPLOYED = "EMPLOYED"
    SELF_EMPLOYED = "SELF_EMPLOYED"
    BUSINESS_OWNER = "BUSINESS_OWNER"
    UNEMPLOYED = "UNEMPLOYED"
    RETIRED = "RETIRED"


class LoanPurpose(str, Enum):
    BUSINESS_EXPANSION = "BUSINESS_EXPANSION"
    PERSONAL_EXPENSE = "PERSONAL_EXPENSE"
    HOME_MORTGAGE = "HOME_MORTGAGE"
    AUTO_LOAN = "AUTO_LOAN"
    DEBT_CONSOLIDATION = "DEBT_CONSOLIDATION"
    MEDICAL_EMERGENCY = "MEDICAL_EMERGENCY"
    EDUCATION = "EDUCATION"
    STARTUP = "STARTUP"


class RiskTier(str, Enum):
    """Ordered best to worst"""

    PRIME = "PRIME"
    NEAR_PRIME = "NEAR_PRIME"
    SUBPRIME = "SUBPRIME"
    DEEP_SUBPRIME = "DEEP_SUBPRIME"


class Recommendation(str, Enum):
    APPROVE = "APPROVE"
    REVIEW = "REVIEW"
    DENY = "DENY"


class CompoundingFrequency(str, Enum):
    DAILY = "DAILY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    ANNUALLY = "ANNUALLY"
    CONTINUOUS = "CONTINUOUS"


class InterestRateEnvironment(str, Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"


class HousingMarket(str, Enum):
    BOOM = "BOOM"
    STABLE = "STABLE"
    DECLINING = "DECLINING"


class CustomerType(str, Enum):
    INDIVIDUAL = "INDIVIDUAL"
    SMALL_BUSINESS = "SMALL_BUSINESS"
    CORPORATE = "CORPORATE"
    HIGH_NET_WORTH = "HIGH_NET_WORTH"


class AccountType(str, Enum):
    CHECKING = "CHECKING"
    SAVINGS = "SAVINGS"
    MONEY_MARKET = "MONEY_MARKET"
    CD_3_MONTH = "CD_3_MONTH"
    CD_6_MONTH = "CD_6_MONTH"
    CD_12_MONTH = "CD_12_MONTH"
    CD_24_MONTH = "CD_24_MONTH"


class XpAction(str, Enum):
    """Banking actions that earn (or cost) experience"""

    LOAN_APPROVED = "LOAN_APPROVED"
    LOAN_REPAID = "LOAN_REPAID"
    LOAN_DEFAULTED = "LOAN_DEFAULTED"
    DEPOSIT_OPENED = "DEPOSIT_OPENED"
    DEPOSIT_VOLUME = "DEPOSIT_VOLUME"
    FIRST_LOAN_BONUS = "FIRST_LOAN_BONUS"
    PERFECT_MONTH = "PERFECT_MONTH"


E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: Type[E], value: object) -> E:
    """
    Resolve a member of enum_cls from a member or its string value.

    Raises:
        InvalidArgumentError: value is not a member of enum_cls
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as e:
        raise InvalidArgumentError(f"Unknown {enum_cls.__name__}: {value!r}") from e


@dataclass(frozen=True)
class BorrowerProfile:
    """Borrower snapshot scored by the default risk model"""

    credit_score: int
    annual_income: float
    monthly_debt: float
    employment_type: EmploymentType
    years_employed: float
    bankruptcy_history: bool
    late_payment_history: int
    loan_amount: float
    loan_purpose: LoanPurpose
    has_collateral: bool = False
    collateral_value: Optional[float] = None


@dataclass(frozen=True)
class EconomicConditions:
    """Macro overlay supplied by the caller"""

    unemployment_rate: float  # 0.05 == 5%
    interest_rate_environment: InterestRateEnvironment = InterestRateEnvironment.NORMAL
    housing_market: HousingMarket = HousingMarket.STABLE
    recession: bool = False


@dataclass(frozen=True)
class DefaultFactor:
    """Single named contribution to a default probability"""

    name: str
    impact: float  # positive increases risk
    description: str


@dataclass(frozen=True)
class DefaultProbabilityResult:
    """Output of the default risk model"""

    base_rate: float
    adjusted_rate: float
    factors: List[DefaultFactor]
    risk_tier: RiskTier
    recommendation: Recommendation


@dataclass(frozen=True)
class AmortizationRow:
    """One monthly payment of an amortization schedule"""

    payment_number: int
    payment: float
    principal: float
    interest: float
    balance: float
    cumulative_interest: float
    due_date: Optional[date] = None


@dataclass(frozen=True)
class RiskAdjustedReturn:
    expected_interest: float
    expected_loss: float
    risk_adjusted_return: float
    break_even_rate: float


@dataclass(frozen=True)
class BankProfile:
    """Player bank attributes that shape NPC generation"""

    level: int = 1
    reputation: float = 0.0  # 0-100
    marketing_budget: float = 0.0  # daily spend


@dataclass
class GeneratedApplicant:
    """Synthesized loan applicant, ready to be persisted by the caller"""

    name: str
    age: int
    employment_type: EmploymentType
    employer: Optional[str]
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
    collateral_offered: Optional[str]
    risk_tier: RiskTier
    default_probability: float
    recommended_rate: float


@dataclass
class GeneratedDepositor:
    name: str
    customer_type: CustomerType
    account_type: AccountType
    initial_deposit: float
    interest_rate: float = 0.0


@dataclass(frozen=True)
class DepositProduct:
    """Terms the bank offers on one account type"""

    account_type: AccountType
    interest_rate: float  # APY
    min_balance: float = 0.0
    monthly_fee: float = 0.0
    fee_waiver_balance: Optional[float] = None
    early_withdrawal_months: int = 0  # months of interest forfeited
    min_level: int = 1


@dataclass(frozen=True)
class PortfolioLoan:
    amount: float
    default_probability: float
    loss_given_default: Optional[float] = None


@dataclass(frozen=True)
class PortfolioSimulationResult:
    """Monte Carlo loss distribution summary"""

    mean_loss: float
    standard_deviation: float
    worst_case: float  # 99th percentile
    best_case: float  # 1st percentile
    expected_loss_rate: float  # percent of notional


@dataclass(frozen=True)
class LevelConfig:
    level: int
    max_loans: int
    max_deposits: int
    xp_required: int
    xp_to_next: Optional[int]
    unlocks: List[str] = field(default_factory=list)
