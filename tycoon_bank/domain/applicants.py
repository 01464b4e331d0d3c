"""NPC loan applicant and depositor generation for the banking game"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from tycoon_bank.domain.balance import get_deposit_product
from tycoon_bank.domain.default_risk import calculate_default_probability
from tycoon_bank.domain.exceptions import InvalidArgumentError
from tycoon_bank.domain.models import (
    AccountType,
    BankProfile,
    BorrowerProfile,
    CustomerType,
    EmploymentType,
    GeneratedApplicant,
    GeneratedDepositor,
    LoanPurpose,
)
from tycoon_bank.domain.random_source import PythonRandomSource, RandomSource, chance, pick, uniform

T = TypeVar("T")

MIN_CREDIT_SCORE = 300
MAX_CREDIT_SCORE = 850

MALE_FIRST_NAMES = [
    "James", "Michael", "Robert", "David", "William", "Joseph", "Charles", "Thomas",
    "Daniel", "Matthew", "Jose", "Carlos", "Juan", "Luis", "Miguel", "Wei", "Chen",
    "Li", "Zhang", "Wang", "Mohammed", "Ahmed", "Ali", "Omar", "Hassan", "Hiroshi",
    "Takeshi", "Kenji", "Yuki", "Ryu", "Raj", "Amit", "Pradeep", "Sanjay", "Vikram",
    "Dmitri", "Alexei", "Ivan", "Sergei", "Vladimir",
]

FEMALE_FIRST_NAMES = [
    "Mary", "Jennifer", "Patricia", "Linda", "Elizabeth", "Barbara", "Susan", "Jessica",
    "Sarah", "Karen", "Maria", "Ana", "Carmen", "Rosa", "Gloria", "Mei", "Ling", "Xiu",
    "Fang", "Yan", "Fatima", "Aisha", "Layla", "Noor", "Sara", "Yuki", "Sakura", "Hana",
    "Mika", "Emi", "Priya", "Anjali", "Deepa", "Kavita", "Sunita", "Olga", "Natasha",
    "Svetlana", "Anna", "Elena",
]

LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis",
    "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez", "Wilson", "Anderson",
    "Thomas", "Taylor", "Moore", "Jackson", "Martin", "Lee", "Perez", "Thompson",
    "White", "Harris", "Sanchez", "Clark", "Ramirez", "Lewis", "Robinson", "Walker",
    "Young", "Allen", "King", "Wright", "Scott", "Torres", "Nguyen", "Hill", "Flores",
    "Green", "Adams", "Nelson", "Baker", "Hall", "Rivera", "Campbell", "Mitchell",
    "Carter", "Roberts", "Chen", "Wang", "Li", "Zhang", "Liu", "Kim", "Park", "Choi",
    "Patel", "Singh", "Kumar", "Shah", "Gupta", "Sharma", "Ali", "Khan", "Hussein",
    "Ahmed", "Tanaka", "Yamamoto", "Sato", "Suzuki", "Ivanov", "Petrov", "Müller",
    "Schmidt", "Cohen", "Levy",
]

EMPLOYERS_BY_INDUSTRY: Dict[str, List[str]] = {
    "tech": [
        "Google", "Microsoft", "Amazon", "Apple", "Meta", "Salesforce", "Oracle", "IBM",
        "Intel", "Cisco", "TechCorp", "DataSystems", "CloudBase", "CodeWorks", "DigitalFirst",
    ],
    "finance": [
        "JPMorgan Chase", "Bank of America", "Wells Fargo", "Citigroup", "Goldman Sachs",
        "Morgan Stanley", "Capital One", "American Express", "Visa", "Mastercard",
    ],
    "healthcare": [
        "UnitedHealth", "CVS Health", "Anthem", "Cigna", "Humana", "HCA Healthcare",
        "Kaiser", "Cleveland Clinic", "Mayo Clinic", "Johns Hopkins",
    ],
    "retail": [
        "Walmart", "Amazon", "Costco", "Target", "Walgreens", "CVS", "Home Depot",
        "Lowe's", "Best Buy", "Kroger",
    ],
    "manufacturing": [
        "General Motors", "Ford", "Toyota", "Boeing", "Lockheed Martin", "General Electric",
        "Caterpillar", "3M", "Honeywell", "Johnson & Johnson",
    ],
    "general": [
        "Acme Corp", "GlobalTech", "United Industries", "Prime Services", "Atlas Group",
        "Pinnacle Corp", "Summit LLC", "Horizon Inc", "Apex Systems", "Vertex Partners",
    ],
}

SELF_EMPLOYED_LABEL = "Self-Employed"

# Realistic US distribution: (cumulative probability, score floor, score span)
CREDIT_SCORE_BUCKETS: List[Tuple[float, float, float]] = [
    (0.16, 300, 279),
    (0.33, 580, 89),
    (0.54, 670, 69),
    (0.79, 740, 59),
    (1.00, 800, 50),
]

# (annual income floor, span) by employment type
INCOME_RANGES: Dict[EmploymentType, Tuple[float, float]] = {
    EmploymentType.EMPLOYED: (35_000, 100_000),
    EmploymentType.SELF_EMPLOYED: (40_000, 150_000),
    EmploymentType.BUSINESS_OWNER: (60_000, 300_000),
    EmploymentType.RETIRED: (20_000, 60_000),
    EmploymentType.UNEMPLOYED: (5_000, 30_000),  # savings, benefits
}

COLLATERAL_COVERAGE = 1.2
BASE_LENDING_RATE = 0.05
RISK_PREMIUM_FACTOR = 0.5
MAX_RECOMMENDED_RATE = 0.30


@dataclass(frozen=True)
class LoanRequestTemplate:
    """How a purpose sizes its request: amount(rng, income), term options, collateral"""

    amount: Callable[[RandomSource, float], float]
    terms: Sequence[int]
    collateral: Optional[str] = None


LOAN_REQUEST_TEMPLATES: Dict[LoanPurpose, LoanRequestTemplate] = {
    LoanPurpose.HOME_MORTGAGE: LoanRequestTemplate(
        lambda rng, income: income * uniform(rng, 2, 6), (180, 240, 360), "Property being purchased"
    ),
    LoanPurpose.AUTO_LOAN: LoanRequestTemplate(
        lambda rng, income: uniform(rng, 15_000, 75_000), (36, 48, 60, 72), "Vehicle being purchased"
    ),
    LoanPurpose.BUSINESS_EXPANSION: LoanRequestTemplate(
        lambda rng, income: income * uniform(rng, 0.5, 2.0), (24, 36, 48, 60)
    ),
    LoanPurpose.STARTUP: LoanRequestTemplate(
        lambda rng, income: uniform(rng, 25_000, 225_000), (36, 48, 60)
    ),
    LoanPurpose.EDUCATION: LoanRequestTemplate(
        lambda rng, income: uniform(rng, 10_000, 110_000), (60, 120, 180)
    ),
    LoanPurpose.DEBT_CONSOLIDATION: LoanRequestTemplate(
        lambda rng, income: income * uniform(rng, 0.3, 1.0), (36, 48, 60)
    ),
    LoanPurpose.MEDICAL_EMERGENCY: LoanRequestTemplate(
        lambda rng, income: uniform(rng, 5_000, 55_000), (12, 24, 36, 48)
    ),
    LoanPurpose.PERSONAL_EXPENSE: LoanRequestTemplate(
        lambda rng, income: uniform(rng, 2_000, 32_000), (12, 24, 36)
    ),
}

# (initial deposit floor, span) by customer type
DEPOSIT_RANGES: Dict[CustomerType, Tuple[float, float]] = {
    CustomerType.INDIVIDUAL: (500, 10_000),
    CustomerType.SMALL_BUSINESS: (5_000, 50_000),
    CustomerType.CORPORATE: (50_000, 500_000),
    CustomerType.HIGH_NET_WORTH: (100_000, 1_000_000),
}

CERTIFICATE_ACCOUNTS = [
    AccountType.CD_3_MONTH,
    AccountType.CD_6_MONTH,
    AccountType.CD_12_MONTH,
    AccountType.CD_24_MONTH,
]


def _draw_from_ladder(roll: float, ladder: Sequence[Tuple[float, T]], fallback: T) -> T:
    """Categorical draw from an ordered list of (upper bound, outcome)"""
    for upper, outcome in ladder:
        if roll < upper:
            return outcome
    return fallback


def generate_name(rng: RandomSource) -> str:
    first_names = MALE_FIRST_NAMES if chance(rng, 0.5) else FEMALE_FIRST_NAMES
    return f"{pick(rng, first_names)} {pick(rng, LAST_NAMES)}"


def generate_employer(employment_type: EmploymentType, rng: RandomSource) -> Optional[str]:
    """Employer name, none for people without one"""
    if employment_type in (EmploymentType.UNEMPLOYED, EmploymentType.RETIRED):
        return None
    if employment_type in (EmploymentType.SELF_EMPLOYED, EmploymentType.BUSINESS_OWNER):
        return SELF_EMPLOYED_LABEL
    industry = pick(rng, list(EMPLOYERS_BY_INDUSTRY))
    return pick(rng, EMPLOYERS_BY_INDUSTRY[industry])


def generate_credit_score(bank_level: int, reputation: float, rng: RandomSource) -> int:
    """
    Credit score drawn from the national distribution, shifted up for
    better-known banks: level * 5 + reputation * 0.3 + U(-10, 10).
    """
    roll = rng.next_float()
    floor, span = CREDIT_SCORE_BUCKETS[-1][1:]
    for cumulative, bucket_floor, bucket_span in CREDIT_SCORE_BUCKETS:
        if roll < cumulative:
            floor, span = bucket_floor, bucket_span
            break

    base_score = floor + rng.next_float() * span
    quality_bonus = bank_level * 5 + reputation * 0.3
    adjusted = base_score + quality_bonus + uniform(rng, -10, 10)

    return min(MAX_CREDIT_SCORE, max(MIN_CREDIT_SCORE, round(adjusted)))


def generate_employment_type(bank_level: int, rng: RandomSource) -> EmploymentType:
    """Higher level banks see slightly more business owners"""
    ladder = [
        (0.55, EmploymentType.EMPLOYED),
        (0.75, EmploymentType.SELF_EMPLOYED),
        (0.85 + bank_level * 0.01, EmploymentType.BUSINESS_OWNER),
        (0.92, EmploymentType.RETIRED),
    ]
    return _draw_from_ladder(rng.next_float(), ladder, EmploymentType.UNEMPLOYED)


def age_income_multiplier(age: int) -> float:
    """Peak earning years 35-55"""
    if 35 <= age <= 55:
        return 1.2
    if age < 25:
        return 0.7
    if age > 65:
        return 0.8
    return 1.0


def generate_annual_income(
    employment_type: EmploymentType,
    age: int,
    credit_score: int,
    rng: RandomSource,
) -> int:
    try:
        floor, span = INCOME_RANGES[employment_type]
    except KeyError as e:
        raise InvalidArgumentError(f"No income range for {employment_type!r}") from e

    base_income = floor + rng.next_float() * span
    credit_multiplier = 0.7 + (credit_score / MAX_CREDIT_SCORE) * 0.6
    return round(base_income * age_income_multiplier(age) * credit_multiplier)


def generate_loan_request(
    purpose: LoanPurpose,
    annual_income: float,
    rng: RandomSource,
) -> Tuple[int, int, Optional[str]]:
    """
    Size a loan request for a purpose.

    Returns:
        (amount, term_months, collateral description or None)
    """
    try:
        template = LOAN_REQUEST_TEMPLATES[purpose]
    except KeyError as e:
        raise InvalidArgumentError(f"No loan request template for {purpose!r}") from e

    amount = round(template.amount(rng, annual_income))
    term_months = pick(rng, template.terms)
    return amount, term_months, template.collateral


def recommended_rate_for(default_probability: float) -> float:
    """Base lending rate plus half the default probability, capped at 30%"""
    rate = min(MAX_RECOMMENDED_RATE, BASE_LENDING_RATE + default_probability * RISK_PREMIUM_FACTOR)
    return round(rate, 4)


def generate_single_applicant(
    bank_profile: BankProfile,
    rng: Optional[RandomSource] = None,
) -> GeneratedApplicant:
    """
    Synthesize one loan applicant and score it with the default risk model.

    Demographics and employment are drawn first, then the financial profile
    (credit score, income, debt, assets, history) and finally a loan request
    sized for a uniformly drawn purpose.
    """
    rng = rng or PythonRandomSource()

    name = generate_name(rng)
    age = 18 + math.floor(rng.next_float() * 62)

    employment_type = generate_employment_type(bank_profile.level, rng)
    employer = generate_employer(employment_type, rng)
    years_employed = math.floor(rng.next_float() * min(age - 18, 40))

    credit_score = generate_credit_score(bank_profile.level, bank_profile.reputation, rng)
    annual_income = generate_annual_income(employment_type, age, credit_score, rng)
    monthly_debt = (annual_income / 12) * uniform(rng, 0, 0.4)
    assets = annual_income * uniform(rng, 0, 5)

    bankruptcy_history = chance(rng, 0.05 * (MAX_CREDIT_SCORE - credit_score) / 550)
    late_payment_history = math.floor(rng.next_float() * (11 - credit_score / 100))

    purpose = pick(rng, list(LoanPurpose))
    amount, term_months, collateral = generate_loan_request(purpose, annual_income, rng)

    risk = calculate_default_probability(
        BorrowerProfile(
            credit_score=credit_score,
            annual_income=annual_income,
            monthly_debt=monthly_debt,
            employment_type=employment_type,
            years_employed=years_employed,
            bankruptcy_history=bankruptcy_history,
            late_payment_history=late_payment_history,
            loan_amount=amount,
            loan_purpose=purpose,
            has_collateral=collateral is not None,
            collateral_value=amount * COLLATERAL_COVERAGE if collateral else None,
        )
    )

    return GeneratedApplicant(
        name=name,
        age=age,
        employment_type=employment_type,
        employer=employer,
        years_employed=years_employed,
        credit_score=credit_score,
        annual_income=annual_income,
        monthly_debt=round(monthly_debt, 2),
        assets=round(assets, 2),
        bankruptcy_history=bankruptcy_history,
        late_payment_history=late_payment_history,
        requested_amount=amount,
        purpose=purpose,
        requested_term_months=term_months,
        collateral_offered=collateral,
        risk_tier=risk.risk_tier,
        default_probability=risk.adjusted_rate,
        recommended_rate=recommended_rate_for(risk.adjusted_rate),
    )


def calculate_applicant_count(
    bank_profile: BankProfile,
    rng: Optional[RandomSource] = None,
) -> int:
    """
    Daily applicant flow.

    Base 3 + 0.5 per level, +0.5 per $1000 of marketing, + reputation / 50,
    then +/-30% noise. Always at least one applicant.
    """
    rng = rng or PythonRandomSource()
    base_count = 3 + bank_profile.level * 0.5
    marketing_bonus = bank_profile.marketing_budget / 2000
    reputation_bonus = bank_profile.reputation / 50

    noise = uniform(rng, 0.7, 1.3)
    return max(1, round((base_count + marketing_bonus + reputation_bonus) * noise))


def generate_applicants(
    bank_profile: BankProfile,
    count: Optional[int] = None,
    rng: Optional[RandomSource] = None,
) -> List[GeneratedApplicant]:
    rng = rng or PythonRandomSource()
    applicant_count = count if count is not None else calculate_applicant_count(bank_profile, rng)
    return [generate_single_applicant(bank_profile, rng) for _ in range(applicant_count)]


def generate_customer_type(bank_level: int, rng: RandomSource) -> CustomerType:
    ladder = [
        (0.65, CustomerType.INDIVIDUAL),
        (0.85, CustomerType.SMALL_BUSINESS),
        (0.95 + bank_level * 0.005, CustomerType.CORPORATE),
    ]
    return _draw_from_ladder(rng.next_float(), ladder, CustomerType.HIGH_NET_WORTH)


def generate_account_type(rng: RandomSource) -> AccountType:
    ladder = [
        (0.30, AccountType.CHECKING),
        (0.55, AccountType.SAVINGS),
        (0.70, AccountType.MONEY_MARKET),
    ]
    account_type = _draw_from_ladder(rng.next_float(), ladder, None)
    return account_type or pick(rng, CERTIFICATE_ACCOUNTS)


def generate_depositors(
    bank_profile: BankProfile,
    count: Optional[int] = None,
    rng: Optional[RandomSource] = None,
) -> List[GeneratedDepositor]:
    """
    Synthesize new depositors; by default 1.5x the day's applicant flow.
    """
    rng = rng or PythonRandomSource()
    if count is None:
        count = round(calculate_applicant_count(bank_profile, rng) * 1.5)

    depositors = []
    for _ in range(count):
        name = generate_name(rng)
        customer_type = generate_customer_type(bank_profile.level, rng)
        account_type = generate_account_type(rng)
        floor, span = DEPOSIT_RANGES[customer_type]

        depositors.append(
            GeneratedDepositor(
                name=name,
                customer_type=customer_type,
                account_type=account_type,
                initial_deposit=round(floor + rng.next_float() * span, 2),
                interest_rate=get_deposit_product(account_type).interest_rate,
            )
        )

    return depositors
