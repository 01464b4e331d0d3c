"""Banking gameplay balance tables - rates, default curves, level progression"""

from typing import Dict, List

from tycoon_bank.domain.models import (
    AccountType,
    DepositProduct,
    LevelConfig,
    RiskTier,
    XpAction,
    coerce_enum,
)

# APR bands by risk tier
INTEREST_RATES: Dict[RiskTier, Dict[str, float]] = {
    RiskTier.PRIME: {"min": 0.05, "base": 0.07, "max": 0.10},
    RiskTier.NEAR_PRIME: {"min": 0.09, "base": 0.12, "max": 0.16},
    RiskTier.SUBPRIME: {"min": 0.15, "base": 0.20, "max": 0.25},
    RiskTier.DEEP_SUBPRIME: {"min": 0.22, "base": 0.28, "max": 0.35},
}

RATE_ADJUSTMENTS = {
    "employment_year": -0.002,
    "employment_cap": -0.02,
    "collateral_discount": -0.03,
}

# Annual default rates by tier, normal and recession
DEFAULT_RATES: Dict[RiskTier, Dict[str, float]] = {
    RiskTier.PRIME: {"base": 0.015, "stressed": 0.04},
    RiskTier.NEAR_PRIME: {"base": 0.06, "stressed": 0.12},
    RiskTier.SUBPRIME: {"base": 0.15, "stressed": 0.28},
    RiskTier.DEEP_SUBPRIME: {"base": 0.30, "stressed": 0.50},
}

LOSS_GIVEN_DEFAULT = {
    "UNSECURED": 0.65,
    "AUTO_LOAN": 0.45,
    "HOME_MORTGAGE": 0.25,
    "BUSINESS_SECURED": 0.40,
}

MAX_LEVEL = 20

# Cumulative XP to reach each level, index 0 == level 1
XP_REQUIREMENTS: List[int] = [
    0, 100, 300, 600, 1000, 1600, 2500, 4000, 6000, 9000,
    13000, 18000, 25000, 35000, 50000, 70000, 100000, 140000, 200000, 300000,
]

MAX_ACTIVE_LOANS: List[int] = [
    5, 10, 15, 20, 30, 40, 50, 65, 80, 100,
    125, 150, 180, 220, 270, 330, 400, 500, 650, 1000,
]

MAX_DEPOSITS: List[int] = [
    10, 20, 35, 50, 75, 100, 150, 200, 275, 400,
    550, 750, 1000, 1500, 2000, 3000, 4500, 7000, 10000, 20000,
]

LEVEL_UNLOCKS: Dict[int, List[str]] = {
    2: ["auto_reject_low_credit"],
    3: ["bulk_approve", "credit_reports"],
    5: ["marketing_campaigns", "cd_products"],
    7: ["auto_approve_prime"],
    10: ["investment_accounts", "business_loans"],
    12: ["securitization"],
    15: ["international_lending"],
    18: ["commercial_real_estate"],
    20: ["investment_banking", "ipo_underwriting"],
}



XP_REWARDS: Dict[XpAction, int] = {
    XpAction.LOAN_APPROVED: 20,
    XpAction.LOAN_REPAID: 50,
    XpAction.LOAN_DEFAULTED: -10,
    XpAction.DEPOSIT_OPENED: 10,
    XpAction.DEPOSIT_VOLUME: 5,  # per DEPOSIT_VOLUME_UNIT on deposit
    XpAction.FIRST_LOAN_BONUS: 15,
    XpAction.PERFECT_MONTH: 100,
}

DEPOSIT_VOLUME_UNIT = 10_000

# Multiplier by consecutive active days, index 0 == day 1; day 7 onwards caps
DAILY_STREAK: List[float] = [1.0, 1.1, 1.2, 1.35, 1.5, 1.75, 2.0]

# Share of applicants per tier, by bank level band
CREDIT_DISTRIBUTION: Dict[str, Dict[RiskTier, float]] = {
    "LOW": {RiskTier.PRIME: 0.10, RiskTier.NEAR_PRIME: 0.25, RiskTier.SUBPRIME: 0.40, RiskTier.DEEP_SUBPRIME: 0.25},
    "MEDIUM": {RiskTier.PRIME: 0.20, RiskTier.NEAR_PRIME: 0.35, RiskTier.SUBPRIME: 0.30, RiskTier.DEEP_SUBPRIME: 0.15},
    "HIGH": {RiskTier.PRIME: 0.30, RiskTier.NEAR_PRIME: 0.40, RiskTier.SUBPRIME: 0.20, RiskTier.DEEP_SUBPRIME: 0.10},
    "PREMIUM": {RiskTier.PRIME: 0.45, RiskTier.NEAR_PRIME: 0.35, RiskTier.SUBPRIME: 0.15, RiskTier.DEEP_SUBPRIME: 0.05},
}

# (minimum level, distribution band)
CREDIT_DISTRIBUTION_BANDS = [(16, "PREMIUM"), (11, "HIGH"), (6, "MEDIUM")]

DEPOSIT_PRODUCTS: Dict[AccountType, DepositProduct] = {
    AccountType.CHECKING: DepositProduct(AccountType.CHECKING, 0.001),
    AccountType.SAVINGS: DepositProduct(AccountType.SAVINGS, 0.025, min_balance=100),
    AccountType.MONEY_MARKET: DepositProduct(
        AccountType.MONEY_MARKET, 0.035, min_balance=2500, monthly_fee=10, fee_waiver_balance=10_000, min_level=5
    ),
    AccountType.CD_3_MONTH: DepositProduct(AccountType.CD_3_MONTH, 0.04, early_withdrawal_months=1, min_level=5),
    AccountType.CD_6_MONTH: DepositProduct(AccountType.CD_6_MONTH, 0.045, early_withdrawal_months=2, min_level=5),
    AccountType.CD_12_MONTH: DepositProduct(AccountType.CD_12_MONTH, 0.05, early_withdrawal_months=3, min_level=5),
    AccountType.CD_24_MONTH: DepositProduct(AccountType.CD_24_MONTH, 0.055, early_withdrawal_months=6, min_level=10),
}


def get_level_config(level: int) -> LevelConfig:
    """Capacity and unlocks for a bank level (clamped to 1-20)"""
    level = max(1, min(MAX_LEVEL, level))
    index = level - 1
    xp_required = XP_REQUIREMENTS[index]
    xp_to_next = XP_REQUIREMENTS[index + 1] - xp_required if level < MAX_LEVEL else None

    unlocks: List[str] = []
    for unlock_level in sorted(LEVEL_UNLOCKS):
        if unlock_level <= level:
            unlocks.extend(LEVEL_UNLOCKS[unlock_level])

    return LevelConfig(
        level=level,
        max_loans=MAX_ACTIVE_LOANS[index],
        max_deposits=MAX_DEPOSITS[index],
        xp_required=xp_required,
        xp_to_next=xp_to_next,
        unlocks=unlocks,
    )


def level_for_xp(xp: int) -> int:
    """Highest level whose XP requirement has been met"""
    level = 1
    for index, required in enumerate(XP_REQUIREMENTS):
        if xp >= required:
            level = index + 1
    return level


def get_recommended_rate(
    risk_tier: RiskTier | str,
    has_collateral: bool = False,
    years_employed: float = 0,
) -> float:
    """
    Suggested APR for a tier after collateral and tenure discounts.

    Tenure earns -0.2% per year, at most -2%. The result never leaves the
    tier's min/max band.

    Raises:
        InvalidArgumentError: Unknown risk tier
    """
    band = INTEREST_RATES[coerce_enum(RiskTier, risk_tier)]
    rate = band["base"]

    if has_collateral:
        rate += RATE_ADJUSTMENTS["collateral_discount"]

    rate += max(years_employed * RATE_ADJUSTMENTS["employment_year"], RATE_ADJUSTMENTS["employment_cap"])

    return max(band["min"], min(band["max"], rate))


def get_credit_distribution(level: int) -> Dict[RiskTier, float]:
    """Expected applicant mix by risk tier for a bank level"""
    for min_level, band in CREDIT_DISTRIBUTION_BANDS:
        if level >= min_level:
            return dict(CREDIT_DISTRIBUTION[band])
    return dict(CREDIT_DISTRIBUTION["LOW"])


def streak_multiplier(streak_days: int) -> float:
    """XP multiplier for a run of consecutive active days (day 1 earns x1)"""
    index = max(0, min(len(DAILY_STREAK), streak_days) - 1)
    return DAILY_STREAK[index]


def calculate_xp_reward(action: XpAction | str, quantity: float = 1, streak_days: int = 1) -> int:
    """
    XP earned for performing an action quantity times.

    For DEPOSIT_VOLUME the quantity is the deposit amount in currency and is
    counted in whole DEPOSIT_VOLUME_UNIT blocks. The streak multiplier scales
    awards only; penalties apply at face value.

    Raises:
        InvalidArgumentError: Unknown action
    """
    action = coerce_enum(XpAction, action)
    if action is XpAction.DEPOSIT_VOLUME:
        quantity = quantity // DEPOSIT_VOLUME_UNIT

    xp = XP_REWARDS[action] * quantity
    if xp > 0:
        xp *= streak_multiplier(streak_days)
    return round(xp)


def get_deposit_product(account_type: AccountType | str) -> DepositProduct:
    """
    Raises:
        InvalidArgumentError: Unknown account type
    """
    return DEPOSIT_PRODUCTS[coerce_enum(AccountType, account_type)]


def available_deposit_products(level: int) -> List[DepositProduct]:
    """Products unlocked at a bank level, in catalogue order"""
    return [product for product in DEPOSIT_PRODUCTS.values() if product.min_level <= level]


def deposit_monthly_fee(account_type: AccountType | str, balance: float) -> float:
    """Maintenance fee for a month, waived above the product's waiver balance"""
    product = get_deposit_product(account_type)
    if product.fee_waiver_balance is not None and balance >= product.fee_waiver_balance:
        return 0.0
    return product.monthly_fee


def early_withdrawal_penalty(account_type: AccountType | str, balance: float) -> float:
    """Interest forfeited when a certificate is broken early: N months at the product rate"""
    product = get_deposit_product(account_type)
    return round(balance * product.interest_rate / 12 * product.early_withdrawal_months, 2)
