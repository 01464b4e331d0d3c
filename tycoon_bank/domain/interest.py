"""Interest math - payments, amortization, rate conversions"""

import math
from datetime import date
from typing import Dict, Iterator, List, Union

from tycoon_bank.domain.exceptions import InvalidArgumentError
from tycoon_bank.domain.models import AmortizationRow, CompoundingFrequency, coerce_enum
from tycoon_bank.utils.date_utils import payment_due_date

# Discrete compounding periods per year; CONTINUOUS is handled separately
PERIODS_PER_YEAR: Dict[CompoundingFrequency, int] = {
    CompoundingFrequency.DAILY: 365,
    CompoundingFrequency.MONTHLY: 12,
    CompoundingFrequency.QUARTERLY: 4,
    CompoundingFrequency.ANNUALLY: 1,
}

EFFECTIVE_RATE_MAX_ITERATIONS = 100
EFFECTIVE_RATE_TOLERANCE = 1e-6  # currency units of present value

FrequencyLike = Union[CompoundingFrequency, str]


def _periods(frequency: FrequencyLike) -> int | None:
    """Periods per year, or None for continuous compounding"""
    freq = coerce_enum(CompoundingFrequency, frequency)
    if freq is CompoundingFrequency.CONTINUOUS:
        return None
    return PERIODS_PER_YEAR[freq]


def simple_interest(principal: float, annual_rate: float, years: float) -> float:
    """Interest earned without compounding: P * r * t"""
    return principal * annual_rate * years


def compound_interest(
    principal: float,
    annual_rate: float,
    years: float,
    frequency: FrequencyLike = CompoundingFrequency.MONTHLY,
) -> float:
    """
    Accumulated amount after compounding.

    Discrete: P * (1 + r/n)^(n*t). Continuous: P * e^(r*t).

    Raises:
        InvalidArgumentError: Unknown compounding frequency
    """
    n = _periods(frequency)
    if n is None:
        return principal * math.exp(annual_rate * years)
    return principal * (1 + annual_rate / n) ** (n * years)


def monthly_payment(principal: float, annual_rate: float, term_months: int) -> float:
    """
    Level monthly payment that fully amortizes a loan.

    M = P * r(1+r)^n / ((1+r)^n - 1), with r the monthly rate.
    An interest-free loan pays P / n.

    Example:
        monthly_payment(200_000, 0.06, 360) -> 1199.10
    """
    if principal <= 0 or term_months <= 0:
        return 0.0

    if annual_rate == 0:
        return principal / term_months

    r = annual_rate / 12
    growth = (1 + r) ** term_months
    return principal * r * growth / (growth - 1)


def total_interest(principal: float, payment: float, term_months: int) -> float:
    """Total interest paid over the full term"""
    return payment * term_months - principal


def remaining_balance(
    principal: float,
    annual_rate: float,
    term_months: int,
    payments_made: int,
) -> float:
    """Outstanding principal after a number of level payments"""
    if payments_made >= term_months:
        return 0.0
    if payments_made <= 0:
        return principal

    if annual_rate == 0:
        return principal / term_months * (term_months - payments_made)

    r = annual_rate / 12
    growth_full = (1 + r) ** term_months
    growth_paid = (1 + r) ** payments_made
    return principal * (growth_full - growth_paid) / (growth_full - 1)


def early_payoff(
    principal: float,
    annual_rate: float,
    term_months: int,
    payments_made: int,
    penalty_rate: float = 0.0,
) -> float:
    """Amount due to retire the loan now, including a prepayment penalty"""
    balance = remaining_balance(principal, annual_rate, term_months, payments_made)
    return balance * (1 + penalty_rate)


class AmortizationSchedule:
    """
    Lazy month-by-month amortization table.

    Iterating yields one AmortizationRow per month of the term and can be
    repeated; nothing is precomputed beyond the level payment. The balance of
    the final row is clamped at zero to absorb floating-point drift.
    """

    def __init__(
        self,
        principal: float,
        annual_rate: float,
        term_months: int,
        start_date: date | None = None,
    ):
        self.principal = principal
        self.annual_rate = annual_rate
        self.term_months = max(term_months, 0)
        self.start_date = start_date
        self.payment = monthly_payment(principal, annual_rate, term_months)

    def __len__(self) -> int:
        return self.term_months

    def __iter__(self) -> Iterator[AmortizationRow]:
        monthly_rate = self.annual_rate / 12
        balance = self.principal
        cumulative_interest = 0.0

        for number in range(1, self.term_months + 1):
            interest = balance * monthly_rate
            principal_portion = self.payment - interest
            balance -= principal_portion
            cumulative_interest += interest

            if number == self.term_months:
                balance = max(0.0, balance)

            due_date = (
                payment_due_date(self.start_date, number) if self.start_date else None
            )
            yield AmortizationRow(
                payment_number=number,
                payment=self.payment,
                principal=principal_portion,
                interest=interest,
                balance=balance,
                cumulative_interest=cumulative_interest,
                due_date=due_date,
            )

    @property
    def total_interest(self) -> float:
        return total_interest(self.principal, self.payment, self.term_months)


def generate_amortization_schedule(
    principal: float,
    annual_rate: float,
    term_months: int,
    start_date: date | None = None,
) -> List[AmortizationRow]:
    """Materialized amortization schedule"""
    return list(AmortizationSchedule(principal, annual_rate, term_months, start_date))


def apr_to_apy(apr: float, frequency: FrequencyLike = CompoundingFrequency.MONTHLY) -> float:
    """Nominal annual rate to effective annual yield"""
    n = _periods(frequency)
    if n is None:
        return math.exp(apr) - 1
    return (1 + apr / n) ** n - 1


def apy_to_apr(apy: float, frequency: FrequencyLike = CompoundingFrequency.MONTHLY) -> float:
    """Effective annual yield back to a nominal annual rate"""
    n = _periods(frequency)
    if n is None:
        return math.log(1 + apy)
    return n * ((1 + apy) ** (1 / n) - 1)


def max_loan_amount(payment: float, annual_rate: float, term_months: int) -> float:
    """
    Largest principal a given monthly payment can service.

    Present value of an annuity: M * (1 - (1+r)^-n) / r.
    """
    if term_months <= 0:
        return 0.0
    if annual_rate == 0:
        return payment * term_months

    r = annual_rate / 12
    return payment * (1 - (1 + r) ** -term_months) / r


def effective_rate(
    principal: float,
    annual_rate: float,
    term_months: int,
    fees: float,
) -> float:
    """
    True annualized cost of a loan once upfront fees are deducted.

    The borrower repays the contractual payment on the full principal but
    only receives principal - fees. Solves for the monthly rate at which the
    payments' present value equals the net proceeds using Newton steps with a
    numerical derivative, stopping after EFFECTIVE_RATE_MAX_ITERATIONS even
    if not converged.

    Returns:
        Nominal annual rate (monthly rate * 12)

    Raises:
        InvalidArgumentError: Fees consume the whole principal
    """
    if fees <= 0 or term_months <= 0:
        return annual_rate

    net_proceeds = principal - fees
    if net_proceeds <= 0:
        raise InvalidArgumentError("Fees must be smaller than the principal")

    payment = monthly_payment(principal, annual_rate, term_months)

    def pv_gap(monthly: float) -> float:
        return max_loan_amount(payment, monthly * 12, term_months) - net_proceeds

    guess = max(annual_rate / 12, 0.001)
    step = 1e-7

    for _ in range(EFFECTIVE_RATE_MAX_ITERATIONS):
        gap = pv_gap(guess)
        if abs(gap) < EFFECTIVE_RATE_TOLERANCE:
            break
        slope = (pv_gap(guess + step) - gap) / step
        if slope == 0:
            break
        # Keep the rate above -100% so (1 + r) stays positive
        guess = max(guess - gap / slope, -0.99)

    return guess * 12
