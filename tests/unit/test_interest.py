"""Unit tests for interest math"""

import math
from datetime import date, timedelta

import pytest

from tycoon_bank.domain.exceptions import InvalidArgumentError
from tycoon_bank.domain.interest import (
    EFFECTIVE_RATE_MAX_ITERATIONS,
    AmortizationSchedule,
    apr_to_apy,
    apy_to_apr,
    compound_interest,
    early_payoff,
    effective_rate,
    generate_amortization_schedule,
    max_loan_amount,
    monthly_payment,
    remaining_balance,
    simple_interest,
)
from tycoon_bank.domain.models import CompoundingFrequency

DISCRETE_FREQUENCIES = [
    CompoundingFrequency.DAILY,
    CompoundingFrequency.MONTHLY,
    CompoundingFrequency.QUARTERLY,
    CompoundingFrequency.ANNUALLY,
]


def test_simple_interest():
    assert simple_interest(10_000, 0.05, 3) == pytest.approx(1_500)


def test_compound_interest_discrete_frequencies():
    """P(1 + r/n)^(n*t)"""
    assert compound_interest(1_000, 0.12, 1, CompoundingFrequency.ANNUALLY) == pytest.approx(1_120)
    assert compound_interest(1_000, 0.12, 1, CompoundingFrequency.QUARTERLY) == pytest.approx(1_000 * 1.03**4)
    assert compound_interest(1_000, 0.12, 2, CompoundingFrequency.MONTHLY) == pytest.approx(1_000 * 1.01**24)


def test_compound_interest_continuous():
    assert compound_interest(1_000, 0.05, 2, CompoundingFrequency.CONTINUOUS) == pytest.approx(
        1_000 * math.exp(0.1)
    )


def test_compound_interest_accepts_string_frequency():
    assert compound_interest(1_000, 0.12, 1, "ANNUALLY") == pytest.approx(1_120)


def test_compound_interest_unknown_frequency_fails():
    """Unknown frequency must not silently fall back to a default"""
    with pytest.raises(InvalidArgumentError):
        compound_interest(1_000, 0.05, 1, "WEEKLY")


def test_monthly_payment_thirty_year_mortgage():
    assert monthly_payment(200_000, 0.06, 360) == pytest.approx(1199.10, abs=0.01)


def test_monthly_payment_zero_rate():
    assert monthly_payment(12_000, 0.0, 24) == pytest.approx(500)


def test_monthly_payment_degenerate_inputs():
    assert monthly_payment(0, 0.05, 12) == 0.0
    assert monthly_payment(1_000, 0.05, 0) == 0.0


def test_amortization_fully_amortizes():
    """Last balance ~0 and principal portions sum to the loan"""
    principal = 250_000
    rows = generate_amortization_schedule(principal, 0.065, 360)

    assert len(rows) == 360
    assert rows[-1].balance <= 1e-2
    assert rows[-1].balance >= 0
    assert sum(row.principal for row in rows) == pytest.approx(principal, abs=0.01)


def test_amortization_row_breakdown():
    rows = generate_amortization_schedule(50_000, 0.08, 60)
    first = rows[0]

    assert first.payment_number == 1
    assert first.interest == pytest.approx(50_000 * 0.08 / 12)
    assert first.principal + first.interest == pytest.approx(first.payment)
    assert first.balance == pytest.approx(50_000 - first.principal)
    assert rows[-1].cumulative_interest == pytest.approx(sum(row.interest for row in rows))


def test_amortization_zero_rate():
    rows = generate_amortization_schedule(1_200, 0.0, 12)

    assert all(row.interest == 0 for row in rows)
    assert all(row.principal == pytest.approx(100) for row in rows)
    assert rows[-1].balance == pytest.approx(0, abs=1e-9)


def test_amortization_schedule_is_lazy_and_restartable():
    schedule = AmortizationSchedule(10_000, 0.05, 12)

    assert len(schedule) == 12
    first_pass = list(schedule)
    second_pass = list(schedule)
    assert first_pass == second_pass

    iterator = iter(schedule)
    assert next(iterator).payment_number == 1
    assert next(iterator).payment_number == 2


def test_amortization_due_dates_follow_game_months():
    start = date(2025, 1, 1)
    rows = generate_amortization_schedule(10_000, 0.05, 3, start_date=start)

    assert rows[0].due_date == start
    assert rows[1].due_date == start + timedelta(days=30)
    assert rows[2].due_date == start + timedelta(days=60)


def test_amortization_without_start_date_has_no_due_dates():
    assert all(row.due_date is None for row in AmortizationSchedule(1_000, 0.05, 6))


@pytest.mark.parametrize("frequency", DISCRETE_FREQUENCIES)
@pytest.mark.parametrize("rate", [0.01, 0.05, 0.1, 0.2])
def test_apr_apy_round_trip(frequency, rate):
    assert apy_to_apr(apr_to_apy(rate, frequency), frequency) == pytest.approx(rate, abs=1e-4)


def test_apr_to_apy_known_values():
    assert apr_to_apy(0.12, CompoundingFrequency.MONTHLY) == pytest.approx(1.01**12 - 1)
    assert apr_to_apy(0.12, CompoundingFrequency.ANNUALLY) == pytest.approx(0.12)
    assert apr_to_apy(0.05, CompoundingFrequency.CONTINUOUS) == pytest.approx(math.exp(0.05) - 1)
    assert apy_to_apr(math.exp(0.05) - 1, CompoundingFrequency.CONTINUOUS) == pytest.approx(0.05)


def test_apy_exceeds_apr_with_more_frequent_compounding():
    annual = apr_to_apy(0.08, CompoundingFrequency.ANNUALLY)
    monthly = apr_to_apy(0.08, CompoundingFrequency.MONTHLY)
    daily = apr_to_apy(0.08, CompoundingFrequency.DAILY)
    continuous = apr_to_apy(0.08, CompoundingFrequency.CONTINUOUS)

    assert annual < monthly < daily < continuous


def test_rate_conversion_unknown_frequency_fails():
    with pytest.raises(InvalidArgumentError):
        apr_to_apy(0.05, "FORTNIGHTLY")
    with pytest.raises(InvalidArgumentError):
        apy_to_apr(0.05, "FORTNIGHTLY")


def test_max_loan_amount_inverts_payment():
    payment = monthly_payment(200_000, 0.06, 360)
    assert max_loan_amount(payment, 0.06, 360) == pytest.approx(200_000, abs=0.01)


def test_max_loan_amount_zero_rate():
    assert max_loan_amount(500, 0.0, 24) == pytest.approx(12_000)


def test_remaining_balance_matches_schedule():
    rows = generate_amortization_schedule(50_000, 0.08, 60)
    assert remaining_balance(50_000, 0.08, 60, 24) == pytest.approx(rows[23].balance, abs=0.01)
    assert remaining_balance(50_000, 0.08, 60, 0) == 50_000
    assert remaining_balance(50_000, 0.08, 60, 60) == 0


def test_early_payoff_applies_penalty():
    balance = remaining_balance(50_000, 0.08, 60, 24)
    assert early_payoff(50_000, 0.08, 60, 24, penalty_rate=0.02) == pytest.approx(balance * 1.02)


def test_effective_rate_without_fees_is_contract_rate():
    assert effective_rate(10_000, 0.07, 36, 0) == 0.07


def test_effective_rate_with_fees_exceeds_contract_rate():
    """Fees reduce proceeds, so the true cost must be higher but still sane"""
    rate = effective_rate(10_000, 0.07, 36, 300)

    assert 0.07 < rate < 0.10
    payment = monthly_payment(10_000, 0.07, 36)
    assert max_loan_amount(payment, rate, 36) == pytest.approx(9_700, abs=1.0)


def test_effective_rate_interest_free_loan_with_fee():
    rate = effective_rate(12_000, 0.0, 12, 120)
    assert 0.0 < rate < 0.05


def test_effective_rate_terminates_within_iteration_cap(monkeypatch):
    """Even with an unreachable tolerance the solver stops after the cap"""
    calls = []
    import tycoon_bank.domain.interest as interest

    real_max_loan_amount = interest.max_loan_amount

    def counting_max_loan_amount(*args):
        calls.append(args)
        return real_max_loan_amount(*args)

    monkeypatch.setattr(interest, "EFFECTIVE_RATE_TOLERANCE", -1.0)
    monkeypatch.setattr(interest, "max_loan_amount", counting_max_loan_amount)

    rate = interest.effective_rate(10_000, 0.07, 36, 300)

    assert math.isfinite(rate)
    # two present-value evaluations per iteration at most
    assert len(calls) <= 2 * EFFECTIVE_RATE_MAX_ITERATIONS


def test_effective_rate_fees_exceeding_principal_fail():
    with pytest.raises(InvalidArgumentError):
        effective_rate(1_000, 0.05, 12, 1_000)
