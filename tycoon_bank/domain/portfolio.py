"""Portfolio risk - Monte Carlo loss simulation and expected returns"""

import math
from typing import Dict, List, Optional, Sequence

from tycoon_bank.domain.balance import DEFAULT_RATES, INTEREST_RATES, LOSS_GIVEN_DEFAULT
from tycoon_bank.domain.default_risk import DEFAULT_LOSS_GIVEN_DEFAULT
from tycoon_bank.domain.exceptions import InvalidArgumentError
from tycoon_bank.domain.models import PortfolioLoan, PortfolioSimulationResult, RiskTier, coerce_enum
from tycoon_bank.domain.random_source import PythonRandomSource, RandomSource


def _percentile(sorted_losses: List[float], fraction: float) -> float:
    return sorted_losses[math.floor(len(sorted_losses) * fraction)]


def simulate_portfolio_defaults(
    loans: Sequence[PortfolioLoan],
    simulations: int = 1000,
    rng: Optional[RandomSource] = None,
) -> PortfolioSimulationResult:
    """
    Estimate the aggregate loss distribution of a loan book.

    Each trial draws an independent default for every loan at its own
    probability and sums amount * LGD for the loans that default. Percentiles
    come from the fully sorted trial losses.

    Returns:
        Mean, population std dev, 99th (worst) and 1st (best) percentile loss
        in currency, and mean loss as a percent of notional

    Raises:
        InvalidArgumentError: Fewer than one simulation requested
    """
    if simulations < 1:
        raise InvalidArgumentError("At least one simulation is required")

    rng = rng or PythonRandomSource()
    total_portfolio = sum(loan.amount for loan in loans)

    exposures = [
        (
            loan.default_probability,
            loan.amount
            * (loan.loss_given_default if loan.loss_given_default is not None else DEFAULT_LOSS_GIVEN_DEFAULT),
        )
        for loan in loans
    ]

    losses: List[float] = []
    for _ in range(simulations):
        trial_loss = 0.0
        for probability, loss in exposures:
            if rng.next_float() < probability:
                trial_loss += loss
        losses.append(trial_loss)

    losses.sort()

    mean = sum(losses) / simulations
    variance = sum((loss - mean) ** 2 for loss in losses) / simulations
    loss_rate = (mean / total_portfolio) * 100 if total_portfolio > 0 else 0.0

    return PortfolioSimulationResult(
        mean_loss=round(mean, 2),
        standard_deviation=round(math.sqrt(variance), 2),
        worst_case=round(_percentile(losses, 0.99), 2),
        best_case=round(_percentile(losses, 0.01), 2),
        expected_loss_rate=round(loss_rate, 2),
    )


def calculate_expected_portfolio_return(exposure_by_tier: Dict[RiskTier | str, float]) -> float:
    """
    Exposure-weighted annual return: tier base APR minus base default rate
    times unsecured LGD.
    """
    total_exposure = 0.0
    weighted_return = 0.0

    for tier, exposure in exposure_by_tier.items():
        tier = coerce_enum(RiskTier, tier)
        expected = INTEREST_RATES[tier]["base"] - DEFAULT_RATES[tier]["base"] * LOSS_GIVEN_DEFAULT["UNSECURED"]
        total_exposure += exposure
        weighted_return += exposure * expected

    return weighted_return / total_exposure if total_exposure > 0 else 0.0
