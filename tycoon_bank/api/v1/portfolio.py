"""POST /v1/portfolio/simulate - Monte Carlo loan book losses"""

import time

from fastapi import APIRouter, Depends, HTTPException, Request

from tycoon_bank.api.dependencies import get_random_source, get_request_id
from tycoon_bank.api.v1.schemas import PortfolioSimulationRequest, PortfolioSimulationResponse
from tycoon_bank.domain.exceptions import InvalidArgumentError
from tycoon_bank.domain.models import PortfolioLoan
from tycoon_bank.domain.portfolio import simulate_portfolio_defaults
from tycoon_bank.domain.random_source import RandomSource
from tycoon_bank.infrastructure.observability.logging import log_simulation
from tycoon_bank.infrastructure.observability.metrics import simulation_duration_histogram

router = APIRouter()


@router.post("/portfolio/simulate", response_model=PortfolioSimulationResponse)
def simulate_portfolio(
    request_body: PortfolioSimulationRequest,
    request: Request,
    rng: RandomSource = Depends(get_random_source),
):
    """
    Loss distribution of a loan book.

    Loans without an explicit loss_given_default use 60%.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    loans = [PortfolioLoan(**loan.model_dump()) for loan in request_body.loans]

    try:
        with simulation_duration_histogram.time():
            result = simulate_portfolio_defaults(loans, request_body.simulations, rng=rng)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    log_simulation(request_id, len(loans), request_body.simulations, result.mean_loss, duration_ms)

    return PortfolioSimulationResponse(
        mean_loss=result.mean_loss,
        standard_deviation=result.standard_deviation,
        worst_case=result.worst_case,
        best_case=result.best_case,
        expected_loss_rate=result.expected_loss_rate,
    )
