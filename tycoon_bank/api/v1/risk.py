"""POST /v1/risk/default-probability - borrower default risk endpoint"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Request

from tycoon_bank.api.dependencies import get_request_id
from tycoon_bank.api.v1.schemas import (
    DefaultFactorSchema,
    DefaultProbabilityRequest,
    DefaultProbabilityResponse,
)
from tycoon_bank.domain.default_risk import annual_to_monthly_default_rate, calculate_default_probability
from tycoon_bank.domain.exceptions import InvalidArgumentError
from tycoon_bank.domain.models import BorrowerProfile, EconomicConditions
from tycoon_bank.infrastructure.observability.logging import log_risk_evaluation
from tycoon_bank.infrastructure.observability.metrics import record_risk_evaluation

router = APIRouter()


@router.post("/risk/default-probability", response_model=DefaultProbabilityResponse)
def evaluate_default_probability(request_body: DefaultProbabilityRequest, request: Request):
    """
    Score a borrower and explain the result.

    Returns the clamped annual default probability, the factor breakdown the
    loan review screen displays, the credit-score tier and the
    approve/review/deny recommendation.
    """
    request_id = get_request_id(request)

    profile = BorrowerProfile(**request_body.profile.model_dump())
    conditions = (
        EconomicConditions(**request_body.economic_conditions.model_dump())
        if request_body.economic_conditions
        else None
    )

    try:
        result = calculate_default_probability(profile, conditions)
    except InvalidArgumentError as e:
        logging.warning(f"Invalid borrower profile: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_risk_evaluation(result.recommendation.value, result.risk_tier.value)
    log_risk_evaluation(
        request_id,
        profile.credit_score,
        result.adjusted_rate,
        result.risk_tier.value,
        result.recommendation.value,
    )

    return DefaultProbabilityResponse(
        base_rate=result.base_rate,
        adjusted_rate=result.adjusted_rate,
        factors=[DefaultFactorSchema(**asdict(f)) for f in result.factors],
        risk_tier=result.risk_tier,
        recommendation=result.recommendation,
        monthly_default_rate=round(annual_to_monthly_default_rate(result.adjusted_rate), 6),
    )
