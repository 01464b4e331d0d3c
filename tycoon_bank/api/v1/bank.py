"""Bank endpoints - NPC applicant/depositor flow and level progression"""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from tycoon_bank.api.dependencies import get_random_source
from tycoon_bank.api.v1.schemas import (
    ApplicantSchema,
    ApplicantsResponse,
    DepositorSchema,
    DepositorsResponse,
    GenerationRequest,
    LevelRequest,
    LevelResponse,
    XpRewardRequest,
    XpRewardResponse,
)
from tycoon_bank.domain.applicants import generate_applicants, generate_depositors
from tycoon_bank.domain.balance import (
    available_deposit_products,
    calculate_xp_reward,
    get_credit_distribution,
    get_level_config,
    level_for_xp,
    streak_multiplier,
)
from tycoon_bank.domain.models import BankProfile
from tycoon_bank.domain.random_source import RandomSource
from tycoon_bank.infrastructure.observability.metrics import (
    record_generated_applicants,
    record_generated_depositors,
)

router = APIRouter()


@router.post("/bank/applicants", response_model=ApplicantsResponse)
def create_applicants(
    request_body: GenerationRequest,
    rng: RandomSource = Depends(get_random_source),
):
    """
    Generate today's loan applicants for a bank.

    The caller persists them; applicant quality and volume follow the bank's
    level, reputation and marketing budget.
    """
    bank = BankProfile(**request_body.bank.model_dump())
    applicants = generate_applicants(bank, count=request_body.count, rng=rng)

    record_generated_applicants([a.risk_tier.value for a in applicants])

    return ApplicantsResponse(applicants=[ApplicantSchema(**asdict(a)) for a in applicants])


@router.post("/bank/depositors", response_model=DepositorsResponse)
def create_depositors(
    request_body: GenerationRequest,
    rng: RandomSource = Depends(get_random_source),
):
    """Generate new depositors for a bank"""
    bank = BankProfile(**request_body.bank.model_dump())
    depositors = generate_depositors(bank, count=request_body.count, rng=rng)

    record_generated_depositors([d.customer_type.value for d in depositors])

    return DepositorsResponse(depositors=[DepositorSchema(**asdict(d)) for d in depositors])


@router.post("/bank/level", response_model=LevelResponse)
def get_bank_level(request_body: LevelRequest):
    """Resolve accumulated XP into level capacity, unlocks, applicant mix and products"""
    config = get_level_config(level_for_xp(request_body.xp))
    return LevelResponse(
        **asdict(config),
        credit_distribution=get_credit_distribution(config.level),
        deposit_products=[p.account_type for p in available_deposit_products(config.level)],
    )


@router.post("/bank/xp", response_model=XpRewardResponse)
def award_xp(request_body: XpRewardRequest):
    """XP a bank earns for an action, scaled by its daily streak"""
    xp = calculate_xp_reward(request_body.action, request_body.quantity, request_body.streak_days)
    return XpRewardResponse(xp=xp, streak_multiplier=streak_multiplier(request_body.streak_days))
