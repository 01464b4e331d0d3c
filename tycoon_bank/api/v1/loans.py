"""Loan math endpoints - payments, amortization tables, affordability, rate conversion"""

from fastapi import APIRouter, HTTPException

from tycoon_bank.api.v1.schemas import (
    AmortizationResponse,
    AmortizationRowSchema,
    LoanTermsRequest,
    MaxLoanRequest,
    MaxLoanResponse,
    MonthlyPaymentResponse,
    RateConversionRequest,
    RateConversionResponse,
)
from tycoon_bank.domain.exceptions import InvalidArgumentError
from tycoon_bank.domain.interest import (
    AmortizationSchedule,
    apr_to_apy,
    apy_to_apr,
    max_loan_amount,
    monthly_payment,
    total_interest,
)

router = APIRouter()


@router.post("/loans/payment", response_model=MonthlyPaymentResponse)
def get_monthly_payment(request_body: LoanTermsRequest):
    """Level monthly payment and lifetime cost of a loan"""
    payment = monthly_payment(request_body.principal, request_body.annual_rate, request_body.term_months)
    interest = total_interest(request_body.principal, payment, request_body.term_months)

    return MonthlyPaymentResponse(
        monthly_payment=round(payment, 2),
        total_interest=round(interest, 2),
        total_paid=round(payment * request_body.term_months, 2),
    )


@router.post("/loans/amortization", response_model=AmortizationResponse)
def get_amortization_schedule(request_body: LoanTermsRequest):
    """
    Full month-by-month schedule.

    Rows carry due dates when a start_date is supplied (30-day game months).
    """
    schedule = AmortizationSchedule(
        request_body.principal,
        request_body.annual_rate,
        request_body.term_months,
        start_date=request_body.start_date,
    )

    rows = [
        AmortizationRowSchema(
            payment_number=row.payment_number,
            payment=round(row.payment, 2),
            principal=round(row.principal, 2),
            interest=round(row.interest, 2),
            balance=round(row.balance, 2),
            cumulative_interest=round(row.cumulative_interest, 2),
            due_date=row.due_date,
        )
        for row in schedule
    ]

    return AmortizationResponse(
        monthly_payment=round(schedule.payment, 2),
        total_interest=round(schedule.total_interest, 2),
        rows=rows,
    )


@router.post("/loans/max-amount", response_model=MaxLoanResponse)
def get_max_loan_amount(request_body: MaxLoanRequest):
    """Largest principal the given monthly payment can service"""
    amount = max_loan_amount(request_body.monthly_payment, request_body.annual_rate, request_body.term_months)
    return MaxLoanResponse(max_loan_amount=round(amount, 2))


@router.post("/rates/convert", response_model=RateConversionResponse)
def convert_rate(request_body: RateConversionRequest):
    """Convert between nominal APR and effective APY"""
    try:
        if request_body.direction == "apr_to_apy":
            apr = request_body.rate
            apy = apr_to_apy(apr, request_body.frequency)
        else:
            apy = request_body.rate
            apr = apy_to_apr(apy, request_body.frequency)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return RateConversionResponse(apr=round(apr, 6), apy=round(apy, 6), frequency=request_body.frequency)
