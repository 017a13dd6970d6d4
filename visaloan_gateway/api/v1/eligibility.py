"""GET /v1/eligibility/* - selectable durations and amounts for a visa window"""

from datetime import date
from fastapi import APIRouter, Query

from visaloan_gateway.api.v1.schemas import (
    DurationOptionSchema,
    EligibleAmountsResponse,
    EligibleDurationsResponse,
    VisaWindowResponse,
)
from visaloan_gateway.domain.eligibility import eligible_amounts_for_duration, eligible_durations_for_amount
from visaloan_gateway.domain.rates import MIN_LOAN_DURATION
from visaloan_gateway.utils.date_utils import available_durations, max_loan_duration, months_between

router = APIRouter()


@router.get("/eligibility/window", response_model=VisaWindowResponse)
def get_visa_window(
    visa_expiry: date = Query(..., description="Borrower's visa expiry date"),
    today: date | None = Query(None, description="Calculation date (defaults to the server date)"),
):
    """Months left on the visa and the loan terms it allows"""
    today = today or date.today()
    max_duration = max_loan_duration(today, visa_expiry)

    return VisaWindowResponse(
        visa_expiry=visa_expiry,
        months_until_expiry=months_between(today, visa_expiry),
        max_duration=max_duration,
        available_durations=available_durations(max_duration),
    )


@router.get("/eligibility/amounts", response_model=EligibleAmountsResponse)
def get_eligible_amounts(
    visa_expiry: date = Query(..., description="Borrower's visa expiry date"),
    today: date | None = Query(None, description="Calculation date (defaults to the server date)"),
):
    """
    Loan amounts a borrower can pick for this visa window.

    Amounts are screened at the longest allowed term, where the EMI is lowest.
    A window shorter than the minimum term offers nothing.
    """
    max_duration = max_loan_duration(today or date.today(), visa_expiry)
    amounts = eligible_amounts_for_duration(max_duration) if max_duration >= MIN_LOAN_DURATION else []

    return EligibleAmountsResponse(visa_expiry=visa_expiry, max_duration=max_duration, amounts=amounts)


@router.get("/eligibility/durations", response_model=EligibleDurationsResponse)
def get_eligible_durations(
    visa_expiry: date = Query(..., description="Borrower's visa expiry date"),
    amount: int = Query(..., gt=0, description="Selected loan amount in won"),
    today: date | None = Query(None, description="Calculation date (defaults to the server date)"),
):
    """Loan terms within the visa window at which the amount is at least medium risk"""
    max_duration = max_loan_duration(today or date.today(), visa_expiry)
    options = eligible_durations_for_amount(amount, available_durations(max_duration))

    return EligibleDurationsResponse(
        visa_expiry=visa_expiry,
        amount=amount,
        max_duration=max_duration,
        durations=[
            DurationOptionSchema(duration=o.duration, emi=o.emi, is_recommended=o.is_recommended)
            for o in options
        ],
    )
