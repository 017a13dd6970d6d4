"""POST /v1/quote and GET /v1/quote/grid - loan quote endpoints"""

import time
import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from visaloan_gateway.api.v1.schemas import (
    GridCellSchema,
    GridResponse,
    GridRowSchema,
    QuoteRequest,
    QuoteResponse,
    ScheduleEntrySchema,
)
from visaloan_gateway.api.dependencies import get_request_id, require_table_password
from visaloan_gateway.domain.eligibility import build_eligibility_grid, make_loan_quote
from visaloan_gateway.domain.exceptions import InvalidArgumentError
from visaloan_gateway.domain.rates import LOAN_AMOUNTS, LOAN_DURATIONS
from visaloan_gateway.infrastructure.observability.metrics import record_quote
from visaloan_gateway.infrastructure.observability.logging import log_quote

router = APIRouter()


@router.post("/quote", response_model=QuoteResponse)
def create_quote(request_body: QuoteRequest, request: Request):
    """
    Quote a loan for a visa window and term.

    Flow:
    1. Derive the maximum term allowed by the visa expiry
    2. Use the requested amount, or pick the maximum recommended amount
    3. Compute EMI, totals and the month-by-month schedule

    A quote with loan_amount 0 means nothing can be recommended for the term.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        quote = make_loan_quote(
            visa_expiry=request_body.visa_expiry,
            duration=request_body.duration,
            today=request_body.today or date.today(),
            amount=request_body.amount,
        )
    except InvalidArgumentError as e:
        logging.warning(f"Invalid quote request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_quote(quote.tier.label, quote.loan_amount)
    log_quote(request_id, quote.duration, quote.max_duration, quote.loan_amount, quote.tier.label, duration_ms)

    return QuoteResponse(
        visa_expiry=quote.visa_expiry,
        max_duration=quote.max_duration,
        duration=quote.duration,
        contract_end=quote.contract_end,
        exceeds_visa_window=quote.exceeds_visa_window,
        loan_amount=quote.loan_amount,
        monthly_payment=quote.monthly_payment,
        total_payment=quote.total_payment,
        total_interest=quote.total_interest,
        tier=quote.tier.label,
        schedule=[ScheduleEntrySchema.from_entry(entry) for entry in quote.schedule],
    )


@router.get("/quote/grid", response_model=GridResponse, dependencies=[Depends(require_table_password)])
def get_quote_grid():
    """
    Detailed loan table for loan officers.

    Returns:
        EMI and tier for every candidate amount at every term (3-180 months)
    """
    rows = build_eligibility_grid(LOAN_DURATIONS, LOAN_AMOUNTS)

    return GridResponse(
        amounts=LOAN_AMOUNTS,
        rows=[
            GridRowSchema(
                duration=row.duration,
                cells=[GridCellSchema(amount=c.amount, emi=c.emi, tier=c.tier.label) for c in row.cells],
            )
            for row in rows
        ],
    )
