"""Eligibility engine - core business logic for loan recommendations"""

import math
from datetime import date
from typing import Iterable, List, Optional, Sequence
from visaloan_gateway.domain.models import (
    DurationOption,
    EligibilityTier,
    GridCell,
    GridRow,
    LoanQuote,
)
from visaloan_gateway.domain.amortization import (
    build_payment_schedule,
    monthly_payment,
    schedule_totals,
)
from visaloan_gateway.domain.exceptions import InvalidArgumentError
from visaloan_gateway.domain.rates import CAPACITY, LOAN_AMOUNTS, LOAN_DURATIONS
from visaloan_gateway.domain.thresholds import blue_ceiling, yellow_ceiling
from visaloan_gateway.utils.date_utils import add_months, max_loan_duration


def capacity_ratio(emi: int) -> int:
    """
    Months of borrower capacity one installment consumes.

    Rounds half away from zero (1.5 → 2), not Python's banker's rounding.
    """
    return math.floor(emi / CAPACITY + 0.5)


def classify_payment(amount: int, duration: int, emi: int) -> EligibilityTier:
    """
    Band an already computed EMI.

    Rules, first match wins:
    - capacity ratio > duration: Ineligible (debt-service gate)
    - EMI < yellow ceiling:      Recommended
    - EMI < blue ceiling:        Medium risk
    - otherwise:                 Ineligible
    """
    if capacity_ratio(emi) > duration:
        return EligibilityTier.INELIGIBLE
    if emi < yellow_ceiling(amount):
        return EligibilityTier.RECOMMENDED
    if emi < blue_ceiling(amount):
        return EligibilityTier.MEDIUM_RISK
    return EligibilityTier.INELIGIBLE


def classify(amount: int, duration: int) -> EligibilityTier:
    """Risk band of lending `amount` over `duration` months"""
    return classify_payment(amount, duration, monthly_payment(amount, duration))


def max_eligible_amount(duration: int, candidate_amounts: Iterable[int] = LOAN_AMOUNTS) -> Optional[int]:
    """
    Largest amount to recommend for a loan term.

    Prefers the largest Recommended amount; only when no candidate is
    Recommended does it fall back to the largest Medium-risk amount. A smaller
    Recommended amount always wins over a larger Medium-risk one.

    Returns None when no candidate qualifies.
    """
    best_recommended = None
    best_medium_risk = None

    for amount in candidate_amounts:
        tier = classify(amount, duration)
        if tier == EligibilityTier.RECOMMENDED:
            if best_recommended is None or amount > best_recommended:
                best_recommended = amount
        elif tier == EligibilityTier.MEDIUM_RISK:
            if best_medium_risk is None or amount > best_medium_risk:
                best_medium_risk = amount

    return best_recommended if best_recommended is not None else best_medium_risk


def eligible_amounts_for_duration(duration: int, candidate_amounts: Iterable[int] = LOAN_AMOUNTS) -> List[int]:
    """Amounts at least Medium-risk at `duration`, in candidate order"""
    return [
        amount for amount in candidate_amounts
        if classify(amount, duration) >= EligibilityTier.MEDIUM_RISK
    ]


def eligible_durations_for_amount(amount: int, durations: Iterable[int] = LOAN_DURATIONS) -> List[DurationOption]:
    """Terms at which `amount` is at least Medium-risk, with their EMI"""
    options = []
    for duration in durations:
        emi = monthly_payment(amount, duration)
        tier = classify_payment(amount, duration, emi)
        if tier >= EligibilityTier.MEDIUM_RISK:
            options.append(
                DurationOption(
                    duration=duration,
                    emi=emi,
                    is_recommended=tier == EligibilityTier.RECOMMENDED,
                )
            )
    return options


def build_eligibility_grid(
    durations: Sequence[int] = LOAN_DURATIONS,
    amounts: Sequence[int] = LOAN_AMOUNTS,
) -> List[GridRow]:
    """Detailed loan table: EMI and tier for every duration x amount"""
    rows = []
    for duration in durations:
        row = GridRow(duration=duration)
        for amount in amounts:
            emi = monthly_payment(amount, duration)
            row.cells.append(GridCell(amount=amount, emi=emi, tier=classify_payment(amount, duration, emi)))
        rows.append(row)
    return rows


def make_loan_quote(
    visa_expiry: date,
    duration: int,
    today: date,
    amount: int | None = None,
) -> LoanQuote:
    """
    Main entry point: quote a loan for a visa window and term.

    Flow:
    1. Derive the maximum term from the visa window (3-month buffer)
    2. Use the requested amount, or the best eligible amount for the term
    3. Compute EMI, totals and the full repayment schedule

    A term longer than the visa window is still quoted, flagged with
    exceeds_visa_window. When no amount qualifies the quote carries a zero
    amount and an empty schedule.
    """
    if duration <= 0:
        raise InvalidArgumentError(f"Loan term must be a positive number of months, got {duration}")
    if amount is not None and amount <= 0:
        raise InvalidArgumentError(f"Loan amount must be positive, got {amount}")

    max_duration = max_loan_duration(today, visa_expiry)

    loan_amount = amount if amount is not None else max_eligible_amount(duration)

    if loan_amount is None:
        return LoanQuote(
            visa_expiry=visa_expiry,
            max_duration=max_duration,
            duration=duration,
            contract_end=add_months(today, duration),
            exceeds_visa_window=duration > max_duration,
            loan_amount=0,
            monthly_payment=0,
            total_payment=0,
            total_interest=0,
            tier=EligibilityTier.INELIGIBLE,
            schedule=[],
        )

    emi = monthly_payment(loan_amount, duration)
    total_payment, total_interest = schedule_totals(loan_amount, emi, duration)

    return LoanQuote(
        visa_expiry=visa_expiry,
        max_duration=max_duration,
        duration=duration,
        contract_end=add_months(today, duration),
        exceeds_visa_window=duration > max_duration,
        loan_amount=loan_amount,
        monthly_payment=emi,
        total_payment=total_payment,
        total_interest=total_interest,
        tier=classify_payment(loan_amount, duration, emi),
        schedule=build_payment_schedule(loan_amount, duration, emi),
    )
