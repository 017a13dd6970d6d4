"""Fixed-rate amortization: level monthly payment (EMI) and repayment schedule"""

import math
from typing import List, Tuple
from visaloan_gateway.domain.models import PaymentScheduleEntry
from visaloan_gateway.domain.exceptions import InvalidArgumentError
from visaloan_gateway.domain.rates import MONTHLY_INTEREST_RATE, PAYMENT_ROUNDING_UNIT


def _validate(principal: float, term: int) -> None:
    if term <= 0:
        raise InvalidArgumentError(f"Loan term must be a positive number of months, got {term}")
    if principal < 0:
        raise InvalidArgumentError(f"Loan amount must not be negative, got {principal}")


def annuity_payment(principal: float, term: int, rate: float = MONTHLY_INTEREST_RATE) -> float:
    """
    Exact level payment that retires `principal` in `term` months.

    payment = r * P / (1 - (1+r)^-n), or P / n when r == 0

    The negative exponent tends to 0 for very long terms, so the payment
    approaches r * P instead of overflowing.
    """
    _validate(principal, term)

    if rate == 0:
        return principal / term

    return rate * principal / (1 - (1 + rate) ** -term)


def monthly_payment(principal: int, term: int, rate: float = MONTHLY_INTEREST_RATE) -> int:
    """
    Monthly installment (EMI) quoted to the borrower.

    The exact annuity payment is rounded UP to the next 1,000 won. Threshold
    comparisons downstream rely on this conservative rounding.

    Raises:
        InvalidArgumentError: term <= 0 or negative principal

    Example:
        10,000,000 over 36 months at 20%/12 → 371,635.xx → 372,000
    """
    payment = annuity_payment(principal, term, rate)
    return math.ceil(payment / PAYMENT_ROUNDING_UNIT) * PAYMENT_ROUNDING_UNIT


def build_payment_schedule(
    principal: int,
    term: int,
    payment: float,
    rate: float = MONTHLY_INTEREST_RATE,
) -> List[PaymentScheduleEntry]:
    """
    Month-by-month principal/interest/balance breakdown.

    Requirements:
    - Exactly `term` entries, even when a rounded-up payment retires the loan early
    - Interest accrues on the outstanding balance, which never drops below 0
    - Once the loan is retired, trailing rows carry zero principal and zero interest

    Args:
        principal: Loan amount
        term: Number of monthly payments
        payment: Level payment, usually monthly_payment(principal, term)
        rate: Monthly interest rate

    Returns:
        List of PaymentScheduleEntry ordered by month
    """
    _validate(principal, term)

    balance = float(principal)
    schedule = []
    for month in range(1, term + 1):
        interest = balance * rate
        principal_part = min(payment - interest, balance)
        balance = balance - principal_part

        schedule.append(
            PaymentScheduleEntry(
                month=month,
                payment=payment,
                principal=principal_part,
                interest=interest,
                balance=balance,
            )
        )

    return schedule


def schedule_totals(principal: int, payment: int, term: int) -> Tuple[int, int]:
    """Total repayment and total interest for a level-payment loan: (payment * term, payment * term - principal)"""
    total_payment = payment * term
    return total_payment, total_payment - principal
