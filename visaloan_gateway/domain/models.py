"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum
from typing import List, Optional


class EligibilityTier(IntEnum):
    """Risk band of an (amount, duration) pair, ordered from worst to best"""

    INELIGIBLE = 0
    MEDIUM_RISK = 1  # "blue" band
    RECOMMENDED = 2  # "yellow" band

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class PaymentScheduleEntry:
    """Single month of an amortization schedule"""

    month: int
    payment: float
    principal: float
    interest: float
    balance: float


@dataclass(frozen=True)
class DurationOption:
    """Selectable loan term for a fixed amount"""

    duration: int
    emi: int
    is_recommended: bool


@dataclass(frozen=True)
class GridCell:
    """EMI and tier of one amount at one duration in the detailed loan table"""

    amount: int
    emi: int
    tier: EligibilityTier


@dataclass
class GridRow:
    duration: int
    cells: List[GridCell] = field(default_factory=list)


@dataclass
class LoanQuote:
    """Output of the calculator for a visa window and chosen term"""

    visa_expiry: date
    max_duration: int
    duration: int
    contract_end: date
    exceeds_visa_window: bool
    loan_amount: int
    monthly_payment: int
    total_payment: int
    total_interest: int
    tier: EligibilityTier
    schedule: List[PaymentScheduleEntry]

    @property
    def has_offer(self) -> bool:
        return self.loan_amount > 0


@dataclass
class Lead:
    """Customer contact captured when a quote is emailed"""

    customer_email: str
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    manager_name: Optional[str] = None
    manager_contact: Optional[str] = None
    corridor: Optional[str] = None
