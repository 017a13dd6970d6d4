"""Pydantic schemas for API request/response validation"""

import math
from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from visaloan_gateway.domain.models import PaymentScheduleEntry
from visaloan_gateway.utils.phone_utils import format_phone_number


def round_won(value: float) -> int:
    """Display rounding for schedule figures: half up, like the calculator UI"""
    return math.floor(value + 0.5)


class VisaWindowResponse(BaseModel):
    """Response for GET /v1/eligibility/window"""

    visa_expiry: date
    months_until_expiry: int
    max_duration: int
    available_durations: List[int]


class EligibleAmountsResponse(BaseModel):
    """Response for GET /v1/eligibility/amounts"""

    visa_expiry: date
    max_duration: int
    amounts: List[int]


class DurationOptionSchema(BaseModel):
    duration: int
    emi: int
    is_recommended: bool


class EligibleDurationsResponse(BaseModel):
    """Response for GET /v1/eligibility/durations"""

    visa_expiry: date
    amount: int
    max_duration: int
    durations: List[DurationOptionSchema]


class QuoteRequest(BaseModel):
    """Request body for POST /v1/quote"""

    visa_expiry: date = Field(..., description="Borrower's visa expiry date")
    duration: int = Field(..., gt=0, description="Loan term in months")
    amount: Optional[int] = Field(
        None,
        gt=0,
        description="Loan amount in won; omit to quote the maximum recommended amount",
    )
    today: Optional[date] = Field(None, description="Calculation date (defaults to the server date)")


class ScheduleEntrySchema(BaseModel):
    """Single month of the repayment schedule, rounded to whole won"""

    month: int
    payment: int
    principal: int
    interest: int
    balance: int

    @classmethod
    def from_entry(cls, entry: PaymentScheduleEntry) -> "ScheduleEntrySchema":
        return cls(
            month=entry.month,
            payment=round_won(entry.payment),
            principal=round_won(entry.principal),
            interest=round_won(entry.interest),
            balance=round_won(entry.balance),
        )


class QuoteResponse(BaseModel):
    """Response for POST /v1/quote"""

    visa_expiry: date
    max_duration: int
    duration: int
    contract_end: date
    exceeds_visa_window: bool
    loan_amount: int
    monthly_payment: int
    total_payment: int
    total_interest: int
    tier: str
    schedule: List[ScheduleEntrySchema]


class GridCellSchema(BaseModel):
    amount: int
    emi: int
    tier: str


class GridRowSchema(BaseModel):
    duration: int
    cells: List[GridCellSchema]


class GridResponse(BaseModel):
    """Response for GET /v1/quote/grid"""

    amounts: List[int]
    rows: List[GridRowSchema]


class LeadEmailRequest(BaseModel):
    """Request body for POST /v1/leads/email"""

    customer_email: Optional[EmailStr] = None
    customer_name: str = ""
    customer_phone: str = ""
    loan_amount: int = Field(..., gt=0)
    monthly_payment: int = Field(..., gt=0)
    loan_duration: int = Field(..., gt=0)
    manager_name: str = ""
    manager_contact: str = ""
    corridor: Optional[str] = Field(None, description="Assigned manager's nationality code")

    @field_validator("customer_phone", "manager_contact")
    @classmethod
    def hyphenate_phone(cls, value: str) -> str:
        return format_phone_number(value)


class LeadEmailResponse(BaseModel):
    """Response for POST /v1/leads/email"""

    success: bool
    lead_created: bool
    message_id: Optional[str] = None


class LeadItem(BaseModel):
    """Single lead in the dashboard listing"""

    id: str
    name: Optional[str]
    phone: Optional[str]
    email: str
    manager_name: Optional[str]
    manager_contact: Optional[str]
    corridor: Optional[str]
    created_at: datetime


class LeadListResponse(BaseModel):
    """Response for GET /v1/leads"""

    corridor: Optional[str]
    corridors: List[str]
    total: int
    today: int
    leads: List[LeadItem]
