"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from loan_calculator.models.loan import DisplayScale, Frequency


# ---- Request schemas ----

class LoanInputRequest(BaseModel):
    principal: Decimal = Field(..., description="Loan amount in dollars")
    annual_rate_percent: Decimal = Field(..., description="Annual interest rate in percent, e.g. 5 for 5%")
    term_years: int = Field(..., description="Loan term in years")


class PaymentRequest(LoanInputRequest):
    frequency: Frequency = Frequency.MONTHLY


class ScheduleRequest(PaymentRequest):
    scale: DisplayScale = DisplayScale.YEAR
    aligned: bool = Field(False, description="Amortize over real repayments, aggregate to scale")


# ---- Response schemas ----

class BoundsResponse(BaseModel):
    min_principal: Decimal
    max_principal: Decimal
    min_rate_percent: Decimal
    max_rate_percent: Decimal
    min_term_years: int
    max_term_years: int


class ValidationResponse(BaseModel):
    valid: bool


class PaymentResponse(BaseModel):
    frequency: Frequency
    payment: Decimal
    payment_rounded: Decimal
    total_periods: int
    total_repaid: Decimal
    total_interest: Decimal


class ScheduleEntryResponse(BaseModel):
    index: int
    principal_portion: Decimal
    interest_portion: Decimal


class ScheduleResponse(BaseModel):
    payment: Decimal
    frequency: Frequency
    scale: DisplayScale
    aligned: bool
    entries: list[ScheduleEntryResponse]
