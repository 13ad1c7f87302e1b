"""Loan calculation routes."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Query, Response

from loan_calculator.api.schemas import (
    BoundsResponse,
    LoanInputRequest,
    PaymentRequest,
    PaymentResponse,
    ScheduleEntryResponse,
    ScheduleRequest,
    ScheduleResponse,
    ValidationResponse,
)
from loan_calculator.config import settings
from loan_calculator.data.export import MEDIA_TYPES, export_filename, schedule_to_bytes
from loan_calculator.engine.payment import compute_payment, total_interest, total_repaid
from loan_calculator.engine.periods import round2, total_periods
from loan_calculator.engine.schedule import generate_schedule
from loan_calculator.engine.validation import validate
from loan_calculator.exceptions import InvalidInputError
from loan_calculator.models.loan import ScheduleEntry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/loan", tags=["loan"])

INVALID_RANGE_MESSAGE = "Please ensure all input values are within their valid ranges"


def _require_valid(req: LoanInputRequest) -> None:
    if not validate(req.principal, req.annual_rate_percent, req.term_years):
        raise HTTPException(status_code=422, detail=INVALID_RANGE_MESSAGE)


def _schedule(req: ScheduleRequest) -> list[ScheduleEntry]:
    _require_valid(req)
    try:
        return generate_schedule(
            req.principal, req.annual_rate_percent, req.term_years,
            req.frequency, req.scale, aligned=req.aligned,
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/bounds", response_model=BoundsResponse)
async def get_bounds():
    """Configured input ranges."""
    return BoundsResponse(**asdict(settings.loan_bounds))


@router.post("/validate", response_model=ValidationResponse)
async def validate_inputs(req: LoanInputRequest):
    return ValidationResponse(valid=validate(req.principal, req.annual_rate_percent, req.term_years))


@router.post("/payment", response_model=PaymentResponse)
async def payment(req: PaymentRequest):
    """Fixed periodic payment plus lifetime totals."""
    _require_valid(req)
    try:
        pmt = compute_payment(req.principal, req.annual_rate_percent, req.term_years, req.frequency)
        repaid = total_repaid(req.principal, req.annual_rate_percent, req.term_years, req.frequency)
        interest = total_interest(req.principal, req.annual_rate_percent, req.term_years, req.frequency)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return PaymentResponse(
        frequency=req.frequency,
        payment=pmt,
        payment_rounded=round2(pmt),
        total_periods=total_periods(req.term_years, req.frequency),
        total_repaid=repaid,
        total_interest=interest,
    )


@router.post("/schedule", response_model=ScheduleResponse)
async def schedule(req: ScheduleRequest):
    """Principal/interest split per display period."""
    entries = _schedule(req)
    pmt = compute_payment(req.principal, req.annual_rate_percent, req.term_years, req.frequency)
    return ScheduleResponse(
        payment=pmt,
        frequency=req.frequency,
        scale=req.scale,
        aligned=req.aligned,
        entries=[
            ScheduleEntryResponse(
                index=e.index,
                principal_portion=e.principal_portion,
                interest_portion=e.interest_portion,
            )
            for e in entries
        ],
    )


@router.post("/schedule/export")
async def export_schedule(req: ScheduleRequest, fmt: str = Query("xlsx", pattern="^(xlsx|csv)$")):
    """Download the schedule as a spreadsheet."""
    entries = _schedule(req)
    content = schedule_to_bytes(entries, fmt)
    filename = export_filename(req.scale, fmt)
    logger.info("Serving %s export with %d rows", fmt, len(entries))
    return Response(
        content=content,
        media_type=MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
