"""EMI calculation routes: the primary API entry point."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from emi_calc.api.deps import get_rate_session
from emi_calc.api.schemas import AmortizationEntryResponse, EMIRequest, EMIResponse
from emi_calc.config import settings
from emi_calc.data.rates import RateSession
from emi_calc.engine.amortization import calculate_loan, summarize_schedule
from emi_calc.engine.currency import convert_and_format, rate_available, to_base
from emi_calc.models.loan import LoanTerms

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["calculator"])


@router.post("/emi", response_model=EMIResponse)
async def calculate_emi(
    req: EMIRequest,
    session: RateSession = Depends(get_rate_session),
):
    """Loan terms → installment, totals and schedule in the chosen currency."""
    rates = await session.get_rates()
    base = session.base_currency
    # Without a table the base currency still displays; everything else is N/A
    table = rates if rates is not None else {}

    def fmt(amount) -> str:
        return convert_and_format(amount, req.currency, table, base)

    principal = to_base(req.principal, req.principal_currency, table, base)
    if principal is None:
        raise HTTPException(
            status_code=422,
            detail=f"Rate for {req.principal_currency} unavailable",
        )
    if principal > settings.max_principal:
        raise HTTPException(
            status_code=422,
            detail=f"Principal exceeds {settings.max_principal} {base}",
        )

    terms = LoanTerms(
        principal=principal,
        annual_rate_percent=req.annual_rate_percent,
        duration_months=req.months,
    )
    calc = calculate_loan(terms)
    if not calc.is_valid:
        logger.warning("EMI calculation failed for %s", terms)
        raise HTTPException(
            status_code=422,
            detail="Could not calculate EMI. Please check your inputs.",
        )

    summary = summarize_schedule(calc.schedule, calc.installment)

    return EMIResponse(
        base_currency=base,
        currency=req.currency,
        rate_available=rate_available(req.currency, table, base),
        principal=principal,
        installment=calc.installment,
        installment_display=fmt(calc.installment),
        total_interest=summary.total_interest,
        total_interest_display=fmt(summary.total_interest),
        total_paid=summary.total_paid,
        total_paid_display=fmt(summary.total_paid),
        schedule=[
            AmortizationEntryResponse(
                period=e.period,
                principal_portion=e.principal_portion,
                interest_portion=e.interest_portion,
                total_payment=e.total_payment,
                remaining_balance=e.remaining_balance,
                principal_display=fmt(e.principal_portion),
                interest_display=fmt(e.interest_portion),
                total_payment_display=fmt(e.total_payment),
                remaining_balance_display=fmt(e.remaining_balance),
            )
            for e in calc.schedule
        ],
    )
