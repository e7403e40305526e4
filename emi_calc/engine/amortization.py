"""Installment (EMI) and amortization schedule computation.

Pure functions: numbers in, dataclasses out. No I/O.

Invalid input and numerical faults are never raised. The installment is
reported as None and the schedule as an empty (or truncated) list.
"""

import logging
from decimal import Decimal, DecimalException
from itertools import groupby

from emi_calc.models.loan import (
    AmortizationEntry,
    LoanCalculation,
    LoanTerms,
    ScheduleSummary,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
TOLERANCE = Decimal("0.01")
GROSS_NEGATIVE_BALANCE = Decimal("-1")


def to_decimal(value) -> Decimal | None:
    """Coerce a number or numeric string to Decimal; None if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except DecimalException:
        return None


def _validated(principal, annual_rate_percent, duration_months) -> tuple[Decimal, Decimal, int] | None:
    p = to_decimal(principal)
    rate = to_decimal(annual_rate_percent)
    n = to_decimal(duration_months)
    if p is None or rate is None or n is None:
        return None
    if not (p.is_finite() and rate.is_finite() and n.is_finite()):
        return None
    if p <= 0 or rate < 0 or n <= 0:
        return None
    if n != n.to_integral_value():
        return None
    return p, rate, int(n)


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    return annual_rate_percent / 12 / 100


def compute_installment(principal, annual_rate_percent, duration_months) -> Decimal | None:
    """Fixed monthly installment for an amortizing loan.

    M = P * r(1+r)^n / ((1+r)^n - 1), with r the monthly rate.
    A zero rate gives P / n. An overflowing power term or a zero
    denominator yields None; there is no fallback to simple division.
    """
    terms = _validated(principal, annual_rate_percent, duration_months)
    if terms is None:
        return None
    p, annual_rate, n = terms

    if annual_rate == 0:
        return p / n

    r = monthly_rate(annual_rate)
    try:
        factor = (1 + r) ** n
        if not factor.is_finite():
            return None
        denominator = factor - 1
        if denominator == 0:
            return None
        installment = p * r * factor / denominator
    except DecimalException as e:
        logger.warning("Installment computation failed for n=%s, rate=%s: %r", n, annual_rate, e)
        return None

    if not installment.is_finite():
        return None
    return installment


def generate_schedule(principal, annual_rate_percent, duration_months) -> list[AmortizationEntry]:
    """Period-by-period breakdown of principal, interest and balance.

    The last period absorbs any rounding drift so the balance ends at exactly
    zero. A numerical fault stops generation and returns the entries built
    so far.
    """
    installment = compute_installment(principal, annual_rate_percent, duration_months)
    terms = _validated(principal, annual_rate_percent, duration_months)
    if installment is None or terms is None:
        return []

    balance, annual_rate, n = terms
    r = ZERO if annual_rate == 0 else monthly_rate(annual_rate)

    schedule: list[AmortizationEntry] = []
    try:
        for period in range(1, n + 1):
            interest = ZERO if r == 0 else balance * r
            principal_paid = installment - interest
            payment = installment

            if not (interest.is_finite() and principal_paid.is_finite()):
                logger.error(
                    "Calculation error in period %d: interest=%s, principal=%s",
                    period, interest, principal_paid,
                )
                return schedule

            if period == n:
                # Final payment clears whatever is left
                if abs(balance - principal_paid) > TOLERANCE:
                    principal_paid = balance
                payment = principal_paid + interest
                balance = ZERO
            else:
                balance -= principal_paid
                if balance < -TOLERANCE:
                    principal_paid += balance
                    payment = principal_paid + interest
                    balance = ZERO
                elif balance < 0:
                    balance = ZERO

            values = (principal_paid, interest, payment, balance)
            if not all(v.is_finite() for v in values):
                logger.error("Non-finite value in period %d", period)
                return schedule

            schedule.append(AmortizationEntry(
                period=period,
                principal_portion=principal_paid,
                interest_portion=interest,
                total_payment=payment,
                remaining_balance=balance,
            ))

            if balance < GROSS_NEGATIVE_BALANCE:
                logger.error("Significant negative balance in period %d, stopping", period)
                break
    except DecimalException as e:
        logger.error("Schedule generation aborted after %d periods: %r", len(schedule), e)

    return schedule


def calculate_loan(terms: LoanTerms) -> LoanCalculation:
    """Installment and schedule for one set of terms."""
    installment = compute_installment(
        terms.principal, terms.annual_rate_percent, terms.duration_months
    )
    if installment is None:
        return LoanCalculation(terms=terms, installment=None, schedule=[])

    schedule = generate_schedule(
        terms.principal, terms.annual_rate_percent, terms.duration_months
    )
    return LoanCalculation(terms=terms, installment=installment, schedule=schedule)


def summarize_schedule(
    schedule: list[AmortizationEntry], installment: Decimal | None = None
) -> ScheduleSummary:
    total_interest = sum((e.interest_portion for e in schedule), ZERO)
    total_principal = sum((e.principal_portion for e in schedule), ZERO)
    total_paid = sum((e.total_payment for e in schedule), ZERO)
    return ScheduleSummary(
        installment=installment,
        total_interest=total_interest,
        total_principal=total_principal,
        total_paid=total_paid,
        periods=len(schedule),
    )


def _loan_year(entry: AmortizationEntry) -> int:
    return (entry.period - 1) // 12 + 1


def yearly_summary(schedule: list[AmortizationEntry]) -> list[dict[str, Decimal]]:
    """Group a schedule into 12-period loan years; a short final year is kept.

    Keys: year, principal, interest, payment, ending_balance
    """
    yearly: list[dict[str, Decimal]] = []
    for year, group in groupby(schedule, key=_loan_year):
        entries = list(group)
        yearly.append({
            "year": Decimal(year),
            "principal": sum((e.principal_portion for e in entries), ZERO),
            "interest": sum((e.interest_portion for e in entries), ZERO),
            "payment": sum((e.total_payment for e in entries), ZERO),
            "ending_balance": entries[-1].remaining_balance,
        })
    return yearly
