from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class LoanTerms:
    """Inputs for one calculation request.

    No validation happens here: out-of-range or non-finite values are
    reported by the engine as an invalid result.
    """
    principal: Decimal
    annual_rate_percent: Decimal  # nominal, e.g. 7.5 for 7.5%
    duration_months: int

    @classmethod
    def from_years(
        cls, principal: Decimal, annual_rate_percent: Decimal, duration_years: int
    ) -> "LoanTerms":
        return cls(
            principal=principal,
            annual_rate_percent=annual_rate_percent,
            duration_months=duration_years * 12,
        )


@dataclass(frozen=True)
class AmortizationEntry:
    period: int
    principal_portion: Decimal
    interest_portion: Decimal
    total_payment: Decimal
    remaining_balance: Decimal


@dataclass(frozen=True)
class LoanCalculation:
    """Caller-held result of one calculation: the request and its response."""
    terms: LoanTerms
    installment: Decimal | None
    schedule: list[AmortizationEntry] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.installment is not None


@dataclass(frozen=True)
class ScheduleSummary:
    installment: Decimal | None
    total_interest: Decimal
    total_principal: Decimal
    total_paid: Decimal
    periods: int
