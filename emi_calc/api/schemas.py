"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator, model_validator

from emi_calc.config import settings


# ---- Request schemas ----

class EMIRequest(BaseModel):
    principal: Decimal = Field(..., gt=0, description="Loan amount in principal_currency")
    annual_rate_percent: Decimal = Field(
        ..., ge=0, le=settings.max_rate_percent, description="Nominal annual rate, e.g. 7.5"
    )
    duration_months: int | None = Field(
        None, gt=0, le=settings.max_duration_years * 12
    )
    duration_years: int | None = Field(None, gt=0, le=settings.max_duration_years)
    currency: str = Field(settings.base_currency, description="Display currency code")
    principal_currency: str = Field(
        settings.base_currency, description="Currency the principal was entered in"
    )

    @field_validator("currency", "principal_currency")
    @classmethod
    def _upper_currency(cls, v: str) -> str:
        return v.strip().upper()

    @model_validator(mode="after")
    def _one_duration(self) -> "EMIRequest":
        if (self.duration_months is None) == (self.duration_years is None):
            raise ValueError("Provide exactly one of duration_months or duration_years")
        return self

    @property
    def months(self) -> int:
        if self.duration_months is not None:
            return self.duration_months
        return self.duration_years * 12


# ---- Response schemas ----

class AmortizationEntryResponse(BaseModel):
    period: int
    principal_portion: Decimal
    interest_portion: Decimal
    total_payment: Decimal
    remaining_balance: Decimal

    # Formatted in the requested display currency
    principal_display: str
    interest_display: str
    total_payment_display: str
    remaining_balance_display: str


class EMIResponse(BaseModel):
    base_currency: str
    currency: str
    rate_available: bool

    principal: Decimal
    installment: Decimal
    installment_display: str
    total_interest: Decimal
    total_interest_display: str
    total_paid: Decimal
    total_paid_display: str

    schedule: list[AmortizationEntryResponse]


class RatesResponse(BaseModel):
    base_currency: str
    loaded: bool
    error: str | None = None
    rates: dict[str, Decimal] = {}


class CurrencyResponse(BaseModel):
    code: str
    name: str
    rate_available: bool
