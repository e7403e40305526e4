"""Canonical test fixtures used across the test suite.

Fixture: $100K loan at 7.5% for 60 months; USD base with a small rate table.
"""

from decimal import Decimal

import pytest

from emi_calc.models.loan import LoanTerms


@pytest.fixture
def canonical_terms() -> LoanTerms:
    """$100K over 5 years at 7.5%."""
    return LoanTerms(
        principal=Decimal("100000"),
        annual_rate_percent=Decimal("7.5"),
        duration_months=60,
    )


@pytest.fixture
def zero_rate_terms() -> LoanTerms:
    return LoanTerms(
        principal=Decimal("12000"),
        annual_rate_percent=Decimal("0"),
        duration_months=12,
    )


@pytest.fixture
def rate_table() -> dict[str, Decimal]:
    return {
        "USD": Decimal("1"),
        "EUR": Decimal("0.9"),
        "GBP": Decimal("0.79"),
        "JPY": Decimal("151.2"),
        "INR": Decimal("83.1"),
    }


@pytest.fixture
def provider_payload() -> dict:
    """Trimmed exchangerate-api.com v6 success response."""
    return {
        "result": "success",
        "base_code": "USD",
        "conversion_rates": {
            "USD": 1,
            "EUR": 0.9,
            "GBP": 0.79,
            "JPY": 151.2,
        },
    }
