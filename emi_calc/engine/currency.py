"""Currency conversion and display formatting.

Pure functions over a rate table supplied by the caller. No network I/O:
rates come from whatever fetched them (see emi_calc.data.rates).

A rate table maps ISO 4217 codes to multipliers relative to the base
currency: 1 unit of base = rate units of that currency.
"""

import logging
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal

from babel.numbers import UnknownCurrencyError, format_currency, validate_currency

from emi_calc.config import settings
from emi_calc.engine.amortization import to_decimal

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
TWO_PLACES = Decimal("0.01")
QUANTIZE_LIMIT = 25  # decimal exponent; default context keeps 28 digits
DEFAULT_BASE_CURRENCY = "USD"

RateTable = Mapping[str, Decimal | float]

SUPPORTED_CURRENCIES: dict[str, str] = {
    "USD": "United States Dollar",
    "EUR": "Euro",
    "GBP": "British Pound Sterling",
    "JPY": "Japanese Yen",
    "CAD": "Canadian Dollar",
    "AUD": "Australian Dollar",
    "CHF": "Swiss Franc",
    "CNY": "Chinese Yuan",
    "INR": "Indian Rupee",
    "BRL": "Brazilian Real",
    "RUB": "Russian Ruble",
    "ZAR": "South African Rand",
}


def _lookup_rate(currency: str, rate_table: RateTable) -> Decimal | None:
    rate = to_decimal(rate_table.get(currency))
    if rate is None or not rate.is_finite():
        return None
    return rate


def rate_available(
    currency: str,
    rate_table: RateTable | None,
    base_currency: str = DEFAULT_BASE_CURRENCY,
) -> bool:
    """Whether amounts can be shown in ``currency`` with this table."""
    if currency == base_currency:
        return True
    if rate_table is None:
        return False
    return _lookup_rate(currency, rate_table) is not None


def convert(
    amount,
    target_currency: str,
    rate_table: RateTable | None,
    base_currency: str = DEFAULT_BASE_CURRENCY,
) -> Decimal | None:
    """Convert a base-currency amount into ``target_currency``.

    Returns None when the amount is missing or NaN, when no table has been
    loaded, or when the table has no usable rate for the target. The base
    currency converts at an implicit rate of 1.
    """
    value = to_decimal(amount)
    if value is None or value.is_nan() or rate_table is None:
        return None

    if target_currency == base_currency:
        return value

    rate = _lookup_rate(target_currency, rate_table)
    if rate is None:
        logger.debug("Exchange rate not found for %s", target_currency)
        return None

    return value * rate


def to_base(
    amount,
    source_currency: str,
    rate_table: RateTable | None,
    base_currency: str = DEFAULT_BASE_CURRENCY,
) -> Decimal | None:
    """Convert an amount entered in ``source_currency`` back to base."""
    value = to_decimal(amount)
    if value is None or value.is_nan() or rate_table is None:
        return None

    if source_currency == base_currency:
        return value

    rate = _lookup_rate(source_currency, rate_table)
    if rate is None or rate == 0:
        logger.debug("Cannot convert %s back to %s", source_currency, base_currency)
        return None

    return value / rate


def format_amount(amount, currency_code: str = DEFAULT_BASE_CURRENCY) -> str:
    """Render an amount with the currency's symbol, grouping and 2 decimals.

    Missing or non-finite amounts render as "N/A". Codes Babel does not know
    fall back to "<amount> <code>".
    """
    value = to_decimal(amount)
    if value is None or not value.is_finite():
        return NOT_AVAILABLE

    # Halves round away from zero, as browser currency formatting does.
    # Amounts too large to quantize in the default context are left to Babel.
    if value.adjusted() < QUANTIZE_LIMIT:
        value = value.quantize(TWO_PLACES, ROUND_HALF_UP)

    try:
        validate_currency(currency_code)
    except UnknownCurrencyError:
        logger.debug("Unknown currency code %r, using plain format", currency_code)
        return f"{value:.2f} {currency_code}"

    # currency_digits=False: always the pattern's 2 fraction digits (JPY included)
    return format_currency(
        value,
        currency_code,
        locale=settings.display_locale,
        currency_digits=False,
    )


def convert_and_format(
    amount,
    target_currency: str,
    rate_table: RateTable | None,
    base_currency: str = DEFAULT_BASE_CURRENCY,
) -> str:
    converted = convert(amount, target_currency, rate_table, base_currency)
    return format_amount(converted, target_currency)
