from decimal import Decimal

import pytest

from emi_calc.engine.currency import (
    NOT_AVAILABLE,
    SUPPORTED_CURRENCIES,
    convert,
    convert_and_format,
    format_amount,
    rate_available,
    to_base,
)


class TestConvert:
    def test_applies_rate(self):
        assert convert(Decimal("2003.79"), "EUR", {"EUR": Decimal("0.9")}, "USD") == Decimal("1803.411")

    def test_float_rates(self):
        assert convert(Decimal("100"), "EUR", {"EUR": 0.9}, "USD") == Decimal("90.0")

    def test_base_currency_is_identity(self, rate_table):
        x = Decimal("2003.789123")
        assert convert(x, "USD", rate_table, "USD") == x

    def test_base_identity_without_explicit_entry(self):
        assert convert(Decimal("42"), "USD", {}, "USD") == Decimal("42")

    def test_missing_rate(self):
        assert convert(Decimal("100"), "GBP", {}, "USD") is None

    def test_non_finite_rate(self):
        assert convert(Decimal("100"), "EUR", {"EUR": float("nan")}, "USD") is None
        assert convert(Decimal("100"), "EUR", {"EUR": float("inf")}, "USD") is None

    def test_no_rate_table(self):
        assert convert(Decimal("100"), "USD", None, "USD") is None

    @pytest.mark.parametrize("amount", [None, float("nan"), Decimal("NaN"), "abc"])
    def test_invalid_amount(self, amount, rate_table):
        assert convert(amount, "EUR", rate_table, "USD") is None


class TestToBase:
    def test_inverse_rate(self):
        assert to_base(Decimal("90"), "EUR", {"EUR": Decimal("0.9")}, "USD") == Decimal("100")

    def test_base_identity(self):
        assert to_base(Decimal("90"), "USD", {}, "USD") == Decimal("90")

    def test_zero_rate(self):
        assert to_base(Decimal("90"), "EUR", {"EUR": Decimal("0")}, "USD") is None

    def test_missing_rate(self):
        assert to_base(Decimal("90"), "EUR", {}, "USD") is None


class TestFormatAmount:
    def test_usd(self):
        assert format_amount(Decimal("1234567.891"), "USD") == "$1,234,567.89"

    def test_eur(self):
        assert format_amount(Decimal("1803.411"), "EUR") == "€1,803.41"

    def test_jpy_keeps_two_decimals(self):
        assert format_amount(Decimal("1500"), "JPY") == "¥1,500.00"

    def test_default_code_is_usd(self):
        assert format_amount(Decimal("5")) == "$5.00"

    @pytest.mark.parametrize("amount", [None, float("nan"), float("inf"), Decimal("-Infinity")])
    def test_invalid_amount(self, amount):
        assert format_amount(amount, "EUR") == NOT_AVAILABLE

    def test_unknown_code_falls_back(self):
        assert format_amount(Decimal("12.346"), "XQQ") == "12.35 XQQ"

    @pytest.mark.parametrize(
        "amount, expected",
        [(Decimal("0.125"), "$0.13"), (Decimal("2.675"), "$2.68"), (Decimal("-0.125"), "-$0.13")],
    )
    def test_halves_round_up(self, amount, expected):
        assert format_amount(amount, "USD") == expected

    def test_fallback_halves_round_up(self):
        assert format_amount(Decimal("0.125"), "XQQ") == "0.13 XQQ"

    def test_all_supported_codes_format(self):
        for code in SUPPORTED_CURRENCIES:
            formatted = format_amount(Decimal("1000"), code)
            assert formatted != NOT_AVAILABLE
            assert "1,000.00" in formatted


class TestConvertAndFormat:
    def test_eur(self):
        """$2,003.79 at 0.9 EUR/USD."""
        result = convert_and_format(Decimal("2003.79"), "EUR", {"EUR": Decimal("0.9")}, "USD")
        assert result == "€1,803.41"

    def test_missing_rate_is_na(self):
        assert convert_and_format(Decimal("2003.79"), "GBP", {}, "USD") == NOT_AVAILABLE

    def test_no_table_is_na(self):
        assert convert_and_format(Decimal("2003.79"), "EUR", None, "USD") == NOT_AVAILABLE

    def test_invalid_amount_is_na(self, rate_table):
        assert convert_and_format(None, "EUR", rate_table, "USD") == NOT_AVAILABLE


class TestRateAvailable:
    def test_base_always_available(self):
        assert rate_available("USD", None, "USD")
        assert rate_available("USD", {}, "USD")

    def test_present_rate(self, rate_table):
        assert rate_available("EUR", rate_table, "USD")

    def test_missing_rate(self, rate_table):
        assert not rate_available("ZAR", rate_table, "USD")
        assert not rate_available("EUR", None, "USD")
