from decimal import Decimal
from unittest.mock import patch

from emi_calc.cli import main
from emi_calc.data.rates import RateSession


class StaticSource:
    def __init__(self, rates):
        self.rates = rates
        self.last_error = None if rates is not None else "no key"

    async def fetch_rates(self, base_currency: str = "USD"):
        return self.rates


def _session_with(rates):
    return lambda base_currency=None: RateSession(StaticSource(rates), base_currency=base_currency)


class TestCLI:
    async def test_base_currency_schedule(self, capsys):
        code = await main(["100000", "7.5", "--years", "5"])
        out = capsys.readouterr().out

        assert code == 0
        assert "$2,003.79" in out
        assert "$625.00" in out
        assert "Payments:         60" in out

    async def test_summary_only(self, capsys):
        code = await main(["12000", "0", "--months", "12", "--summary-only"])
        out = capsys.readouterr().out

        assert code == 0
        assert "$1,000.00" in out
        assert "Amortization Schedule" not in out

    async def test_yearly(self, capsys):
        await main(["12000", "0", "--months", "24", "--summary-only", "--yearly"])
        out = capsys.readouterr().out
        assert "Yearly Summary" in out
        assert "$6,000.00" in out

    async def test_converted_currency(self, capsys):
        with patch("emi_calc.cli.RateSession", side_effect=_session_with({"EUR": Decimal("0.9")})):
            code = await main(["12000", "0", "--months", "12", "--currency", "eur", "--summary-only"])
        out = capsys.readouterr().out

        assert code == 0
        assert "€900.00" in out

    async def test_missing_rate_falls_back_to_base(self, capsys):
        with patch("emi_calc.cli.RateSession", side_effect=_session_with(None)):
            code = await main(["12000", "0", "--months", "12", "--currency", "GBP", "--summary-only"])
        captured = capsys.readouterr()

        assert code == 0
        assert "Rate for GBP unavailable" in captured.err
        assert "$1,000.00" in captured.out

    async def test_invalid_input(self, capsys):
        code = await main(["-5", "5", "--months", "12"])
        assert code == 1
        assert "Could not calculate EMI" in capsys.readouterr().err

    async def test_principal_in_other_currency(self, capsys):
        with patch("emi_calc.cli.RateSession", side_effect=_session_with({"EUR": Decimal("0.9")})):
            code = await main(
                ["10800", "0", "--months", "12", "--principal-currency", "eur", "--summary-only"]
            )
        out = capsys.readouterr().out

        assert code == 0
        assert "$1,000.00" in out

    async def test_principal_currency_rate_missing(self, capsys):
        with patch("emi_calc.cli.RateSession", side_effect=_session_with({})):
            code = await main(["1000", "5", "--months", "12", "--principal-currency", "GBP"])

        assert code == 1
        assert "Rate for GBP unavailable" in capsys.readouterr().err
