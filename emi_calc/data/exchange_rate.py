"""ExchangeRate-API client for currency conversion rates."""

import logging
from decimal import Decimal, DecimalException

import httpx

from emi_calc.config import settings

logger = logging.getLogger(__name__)


def _error_type(resp: httpx.Response) -> str:
    """Provider error code from an error response body, if it has one."""
    try:
        body = resp.json()
    except ValueError:
        return "unknown"
    if isinstance(body, dict):
        return body.get("error-type") or "unknown"
    return "unknown"


class ExchangeRateClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.exchange_rate_api_key
        self.base_url = (base_url or settings.exchange_rate_base_url).rstrip("/")
        self.timeout = timeout or settings.request_timeout
        self.last_error: str | None = None

    async def _get(self, path: str) -> dict:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.get(f"{self.base_url}{path}")
            resp.raise_for_status()
            return resp.json()

    async def fetch_rates(self, base_currency: str = "USD") -> dict[str, Decimal] | None:
        """Fetch the latest rates for ``base_currency``.

        Missing key, HTTP errors, provider-reported errors and malformed
        payloads all log a warning, set ``last_error`` and return None.
        """
        self.last_error = None
        if not self.api_key:
            return self._fail(
                "API key for exchange rates is missing. Set EXCHANGE_RATE_API_KEY."
            )

        try:
            data = await self._get(f"/{self.api_key}/latest/{base_currency}")
        except httpx.HTTPStatusError as e:
            return self._fail(
                f"Failed to fetch exchange rates: {e.response.status_code} "
                f"{e.response.reason_phrase} - {_error_type(e.response)}"
            )
        except httpx.HTTPError as e:
            return self._fail(f"Exchange rate request failed: {e}")
        except ValueError:
            return self._fail("Exchange rate API returned invalid JSON")

        if not isinstance(data, dict):
            return self._fail("Exchange rate API returned an unexpected payload")
        if data.get("result") == "error":
            return self._fail(f"Exchange rate API error: {data.get('error-type', 'unknown')}")

        raw = data.get("conversion_rates")
        if not isinstance(raw, dict):
            return self._fail("Exchange rate payload has no conversion_rates")

        rates: dict[str, Decimal] = {}
        for code, value in raw.items():
            try:
                rate = Decimal(str(value))
                if rate.is_finite() and rate > 0:
                    rates[code] = rate
                    continue
            except DecimalException:
                pass
            logger.debug("Skipping unusable rate for %s: %r", code, value)

        logger.info("Loaded %d exchange rates for base %s", len(rates), base_currency)
        return rates

    def _fail(self, message: str) -> None:
        logger.warning("%s", message)
        self.last_error = message
        return None
