"""Per-session rate table: fetched once, then shared by every conversion."""

import asyncio
import logging
from decimal import Decimal

from emi_calc.config import settings
from emi_calc.data.base import ExchangeRateSource
from emi_calc.data.exchange_rate import ExchangeRateClient

logger = logging.getLogger(__name__)


class RateSession:
    """Holds the single rate table for a session.

    ``loaded`` turns true once a fetch has been attempted. A failed fetch
    leaves ``rates`` as None with the reason in ``error``; it is not retried
    until ``refresh()`` is called.
    """

    def __init__(
        self,
        source: ExchangeRateSource | None = None,
        base_currency: str | None = None,
    ):
        self.source = source or ExchangeRateClient()
        self.base_currency = base_currency or settings.base_currency
        self.rates: dict[str, Decimal] | None = None
        self.error: str | None = None
        self.loaded = False
        self._lock = asyncio.Lock()

    async def get_rates(self) -> dict[str, Decimal] | None:
        async with self._lock:
            if not self.loaded:
                await self._fetch()
        return self.rates

    async def refresh(self) -> dict[str, Decimal] | None:
        async with self._lock:
            await self._fetch()
        return self.rates

    async def _fetch(self) -> None:
        rates = await self.source.fetch_rates(self.base_currency)
        self.loaded = True
        if rates is None:
            self.rates = None
            self.error = (
                getattr(self.source, "last_error", None)
                or "An unknown error occurred while fetching exchange rates."
            )
            logger.warning("No exchange rates available: %s", self.error)
            return
        self.rates = rates
        self.error = None
