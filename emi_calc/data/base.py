"""Protocol definitions for data sources.

Each protocol defines the interface that concrete data source implementations must satisfy.
"""

from decimal import Decimal
from typing import Protocol, runtime_checkable


@runtime_checkable
class ExchangeRateSource(Protocol):
    async def fetch_rates(self, base_currency: str = "USD") -> dict[str, Decimal] | None:
        """Fetch current conversion rates relative to ``base_currency``.

        Returns None on any failure.
        """
        ...
