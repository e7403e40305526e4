"""FastAPI dependency injection."""

from functools import lru_cache

from emi_calc.data.exchange_rate import ExchangeRateClient
from emi_calc.data.rates import RateSession


@lru_cache
def get_rate_session() -> RateSession:
    # One rate table per process
    return RateSession(ExchangeRateClient())
