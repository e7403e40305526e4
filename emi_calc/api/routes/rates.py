"""Exchange rate and currency routes."""

from fastapi import APIRouter, Depends

from emi_calc.api.deps import get_rate_session
from emi_calc.api.schemas import CurrencyResponse, RatesResponse
from emi_calc.data.rates import RateSession
from emi_calc.engine.currency import SUPPORTED_CURRENCIES, rate_available

router = APIRouter(prefix="/api/v1", tags=["rates"])


@router.get("/rates", response_model=RatesResponse)
async def get_rates(session: RateSession = Depends(get_rate_session)):
    """Current session rate table, fetched on first use."""
    rates = await session.get_rates()
    return RatesResponse(
        base_currency=session.base_currency,
        loaded=session.loaded,
        error=session.error,
        rates=rates or {},
    )


@router.post("/rates/refresh", response_model=RatesResponse)
async def refresh_rates(session: RateSession = Depends(get_rate_session)):
    rates = await session.refresh()
    return RatesResponse(
        base_currency=session.base_currency,
        loaded=session.loaded,
        error=session.error,
        rates=rates or {},
    )


@router.get("/currencies", response_model=list[CurrencyResponse])
async def list_currencies(session: RateSession = Depends(get_rate_session)):
    """Supported display currencies and whether each has a rate."""
    rates = await session.get_rates()
    return [
        CurrencyResponse(
            code=code,
            name=name,
            rate_available=rate_available(code, rates, session.base_currency),
        )
        for code, name in SUPPORTED_CURRENCIES.items()
    ]
