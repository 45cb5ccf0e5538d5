"""FX API — live USD/AUD rate for converting trade values."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from cryptocgt.api.deps import get_rate_provider
from cryptocgt.api.schemas.fx import FxRateResponse
from cryptocgt.infra.fx.coinbase import SOURCE, CoinbaseRateProvider

router = APIRouter(prefix="/api/fx", tags=["fx"])

RateProviderDep = Annotated[CoinbaseRateProvider, Depends(get_rate_provider)]


@router.get("/usd-aud", response_model=FxRateResponse)
async def usd_aud_rate(provider: RateProviderDep) -> FxRateResponse:
    rate = await provider.get_usd_aud_rate()
    if rate is None:
        raise HTTPException(status_code=502, detail="Failed to fetch USD/AUD rate from Coinbase")
    return FxRateResponse(rate=rate, source=SOURCE, cached=provider.last_was_cached)
