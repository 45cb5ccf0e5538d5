from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from cryptocgt.accounting.tax_engine import TaxEngine
from cryptocgt.container import Container
from cryptocgt.infra.fx.coinbase import CoinbaseRateProvider


@inject
def get_tax_engine(
    engine: TaxEngine = Depends(Provide[Container.tax_engine]),
) -> TaxEngine:
    return engine


@inject
def get_rate_provider(
    provider: CoinbaseRateProvider = Depends(Provide[Container.rate_provider]),
) -> CoinbaseRateProvider:
    return provider
