import httpx
from dependency_injector import containers, providers

from cryptocgt.accounting.tax_engine import TaxEngine
from cryptocgt.config import Settings
from cryptocgt.infra.fx.coinbase import CoinbaseRateProvider


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["cryptocgt.api.deps"])

    settings = providers.Singleton(Settings)

    http_client = providers.Singleton(
        httpx.AsyncClient,
        timeout=settings.provided.http_timeout,
    )

    rate_provider = providers.Singleton(
        CoinbaseRateProvider,
        http_client=http_client,
        base_url=settings.provided.coinbase_api_url,
        cache_seconds=settings.provided.fx_cache_seconds,
    )

    tax_engine = providers.Factory(
        TaxEngine,
        wash_sale_window_days=settings.provided.wash_sale_window_days,
    )
