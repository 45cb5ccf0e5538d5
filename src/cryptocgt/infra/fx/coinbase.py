"""Coinbase USD→AUD spot rate provider with a short in-memory cache."""

import logging
import time
from decimal import Decimal, InvalidOperation

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from cryptocgt.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

BASE_URL = "https://api.coinbase.com/v2"
SOURCE = "coinbase"


class CoinbaseRateProvider:
    """Fetch the USD/AUD spot rate. Returns None on failure so callers keep their last rate."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str = BASE_URL,
        cache_seconds: int = 600,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._cache_seconds = cache_seconds
        self._cached_rate: Decimal | None = None
        self._cached_at = 0.0
        self.last_was_cached = False

    async def get_usd_aud_rate(self) -> Decimal | None:
        now = time.monotonic()
        if self._cached_rate is not None and now - self._cached_at < self._cache_seconds:
            self.last_was_cached = True
            return self._cached_rate

        self.last_was_cached = False
        try:
            rate = await self._fetch_rate()
        except ExternalServiceError as exc:
            logger.warning("USD/AUD rate fetch failed: %s", exc)
            return None

        if rate is None:
            return None

        self._cached_rate = rate
        self._cached_at = now
        return rate

    @retry(
        retry=retry_if_exception_type(ExternalServiceError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        reraise=True,
    )
    async def _fetch_rate(self) -> Decimal | None:
        url = f"{self._base_url}/prices/USD-AUD/spot"
        try:
            response = await self._http.get(url)
        except httpx.HTTPError as exc:
            raise ExternalServiceError(f"Coinbase request failed: {exc}") from exc

        # Rate limit or server error → retriable
        if response.status_code == 429 or response.status_code >= 500:
            raise ExternalServiceError(f"Coinbase returned {response.status_code}")

        if response.status_code != 200:
            logger.warning("Coinbase returned %d for USD-AUD", response.status_code)
            return None

        try:
            amount = (response.json().get("data") or {}).get("amount")
        except (ValueError, AttributeError) as exc:
            logger.warning("Unexpected USD-AUD response body from Coinbase: %s", exc)
            return None

        try:
            rate = Decimal(str(amount)) if amount is not None else None
        except InvalidOperation:
            rate = None

        if rate is None or not rate.is_finite() or rate <= 0:
            logger.warning("Could not parse USD-AUD rate from Coinbase: %r", amount)
            return None
        return rate

    async def close(self) -> None:
        await self._http.aclose()
