"""
Resilient price fetcher.

Per symbol:
    cache hit                      -> cached quote
    direct source, up to N tries   -> LIVE  (429s wait and retry, other
                                             failures go straight to proxies)
    proxies, in order              -> PROXY (first success wins)
    synthetic generator            -> SYNTHETIC (always succeeds)

get_price never raises. Sleep and clock are injected, so the whole loop runs
synchronously in tests without real waiting.
"""

import logging
import math
import time
from dataclasses import replace
from typing import Callable, Iterable, Optional, Sequence

from cryptowallet.core.timezone import now_utc
from cryptowallet.domain.coins import normalize_symbol
from cryptowallet.domain.models.enums import QuoteSource
from cryptowallet.domain.views import PriceQuote
from cryptowallet.providers.price_source import (
    FetchFailed,
    FetchResult,
    PriceOk,
    PriceSource,
    RateLimited,
)
from cryptowallet.providers.synthetic import SyntheticPriceGenerator
from cryptowallet.services.price_cache import PriceCache

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3
INITIAL_RETRY_DELAY_SECONDS = 1.0
MAX_RETRY_DELAY_SECONDS = 30.0


class ResilientFetcher:
    """Fetches prices through retry, proxy fallback, caching and synthetic degradation."""

    def __init__(
        self,
        direct: PriceSource,
        proxies: Sequence[PriceSource] = (),
        synthetic: Optional[SyntheticPriceGenerator] = None,
        cache: Optional[PriceCache] = None,
        max_attempts: int = MAX_ATTEMPTS,
        initial_retry_delay: float = INITIAL_RETRY_DELAY_SECONDS,
        max_retry_delay: float = MAX_RETRY_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._direct = direct
        self._proxies = list(proxies)
        self._synthetic = synthetic or SyntheticPriceGenerator()
        self._cache = cache if cache is not None else PriceCache()
        self._max_attempts = max_attempts
        self._initial_delay = initial_retry_delay
        self._max_delay = max_retry_delay
        self._sleep = sleep

    @property
    def cache(self) -> PriceCache:
        return self._cache

    def get_price(self, symbol: str) -> PriceQuote:
        """
        Return a quote for symbol. Never raises.

        Cache hits keep price and as_of; real quotes are re-tagged CACHED,
        synthetic ones stay SYNTHETIC.
        """
        key = normalize_symbol(symbol) or ""

        cached = self._cache.get(key)
        if cached is not None:
            if cached.is_synthetic:
                return cached
            return replace(cached, source=QuoteSource.CACHED)

        quote = self._fetch(key)
        self._cache.put(quote)
        return quote

    def get_prices(self, symbols: Iterable[str]) -> dict[str, PriceQuote]:
        """Batch convenience over get_price; keys are normalized symbols."""
        result: dict[str, PriceQuote] = {}
        for symbol in symbols:
            key = normalize_symbol(symbol)
            if key and key not in result:
                result[key] = self.get_price(key)
        return result

    def _fetch(self, key: str) -> PriceQuote:
        if not key:
            logger.warning("Empty symbol requested; returning synthetic price")
            return self._synthetic.quote(key)

        result = self._try_direct(key)
        if isinstance(result, PriceOk):
            return self._to_quote(key, result, QuoteSource.LIVE)

        for proxy in self._proxies:
            result = self._call(proxy, key)
            if isinstance(result, PriceOk):
                logger.info("Price for %s served via %s", key, proxy.name)
                return self._to_quote(key, result, QuoteSource.PROXY)
            logger.warning("Proxy %s failed for %s: %s", proxy.name, key, _describe(result))

        quote = self._synthetic.quote(key)
        logger.warning(
            "All price sources failed for %s; using synthetic price %.4f",
            key,
            quote.price,
        )
        return quote

    def _try_direct(self, key: str) -> FetchResult:
        """Direct source with retry on rate limiting only."""
        result: FetchResult = FetchFailed("no attempts made")
        for attempt in range(self._max_attempts):
            result = self._call(self._direct, key)

            if isinstance(result, RateLimited):
                if attempt == self._max_attempts - 1:
                    logger.warning(
                        "Rate limited on %s after %d attempts; trying proxies",
                        key,
                        self._max_attempts,
                    )
                    break
                delay = self.retry_delay(attempt, result.retry_after)
                logger.warning(
                    "Rate limited on %s. Retrying after %.1fs (attempt %d/%d)",
                    key,
                    delay,
                    attempt + 1,
                    self._max_attempts,
                )
                self._sleep(delay)
                continue

            if isinstance(result, FetchFailed):
                logger.warning("Direct price call failed for %s: %s; trying proxies", key, result.reason)
            break
        return result

    def retry_delay(self, attempt: int, retry_after: Optional[float] = None) -> float:
        """Upstream Retry-After when given, else exponential backoff; clamped to max."""
        if retry_after is not None:
            delay = retry_after
        else:
            delay = self._initial_delay * (2 ** attempt)
        return min(max(delay, 0.0), self._max_delay)

    @staticmethod
    def _call(source: PriceSource, key: str) -> FetchResult:
        # Sources report failures as values; anything raised is a bug in the adapter
        try:
            result = source.fetch_price(key)
        except Exception as exc:
            logger.exception("Price source %s raised for %s", getattr(source, "name", source), key)
            return FetchFailed(f"{type(exc).__name__}: {exc}")
        # Quotes leaving the fetcher are always finite and > 0
        if isinstance(result, PriceOk) and not (math.isfinite(result.price) and result.price > 0):
            return FetchFailed(f"Unusable price: {result.price!r}")
        if isinstance(result, PriceOk) and result.previous_price is not None:
            if not (math.isfinite(result.previous_price) and result.previous_price > 0):
                return replace(result, previous_price=None)
        return result

    @staticmethod
    def _to_quote(key: str, result: PriceOk, source: QuoteSource) -> PriceQuote:
        return PriceQuote(
            symbol=key,
            price=result.price,
            as_of=now_utc(),
            source=source,
            previous_price=result.previous_price,
        )


def _describe(result: FetchResult) -> str:
    if isinstance(result, RateLimited):
        return "rate limited"
    if isinstance(result, FetchFailed):
        return result.reason
    return "ok"
