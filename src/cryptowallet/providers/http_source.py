"""
HTTP price sources: the direct upstream API and CORS relay proxies.

Both use a shared httpx.Client with a hard per-call timeout. Responses are
normalized into PriceOk / RateLimited / FetchFailed; nothing is raised.
"""

import json
import logging
import math
from typing import Optional
from urllib.parse import quote, urlencode

import httpx

from cryptowallet.core.timezone import now_utc, parse_datetime_utc
from cryptowallet.providers.price_source import (
    FetchFailed,
    FetchResult,
    PriceOk,
    RateLimited,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0

_JSON_HEADERS = {"Accept": "application/json"}


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """
    Parse a Retry-After header into seconds.

    Accepts delta-seconds ("2", "1.5") or an HTTP-date. Returns None when
    absent or unparseable; never negative.
    """
    if value is None or not value.strip():
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        pass
    try:
        retry_at = parse_datetime_utc(value)
    except (ValueError, OverflowError):
        return None
    return max(0.0, (retry_at - now_utc()).total_seconds())


def _to_float(value) -> Optional[float]:
    """Finite float or None; NaN and infinities count as missing."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _decode_body(response: httpx.Response) -> Optional[object]:
    """JSON body, or JSON found in a text body; None if neither."""
    try:
        return response.json()
    except ValueError:
        pass
    try:
        return json.loads(response.text)
    except ValueError:
        return None


def parse_price_response(response: httpx.Response) -> FetchResult:
    """Map an upstream (or relayed) response onto a tagged result."""
    if response.status_code == 429:
        return RateLimited(retry_after=parse_retry_after(response.headers.get("Retry-After")))

    payload = _decode_body(response)

    if not response.is_success:
        message = payload.get("message") if isinstance(payload, dict) else None
        return FetchFailed(message or f"HTTP {response.status_code}")

    if not isinstance(payload, dict):
        return FetchFailed("Response body is not a JSON object")
    if payload.get("success") is False:
        return FetchFailed(payload.get("message") or "Upstream reported failure")

    price = _to_float(payload.get("price"))
    if price is None or price <= 0:
        return FetchFailed(f"Unusable price: {payload.get('price')!r}")

    previous = _to_float(payload.get("previousPrice"))
    if previous is not None and previous <= 0:
        previous = None
    return PriceOk(price=price, previous_price=previous)


class HttpPriceSource:
    """Direct upstream: GET {base_url}/price?symbol=SYM."""

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.Client] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        name: str = "direct",
    ):
        self.name = name
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._client = client or httpx.Client(timeout=timeout_seconds)
        self._own_client = client is None

    def price_url(self, symbol: str) -> str:
        """Absolute upstream URL for a symbol's price."""
        return f"{self._base_url}/price?{urlencode({'symbol': symbol})}"

    def fetch_price(self, symbol: str) -> FetchResult:
        return self._get(self.price_url(symbol), headers=_JSON_HEADERS)

    def close(self) -> None:
        """Close the HTTP client if this source created it."""
        if self._own_client:
            self._client.close()

    def _get(self, url: str, headers: dict[str, str]) -> FetchResult:
        try:
            response = self._client.get(url, headers=headers, timeout=self._timeout)
        except httpx.TimeoutException as exc:
            logger.debug("[%s] timeout after %.1fs: %s", self.name, self._timeout, url)
            return FetchFailed(f"Timeout: {exc}")
        except httpx.HTTPError as exc:
            logger.debug("[%s] %s: %s", self.name, type(exc).__name__, exc)
            return FetchFailed(f"{type(exc).__name__}: {exc}")
        return parse_price_response(response)


class ProxyPriceSource(HttpPriceSource):
    """
    Relay in front of the upstream: GET {proxy_base}{url-encoded target}.

    Only Accept headers are forwarded; credentials never go to a relay.
    """

    def __init__(
        self,
        proxy_base: str,
        target: HttpPriceSource,
        client: Optional[httpx.Client] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        super().__init__(
            base_url=proxy_base,
            client=client,
            timeout_seconds=timeout_seconds,
            name=f"proxy:{proxy_base}",
        )
        self._proxy_base = proxy_base
        self._target = target
        self._headers = dict(_JSON_HEADERS)
        if "cors-anywhere" in proxy_base:
            self._headers["X-Requested-With"] = "XMLHttpRequest"

    def price_url(self, symbol: str) -> str:
        return f"{self._proxy_base}{quote(self._target.price_url(symbol), safe='')}"

    def fetch_price(self, symbol: str) -> FetchResult:
        return self._get(self.price_url(symbol), headers=self._headers)
