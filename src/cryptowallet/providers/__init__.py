"""Price providers module."""

from cryptowallet.providers.price_source import (
    PriceSource,
    PriceOk,
    RateLimited,
    FetchFailed,
    FetchResult,
)
from cryptowallet.providers.http_source import (
    HttpPriceSource,
    ProxyPriceSource,
    parse_price_response,
    parse_retry_after,
)
from cryptowallet.providers.synthetic import SyntheticPriceGenerator

__all__ = [
    "PriceSource",
    "PriceOk",
    "RateLimited",
    "FetchFailed",
    "FetchResult",
    "HttpPriceSource",
    "ProxyPriceSource",
    "parse_price_response",
    "parse_retry_after",
    "SyntheticPriceGenerator",
]
