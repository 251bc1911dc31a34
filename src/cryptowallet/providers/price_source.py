"""Price source protocol and the tagged results every source returns."""

from dataclasses import dataclass
from typing import Optional, Protocol, Union


@dataclass(frozen=True)
class PriceOk:
    """Upstream answered with a usable price."""

    price: float
    previous_price: Optional[float] = None


@dataclass(frozen=True)
class RateLimited:
    """Upstream answered 429; retry_after is in seconds when it said so."""

    retry_after: Optional[float] = None


@dataclass(frozen=True)
class FetchFailed:
    """Anything else: network error, timeout, non-2xx, unusable body."""

    reason: str


FetchResult = Union[PriceOk, RateLimited, FetchFailed]


class PriceSource(Protocol):
    """
    Protocol for a single upstream price provider.

    Implementations must not raise: every outcome is reported as one of
    PriceOk, RateLimited or FetchFailed.
    """

    name: str

    def fetch_price(self, symbol: str) -> FetchResult:
        """Fetch the current USD price for one symbol."""
        ...
