"""In-memory TTL cache for price quotes."""

import time
from typing import Callable, Optional

from cryptowallet.domain.views import PriceQuote

DEFAULT_TTL_SECONDS = 10.0


class PriceCache:
    """
    Per-symbol quote cache with a fixed TTL.

    Entries are whole-value replacements (last writer wins); there is no
    invalidation other than expiry. The clock is injectable so expiry can be
    driven from tests.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_seconds
        self._clock = clock
        # symbol -> (quote, stored_at)
        self._entries: dict[str, tuple[PriceQuote, float]] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, symbol: str) -> Optional[PriceQuote]:
        """Return the cached quote if still within TTL, else None."""
        entry = self._entries.get(symbol)
        if entry is None:
            return None
        quote, stored_at = entry
        if self._clock() - stored_at < self._ttl:
            return quote
        self._entries.pop(symbol, None)
        return None

    def put(self, quote: PriceQuote) -> None:
        """Store a quote under its symbol, replacing any previous entry."""
        self._entries[quote.symbol] = (quote, self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
