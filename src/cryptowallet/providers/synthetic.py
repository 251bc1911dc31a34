"""Synthetic price generator used when every real source is down."""

import random
from typing import Optional

from cryptowallet.core.timezone import now_utc
from cryptowallet.domain.models.enums import QuoteSource
from cryptowallet.domain.views import PriceQuote


# Rough USD levels for supported coins; only used to keep screens populated
BASE_PRICES: dict[str, float] = {
    "BTC": 50000.0,
    "ETH": 3000.0,
    "DOGE": 0.25,
    "XRP": 1.2,
    "ADA": 2.5,
    "SOL": 150.0,
    "DOT": 30.0,
    "LTC": 180.0,
}

DEFAULT_BASE_PRICE = 100.0
JITTER = 0.05


class SyntheticPriceGenerator:
    """
    Placeholder prices: base table plus uniform jitter in [-5%, +5%].

    No network, no shared state beyond the RNG. Pass a seed for
    reproducible output.
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    @staticmethod
    def base_price(symbol: str) -> float:
        """Table price for a symbol; unknown symbols get the default."""
        return BASE_PRICES.get(symbol.upper(), DEFAULT_BASE_PRICE)

    def generate(self, symbol: str) -> float:
        """Return a jittered placeholder price (always > 0)."""
        base = self.base_price(symbol)
        variance = base * JITTER
        return base + self._rng.uniform(-variance, variance)

    def quote(self, symbol: str) -> PriceQuote:
        """Wrap a generated price in a quote tagged SYNTHETIC."""
        return PriceQuote(
            symbol=symbol.upper(),
            price=self.generate(symbol),
            as_of=now_utc(),
            source=QuoteSource.SYNTHETIC,
        )
