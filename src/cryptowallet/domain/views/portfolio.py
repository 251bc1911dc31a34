"""View models for pricing and portfolio outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from cryptowallet.domain.models.enums import QuoteSource


@dataclass(frozen=True)
class PriceQuote:
    """Price for a symbol, tagged with where it came from."""

    symbol: str
    price: float
    as_of: datetime
    source: QuoteSource
    previous_price: Optional[float] = None

    @property
    def change_24h_percent(self) -> float:
        """Percent change against the previous price; 0 when unknown."""
        if not self.previous_price or self.previous_price <= 0:
            return 0.0
        return (self.price - self.previous_price) / self.previous_price * 100

    @property
    def is_synthetic(self) -> bool:
        """Return True if no real upstream produced this price."""
        return self.source == QuoteSource.SYNTHETIC


@dataclass
class PositionAccumulator:
    """
    Running totals for one symbol while replaying the ledger.

    IMPORTANT: Derived only; never persisted.
    """

    symbol: str
    quantity: float = 0.0
    total_invested: float = 0.0

    @property
    def avg_cost(self) -> float:
        """Average cost per coin; 0 for an empty position."""
        if self.quantity <= 0:
            return 0.0
        return self.total_invested / self.quantity


@dataclass
class Holding:
    """Aggregated, point-in-time view of one coin in a portfolio."""

    symbol: str
    coin: str
    quantity: float
    total_invested: float
    avg_buy_price: float
    current_price: float
    market_value: float
    profit_loss: float
    change_24h_percent: float
    roi_percent: float
    price_source: QuoteSource


@dataclass
class PortfolioSummary:
    """Portfolio-level totals over all holdings."""

    total_value: float = 0.0
    total_invested: float = 0.0
    total_profit_loss: float = 0.0
    portfolio_roi: float = 0.0
    weighted_24h_change_percent: float = 0.0
    as_of: Optional[datetime] = None
    degraded_symbols: list[str] = field(default_factory=list)
