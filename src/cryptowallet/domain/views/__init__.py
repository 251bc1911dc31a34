"""View models for service outputs."""

from cryptowallet.domain.views.portfolio import (
    PriceQuote,
    PositionAccumulator,
    Holding,
    PortfolioSummary,
)

__all__ = [
    "PriceQuote",
    "PositionAccumulator",
    "Holding",
    "PortfolioSummary",
]
