"""
Pydantic schemas for the wallet endpoint.

Field aliases are the JSON names the dashboard reads; keep them stable.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from cryptowallet.domain.views import Holding
from cryptowallet.services.wallet_service import WalletView


class HoldingResponse(BaseModel):
    """One coin in the wallet."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    coin: str
    quantity: float
    total_invested: float = Field(alias="totalInvested")
    avg_buy_price: float = Field(alias="avgBuyPrice")
    current_price: float = Field(alias="currentPrice")
    market_value: float = Field(alias="marketValue")
    profit_loss: float = Field(alias="profitLoss")
    change_24h_percent: float = Field(alias="change24hPercent")
    roi_percent: float = Field(alias="roiPercent")
    price_source: str = Field(alias="priceSource")

    @classmethod
    def from_holding(cls, holding: Holding) -> "HoldingResponse":
        return cls(
            symbol=holding.symbol,
            coin=holding.coin,
            quantity=holding.quantity,
            total_invested=holding.total_invested,
            avg_buy_price=holding.avg_buy_price,
            current_price=holding.current_price,
            market_value=holding.market_value,
            profit_loss=holding.profit_loss,
            change_24h_percent=holding.change_24h_percent,
            roi_percent=holding.roi_percent,
            price_source=holding.price_source.value,
        )


class WalletResponse(BaseModel):
    """Aggregated wallet: holdings plus portfolio totals."""

    model_config = ConfigDict(populate_by_name=True)

    holdings: list[HoldingResponse]
    total_value: float = Field(alias="totalValue")
    total_invested: float = Field(alias="totalInvested")
    total_profit_loss: float = Field(alias="totalProfitLoss")
    portfolio_roi: float = Field(alias="portfolioROI")
    portfolio_24h_change: float = Field(alias="portfolio24hChange")
    degraded_symbols: list[str] = Field(default_factory=list, alias="degradedSymbols")
    as_of: Optional[datetime] = Field(default=None, alias="asOf")

    @classmethod
    def from_view(cls, view: WalletView) -> "WalletResponse":
        summary = view.summary
        return cls(
            holdings=[HoldingResponse.from_holding(h) for h in view.holdings],
            total_value=summary.total_value,
            total_invested=summary.total_invested,
            total_profit_loss=summary.total_profit_loss,
            portfolio_roi=summary.portfolio_roi,
            portfolio_24h_change=summary.weighted_24h_change_percent,
            degraded_symbols=summary.degraded_symbols,
            as_of=summary.as_of,
        )
