"""Holdings aggregator: derives per-coin holdings and portfolio totals from the ledger."""

import logging
from typing import Iterable, Mapping, Optional, Protocol

from cryptowallet.core.timezone import now_utc
from cryptowallet.domain.coins import coin_name, normalize_symbol
from cryptowallet.domain.models import (
    HoldingSort,
    SellAccounting,
    Transaction,
    TransactionKind,
)
from cryptowallet.domain.views import (
    Holding,
    PortfolioSummary,
    PositionAccumulator,
    PriceQuote,
)

logger = logging.getLogger(__name__)

# Quantities at or below this are float residue of fully closed positions
QUANTITY_EPSILON = 1e-12


class PriceLookup(Protocol):
    """What the aggregator needs from a price fetcher."""

    def get_price(self, symbol: str) -> PriceQuote:
        ...

    def get_prices(self, symbols: Iterable[str]) -> dict[str, PriceQuote]:
        ...


def _safe_div(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


class HoldingsAggregator:
    """
    Replays buy/sell transactions into holdings and a portfolio summary.

    Nothing is stored: every call recomputes from the transactions and the
    latest prices. All arithmetic is full-precision float; rounding is left
    to the caller.
    """

    def __init__(
        self,
        price_lookup: PriceLookup,
        sell_accounting: SellAccounting = SellAccounting.VERBATIM,
    ):
        self._prices = price_lookup
        self._sell_accounting = sell_accounting

    def fold(self, transactions: Iterable[Transaction]) -> list[PositionAccumulator]:
        """
        Fold transactions into one accumulator per symbol.

        Order follows the first appearance of each symbol. Missing numeric
        fields count as 0 and are logged; closed positions are included.
        """
        positions: dict[str, PositionAccumulator] = {}

        for txn in transactions:
            symbol = normalize_symbol(txn.symbol)
            if symbol is None:
                logger.warning("Skipping transaction %s with no symbol", txn.txn_id)
                continue

            if txn.kind not in (TransactionKind.BUY, TransactionKind.SELL):
                logger.warning("Skipping transaction %s with unknown kind %r", txn.txn_id, txn.kind)
                continue

            quantity = txn.quantity
            if quantity is None:
                logger.warning("Transaction %s (%s) has no quantity; treating as 0", txn.txn_id, symbol)
                quantity = 0.0
            total_price = txn.total_price
            if total_price is None:
                logger.warning("Transaction %s (%s) has no total price; treating as 0", txn.txn_id, symbol)
                total_price = 0.0

            position = positions.get(symbol)
            if position is None:
                position = positions[symbol] = PositionAccumulator(symbol=symbol)

            if txn.kind == TransactionKind.BUY:
                position.quantity += quantity
                position.total_invested += total_price

            else:
                if self._sell_accounting == SellAccounting.PROPORTIONAL:
                    removed = min(quantity, max(position.quantity, 0.0)) * position.avg_cost
                    position.total_invested -= removed
                else:
                    position.total_invested -= total_price
                position.quantity -= quantity

        return list(positions.values())

    def open_positions(self, transactions: Iterable[Transaction]) -> list[PositionAccumulator]:
        """Accumulators with quantity > 0 (fully sold or invalid ones dropped)."""
        return [p for p in self.fold(transactions) if p.quantity > QUANTITY_EPSILON]

    def aggregate(
        self,
        transactions: Iterable[Transaction],
        prices: Optional[Mapping[str, PriceQuote]] = None,
        sort: Optional[HoldingSort] = None,
    ) -> tuple[list[Holding], PortfolioSummary]:
        """
        Compute holdings and summary.

        Prices found in `prices` are used as-is; any symbol missing from it is
        pulled from the price lookup one at a time.
        """
        return self._build(self.open_positions(transactions), prices or {}, sort)

    def aggregate_portfolio(
        self,
        transactions: Iterable[Transaction],
        sort: Optional[HoldingSort] = None,
    ) -> tuple[list[Holding], PortfolioSummary]:
        """Compute holdings and summary, fetching all prices in one batch."""
        positions = self.open_positions(transactions)
        quotes = self._prices.get_prices([p.symbol for p in positions])
        return self._build(positions, quotes, sort)

    def _build(
        self,
        positions: list[PositionAccumulator],
        prices: Mapping[str, PriceQuote],
        sort: Optional[HoldingSort],
    ) -> tuple[list[Holding], PortfolioSummary]:
        holdings: list[Holding] = []
        degraded: list[str] = []
        latest_as_of = None

        for position in positions:
            quote = prices.get(position.symbol)
            if quote is None:
                quote = self._prices.get_price(position.symbol)
            if quote.is_synthetic:
                degraded.append(position.symbol)
            if latest_as_of is None or quote.as_of > latest_as_of:
                latest_as_of = quote.as_of

            holdings.append(self._to_holding(position, quote))

        summary = self.summarize(holdings)
        summary.as_of = latest_as_of or now_utc()
        summary.degraded_symbols = degraded

        if sort is not None:
            holdings = sort_holdings(holdings, sort)
        return holdings, summary

    @staticmethod
    def _to_holding(position: PositionAccumulator, quote: PriceQuote) -> Holding:
        avg_buy_price = _safe_div(position.total_invested, position.quantity)
        market_value = position.quantity * quote.price
        roi = (quote.price - avg_buy_price) / avg_buy_price * 100 if avg_buy_price > 0 else 0.0
        return Holding(
            symbol=position.symbol,
            coin=coin_name(position.symbol),
            quantity=position.quantity,
            total_invested=position.total_invested,
            avg_buy_price=avg_buy_price,
            current_price=quote.price,
            market_value=market_value,
            profit_loss=market_value - position.total_invested,
            change_24h_percent=quote.change_24h_percent,
            roi_percent=roi,
            price_source=quote.source,
        )

    @staticmethod
    def summarize(holdings: list[Holding]) -> PortfolioSummary:
        """Portfolio totals; every ratio is 0 when its denominator is not positive."""
        total_value = sum(h.market_value for h in holdings)
        total_invested = sum(h.total_invested for h in holdings)
        total_profit_loss = total_value - total_invested

        weighted_change = 0.0
        if total_value > 0:
            weighted_change = sum(h.market_value / total_value * h.change_24h_percent for h in holdings)

        return PortfolioSummary(
            total_value=total_value,
            total_invested=total_invested,
            total_profit_loss=total_profit_loss,
            portfolio_roi=total_profit_loss / total_invested * 100 if total_invested > 0 else 0.0,
            weighted_24h_change_percent=weighted_change,
        )


def sort_holdings(holdings: list[Holding], sort: HoldingSort) -> list[Holding]:
    """Return holdings ordered by value or by ROI; ties keep their order."""
    if sort in (HoldingSort.CHANGE_DESC, HoldingSort.CHANGE_ASC):
        key = lambda h: h.roi_percent  # noqa: E731
    else:
        key = lambda h: h.market_value  # noqa: E731
    reverse = sort in (HoldingSort.VALUE_DESC, HoldingSort.CHANGE_DESC)
    return sorted(holdings, key=key, reverse=reverse)
