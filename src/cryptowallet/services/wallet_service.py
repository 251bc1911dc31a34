"""Wallet service: a user's ledger priced into holdings."""

from dataclasses import dataclass, field
from typing import Optional

from cryptowallet.domain.models import HoldingSort
from cryptowallet.domain.views import Holding, PortfolioSummary
from cryptowallet.services.holdings_aggregator import HoldingsAggregator
from cryptowallet.services.ledger_service import LedgerService


@dataclass
class WalletView:
    """Holdings plus portfolio totals for one user."""

    user_id: str
    holdings: list[Holding] = field(default_factory=list)
    summary: PortfolioSummary = field(default_factory=PortfolioSummary)


class WalletService:
    """
    Joins the ledger with the holdings aggregator.

    Always returns a complete view: price outages degrade to synthetic
    prices inside the fetcher instead of failing the request.
    """

    def __init__(
        self,
        ledger_service: LedgerService,
        aggregator: HoldingsAggregator,
    ):
        self._ledger = ledger_service
        self._aggregator = aggregator

    def get_wallet(self, user_id: str, sort: Optional[HoldingSort] = None) -> WalletView:
        transactions = self._ledger.list_for_user(user_id)
        holdings, summary = self._aggregator.aggregate_portfolio(transactions, sort=sort)
        return WalletView(user_id=user_id, holdings=holdings, summary=summary)
