"""Service layer - business logic orchestration."""

from cryptowallet.services.ledger_service import LedgerService, TradeRequest
from cryptowallet.services.price_cache import PriceCache
from cryptowallet.services.price_fetcher import ResilientFetcher
from cryptowallet.services.holdings_aggregator import HoldingsAggregator
from cryptowallet.services.wallet_service import WalletService, WalletView

__all__ = [
    "LedgerService",
    "TradeRequest",
    "PriceCache",
    "ResilientFetcher",
    "HoldingsAggregator",
    "WalletService",
    "WalletView",
]
