"""Dependency injection for FastAPI."""

import logging
from typing import Optional

import httpx
from fastapi import Depends
from sqlalchemy.orm import Session

from cryptowallet.config.settings import Settings, get_settings
from cryptowallet.repositories.sqlalchemy.database import get_db
from cryptowallet.repositories.sqlalchemy import SqlAlchemyTransactionRepository
from cryptowallet.providers import HttpPriceSource, ProxyPriceSource, SyntheticPriceGenerator
from cryptowallet.services import (
    LedgerService,
    PriceCache,
    ResilientFetcher,
    HoldingsAggregator,
    WalletService,
)

logger = logging.getLogger(__name__)

# Process-wide fetcher: the price cache must outlive a single request
_price_fetcher: Optional[ResilientFetcher] = None
_http_client: Optional[httpx.Client] = None


def build_price_fetcher(settings: Settings, client: httpx.Client) -> ResilientFetcher:
    """
    Wire the direct source, the relay chain, the cache and the synthetic fallback.

    All sources share `client`; the caller owns it and must close it.
    """
    timeout = settings.price_fetch_timeout_seconds

    direct = HttpPriceSource(settings.price_api_base_url, client=client, timeout_seconds=timeout)
    proxies = [
        ProxyPriceSource(proxy_base, direct, client=client, timeout_seconds=timeout)
        for proxy_base in settings.price_proxy_urls
    ]
    return ResilientFetcher(
        direct=direct,
        proxies=proxies,
        synthetic=SyntheticPriceGenerator(seed=settings.synthetic_price_seed),
        cache=PriceCache(ttl_seconds=settings.price_cache_ttl_seconds),
        max_attempts=settings.price_max_attempts,
        initial_retry_delay=settings.price_initial_retry_delay_seconds,
        max_retry_delay=settings.price_max_retry_delay_seconds,
    )


def get_price_fetcher() -> ResilientFetcher:
    """Provide the shared ResilientFetcher instance."""
    global _price_fetcher, _http_client
    if _price_fetcher is None:
        settings = get_settings()
        _http_client = httpx.Client(timeout=settings.price_fetch_timeout_seconds)
        _price_fetcher = build_price_fetcher(settings, client=_http_client)
        logger.info(
            "Price fetcher ready: %s with %d relays",
            settings.price_api_base_url,
            len(settings.price_proxy_urls),
        )
    return _price_fetcher


def reset_price_fetcher() -> None:
    """Drop the shared fetcher and close its HTTP client."""
    global _price_fetcher, _http_client
    if _http_client is not None:
        _http_client.close()
    _http_client = None
    _price_fetcher = None


def get_transaction_repo(db: Session = Depends(get_db)) -> SqlAlchemyTransactionRepository:
    """Provide TransactionRepository instance."""
    return SqlAlchemyTransactionRepository(db)


def get_ledger_service(
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(transaction_repo=transaction_repo)


def get_holdings_aggregator(
    fetcher: ResilientFetcher = Depends(get_price_fetcher),
) -> HoldingsAggregator:
    """Provide HoldingsAggregator instance."""
    return HoldingsAggregator(
        price_lookup=fetcher,
        sell_accounting=get_settings().sell_accounting,
    )


def get_wallet_service(
    ledger_service: LedgerService = Depends(get_ledger_service),
    aggregator: HoldingsAggregator = Depends(get_holdings_aggregator),
) -> WalletService:
    """Provide WalletService instance."""
    return WalletService(ledger_service=ledger_service, aggregator=aggregator)
