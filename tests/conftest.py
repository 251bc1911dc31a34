"""
Pytest configuration and fixtures for crypto wallet tests.

This module provides:
- In-memory SQLite database fixtures
- Fake clock and recording sleep for the retry loop
- Scripted price sources returning canned results
- Service and repository fixtures
- FastAPI test client with dependency overrides
"""

from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from cryptowallet.main import app
from cryptowallet.api.deps import get_price_fetcher
from cryptowallet.config.settings import Settings, set_settings, reset_settings
from cryptowallet.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from cryptowallet.repositories.sqlalchemy import orm_models  # noqa: F401
from cryptowallet.repositories.sqlalchemy import SqlAlchemyTransactionRepository
from cryptowallet.providers import (
    FetchFailed,
    FetchResult,
    PriceOk,
    RateLimited,
    SyntheticPriceGenerator,
)
from cryptowallet.services import (
    LedgerService,
    PriceCache,
    ResilientFetcher,
    HoldingsAggregator,
)
from cryptowallet.services.ledger_service import TradeRequest
from cryptowallet.domain.models import Transaction, TransactionKind
from cryptowallet.core.timezone import UTC


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create an aware UTC datetime."""
    return UTC.localize(datetime(year, month, day, hour, minute, second))


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Sleep replacement that records requested delays and returns at once."""

    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


# =============================================================================
# PRICE SOURCE FIXTURES
# =============================================================================


class ScriptedPriceSource:
    """
    PriceSource returning a fixed sequence of results.

    The last result repeats once the script is exhausted. `calls` records
    every symbol requested.
    """

    def __init__(self, results: Sequence[FetchResult], name: str = "scripted"):
        self.name = name
        self._results = list(results)
        self.calls: list[str] = []

    def fetch_price(self, symbol: str) -> FetchResult:
        self.calls.append(symbol)
        index = min(len(self.calls) - 1, len(self._results) - 1)
        return self._results[index]

    @property
    def call_count(self) -> int:
        return len(self.calls)


class RaisingPriceSource:
    """PriceSource whose adapter is broken and raises."""

    name = "raising"

    def __init__(self):
        self.call_count = 0

    def fetch_price(self, symbol: str) -> FetchResult:
        self.call_count += 1
        raise RuntimeError("adapter bug")


class StaticPriceLookup:
    """Price lookup with a fixed price table; records batch and single calls."""

    def __init__(self, quotes: dict):
        self._quotes = quotes
        self.single_calls: list[str] = []
        self.batch_calls: list[list[str]] = []

    def get_price(self, symbol: str):
        self.single_calls.append(symbol)
        return self._quotes[symbol]

    def get_prices(self, symbols: Iterable[str]):
        symbols = list(symbols)
        self.batch_calls.append(symbols)
        return {s: self._quotes[s] for s in symbols}


def ok(price: float, previous: Optional[float] = None) -> PriceOk:
    return PriceOk(price=price, previous_price=previous)


def failed(reason: str = "boom") -> FetchFailed:
    return FetchFailed(reason)


def limited(retry_after: Optional[float] = None) -> RateLimited:
    return RateLimited(retry_after=retry_after)


@pytest.fixture
def price_cache(fake_clock) -> PriceCache:
    """Price cache driven by the fake clock."""
    return PriceCache(ttl_seconds=10.0, clock=fake_clock)


@pytest.fixture
def synthetic_generator() -> SyntheticPriceGenerator:
    """Seeded synthetic generator."""
    return SyntheticPriceGenerator(seed=42)


@pytest.fixture
def fetcher_factory(
    price_cache,
    synthetic_generator,
    recording_sleep,
) -> Callable[..., ResilientFetcher]:
    """Factory for fetchers wired with scripted sources, fake clock and recording sleep."""

    def _create(direct, proxies=(), **kwargs) -> ResilientFetcher:
        return ResilientFetcher(
            direct=direct,
            proxies=proxies,
            synthetic=synthetic_generator,
            cache=price_cache,
            sleep=recording_sleep,
            **kwargs,
        )

    return _create


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY AND SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    """Provide test TransactionRepository."""
    return SqlAlchemyTransactionRepository(test_session)


@pytest.fixture
def ledger_service(transaction_repo) -> LedgerService:
    """Provide test LedgerService."""
    return LedgerService(transaction_repo=transaction_repo)


@pytest.fixture
def api_direct_source() -> ScriptedPriceSource:
    """Direct source used by the API client: every coin at $100, previously $80."""
    return ScriptedPriceSource([ok(100.0, 80.0)], name="direct")


@pytest.fixture
def api_fetcher(api_direct_source, fetcher_factory) -> ResilientFetcher:
    return fetcher_factory(api_direct_source)


@pytest.fixture
def holdings_aggregator(api_fetcher) -> HoldingsAggregator:
    return HoldingsAggregator(price_lookup=api_fetcher)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


def make_txn(
    symbol: str,
    kind: TransactionKind,
    quantity: Optional[float],
    total_price: Optional[float],
    txn_id: Optional[str] = None,
    user_id: str = "user-1",
    txn_time: Optional[datetime] = None,
) -> Transaction:
    """Build an in-memory transaction (not persisted)."""
    make_txn.counter += 1
    return Transaction(
        txn_id=txn_id or f"txn-{make_txn.counter}",
        user_id=user_id,
        symbol=symbol,
        kind=kind,
        quantity=quantity,
        total_price=total_price,
        txn_time=txn_time or utc_datetime(2024, 6, 1),
    )


make_txn.counter = 0


def buy(symbol: str, quantity: Optional[float], total_price: Optional[float], **kwargs) -> Transaction:
    return make_txn(symbol, TransactionKind.BUY, quantity, total_price, **kwargs)


def sell(symbol: str, quantity: Optional[float], total_price: Optional[float], **kwargs) -> Transaction:
    return make_txn(symbol, TransactionKind.SELL, quantity, total_price, **kwargs)


@pytest.fixture
def trade_factory(ledger_service) -> Callable[..., Transaction]:
    """Factory recording persisted trades through the ledger service."""

    def _trade(
        kind: TransactionKind,
        coin: str,
        quantity: float,
        total_price: float,
        user_id: str = "user-1",
        txn_time: Optional[datetime] = None,
    ) -> Transaction:
        data = TradeRequest(
            user_id=user_id,
            coin=coin,
            quantity=quantity,
            total_price=total_price,
            txn_time=txn_time,
        )
        if kind == TransactionKind.BUY:
            return ledger_service.record_buy(data)
        return ledger_service.record_sell(data)

    return _trade


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine, api_fetcher) -> TestClient:
    """Provide FastAPI test client with test database and scripted prices."""
    set_settings(Settings(database_url="sqlite:///:memory:", _env_file=None))
    reset_database()
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_price_fetcher] = lambda: api_fetcher
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01) -> None:
    """Assert two floats are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
