"""Ledger database engine and session management."""

import logging
from typing import Any, Generator, Optional

from sqlalchemy import create_engine, Engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.pool import StaticPool

from cryptowallet.config.settings import get_settings

logger = logging.getLogger(__name__)

Base = declarative_base()

# Built lazily from settings; reset_database() drops both
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def engine_options(url: str) -> dict[str, Any]:
    """
    create_engine keyword arguments for a ledger URL.

    SQLite connections are shared across the request threadpool, and an
    in-memory database lives only as long as its single connection.
    """
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return {"pool_pre_ping": True}

    options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if parsed.database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
    return options


def get_engine() -> Engine:
    """Engine for the configured ledger database."""
    global _engine
    if _engine is None:
        url = get_settings().get_database_url()
        _engine = create_engine(url, echo=False, **engine_options(url))
        logger.info("Ledger database: %s", make_url(url).render_as_string(hide_password=True))
    return _engine


def get_session_factory() -> sessionmaker:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session; closed once the response is sent."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create the transactions table if it is missing."""
    from cryptowallet.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def reset_database() -> None:
    """Dispose the engine so the next call rebuilds it from current settings."""
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
