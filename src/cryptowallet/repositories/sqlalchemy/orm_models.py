"""SQLAlchemy ORM model definitions."""

from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Float,
    Enum as SqlEnum,
)

from cryptowallet.repositories.sqlalchemy.database import Base
from cryptowallet.domain.models.enums import TransactionKind


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (ledger entry)."""

    __tablename__ = "transactions"

    # Insertion sequence breaks ties between trades with the same timestamp
    seq = Column(Integer, primary_key=True, autoincrement=True)
    txn_id = Column(String(36), unique=True, nullable=False)
    user_id = Column(String(64), index=True, nullable=False)
    symbol = Column(String(20), nullable=False)
    kind = Column(SqlEnum(TransactionKind), nullable=False)
    quantity = Column(Float, nullable=True)
    total_price = Column(Float, nullable=True)
    txn_time = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
