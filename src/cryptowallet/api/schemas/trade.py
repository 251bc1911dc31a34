"""Pydantic schemas for trade and transaction endpoints."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from cryptowallet.domain.coins import coin_name
from cryptowallet.domain.models import Transaction


class TradeRequestBody(BaseModel):
    """Request body for buy/sell. Range checks happen in the ledger service."""

    model_config = ConfigDict(populate_by_name=True)

    coin: str
    quantity: float
    total_price: float = Field(alias="totalPrice")


class TransactionResponse(BaseModel):
    """Response schema for one ledger entry."""

    model_config = ConfigDict(populate_by_name=True)

    txn_id: str = Field(alias="id")
    type: str
    symbol: str
    coin: str
    quantity: Optional[float] = None
    total_price: Optional[float] = Field(default=None, alias="totalPrice")
    date: Optional[datetime] = None

    @classmethod
    def from_domain(cls, txn: Transaction) -> "TransactionResponse":
        return cls(
            txn_id=txn.txn_id,
            type=txn.kind.value.capitalize(),
            symbol=txn.symbol,
            coin=coin_name(txn.symbol),
            quantity=txn.quantity,
            total_price=txn.total_price,
            date=txn.txn_time,
        )


class TransactionListResponse(BaseModel):
    """Newest-first transaction history."""

    transactions: list[TransactionResponse]


class ImportRequestBody(BaseModel):
    """Raw document-store records to append to a user's ledger."""

    records: list[dict[str, Any]]


class ImportSummaryResponse(BaseModel):
    """Result of a record import."""

    model_config = ConfigDict(populate_by_name=True)

    imported_count: int = Field(alias="importedCount")
    skipped_count: int = Field(alias="skippedCount")


class DeleteUserResponse(BaseModel):
    """Result of an account-deletion cascade."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    deleted_count: int = Field(alias="deletedCount")
