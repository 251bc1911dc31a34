"""Domain models package."""

from cryptowallet.domain.models.enums import (
    TransactionKind,
    QuoteSource,
    SellAccounting,
    HoldingSort,
)
from cryptowallet.domain.models.transaction import Transaction

__all__ = [
    "TransactionKind",
    "QuoteSource",
    "SellAccounting",
    "HoldingSort",
    "Transaction",
]
