"""Domain layer - pure business models with no external dependencies."""

from cryptowallet.domain.models import (
    Transaction,
    TransactionKind,
    QuoteSource,
    SellAccounting,
    HoldingSort,
)

__all__ = [
    "Transaction",
    "TransactionKind",
    "QuoteSource",
    "SellAccounting",
    "HoldingSort",
]
