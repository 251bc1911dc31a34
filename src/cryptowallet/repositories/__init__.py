"""Repository layer - data access abstractions and implementations."""

from cryptowallet.repositories.protocols import TransactionRepository

__all__ = [
    "TransactionRepository",
]
