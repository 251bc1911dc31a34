"""Repository protocol definitions (interfaces)."""

from cryptowallet.repositories.protocols.transaction_repo import TransactionRepository

__all__ = [
    "TransactionRepository",
]
