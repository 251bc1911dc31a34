"""Transaction repository protocol."""

from typing import Protocol

from cryptowallet.domain.models import Transaction


class TransactionRepository(Protocol):
    """Interface for transaction (ledger) data access."""

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        ...

    def list_by_user(self, user_id: str) -> list[Transaction]:
        """List all transactions for a user, oldest first."""
        ...

    def delete_by_user(self, user_id: str) -> int:
        """Delete every transaction of a user; return how many were removed."""
        ...
