"""Transaction domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from cryptowallet.domain.models.enums import TransactionKind


@dataclass(frozen=True)
class Transaction:
    """
    Ledger transaction entry (source of truth).

    Supports BUY and SELL of a single coin.
    - quantity is the number of coins traded (fractional)
    - total_price is the dollar amount of the whole trade, not the unit price
    - USD only

    Numeric fields are Optional because records read back from loosely
    validated storage can miss them; consumers treat None as 0.

    A string kind is parsed on construction ("Buy" -> BUY); an unknown
    string raises ValueError. Loose records with unknown types are skipped
    (and logged) by LedgerService.from_record before a Transaction exists;
    any other non-enum kind is skipped and logged by HoldingsAggregator.fold.
    """

    txn_id: str
    user_id: str
    symbol: str
    kind: TransactionKind
    quantity: Optional[float] = None
    total_price: Optional[float] = None
    txn_time: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.kind, str) and not isinstance(self.kind, TransactionKind):
            object.__setattr__(self, "kind", TransactionKind.parse(self.kind))

    @property
    def is_buy(self) -> bool:
        """Return True if this is a BUY transaction."""
        return self.kind == TransactionKind.BUY

    @property
    def unit_price(self) -> float:
        """Price per coin implied by the trade; 0 when quantity is missing or zero."""
        if not self.quantity:
            return 0.0
        return (self.total_price or 0.0) / self.quantity
