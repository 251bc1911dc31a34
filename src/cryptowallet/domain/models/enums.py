"""Enumerations for domain models."""

from enum import Enum


class TransactionKind(str, Enum):
    """Types of ledger transactions."""

    BUY = "BUY"
    SELL = "SELL"

    @classmethod
    def parse(cls, value: str) -> "TransactionKind":
        """Accept the stored spelling ("Buy", "buy", "BUY")."""
        return cls(str(value).strip().upper())


class QuoteSource(str, Enum):
    """Where a price quote came from."""

    LIVE = "live"  # direct upstream call
    PROXY = "proxy"  # upstream reached through a relay
    CACHED = "cached"  # served from the TTL cache
    SYNTHETIC = "synthetic"  # generated placeholder, no upstream reached


class SellAccounting(str, Enum):
    """How a SELL reduces the invested amount of a position."""

    VERBATIM = "VERBATIM"  # subtract the sell's total price (default)
    PROPORTIONAL = "PROPORTIONAL"  # subtract quantity x average cost


class HoldingSort(str, Enum):
    """Ordering options for holdings output."""

    VALUE_DESC = "value-desc"
    VALUE_ASC = "value-asc"
    CHANGE_DESC = "change-desc"
    CHANGE_ASC = "change-asc"

    @classmethod
    def _missing_(cls, value):
        # "value_desc" is accepted as a spelling of "value-desc"
        if isinstance(value, str):
            normalized = value.strip().lower().replace("_", "-")
            for member in cls:
                if member.value == normalized:
                    return member
        return None
