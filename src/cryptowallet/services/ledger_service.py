"""Ledger service for buy/sell transactions."""

import logging
import math
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from cryptowallet.core.exceptions import InsufficientQuantityError, ValidationError
from cryptowallet.core.timezone import now_utc, parse_datetime_utc, to_utc
from cryptowallet.domain.coins import normalize_symbol
from cryptowallet.domain.models import Transaction, TransactionKind
from cryptowallet.repositories.protocols import TransactionRepository

logger = logging.getLogger(__name__)

# Sells may exceed the float-summed holding by this much (rounding residue)
QUANTITY_TOLERANCE = 1e-9


@dataclass
class TradeRequest:
    """Input data for a buy or sell."""

    user_id: str
    coin: str
    quantity: float
    total_price: float
    txn_time: Optional[datetime] = None


class LedgerService:
    """
    Service for managing the transaction ledger.

    The ledger is append-only: trades are recorded, never edited. The only
    removal is the account-deletion cascade.
    """

    def __init__(self, transaction_repo: TransactionRepository):
        self._transaction_repo = transaction_repo

    def record_buy(self, data: TradeRequest) -> Transaction:
        """Validate and append a BUY."""
        symbol = self._validate_trade(data)
        return self._append(data, symbol, TransactionKind.BUY)

    def record_sell(self, data: TradeRequest) -> Transaction:
        """
        Validate and append a SELL.

        Raises InsufficientQuantityError if the user holds less than requested.
        """
        symbol = self._validate_trade(data)
        held = self.quantity_held(data.user_id, symbol)
        if held + QUANTITY_TOLERANCE < data.quantity:
            raise InsufficientQuantityError(symbol, data.quantity, held)
        return self._append(data, symbol, TransactionKind.SELL)

    def list_for_user(self, user_id: str) -> list[Transaction]:
        """All transactions of a user, oldest first."""
        return self._transaction_repo.list_by_user(user_id)

    def transaction_history(self, user_id: str) -> list[Transaction]:
        """All transactions of a user, newest first."""
        return list(reversed(self.list_for_user(user_id)))

    def quantity_held(self, user_id: str, symbol: str) -> float:
        """Net quantity of a coin held by the user."""
        norm = normalize_symbol(symbol)
        held = 0.0
        for txn in self.list_for_user(user_id):
            if normalize_symbol(txn.symbol) != norm:
                continue
            quantity = txn.quantity or 0.0
            held += quantity if txn.is_buy else -quantity
        return max(held, 0.0)

    def delete_user(self, user_id: str) -> int:
        """Remove every transaction of a user (account deletion)."""
        deleted = self._transaction_repo.delete_by_user(user_id)
        logger.info("Deleted %d transactions for user %s", deleted, user_id)
        return deleted

    def import_records(self, user_id: str, records: Iterable[Mapping[str, Any]]) -> int:
        """
        Append loosely-shaped document records to the ledger as-is.

        Records that cannot be interpreted are skipped with a warning. Missing
        numbers are kept as missing; the aggregator treats them as 0.
        """
        imported = 0
        for record in records:
            txn = self.from_record(record, user_id)
            if txn is None:
                continue
            self._transaction_repo.create(txn)
            imported += 1
        return imported

    @staticmethod
    def from_record(record: Mapping[str, Any], user_id: str) -> Optional[Transaction]:
        """
        Convert a document-store record into a Transaction.

        Understands {type, coin|symbol, quantity, totalPrice|price, date|createdAt}.
        A unit `price` is multiplied out when `totalPrice` is absent.
        """
        symbol = normalize_symbol(record.get("coin") or record.get("symbol"))
        if symbol is None:
            logger.warning("Skipping record without coin: %r", record)
            return None

        try:
            kind = TransactionKind.parse(record.get("type") or record.get("kind") or "")
        except ValueError:
            logger.warning("Skipping record with unknown type: %r", record)
            return None

        quantity = _to_float(record.get("quantity"))
        total_price = _to_float(record.get("totalPrice", record.get("total_price")))
        if total_price is None:
            unit_price = _to_float(record.get("price"))
            if unit_price is not None and quantity is not None:
                total_price = unit_price * quantity

        txn_time = _to_datetime(record.get("date") or record.get("createdAt"))

        return Transaction(
            txn_id=str(uuid.uuid4()),
            user_id=user_id,
            symbol=symbol,
            kind=kind,
            quantity=quantity,
            total_price=total_price,
            txn_time=txn_time or now_utc(),
        )

    def _append(self, data: TradeRequest, symbol: str, kind: TransactionKind) -> Transaction:
        transaction = Transaction(
            txn_id=str(uuid.uuid4()),
            user_id=data.user_id,
            symbol=symbol,
            kind=kind,
            quantity=float(data.quantity),
            total_price=float(data.total_price),
            txn_time=data.txn_time or now_utc(),
        )
        created = self._transaction_repo.create(transaction)
        logger.info(
            "%s %s %s for $%.2f (user %s)",
            kind.value,
            created.quantity,
            symbol,
            created.total_price,
            data.user_id,
        )
        return created

    @staticmethod
    def _validate_trade(data: TradeRequest) -> str:
        """Validate trade input and return the normalized symbol."""
        if not (data.user_id or "").strip():
            raise ValidationError("user_id is required")
        symbol = normalize_symbol(data.coin)
        if symbol is None:
            raise ValidationError("coin is required")
        if not _is_positive(data.quantity):
            raise ValidationError("quantity must be positive")
        if not _is_positive(data.total_price):
            raise ValidationError("totalPrice must be positive")
        return symbol


def _is_positive(value: Optional[float]) -> bool:
    """True for a finite number > 0; NaN and infinities are rejected."""
    return value is not None and math.isfinite(value) and value > 0


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _to_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_utc(value)
    try:
        return parse_datetime_utc(str(value))
    except (ValueError, OverflowError):
        logger.warning("Unparseable transaction date %r; using now", value)
        return None
