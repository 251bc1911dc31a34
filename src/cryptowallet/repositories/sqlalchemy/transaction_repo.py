"""SQLAlchemy implementation of TransactionRepository."""

from sqlalchemy.orm import Session

from cryptowallet.core.timezone import now_utc, to_utc
from cryptowallet.domain.models import Transaction
from cryptowallet.repositories.sqlalchemy.orm_models import TransactionORM


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        orm_txn = self._to_orm(transaction)
        self._db.add(orm_txn)
        self._db.commit()
        self._db.refresh(orm_txn)
        return self._to_domain(orm_txn)

    def list_by_user(self, user_id: str) -> list[Transaction]:
        """List all transactions for a user, ordered by txn_time."""
        query = (
            self._db.query(TransactionORM)
            .filter(TransactionORM.user_id == user_id)
            .order_by(TransactionORM.txn_time, TransactionORM.seq)
        )
        return [self._to_domain(t) for t in query.all()]

    def delete_by_user(self, user_id: str) -> int:
        """Delete all transactions for a user."""
        deleted = (
            self._db.query(TransactionORM)
            .filter(TransactionORM.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self._db.commit()
        return deleted

    @staticmethod
    def _to_orm(txn: Transaction) -> TransactionORM:
        """Convert domain model to ORM model (timestamps stored as naive UTC)."""
        txn_time = to_utc(txn.txn_time or now_utc())
        return TransactionORM(
            txn_id=txn.txn_id,
            user_id=txn.user_id,
            symbol=txn.symbol,
            kind=txn.kind,
            quantity=txn.quantity,
            total_price=txn.total_price,
            txn_time=txn_time.replace(tzinfo=None),
        )

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.txn_id,
            user_id=orm.user_id,
            symbol=orm.symbol,
            kind=orm.kind,
            quantity=orm.quantity,
            total_price=orm.total_price,
            txn_time=to_utc(orm.txn_time),
        )
