"""SQLAlchemy implementation of TransactionRepository."""

from sqlalchemy.orm import Session

from networth.domain.models import (
    InvestmentTransaction,
    Transaction,
    parse_transactions,
)
from networth.repositories.sqlalchemy.orm_models import TransactionORM


def _num(value: float) -> str:
    return repr(float(value))


class SqlAlchemyTransactionRepository:
    """
    SQLAlchemy-backed transaction repository.

    Rows that fail validation (missing id/account/date) are skipped and logged.
    """

    def __init__(self, db: Session):
        self._db = db

    def list_all(self) -> list[Transaction]:
        """List every valid transaction, ordered by date."""
        rows = self._db.query(TransactionORM).order_by(TransactionORM.date).all()
        return self._to_domain_list(rows)

    def add(self, transaction: Transaction) -> Transaction:
        """Persist a transaction."""
        orm_txn = self._to_orm(transaction)
        self._db.add(orm_txn)
        self._db.commit()
        return transaction

    @staticmethod
    def _to_orm(txn: Transaction) -> TransactionORM:
        """Convert domain model to ORM model."""
        orm = TransactionORM(
            id=txn.id,
            account_id=txn.account_id,
            date=txn.date.isoformat(),
            payee=txn.payee,
            category=txn.category,
            notes=txn.notes,
            amount=_num(txn.amount),
            currency=txn.currency,
        )
        if isinstance(txn, InvestmentTransaction):
            orm.ticker = txn.ticker
            orm.shares = _num(txn.shares)
            orm.price_per_share = _num(txn.price_per_share)
            orm.fee = _num(txn.fee)
        return orm

    @staticmethod
    def _to_record(orm: TransactionORM) -> dict:
        return {
            "id": orm.id,
            "account_id": orm.account_id,
            "date": orm.date,
            "payee": orm.payee,
            "category": orm.category,
            "notes": orm.notes,
            "amount": orm.amount,
            "ticker": orm.ticker,
            "shares": orm.shares,
            "price_per_share": orm.price_per_share,
            "fee": orm.fee,
            "currency": orm.currency,
        }

    def _to_domain_list(self, rows: list[TransactionORM]) -> list[Transaction]:
        return parse_transactions(self._to_record(r) for r in rows)
