"""SQLAlchemy implementation of AccountRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from networth.domain.models import Account, parse_account
from networth.repositories.sqlalchemy.orm_models import AccountORM


class SqlAlchemyAccountRepository:
    """SQLAlchemy-backed account repository."""

    def __init__(self, db: Session):
        self._db = db

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.id == account_id
        ).first()
        return self._to_domain(orm_account) if orm_account else None

    def list_all(self) -> list[Account]:
        """List all accounts."""
        orm_accounts = self._db.query(AccountORM).order_by(AccountORM.name).all()
        return [self._to_domain(a) for a in orm_accounts]

    def add(self, account: Account) -> Account:
        """Persist an account."""
        orm_account = AccountORM(
            id=account.id,
            name=account.name,
            kind=account.kind.value,
            balance=account.balance,
            currency=account.currency,
        )
        self._db.add(orm_account)
        self._db.commit()
        self._db.refresh(orm_account)
        return self._to_domain(orm_account)

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return parse_account({
            "id": orm.id,
            "name": orm.name,
            "kind": orm.kind,
            "balance": orm.balance,
            "currency": orm.currency,
        })
