"""SQLAlchemy repository implementations."""

from networth.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    init_db,
    init_db_with_path,
    reset_database,
    Base,
)
from networth.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from networth.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from networth.repositories.sqlalchemy.price_repo import SqlAlchemyPriceRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "init_db",
    "init_db_with_path",
    "reset_database",
    "Base",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyPriceRepository",
]
