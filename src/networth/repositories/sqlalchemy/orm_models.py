"""SQLAlchemy ORM model definitions for the backend ledger tables."""

from sqlalchemy import Column, Float, Date, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from networth.repositories.sqlalchemy.database import Base


class AccountORM(Base):
    """SQLAlchemy model for Account."""

    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    kind = Column(String(20), nullable=False, default="cash")
    balance = Column(Float, nullable=False, default=0.0)
    currency = Column(String(10), nullable=True)

    transactions = relationship("TransactionORM", back_populates="account")


class TransactionORM(Base):
    """
    SQLAlchemy model for a ledger entry.

    Dates and numbers are stored the way the backend writes them (ISO text, loosely
    typed numbers) and validated when converted to the domain model.
    """

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True)
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False)
    date = Column(String(32), nullable=False)
    payee = Column(String(255), nullable=True)
    category = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    amount = Column(String(32), nullable=True)
    ticker = Column(String(20), nullable=True)
    shares = Column(String(32), nullable=True)
    price_per_share = Column(String(32), nullable=True)
    fee = Column(String(32), nullable=True)
    currency = Column(String(10), nullable=True)

    account = relationship("AccountORM", back_populates="transactions")


class DailyPriceORM(Base):
    """SQLAlchemy model for one daily close of a ticker or FX pair symbol."""

    __tablename__ = "daily_prices"

    symbol = Column(String(20), primary_key=True)
    date = Column(Date, primary_key=True)
    price = Column(Float, nullable=False)
