"""Repository protocol definitions (interfaces)."""

from networth.repositories.protocols.account_repo import AccountRepository
from networth.repositories.protocols.transaction_repo import TransactionRepository
from networth.repositories.protocols.price_repo import PriceRepository
from networth.repositories.protocols.ledger_backend import LedgerBackend

__all__ = [
    "AccountRepository",
    "TransactionRepository",
    "PriceRepository",
    "LedgerBackend",
]
