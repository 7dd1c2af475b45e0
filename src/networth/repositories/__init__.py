"""Repository layer - data access abstractions and implementations."""

from networth.repositories.protocols import (
    AccountRepository,
    TransactionRepository,
    PriceRepository,
    LedgerBackend,
)

__all__ = [
    "AccountRepository",
    "TransactionRepository",
    "PriceRepository",
    "LedgerBackend",
]
