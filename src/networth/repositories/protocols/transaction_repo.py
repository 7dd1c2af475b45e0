"""Transaction repository protocol."""

from typing import Protocol

from networth.domain.models import Transaction


class TransactionRepository(Protocol):
    """Interface for transaction (ledger) data access."""

    def list_all(self) -> list[Transaction]:
        """List every valid transaction, ordered by date."""
        ...

    def add(self, transaction: Transaction) -> Transaction:
        """Persist a transaction (used when seeding a ledger)."""
        ...
