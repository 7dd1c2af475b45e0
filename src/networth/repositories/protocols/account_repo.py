"""Account repository protocol."""

from typing import Protocol, Optional

from networth.domain.models import Account


class AccountRepository(Protocol):
    """Interface for account data access (read-only ledger)."""

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        ...

    def list_all(self) -> list[Account]:
        """List all accounts."""
        ...

    def add(self, account: Account) -> Account:
        """Persist an account (used when seeding a ledger)."""
        ...
