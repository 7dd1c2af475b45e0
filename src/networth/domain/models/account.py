"""Account domain model."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from networth.core.exceptions import ValidationError
from networth.core.parsing import parse_number, normalize_symbol
from networth.domain.models.enums import AccountKind


@dataclass(frozen=True)
class Account:
    """
    Ledger account as reported by the backend.

    ``balance`` is the authoritative current value; every historical balance is
    derived from it, never the reverse. ``currency`` of None means the account is
    kept in the display currency.
    """

    id: str
    name: str
    kind: AccountKind = AccountKind.CASH
    balance: float = 0.0
    currency: Optional[str] = None

    def currency_or(self, default: str) -> str:
        """Return the account currency, falling back to ``default``."""
        return self.currency or default


def parse_kind(value: Any) -> AccountKind:
    """Map a raw kind string onto AccountKind (missing -> cash, unknown -> other)."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return AccountKind.CASH
    if isinstance(value, AccountKind):
        return value
    try:
        return AccountKind(str(value).strip().lower())
    except ValueError:
        return AccountKind.OTHER


def parse_account(record: Mapping[str, Any]) -> Account:
    """Validate a raw backend account record."""
    account_id = record.get("id")
    if account_id is None or str(account_id).strip() == "":
        raise ValidationError("Account id is required")
    return Account(
        id=str(account_id),
        name=str(record.get("name") or account_id),
        kind=parse_kind(record.get("kind")),
        balance=parse_number(record.get("balance")),
        currency=normalize_symbol(record.get("currency")),
    )
