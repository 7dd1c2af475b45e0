"""Transaction domain models and boundary parsing."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Union

from networth.core.exceptions import ValidationError
from networth.core.parsing import parse_number, normalize_symbol, normalize_text
from networth.core.timezone import parse_iso_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CashTransaction:
    """
    Ledger entry that only moves cash.

    ``amount`` is signed: positive is inflow, negative is outflow. ``currency`` is the
    currency the entry was recorded in; None means the account currency.
    """

    id: str
    account_id: str
    date: date
    amount: float
    payee: str = ""
    category: Optional[str] = None
    notes: Optional[str] = None
    currency: Optional[str] = None


@dataclass(frozen=True)
class InvestmentTransaction:
    """
    Ledger entry that trades a security.

    ``shares`` is signed (positive buys, negative sells). ``amount`` is still the cash
    effect on the account and participates in the cash balance like any other entry.
    ``fee`` is charged on buys and added to cost basis.
    """

    id: str
    account_id: str
    date: date
    amount: float
    ticker: str
    shares: float = 0.0
    price_per_share: float = 0.0
    fee: float = 0.0
    payee: str = ""
    category: Optional[str] = None
    notes: Optional[str] = None
    currency: Optional[str] = None


Transaction = Union[CashTransaction, InvestmentTransaction]


def _required(record: Mapping[str, Any], key: str) -> str:
    value = record.get(key)
    if value is None or str(value).strip() == "":
        raise ValidationError(f"Transaction field '{key}' is required")
    return str(value)


def parse_transaction(record: Mapping[str, Any]) -> Transaction:
    """
    Validate one raw backend record into a Transaction.

    ``id``, ``account_id`` and ``date`` are required. Numeric fields that do not parse
    are treated as 0. A non-empty ticker makes the record an InvestmentTransaction.
    """
    tx_id = _required(record, "id")
    account_id = _required(record, "account_id")
    tx_date = parse_iso_date(record.get("date"))
    amount = parse_number(record.get("amount"))
    payee = normalize_text(record.get("payee")) or ""
    category = normalize_text(record.get("category"))
    notes = normalize_text(record.get("notes"))
    currency = normalize_symbol(record.get("currency"))

    ticker = normalize_symbol(record.get("ticker"))
    if ticker:
        return InvestmentTransaction(
            id=tx_id,
            account_id=account_id,
            date=tx_date,
            amount=amount,
            ticker=ticker,
            shares=parse_number(record.get("shares")),
            price_per_share=parse_number(record.get("price_per_share")),
            fee=parse_number(record.get("fee")),
            payee=payee,
            category=category,
            notes=notes,
            currency=currency,
        )
    return CashTransaction(
        id=tx_id,
        account_id=account_id,
        date=tx_date,
        amount=amount,
        payee=payee,
        category=category,
        notes=notes,
        currency=currency,
    )


def parse_transactions(records: Iterable[Mapping[str, Any]]) -> list[Transaction]:
    """Parse a batch of records, skipping (and logging) the ones that fail validation."""
    parsed: list[Transaction] = []
    for record in records:
        try:
            parsed.append(parse_transaction(record))
        except ValidationError as e:
            logger.warning("Skipping invalid transaction record %r: %s", record.get("id"), e.message)
    return parsed
