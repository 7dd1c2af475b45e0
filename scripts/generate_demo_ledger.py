#!/usr/bin/env python3
"""
Generate a realistic demo ledger for the last 6 months.

Simulates a household with a salary, rent and everyday spending in a checking
account, weekly DCA purchases in a brokerage account and a small EUR savings
account. Account balances are written so they agree with the transaction history.

Usage: from project root:
  python scripts/generate_demo_ledger.py [DATA_DIR]
"""

import asyncio
import random
import sys
import uuid
from collections import defaultdict
from datetime import date, timedelta
from pathlib import Path

# Add src/ to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from networth.app_context import AppContext
from networth.config.logging_config import setup_logging
from networth.core.timezone import today_in
from networth.domain.models import (
    Account,
    AccountKind,
    CashTransaction,
    InvestmentTransaction,
)
from networth.repositories.sqlalchemy import (
    SqlAlchemyAccountRepository,
    SqlAlchemyTransactionRepository,
    get_session_factory,
)

# Approximate prices used for generated trades
STOCKS = [
    ("AAPL", 185.0),
    ("MSFT", 380.0),
    ("VTI", 250.0),
    ("SPY", 480.0),
]

SPENDING = [
    ("Groceries", 40, 160),
    ("Dining", 15, 80),
    ("Transport", 10, 60),
    ("Utilities", 80, 140),
]


def _cash(account_id, day, amount, category, payee, currency=None):
    return CashTransaction(
        id=str(uuid.uuid4()),
        account_id=account_id,
        date=day,
        amount=round(amount, 2),
        payee=payee,
        category=category,
        currency=currency,
    )


def _buy(account_id, day, ticker, shares, price, fee=1.0):
    return InvestmentTransaction(
        id=str(uuid.uuid4()),
        account_id=account_id,
        date=day,
        amount=round(-(shares * price + fee), 2),
        ticker=ticker,
        shares=shares,
        price_per_share=price,
        fee=fee,
        payee="Broker",
        category="Investment",
    )


def generate_transactions(start_date: date, today: date) -> list:
    """Generate the demo transaction log between start_date and today."""
    txns = []

    # Initial funding
    txns.append(_cash("checking", start_date, 8000.0, "Opening Balance", "Bank"))
    txns.append(_cash("savings-eur", start_date, 3000.0, "Opening Balance", "Bank", "EUR"))

    day = start_date
    while day <= today:
        if day.day == 1:
            txns.append(_cash("checking", day, 5200.0, "Salary", "Employer"))
            txns.append(_cash("checking", day, -1800.0, "Rent", "Landlord"))
            # Monthly transfer into the brokerage account
            txns.append(_cash("checking", day, -1500.0, "Transfer", "Brokerage"))
            txns.append(_cash("brokerage", day, 1500.0, "Transfer", "Checking"))
            txns.append(_cash("savings-eur", day, 200.0, "Savings", "Standing order", "EUR"))
        if day.weekday() == 0:
            # Weekly DCA: buy ~$300 of a random stock
            ticker, base_price = random.choice(STOCKS)
            price = round(base_price * random.uniform(0.95, 1.05), 2)
            shares = round(300 / price, 4)
            txns.append(_buy("brokerage", day, ticker, shares, price))
        if random.random() < 0.4:
            category, low, high = random.choice(SPENDING)
            txns.append(_cash("checking", day, -random.uniform(low, high), category, category))
        day += timedelta(days=1)

    return txns


def generate_demo_ledger(data_dir: Path = None):
    """Write demo accounts and transactions into the ledger database."""
    context = AppContext(data_dir)
    context.initialize()

    today = today_in()
    start_date = today - timedelta(days=182)
    random.seed(42)

    print(f"Generating transactions from {start_date} to {today}")
    print("=" * 60)

    txns = generate_transactions(start_date, today)

    balances = defaultdict(float)
    for t in txns:
        balances[t.account_id] += t.amount

    accounts = [
        Account(id="checking", name="Checking", kind=AccountKind.CASH,
                balance=round(balances["checking"], 2)),
        Account(id="brokerage", name="Brokerage", kind=AccountKind.BROKERAGE,
                balance=round(balances["brokerage"], 2)),
        Account(id="savings-eur", name="Euro Savings", kind=AccountKind.CASH,
                balance=round(balances["savings-eur"], 2), currency="EUR"),
    ]

    with get_session_factory()() as db:
        account_repo = SqlAlchemyAccountRepository(db)
        transaction_repo = SqlAlchemyTransactionRepository(db)
        for account in accounts:
            if account_repo.get_by_id(account.id):
                print(f"✓ Account '{account.name}' already exists, skipping")
                continue
            account_repo.add(account)
            print(f"✓ Account '{account.name}' created (balance {account.balance:,.2f})")
        if transaction_repo.list_all():
            print("✓ Ledger already has transactions, nothing to do")
            return
        for t in txns:
            transaction_repo.add(t)

    print(f"\n✓ Created {len(txns)} transactions")

    # Fill the daily price table and compute the dashboard once
    views = asyncio.run(context.dashboard.refresh())
    if views is not None:
        print(f"\nCurrent net worth: {views.current_net_worth:,.2f} {views.params.display_currency}")
        for h in views.holdings:
            print(f"  {h.ticker}: {h.shares:.4f} shares, value {h.value:,.2f}, ROI {h.roi:.1f}%")
        if not views.net_worth.quality.is_clean:
            print(f"  Data quality: {views.net_worth.quality}")


if __name__ == "__main__":
    setup_logging("WARNING")
    try:
        generate_demo_ledger(Path(sys.argv[1]) if len(sys.argv) > 1 else None)
    except Exception as e:
        print(f"\n✗ Error: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)
