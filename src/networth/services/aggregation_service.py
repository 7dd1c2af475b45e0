"""Expense, income-vs-expense and cash-flow aggregations over the transaction log."""

from collections import defaultdict
from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta

from networth.core.timezone import format_date, format_month
from networth.domain.models import (
    Account,
    BucketGranularity,
    FlowNodeKind,
    InvestmentTransaction,
    Transaction,
)
from networth.domain.views import (
    CategoryTotal,
    FlowEdge,
    FlowGraph,
    FlowNode,
    IncomeExpenseBucket,
    IncomeExpenseSeries,
)
from networth.services.classifiers import CategoryClassifier, KeywordInvestmentClassifier
from networth.services.currency import CurrencyConverter
from networth.services.date_range import DateRange, bucket_granularity

BUDGET_ID = "sys:budget"
EXPENSES_ID = "sys:expenses"
INVESTMENTS_ID = "sys:investments"
SURPLUS_ID = "sys:surplus"
DEFICIT_ID = "sys:deficit"

# Layout order of the flow graph (higher sits lower in the rendered diagram)
_SYSTEM_NODES = {
    BUDGET_ID: ("Budget", FlowNodeKind.BUDGET, 500),
    EXPENSES_ID: ("Expenses", FlowNodeKind.EXPENSES, 1200),
    INVESTMENTS_ID: ("Investments & Savings", FlowNodeKind.INVESTMENTS, 1000),
    SURPLUS_ID: ("Savings", FlowNodeKind.SAVINGS, 900),
    DEFICIT_ID: ("Deficit", FlowNodeKind.DEFICIT, 500),
}
INCOME_PRIORITY = 600
INVESTMENT_CATEGORY_PRIORITY = 800
EXPENSE_CATEGORY_PRIORITY = 1000


def _descending(totals: dict[str, float]) -> list[tuple[str, float]]:
    return sorted(totals.items(), key=lambda kv: kv[1], reverse=True)


class AggregationService:
    """
    Builds category and flow views in the display currency.

    Amounts are converted from the account currency at each transaction's own date.
    Transactions in the transfer category never count as income or expense.
    """

    def __init__(
        self,
        classifier: Optional[CategoryClassifier] = None,
        transfer_category: str = "Transfer",
        uncategorized_label: str = "Uncategorized",
        date_format: str = "YYYY-MM-DD",
    ):
        self._classifier = classifier or KeywordInvestmentClassifier()
        self._transfer_category = transfer_category
        self._uncategorized = uncategorized_label
        self._date_format = date_format

    def _category(self, txn: Transaction) -> str:
        return txn.category or self._uncategorized

    def _is_transfer(self, txn: Transaction) -> bool:
        return txn.category == self._transfer_category

    def _to_display(
        self,
        txn: Transaction,
        accounts: dict[str, Account],
        converter: CurrencyConverter,
        display_currency: str,
    ) -> float:
        account = accounts.get(txn.account_id)
        account_currency = account.currency_or(display_currency) if account else display_currency
        return txn.amount * converter.rate(account_currency, display_currency, txn.date)

    def expenses_by_category(
        self,
        accounts: list[Account],
        transactions: list[Transaction],
        converter: CurrencyConverter,
        date_range: DateRange,
        display_currency: str,
    ) -> list[CategoryTotal]:
        """Cash outflows in range summed by category, largest first."""
        by_id = {a.id: a for a in accounts}
        totals: dict[str, float] = defaultdict(float)
        for txn in transactions:
            if (
                txn.amount >= 0
                or self._is_transfer(txn)
                or isinstance(txn, InvestmentTransaction)
                or txn.date not in date_range
            ):
                continue
            amount = abs(self._to_display(txn, by_id, converter, display_currency))
            totals[self._category(txn)] += amount
        return [CategoryTotal(category=c, amount=v) for c, v in _descending(totals)]

    def income_vs_expenses(
        self,
        accounts: list[Account],
        transactions: list[Transaction],
        converter: CurrencyConverter,
        date_range: DateRange,
        display_currency: str,
    ) -> IncomeExpenseSeries:
        """
        Income and expenses bucketed by day (ranges up to a month) or by month.

        Monthly buckets start on the first of the start month. Investment trades and
        transfers are excluded.
        """
        granularity = bucket_granularity(date_range)
        starts = self._bucket_starts(date_range, granularity)
        include_year = (
            (date_range.end.year - date_range.start.year) * 12
            + date_range.end.month - date_range.start.month
        ) >= 12
        income: dict[date, float] = defaultdict(float)
        expense: dict[date, float] = defaultdict(float)
        by_id = {a.id: a for a in accounts}
        bucket_set = set(starts)

        for txn in transactions:
            if self._is_transfer(txn) or isinstance(txn, InvestmentTransaction):
                continue
            key = txn.date if granularity == BucketGranularity.DAY else txn.date.replace(day=1)
            if key not in bucket_set:
                continue
            amount = self._to_display(txn, by_id, converter, display_currency)
            if amount > 0:
                income[key] += amount
            else:
                expense[key] += abs(amount)

        buckets = []
        for start in starts:
            if granularity == BucketGranularity.DAY:
                label = format_date(start, self._date_format)
            else:
                label = format_month(start, include_year)
            buckets.append(
                IncomeExpenseBucket(
                    start=start,
                    label=label,
                    income=income.get(start, 0.0),
                    expense=expense.get(start, 0.0),
                )
            )
        return IncomeExpenseSeries(granularity=granularity, buckets=tuple(buckets))

    @staticmethod
    def _bucket_starts(date_range: DateRange, granularity: BucketGranularity) -> list[date]:
        if granularity == BucketGranularity.DAY:
            return list(date_range.iter_days())
        starts = []
        d = date_range.start.replace(day=1)
        while d <= date_range.end:
            starts.append(d)
            d = d + relativedelta(months=1)
        return starts

    def cash_flow(
        self,
        accounts: list[Account],
        transactions: list[Transaction],
        converter: CurrencyConverter,
        date_range: DateRange,
        display_currency: str,
    ) -> FlowGraph:
        """
        Sankey-style decomposition: income categories feed a budget node that splits
        into investments & savings (investment-like outflows plus any surplus) and
        expenses. A deficit node feeds the budget when outflows exceed income.
        """
        by_id = {a.id: a for a in accounts}
        income_cats: dict[str, float] = defaultdict(float)
        investment_cats: dict[str, float] = defaultdict(float)
        expense_cats: dict[str, float] = defaultdict(float)
        total_income = 0.0
        total_outflow = 0.0

        for txn in transactions:
            if self._is_transfer(txn) or txn.date not in date_range:
                continue
            amount = self._to_display(txn, by_id, converter, display_currency)
            category = self._category(txn)
            if amount > 0:
                income_cats[category] += amount
                total_income += amount
            elif amount < 0:
                if self._classifier.is_investment(category):
                    investment_cats[category] += abs(amount)
                else:
                    expense_cats[category] += abs(amount)
                total_outflow += abs(amount)

        if total_income == 0 and total_outflow == 0:
            return FlowGraph()

        investments_total = sum(investment_cats.values())
        expenses_total = sum(expense_cats.values())
        surplus = total_income - total_outflow if total_income > total_outflow else 0.0
        deficit = total_outflow - total_income if total_income <= total_outflow else 0.0

        nodes: dict[str, FlowNode] = {}
        edges: list[FlowEdge] = []

        def node(node_id: str, label: str, kind: FlowNodeKind, priority: int) -> None:
            if node_id not in nodes:
                nodes[node_id] = FlowNode(id=node_id, label=label, kind=kind, priority=priority)

        def system(node_id: str) -> None:
            label, kind, priority = _SYSTEM_NODES[node_id]
            node(node_id, label, kind, priority)

        def edge(source: str, target: str, amount: float) -> None:
            edges.append(FlowEdge(source, target, amount, nodes[target].priority))

        system(BUDGET_ID)
        for category, value in _descending(income_cats):
            node(f"inc:{category}", category, FlowNodeKind.INCOME, INCOME_PRIORITY)
            edge(f"inc:{category}", BUDGET_ID, value)

        if investments_total + surplus > 0:
            system(INVESTMENTS_ID)
            edge(BUDGET_ID, INVESTMENTS_ID, investments_total + surplus)
        if expenses_total > 0:
            system(EXPENSES_ID)
            edge(BUDGET_ID, EXPENSES_ID, expenses_total)
        if deficit > 0:
            system(DEFICIT_ID)
            edge(DEFICIT_ID, BUDGET_ID, deficit)
        if surplus > 0:
            system(SURPLUS_ID)
            edge(INVESTMENTS_ID, SURPLUS_ID, surplus)
        for category, value in _descending(investment_cats):
            node(f"inv:{category}", category, FlowNodeKind.INVESTMENT_CATEGORY,
                 INVESTMENT_CATEGORY_PRIORITY)
            edge(INVESTMENTS_ID, f"inv:{category}", value)
        for category, value in _descending(expense_cats):
            node(f"exp:{category}", category, FlowNodeKind.EXPENSE_CATEGORY,
                 EXPENSE_CATEGORY_PRIORITY)
            edge(EXPENSES_ID, f"exp:{category}", value)

        return FlowGraph(
            nodes=tuple(nodes.values()),
            edges=tuple(edges),
            total_income=total_income,
            total_expense=total_outflow,
            total_investment=investments_total,
        )
