"""
Unit tests for AnalysisService.

Tests cover:
- Holdings priced at live quotes
- Per-account market values
- Live net worth (brokerage accounts at market value)
- Allocation by asset type
- Treemap of holdings
"""

import pytest

from networth.domain.models import AccountKind
from networth.domain.views import Quote
from networth.services import AnalysisService, CurrencyConverter, PriceSeriesStore
from networth.services.analysis_service import asset_type

from tests.conftest import (
    DeterministicMarketProvider,
    day,
    make_account,
    make_trade,
    make_store,
    assert_close,
)


TODAY = day("2024-07-01")


@pytest.fixture
def service() -> AnalysisService:
    return AnalysisService()


@pytest.fixture
def quotes() -> dict[str, Quote]:
    return DeterministicMarketProvider().get_quotes(["AAPL", "MSFT", "VTI", "BTC-USD"])


@pytest.fixture
def converter() -> CurrencyConverter:
    return CurrencyConverter(PriceSeriesStore())


# =============================================================================
# HOLDINGS TESTS
# =============================================================================


class TestHoldings:
    """Tests for live holdings."""

    def test_holdings_priced_and_sorted(self, service, quotes):
        """
        GIVEN 10 AAPL bought at 150 and 2 MSFT at 300
        WHEN I list holdings
        THEN each is priced at its live quote, with ROI, largest value first
        """
        txns = [
            make_trade("brk", "2024-01-02", "MSFT", 2, 300.0),
            make_trade("brk", "2024-01-02", "AAPL", 10, 150.0),
        ]

        holdings = service.holdings(txns, quotes)

        assert [h.ticker for h in holdings] == ["AAPL", "MSFT"]
        aapl = holdings[0]
        assert_close(aapl.value, 1855.0)
        assert_close(aapl.cost_basis, 1500.0)
        assert_close(aapl.roi, 355.0 / 1500.0 * 100)
        assert aapl.quote_type == "EQUITY"

    def test_unquoted_holding_valued_at_zero(self, service, quotes):
        txns = [make_trade("brk", "2024-01-02", "ZZZZ", 5, 20.0)]

        holding = service.holdings(txns, quotes)[0]

        assert holding.price == 0.0
        assert holding.value == 0.0
        assert_close(holding.roi, -100.0)

    def test_holdings_for_one_account(self, service, quotes):
        txns = [
            make_trade("a1", "2024-01-02", "AAPL", 10, 150.0),
            make_trade("a2", "2024-01-02", "MSFT", 1, 300.0),
        ]

        holdings = service.holdings(txns, quotes, account_id="a2")

        assert [h.ticker for h in holdings] == ["MSFT"]


# =============================================================================
# MARKET VALUE AND NET WORTH TESTS
# =============================================================================


class TestNetWorth:
    """Tests for market values and the live net worth."""

    def test_market_values_per_account(self, service, quotes):
        """
        GIVEN one account holding AAPL and one that sold everything
        WHEN I compute market values
        THEN both accounts have entries and the closed one is worth 0
        """
        txns = [
            make_trade("brk", "2024-01-02", "AAPL", 10, 150.0),
            make_trade("old", "2024-01-02", "MSFT", 3, 300.0),
            make_trade("old", "2024-02-02", "MSFT", -3, 320.0),
        ]

        values = service.market_values(txns, quotes)

        assert_close(values["brk"], 1855.0)
        assert values["old"] == 0.0

    def test_brokerage_counts_at_market_value(self, service, quotes, converter):
        """
        GIVEN a checking account at 1000 and a brokerage account (balance 500) holding AAPL
        WHEN I compute the live net worth
        THEN the brokerage account counts at its market value
        """
        accounts = [
            make_account(id="chk", balance=1000.0),
            make_account(id="brk", kind=AccountKind.BROKERAGE, balance=500.0),
            make_account(id="ret", kind=AccountKind.BROKERAGE, balance=2000.0),
        ]
        txns = [make_trade("brk", "2024-01-02", "AAPL", 10, 150.0)]
        values = service.market_values(txns, quotes)

        total = service.current_net_worth(accounts, values, converter, TODAY, "USD")

        assert_close(total, 1000.0 + 1855.0 + 2000.0)

    def test_net_worth_converts_foreign_accounts(self, service):
        accounts = [make_account(id="eur", balance=100.0, currency="EUR")]
        converter = CurrencyConverter(make_store({"EURUSD=X": [("2024-06-28", 1.08)]}))

        total = service.current_net_worth(accounts, {}, converter, TODAY, "USD")

        assert_close(total, 108.0)


# =============================================================================
# ALLOCATION TESTS
# =============================================================================


class TestAllocation:
    """Tests for the asset-type breakdown."""

    def test_allocation_by_asset_type(self, service, quotes, converter):
        """
        GIVEN cash, a brokerage account with AAPL and VTI, a balance-only brokerage
              account and a negative 'other' account
        WHEN I compute the allocation
        THEN positions go to their asset type, balances to Cash, Stock or Other
        """
        accounts = [
            make_account(id="chk", balance=1000.0),
            make_account(id="brk", kind=AccountKind.BROKERAGE, balance=500.0),
            make_account(id="ret", kind=AccountKind.BROKERAGE, balance=2000.0),
            make_account(id="loan", kind=AccountKind.OTHER, balance=-300.0),
        ]
        txns = [
            make_trade("brk", "2024-01-02", "AAPL", 10, 150.0),
            make_trade("brk", "2024-01-02", "VTI", 2, 200.0),
        ]

        view = service.allocation(accounts, txns, quotes, converter, TODAY, "USD")
        by_label = {i.label: i for i in view.items}

        assert [i.label for i in view.items] == ["Stock", "Cash", "ETF", "Other"]
        assert_close(by_label["Stock"].value, 1855.0 + 2000.0)
        assert_close(by_label["Cash"].value, 1500.0)
        assert_close(by_label["ETF"].value, 500.0)
        assert_close(by_label["Other"].value, -300.0)
        assert_close(view.total_value, 5555.0)
        assert_close(sum(i.percentage for i in view.items), 100.0)
        assert_close(by_label["Other"].percentage, 300.0 / 6155.0 * 100)

    def test_small_brokerage_cash_ignored(self, service, quotes, converter):
        accounts = [make_account(id="brk", kind=AccountKind.BROKERAGE, balance=0.5)]
        txns = [make_trade("brk", "2024-01-02", "BTC-USD", 0.01, 50000.0)]

        view = service.allocation(accounts, txns, quotes, converter, TODAY, "USD")

        assert [i.label for i in view.items] == ["Crypto"]

    def test_foreign_ticker_converted_in_allocation(self, service):
        """
        GIVEN a USD brokerage account holding 10 SAP traded in EUR, quoted at 50
        WHEN I compute the allocation with and without EURUSD=X
        THEN the position is converted at the pair rate, or at 1.0 when it is missing
        """
        accounts = [make_account(id="brk", kind=AccountKind.BROKERAGE, balance=0.0)]
        txns = [make_trade("brk", "2024-01-02", "SAP", 10, 45.0, amount=0.0, currency="EUR")]
        sap = {"SAP": Quote(symbol="SAP", price=50.0, quote_type="EQUITY")}
        with_pair = CurrencyConverter(make_store({"EURUSD=X": [("2024-06-28", 1.10)]}))

        converted = service.allocation(accounts, txns, sap, with_pair, TODAY, "USD")
        fallback = service.allocation(
            accounts, txns, sap, CurrencyConverter(PriceSeriesStore()), TODAY, "USD"
        )

        assert [i.label for i in converted.items] == ["Stock"]
        assert_close(converted.total_value, 550.0)
        assert_close(fallback.total_value, 500.0)

    def test_empty_allocation(self, service, quotes, converter):
        view = service.allocation([], [], quotes, converter, TODAY, "USD")

        assert view.items == ()
        assert view.total_value == 0.0

    @pytest.mark.parametrize("quote_type,label", [
        ("EQUITY", "Stock"),
        ("etf", "ETF"),
        ("MUTUALFUND", "Mutual Fund"),
        ("WARRANT", "Stock"),
        (None, "Stock"),
    ])
    def test_asset_type_labels(self, quote_type, label):
        assert asset_type(Quote(symbol="X", price=1.0, quote_type=quote_type)) == label


# =============================================================================
# TREEMAP TESTS
# =============================================================================


class TestTreemap:
    """Tests for the holdings treemap."""

    def test_treemap_fills_requested_box(self, service, quotes):
        txns = [
            make_trade("brk", "2024-01-02", "MSFT", 2, 300.0),
            make_trade("brk", "2024-01-02", "AAPL", 10, 150.0),
            make_trade("brk", "2024-01-02", "ZZZZ", 1, 10.0),
        ]
        holdings = service.holdings(txns, quotes)

        rects = service.treemap(holdings, 400.0, 300.0)

        assert [r.ticker for r in rects] == ["AAPL", "MSFT"]
        assert_close(sum(r.area for r in rects), 120000.0, 1e-6)
