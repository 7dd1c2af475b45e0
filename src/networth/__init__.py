"""Point-in-time valuation and analytics engine for a personal-finance ledger."""

__version__ = "0.1.0"
