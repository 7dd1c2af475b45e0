"""Daily price point model."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class PricePoint:
    """Closing price of ``symbol`` on ``date``. FX pairs use the ``BASEQUOTE=X`` form."""

    symbol: str
    date: date
    price: float
