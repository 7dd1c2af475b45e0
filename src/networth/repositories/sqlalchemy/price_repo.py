"""SQLAlchemy implementation of PriceRepository."""

from datetime import date
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from networth.domain.models import PricePoint
from networth.repositories.sqlalchemy.orm_models import DailyPriceORM


class SqlAlchemyPriceRepository:
    """SQLAlchemy-backed daily price repository."""

    def __init__(self, db: Session):
        self._db = db

    def list_by_symbol(self, symbol: str) -> list[PricePoint]:
        """List stored points for a symbol, ordered by date."""
        rows = (
            self._db.query(DailyPriceORM)
            .filter(DailyPriceORM.symbol == symbol.upper())
            .order_by(DailyPriceORM.date)
            .all()
        )
        return [self._to_domain(r) for r in rows]

    def latest_date(self, symbol: str) -> Optional[date]:
        """Return the most recent stored date for a symbol."""
        return (
            self._db.query(func.max(DailyPriceORM.date))
            .filter(DailyPriceORM.symbol == symbol.upper())
            .scalar()
        )

    def upsert_many(self, points: list[PricePoint]) -> int:
        """Insert or replace points by (symbol, date)."""
        for point in points:
            self._db.merge(
                DailyPriceORM(
                    symbol=point.symbol.upper(),
                    date=point.date,
                    price=float(point.price),
                )
            )
        self._db.commit()
        return len(points)

    @staticmethod
    def _to_domain(orm: DailyPriceORM) -> PricePoint:
        """Convert ORM model to domain model."""
        return PricePoint(symbol=orm.symbol, date=orm.date, price=orm.price)
