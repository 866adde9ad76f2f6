"""Record store backed by SQLAlchemy.

Holds expense and investment records and answers the two window
queries the dashboard needs. Defaults to a local sqlite file, but any
SQLAlchemy URL works.
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Iterator, Sequence, TypeVar

from pydantic import ValidationError
from sqlalchemy import DateTime, Numeric, String, create_engine, delete, func, select
from sqlalchemy.engine import Row
from sqlalchemy.engine.url import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from finsuite.core.exceptions import DataSourceError
from finsuite.core.models import ExpenseRecord, InvestmentRecord

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", ExpenseRecord, InvestmentRecord)


class Base(DeclarativeBase):
    pass


class ExpenseRow(Base):
    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(primary_key=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    category: Mapped[str] = mapped_column(String(100), index=True)
    date: Mapped[datetime] = mapped_column(DateTime, index=True)


class InvestmentRow(Base):
    __tablename__ = "investments"

    id: Mapped[int] = mapped_column(primary_key=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    type: Mapped[str] = mapped_column(String(50))
    date: Mapped[datetime] = mapped_column(DateTime, index=True)


class RecordStore:
    """Fetch-and-filter access to expense and investment records.

    Every failure of the underlying database is raised as DataSourceError.
    """

    def __init__(self, url: str):
        self.url = url
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        try:
            self._ensure_sqlite_dir(url)
            self.engine = create_engine(url, connect_args=connect_args)
        except (SQLAlchemyError, OSError, ImportError) as e:
            raise DataSourceError(f"Cannot open record store {url}: {e}") from e
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)

    @staticmethod
    def _ensure_sqlite_dir(url: str) -> None:
        parsed = make_url(url)
        if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise DataSourceError(f"{type(e).__name__}: {e}") from e
        finally:
            session.close()

    def create_schema(self) -> None:
        """Create tables if they do not exist."""
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise DataSourceError(f"{type(e).__name__}: {e}") from e

    def get_expenses(self, since: datetime) -> list[ExpenseRecord]:
        """Expenses with date >= since, oldest first.

        Rows that do not form a valid record (negative amount, blank
        category) are skipped and logged.
        """
        stmt = (
            select(ExpenseRow.id, ExpenseRow.amount, ExpenseRow.category)
            .where(ExpenseRow.date >= since)
            .order_by(ExpenseRow.date, ExpenseRow.id)
        )
        with self._session() as session:
            rows = session.execute(stmt).all()
        logger.debug("Fetched %d expense records since %s", len(rows), since)
        return _valid_records(ExpenseRecord, rows, "expenses")

    def get_investments(self, since: datetime) -> list[InvestmentRecord]:
        """Investments with date >= since, oldest first.

        Rows that do not form a valid record are skipped and logged.
        """
        stmt = (
            select(InvestmentRow.id, InvestmentRow.amount, InvestmentRow.type, InvestmentRow.date)
            .where(InvestmentRow.date >= since)
            .order_by(InvestmentRow.date, InvestmentRow.id)
        )
        with self._session() as session:
            rows = session.execute(stmt).all()
        logger.debug("Fetched %d investment records since %s", len(rows), since)
        return _valid_records(InvestmentRecord, rows, "investments")

    def add_expenses(self, items: Iterable[tuple[ExpenseRecord, datetime]]) -> int:
        """Insert expenses given as (record, date) pairs.

        Returns:
            Number of rows inserted.
        """
        rows = [
            ExpenseRow(amount=record.amount, category=record.category, date=when)
            for record, when in items
        ]
        with self._session() as session:
            session.add_all(rows)
        return len(rows)

    def add_investments(self, items: Iterable[InvestmentRecord]) -> int:
        """Insert investment records.

        Returns:
            Number of rows inserted.
        """
        rows = [
            InvestmentRow(amount=record.amount, type=record.type, date=record.date)
            for record in items
        ]
        with self._session() as session:
            session.add_all(rows)
        return len(rows)

    def count(self) -> dict[str, int]:
        """Row counts per table."""
        with self._session() as session:
            expenses = session.scalar(select(func.count()).select_from(ExpenseRow)) or 0
            investments = session.scalar(select(func.count()).select_from(InvestmentRow)) or 0
        return {"expenses": expenses, "investments": investments}

    def delete_all(self) -> int:
        """Delete every record. Returns the number of rows removed."""
        with self._session() as session:
            deleted = session.execute(delete(ExpenseRow)).rowcount or 0
            deleted += session.execute(delete(InvestmentRow)).rowcount or 0
        return deleted


def _valid_records(model: type[RecordT], rows: Sequence[Row], table: str) -> list[RecordT]:
    records: list[RecordT] = []
    for row in rows:
        values = row._asdict()
        row_id = values.pop("id")
        try:
            records.append(model(**values))
        except ValidationError as e:
            logger.warning(
                "Skipping malformed row %s in %s: %s",
                row_id,
                table,
                "; ".join(err["msg"] for err in e.errors()),
            )
    return records
