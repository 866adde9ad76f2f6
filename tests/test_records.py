"""Tests for the SQLAlchemy record store."""

from datetime import datetime, timedelta
from decimal import Decimal

import logging

import pytest
from sqlalchemy.orm import Session

from finsuite.core.exceptions import DataSourceError
from finsuite.core.models import ExpenseRecord, InvestmentRecord
from finsuite.storage.records import ExpenseRow, InvestmentRow, RecordStore

NOW = datetime(2024, 6, 30, 12, 0)


@pytest.fixture
def store(tmp_path) -> RecordStore:
    store = RecordStore(f"sqlite:///{tmp_path / 'records.db'}")
    store.create_schema()
    return store


class TestRecordStore:
    """Tests for RecordStore queries."""

    def test_get_expenses_filters_by_date(self, store: RecordStore) -> None:
        """Test that only expenses inside the window are returned."""
        store.add_expenses([
            (ExpenseRecord(amount=Decimal("30"), category="Food"), NOW - timedelta(days=2)),
            (ExpenseRecord(amount=Decimal("99"), category="Old"), NOW - timedelta(days=45)),
            (ExpenseRecord(amount=Decimal("20"), category="Food"), NOW - timedelta(days=1)),
        ])
        records = store.get_expenses(NOW - timedelta(days=30))

        assert [r.category for r in records] == ["Food", "Food"]
        assert [r.amount for r in records] == [Decimal("30"), Decimal("20")]

    def test_get_investments_ordered_by_date(self, store: RecordStore) -> None:
        """Test that investments come back oldest first with their dates."""
        store.add_investments([
            InvestmentRecord(amount=Decimal("200"), type="ETF", date=datetime(2024, 5, 1)),
            InvestmentRecord(amount=Decimal("100"), type="Stocks", date=datetime(2024, 3, 1)),
            InvestmentRecord(amount=Decimal("50"), type="Bonds", date=datetime(2023, 1, 1)),
        ])
        records = store.get_investments(NOW - timedelta(days=180))

        assert [r.type for r in records] == ["Stocks", "ETF"]
        assert records[0].date == datetime(2024, 3, 1)
        assert records[1].amount == Decimal("200")

    def test_count_and_delete_all(self, store: RecordStore) -> None:
        store.add_expenses([(ExpenseRecord(amount=Decimal("1"), category="A"), NOW)])
        store.add_investments([
            InvestmentRecord(amount=Decimal("1"), type="ETF", date=NOW),
            InvestmentRecord(amount=Decimal("2"), type="ETF", date=NOW),
        ])
        assert store.count() == {"expenses": 1, "investments": 2}

        assert store.delete_all() == 3
        assert store.count() == {"expenses": 0, "investments": 0}

    def test_malformed_rows_are_skipped(self, store: RecordStore, caplog) -> None:
        """Test that rows breaking the record rules are left out and logged."""
        store.add_expenses([(ExpenseRecord(amount=Decimal("40"), category="Food"), NOW)])
        with Session(store.engine) as session:
            session.add_all([
                ExpenseRow(amount=Decimal("-5"), category="Refund", date=NOW),
                ExpenseRow(amount=Decimal("10"), category="", date=NOW),
                InvestmentRow(amount=Decimal("-1"), type="ETF", date=NOW),
            ])
            session.commit()
        store.add_investments([InvestmentRecord(amount=Decimal("7"), type="ETF", date=NOW)])

        with caplog.at_level(logging.WARNING, logger="finsuite.storage.records"):
            expenses = store.get_expenses(NOW - timedelta(days=1))
            investments = store.get_investments(NOW - timedelta(days=1))

        assert [r.category for r in expenses] == ["Food"]
        assert [r.amount for r in investments] == [Decimal("7")]
        assert "Skipping malformed row" in caplog.text
        assert "expenses" in caplog.text

    def test_missing_schema_raises_data_source_error(self, tmp_path) -> None:
        """Test that query failures surface as DataSourceError."""
        store = RecordStore(f"sqlite:///{tmp_path / 'empty.db'}")
        with pytest.raises(DataSourceError):
            store.get_expenses(NOW)

    def test_invalid_url(self) -> None:
        with pytest.raises(DataSourceError):
            RecordStore("not a url")

    def test_unopenable_path(self, tmp_path) -> None:
        """Test that a sqlite path below a regular file cannot be opened."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        with pytest.raises(DataSourceError):
            RecordStore(f"sqlite:///{blocker / 'sub' / 'records.db'}")
