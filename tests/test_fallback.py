"""Tests for sample data fallback and dashboard assembly."""

from datetime import datetime
from decimal import Decimal

import pytest

from finsuite.core.models import (
    DataSource,
    ExpenseRecord,
    FetchErrors,
    InvestmentRecord,
    RecordKind,
)
from finsuite.engine.assembler import assemble_dashboard
from finsuite.engine.fallback import SAMPLE_EXPENSES, SAMPLE_INVESTMENTS, fallback_dataset


class TestFallbackDataset:
    """Tests for fallback_dataset function."""

    def test_expense_totals(self) -> None:
        """Test sample expense total against the sample records."""
        summary, series = fallback_dataset("expense")
        assert summary.total == Decimal("954.77")
        assert summary.period == "Last 30 days"
        assert len(series.labels) == len(SAMPLE_EXPENSES)

    def test_investment_totals(self) -> None:
        """Test that the sample growth curve ends at the sample total."""
        summary, series = fallback_dataset(RecordKind.INVESTMENT)
        expected = sum((r.amount for r in SAMPLE_INVESTMENTS), Decimal(0))
        assert summary.total == expected
        assert series.datasets[0].data[-1] == expected
        assert summary.period == "Last 6 months"

    def test_repeated_calls_are_identical(self) -> None:
        """Test determinism across calls."""
        for kind in ("expense", "investment"):
            first = fallback_dataset(kind)
            second = fallback_dataset(kind)
            assert first == second
            assert first[1].model_dump_json() == second[1].model_dump_json()

    def test_returns_copies(self) -> None:
        """Test that callers cannot change the cached sample data."""
        _, series = fallback_dataset("expense")
        series.labels.append("Injected")

        _, fresh = fallback_dataset("expense")
        assert "Injected" not in fresh.labels

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError):
            fallback_dataset("savings")


class TestAssembleDashboard:
    """Tests for assemble_dashboard function."""

    def test_live_data(self) -> None:
        """Test that records are used when both fetches return data."""
        data = assemble_dashboard(
            [
                ExpenseRecord(amount=Decimal("30"), category="Food"),
                ExpenseRecord(amount=Decimal("20"), category="Food"),
                ExpenseRecord(amount=Decimal("50"), category="Rent"),
            ],
            [InvestmentRecord(amount=Decimal("100"), type="ETF", date=datetime(2024, 1, 1))],
        )
        assert data.expense_summary.total == Decimal("100")
        assert data.expense_chart_data.labels == ["Food", "Rent"]
        assert data.investment_insights.total == Decimal("100")
        assert data.expense_source == DataSource.LIVE
        assert data.investment_source == DataSource.LIVE
        assert not data.errors.has_errors

    def test_empty_lists_use_fallback(self) -> None:
        """Test that empty fetch results are replaced by sample data."""
        data = assemble_dashboard([], [])
        expense_fallback = fallback_dataset("expense")
        investment_fallback = fallback_dataset("investment")

        assert (data.expense_summary, data.expense_chart_data) == expense_fallback
        assert (data.investment_insights, data.investment_chart_data) == investment_fallback
        assert data.expense_source == DataSource.FALLBACK
        assert data.investment_source == DataSource.FALLBACK

    def test_failed_fetch_passes_errors_through(self) -> None:
        """Test that fetch failures keep their messages and use sample data."""
        errors = FetchErrors(expenses="connection refused")
        data = assemble_dashboard(
            None,
            [InvestmentRecord(amount=Decimal("5"), type="ETF", date=datetime(2024, 1, 1))],
            errors,
        )
        assert data.errors.expenses == "connection refused"
        assert data.errors.investments is None
        assert data.expense_source == DataSource.FALLBACK
        assert data.investment_source == DataSource.LIVE

    def test_windows_change_labels(self) -> None:
        """Test that custom windows are reflected in the summaries."""
        data = assemble_dashboard(
            [ExpenseRecord(amount=Decimal("1"), category="Food")],
            [InvestmentRecord(amount=Decimal("1"), type="ETF", date=datetime(2024, 1, 1))],
            expense_window_days=7,
            investment_window_days=90,
            currency="EUR",
        )
        assert data.expense_summary.period == "Last 7 days"
        assert data.investment_insights.period == "Last 3 months"
        assert data.currency == "EUR"

    def test_contract_shape(self) -> None:
        """Test the camelCase mapping for the presentation layer."""
        contract = assemble_dashboard([], None, FetchErrors(investments="timeout")).to_contract()
        assert set(contract) == {
            "expenseSummary",
            "investmentInsights",
            "expenseChartData",
            "investmentChartData",
            "errors",
        }
        assert contract["errors"] == {"expenses": None, "investments": "timeout"}
        assert contract["expenseChartData"]["kind"] == "labeled"
