"""Tests for CLI commands."""

from datetime import datetime
from decimal import Decimal

import pytest
from typer.testing import CliRunner

from finsuite.cli.data_cmd import sample_records
from finsuite.cli.main import app
from finsuite.core.config import DATABASE_URL_ENV
from finsuite.engine.fallback import SAMPLE_EXPENSES, SAMPLE_INVESTMENTS

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Directory with a finsuite.yaml and a private database."""
    monkeypatch.delenv(DATABASE_URL_ENV, raising=False)
    (tmp_path / "finsuite.yaml").write_text("name: Test Dashboard\ncurrency: USD\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def unopenable_store(workdir, monkeypatch):
    """Point the database URL below a regular file so the store cannot open."""
    blocker = workdir / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    monkeypatch.setenv(DATABASE_URL_ENV, f"sqlite:///{blocker / 'sub' / 'db.sqlite'}")
    return workdir


class TestSampleRecords:
    """Tests for sample_records function."""

    def test_dates_inside_default_windows(self) -> None:
        now = datetime(2025, 3, 15, 9, 0)
        expenses, investments = sample_records(now)

        assert len(expenses) == len(SAMPLE_EXPENSES)
        assert all(0 < (now - when).days <= 30 for _, when in expenses)
        assert len(investments) == len(SAMPLE_INVESTMENTS)
        assert max(r.date for r in investments) == now
        assert all((now - r.date).days <= 180 for r in investments)


class TestReportCommand:
    """Tests for 'finsuite report'."""

    def test_report_with_empty_store(self, workdir) -> None:
        result = runner.invoke(app, ["report"])

        assert result.exit_code == 0, result.output
        assert "showing sample data" in result.output
        output = workdir / "reports" / "dashboard.html"
        assert output.exists()
        assert "Expense Tracking" in output.read_text(encoding="utf-8")

    def test_report_custom_output(self, workdir) -> None:
        target = workdir / "out" / "finance.html"
        result = runner.invoke(app, ["report", "--output", str(target)])

        assert result.exit_code == 0, result.output
        assert target.exists()

    def test_report_after_seed(self, workdir) -> None:
        assert runner.invoke(app, ["data", "seed"]).exit_code == 0
        result = runner.invoke(app, ["report"])

        assert result.exit_code == 0, result.output
        assert "sample data" not in result.output

    def test_missing_config(self, workdir) -> None:
        result = runner.invoke(app, ["report", "--config", str(workdir / "missing.yaml")])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_report_with_unopenable_store(self, unopenable_store) -> None:
        """Test that a store that cannot be opened still yields a dashboard."""
        result = runner.invoke(app, ["report"])

        assert result.exit_code == 0, result.output
        assert "Could not fetch expense data" in result.output
        assert "Could not fetch investment data" in result.output
        assert (unopenable_store / "reports" / "dashboard.html").exists()


class TestStatusCommand:
    """Tests for 'finsuite status'."""

    def test_status_with_seeded_data(self, workdir) -> None:
        runner.invoke(app, ["data", "seed"])
        result = runner.invoke(app, ["status"])

        assert result.exit_code == 0, result.output
        assert "Expense Tracking" in result.output
        assert "Investment Insights" in result.output
        assert "Housing" in result.output
        assert "$954.77" in result.output
        assert "Warnings" not in result.output

    def test_status_warns_about_sample_data(self, workdir) -> None:
        result = runner.invoke(app, ["status"])

        assert result.exit_code == 0, result.output
        assert "Expenses show sample data" in result.output
        assert "Investments show sample data" in result.output

    def test_status_with_unopenable_store(self, unopenable_store) -> None:
        result = runner.invoke(app, ["status"])

        assert result.exit_code == 0, result.output
        assert "Expense fetch failed" in result.output
        assert "Investments show sample data" in result.output


class TestDataCommands:
    """Tests for 'finsuite data seed' and 'finsuite data clear'."""

    def test_seed(self, workdir) -> None:
        result = runner.invoke(app, ["data", "seed"])

        assert result.exit_code == 0, result.output
        assert f"{len(SAMPLE_EXPENSES)} expenses" in result.output
        assert (workdir / ".cache" / "finsuite.db").exists()

    def test_seed_with_unopenable_store(self, unopenable_store) -> None:
        """Test that data commands still refuse to run without a store."""
        result = runner.invoke(app, ["data", "seed"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_clear_requires_confirm(self, workdir) -> None:
        runner.invoke(app, ["data", "seed"])
        result = runner.invoke(app, ["data", "clear"])

        assert result.exit_code == 0
        assert "--confirm" in result.output

    def test_clear_with_confirm(self, workdir) -> None:
        runner.invoke(app, ["data", "seed"])
        result = runner.invoke(app, ["data", "clear", "--confirm"])

        assert result.exit_code == 0, result.output
        total = len(SAMPLE_EXPENSES) + len(SAMPLE_INVESTMENTS)
        assert f"Deleted: {total} records" in result.output

    def test_clear_empty(self, workdir) -> None:
        result = runner.invoke(app, ["data", "clear", "--confirm"])
        assert result.exit_code == 0
        assert "already empty" in result.output


def test_seeded_totals_match_sample_data(workdir) -> None:
    """Seeded records aggregate to the same totals as the sample data."""
    runner.invoke(app, ["data", "seed"])
    result = runner.invoke(app, ["status"])

    invested = sum((r.amount for r in SAMPLE_INVESTMENTS), Decimal(0))
    assert f"${invested:,.2f}" in result.output
