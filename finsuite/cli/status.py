"""Implementation of 'finsuite status' command.

Shows both dashboard summaries in the terminal.
"""

from decimal import Decimal
from pathlib import Path

import typer
from rich.markup import escape
from rich.panel import Panel

from finsuite.cli.utils import console, open_config
from finsuite.core.models import DataSource, LabeledSeries
from finsuite.dashboard import DashboardDataProvider
from finsuite.dashboard.generator import format_currency
from finsuite.engine.charts import normalize


def _top_categories(series, limit: int = 5) -> list[tuple[str, Decimal]]:
    """Largest expense categories from the category breakdown series."""
    if not isinstance(series, LabeledSeries) or not series.datasets:
        return []
    values = series.datasets[0].data
    pairs = list(zip(series.labels, values))
    return sorted(pairs, key=lambda x: x[1], reverse=True)[:limit]


def status_command(
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to finsuite.yaml or its directory (default: current directory)",
    ),
) -> None:
    """Show expense and investment summaries.

    Displays totals for both windows, the top spending categories,
    the investment growth points, and warnings about missing data.
    """
    config = open_config(config_path)
    currency = config.currency

    data = DashboardDataProvider.from_config(config).get_dashboard_data()
    warnings: list[str] = []

    console.print()
    console.print(Panel(f"[bold]{config.name}[/bold]", style="cyan"))
    console.print()

    # Expenses
    expenses = data.expense_summary
    console.print(f"[bold]Expense Tracking[/bold] [dim]({expenses.period})[/dim]")
    console.print(f"  Total:     {format_currency(expenses.total, currency):>12}")
    top = _top_categories(data.expense_chart_data)
    if top:
        for cat, amount in top:
            pct = (amount / expenses.total * 100) if expenses.total > 0 else Decimal(0)
            console.print(f"  {escape(cat)}: {format_currency(amount, currency):>12} ({pct:.1f}%)")
    console.print()

    # Investments
    insights = data.investment_insights
    console.print(f"[bold]Investment Insights[/bold] [dim]({insights.period})[/dim]")
    console.print(f"  Total:     {format_currency(insights.total, currency):>12}")
    rows = normalize(data.investment_chart_data)
    if rows:
        first, last = rows[0], rows[-1]
        value_key = next((k for k in last if k != "name"), None)
        console.print(f"  From {first['name']} to {last['name']}: {len(rows)} contributions")
        if value_key is not None:
            console.print(f"  Latest value: {format_currency(last[value_key], currency):>12}")
    console.print()

    # Data source and diagnostics
    if data.expense_source == DataSource.FALLBACK:
        warnings.append("Expenses show sample data")
    if data.investment_source == DataSource.FALLBACK:
        warnings.append("Investments show sample data")
    if data.errors.expenses:
        warnings.append(f"Expense fetch failed: {data.errors.expenses}")
    if data.errors.investments:
        warnings.append(f"Investment fetch failed: {data.errors.investments}")

    if warnings:
        console.print("[bold yellow]⚠ Warnings[/bold yellow]")
        for w in warnings:
            console.print(f"  - {escape(w)}")
        console.print()

    console.print(f"[dim]Generated: {data.generated_at:%Y-%m-%d %H:%M}[/dim]")
