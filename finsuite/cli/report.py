"""Implementation of 'finsuite report' command.

Generates the HTML dashboard with two cards:
1. Expense Tracking - total spent and spending by category
2. Investment Insights - total invested and growth over time
"""

from pathlib import Path

import typer
from rich.markup import escape

from finsuite.cli.utils import console, open_config
from finsuite.core.models import DataSource
from finsuite.dashboard import DashboardDataProvider, generate_dashboard_html, save_dashboard


def _report_source(name: str, source: DataSource, error: str | None) -> None:
    if source != DataSource.FALLBACK:
        return
    if error:
        reason = f"Could not fetch {name} data ({escape(error)})"
    else:
        reason = f"No {name} data found"
    console.print(f"[yellow]{reason}, showing sample data[/yellow]")


def report_command(
    output: Path = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (default: reports/dashboard.html)",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to finsuite.yaml or its directory (default: current directory)",
    ),
) -> None:
    """Generate the HTML dashboard.

    Creates a self-contained HTML file with the Expense Tracking and
    Investment Insights cards. Cards with no data show sample figures.
    """
    config = open_config(config_path)
    data = DashboardDataProvider.from_config(config).get_dashboard_data()

    _report_source("expense", data.expense_source, data.errors.expenses)
    _report_source("investment", data.investment_source, data.errors.investments)

    html = generate_dashboard_html(data, config)

    output_path = output if output else config.reports_path / "dashboard.html"
    save_dashboard(html, output_path)

    console.print(f"[green]Dashboard generated:[/green] {output_path}")
    console.print(f"Open in browser: file://{output_path.absolute()}")
