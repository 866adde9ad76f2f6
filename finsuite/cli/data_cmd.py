"""Implementation of 'finsuite data' command.

Manage the local record store: load sample records or clear all data.
"""

from datetime import datetime, timedelta
from pathlib import Path

import typer
from rich.markup import escape

from finsuite.cli.utils import console, open_config, open_store
from finsuite.core.exceptions import DataSourceError
from finsuite.core.models import ExpenseRecord, InvestmentRecord
from finsuite.engine.fallback import SAMPLE_EXPENSES, SAMPLE_INVESTMENTS

# Create subcommand group
data_app = typer.Typer(help="Manage the local record store")


def sample_records(
    now: datetime,
) -> tuple[list[tuple[ExpenseRecord, datetime]], list[InvestmentRecord]]:
    """Sample records dated so that they fall inside the default windows.

    Expenses are spread over the last days, one per day. Investments keep
    their spacing but are shifted so the latest one is dated ``now``.
    """
    expenses = [
        (record, now - timedelta(days=i + 1))
        for i, record in enumerate(SAMPLE_EXPENSES)
    ]
    shift = now - max(r.date for r in SAMPLE_INVESTMENTS)
    investments = [
        record.model_copy(update={"date": record.date + shift})
        for record in SAMPLE_INVESTMENTS
    ]
    return expenses, investments


@data_app.command(name="seed")
def data_seed(
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to finsuite.yaml or its directory",
    ),
) -> None:
    """Load sample expenses and investments into the store.

    Useful for trying out the dashboard locally.
    """
    config = open_config(config_path)
    store = open_store(config, create=False)

    expenses, investments = sample_records(datetime.now())
    try:
        store.create_schema()
        added_expenses = store.add_expenses(expenses)
        added_investments = store.add_investments(investments)
    except DataSourceError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(
        f"[green]Added:[/green] {added_expenses} expenses, {added_investments} investments"
    )
    console.print("[dim]Run 'finsuite report' to build the dashboard[/dim]")


@data_app.command(name="clear")
def data_clear(
    confirm: bool = typer.Option(
        False,
        "--confirm",
        "-y",
        help="Confirm deletion (required)",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to finsuite.yaml or its directory",
    ),
) -> None:
    """Delete all expenses and investments.

    This deletes ALL data from the database. Use with caution.
    Requires --confirm flag to execute.
    """
    config = open_config(config_path)
    store = open_store(config)

    try:
        counts = store.count()
    except DataSourceError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if counts["expenses"] == 0 and counts["investments"] == 0:
        console.print("[yellow]Database is already empty[/yellow]")
        raise typer.Exit(0)

    console.print(
        f"Current data: [cyan]{counts['expenses']}[/cyan] expenses, "
        f"[cyan]{counts['investments']}[/cyan] investments"
    )

    if not confirm:
        console.print()
        console.print("[yellow]This will delete ALL data![/yellow]")
        console.print("Run with [bold]--confirm[/bold] to proceed")
        raise typer.Exit(0)

    try:
        deleted = store.delete_all()
    except DataSourceError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print()
    console.print(f"[green]Deleted:[/green] {deleted} records")
    console.print("[dim]Run 'finsuite data seed' to load sample data[/dim]")
