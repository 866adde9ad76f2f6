"""Shared helpers for CLI commands."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from finsuite.core.config import FinSuiteConfig, load_config
from finsuite.core.exceptions import ConfigError, ConfigNotFoundError, DataSourceError
from finsuite.core.logging import setup_logging
from finsuite.storage.records import RecordStore

console = Console()


def open_config(path: Path | None) -> FinSuiteConfig:
    """Load config and set up logging, exiting with code 1 on errors."""
    try:
        config = load_config(path)
    except (ConfigNotFoundError, ConfigError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    setup_logging(config.log_level)
    return config


def open_store(config: FinSuiteConfig, create: bool = True) -> RecordStore:
    """Open the record store for the data commands, exiting with code 1 if it cannot be opened.

    Schema creation problems are left for the queries to report.
    """
    try:
        store = RecordStore(config.resolved_database_url)
    except DataSourceError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if create:
        try:
            store.create_schema()
        except DataSourceError as e:
            console.print(f"[yellow]Warning:[/yellow] {escape(str(e))}")
    return store
