"""FinSuite command line interface."""

import typer

from finsuite.cli.data_cmd import data_app
from finsuite.cli.report import report_command
from finsuite.cli.status import status_command

app = typer.Typer(
    name="finsuite",
    help="Personal finance dashboard: expenses and investments at a glance.",
    no_args_is_help=True,
)

app.command(name="report")(report_command)
app.command(name="status")(status_command)
app.add_typer(data_app, name="data")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
