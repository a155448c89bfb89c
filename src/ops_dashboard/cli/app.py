"""Typer CLI application."""

import typer

from ops_dashboard.cli.commands.check import check
from ops_dashboard.cli.commands.report import report

app = typer.Typer(
    name="ops-dashboard",
    help="Daily operational report from the equipment status spreadsheet",
    no_args_is_help=True,
)

app.command()(report)
app.command()(check)
