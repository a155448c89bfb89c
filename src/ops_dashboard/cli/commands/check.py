"""Check command: verify spreadsheet access and sheet layout."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from ops_dashboard.config.log_setup import configure_logging
from ops_dashboard.config.settings import DashboardConfig
from ops_dashboard.config.sheet_layout import ALL_SHEETS
from ops_dashboard.errors import DashboardError
from ops_dashboard.source.google_sheets import GoogleSheetsSource

console = Console()


def check(
    log_level: str = typer.Option("WARNING", help="Log level"),
) -> None:
    """Verify credentials and show what each report sheet contains."""
    configure_logging(log_level)
    config = DashboardConfig.from_env()

    console.print(f"Spreadsheet ID: {config.spreadsheet_id or '[red]missing[/red]'}")
    console.print(f"Client email: {config.client_email or '[red]missing[/red]'}")
    console.print(f"Private key: {'present' if config.private_key.strip() else '[red]missing[/red]'}")

    try:
        source = GoogleSheetsSource(config)
        info = source.describe()
    except DashboardError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]{info.title}[/bold] ({len(info.worksheets)} worksheets)")
    found = {ws.title for ws in info.worksheets}

    table = Table(title="Report sheets")
    table.add_column("Sheet", style="cyan")
    table.add_column("Range")
    table.add_column("Rows", justify="right")
    table.add_column("Header")

    failed = False
    for layout in ALL_SHEETS:
        if layout.name not in found:
            table.add_row(layout.name, layout.range_name, "-", "[red]worksheet missing[/red]")
            failed = True
            continue
        try:
            rows = source.get_range(layout.range_name)
        except DashboardError as e:
            table.add_row(layout.name, layout.range_name, "-", f"[red]{e}[/red]")
            failed = True
            continue
        header = ", ".join(str(cell) for cell in rows[0]) if rows else "[yellow]empty[/yellow]"
        data_rows = max(len(rows) - 1, 0)
        table.add_row(layout.name, layout.range_name, str(data_rows), header)
    console.print(table)

    if failed:
        raise typer.Exit(1)
