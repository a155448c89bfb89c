"""Report command: build the daily report for a date."""

from __future__ import annotations

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ops_dashboard.config.log_setup import configure_logging
from ops_dashboard.config.settings import MATCH_POLICIES, DashboardConfig
from ops_dashboard.errors import ConfigurationError, DashboardError
from ops_dashboard.reporting.aggregator import ReportAggregator
from ops_dashboard.reporting.models import DailyReport
from ops_dashboard.reporting.service import error_payload
from ops_dashboard.reporting.summary import summarize
from ops_dashboard.source.google_sheets import GoogleSheetsSource

console = Console()


def report(
    date: str = typer.Argument(help="Report date (YYYY-MM-DD)"),
    as_json: bool = typer.Option(False, "--json", help="Print the JSON payload instead of tables"),
    policy: str = typer.Option(
        "", help="Registro match policy: fallback, exact or fragment. Env: OPS_DASHBOARD_MATCH_POLICY"
    ),
    offset_days: Optional[int] = typer.Option(
        None, help="Days between report date and Registro date. Env: OPS_DASHBOARD_OFFSET_DAYS"
    ),
    log_level: str = typer.Option("WARNING", help="Log level"),
    log_json: bool = typer.Option(False, help="Emit logs as JSON"),
) -> None:
    """Fetch the spreadsheet and show equipment status for a report date."""
    configure_logging(log_level, json_format=log_json)
    config = DashboardConfig.from_env()
    if policy:
        config.match_policy = policy.strip().lower()
    if offset_days is not None:
        config.offset_days = offset_days

    try:
        if config.match_policy not in MATCH_POLICIES:
            raise ConfigurationError([f"Unknown match policy: {config.match_policy}"])
        aggregator = ReportAggregator.from_config(config, GoogleSheetsSource(config))
        daily = aggregator.build(date)
    except DashboardError as e:
        if as_json:
            typer.echo(json.dumps(error_payload(e), ensure_ascii=False, indent=2))
        else:
            console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(daily.to_dict(), ensure_ascii=False, indent=2))
        return
    _show_report(daily)


def _show_report(daily: DailyReport) -> None:
    console.print(
        f"\n[bold]Reporte operacional {daily.report_date.isoformat()}[/bold]"
        f" [dim](actualizado {daily.last_update:%Y-%m-%d %H:%M:%S} UTC,"
        f" match: {daily.strategy.value})[/dim]"
    )
    for sheet, message in daily.errors.items():
        console.print(f"[yellow]{sheet} unavailable: {message}[/yellow]")

    if daily.is_empty():
        console.print("[yellow]No records found for this date.[/yellow]")
        return

    if daily.registros:
        table = Table(title=f"Registros ({len(daily.registros)})")
        table.add_column("ID", style="cyan")
        table.add_column("Fecha")
        table.add_column("Día", justify="right")
        table.add_column("Cliente")
        table.add_column("Centro")
        table.add_column("Responsable")
        table.add_column("Puerto (Directemar / Concesión)")
        table.add_column("Clima")
        for r in daily.registros:
            table.add_row(
                r.id_registro,
                r.fecha.strftime("%Y-%m-%d %H:%M") if r.fecha else "-",
                str(r.dia_operacion),
                r.cliente,
                r.centro,
                r.responsable,
                f"{r.estado_puerto_directemar or '-'} / {r.estado_puerto_concesion or '-'}",
                r.condiciones_clima,
            )
        console.print(table)

    if daily.dmas:
        table = Table(title=f"DMAs ({len(daily.dmas)})")
        table.add_column("DMA", style="cyan")
        table.add_column("Estado")
        table.add_column("Estación")
        table.add_column("Punto")
        table.add_column("Horas", justify="right")
        table.add_column("Observaciones")
        for d in daily.dmas:
            color = "green" if d.is_pumping else "red" if d.is_inoperative else "yellow"
            table.add_row(
                d.dma_numero,
                f"[{color}]{d.estado_equipo or '-'}[/{color}]",
                d.estacion,
                d.punto,
                f"{d.horas_bombeo:g}h",
                d.observaciones[:60],
            )
        console.print(table)

    if daily.naves:
        table = Table(title=f"Naves ({len(daily.naves)})")
        table.add_column("Nave", style="cyan")
        table.add_column("Observaciones")
        for n in daily.naves:
            table.add_row(n.nave_nombre, n.nave_observaciones[:80])
        console.print(table)

    if daily.rovs:
        table = Table(title=f"ROVs ({len(daily.rovs)})")
        table.add_column("ROV", style="cyan")
        table.add_column("Estado")
        table.add_column("Responsable")
        table.add_column("Ubicación")
        table.add_column("Observaciones")
        for r in daily.rovs:
            color = "green" if r.is_operational else "yellow"
            table.add_row(
                r.rov_numero,
                f"[{color}]{r.estado or '-'}[/{color}]",
                r.responsable,
                r.ubicacion,
                r.observaciones[:60],
            )
        console.print(table)

    summary = summarize(daily)
    table = Table(title="Resumen")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("DMAs bombeando", str(summary.dmas_pumping))
    table.add_row("DMAs inoperativos", str(summary.dmas_inoperative))
    table.add_row("DMAs en espera", str(summary.dmas_standby))
    table.add_row("Horas de bombeo", f"{summary.pumping_hours:g}")
    table.add_row("ROVs operativos", f"{summary.rovs_operational}/{summary.rovs_total}")
    table.add_row("Naves", str(summary.naves_total))
    if daily.registros:
        table.add_section()
        table.add_row("Equipos declarados", str(summary.declared_equipment))
        table.add_row("Inoperativos declarados", str(summary.declared_inoperative))
        table.add_row("Bombeando declarados", str(summary.declared_pumping))
    console.print(table)
