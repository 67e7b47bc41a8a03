"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en varios comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import DownloadResult, PublishReport, StepRecord


def print_banner(console: Console, subtitle: str) -> None:
    """Imprime el banner de cabecera (se omite con --quiet)."""

    title = Text("hugo-pages", style="bold cyan")
    sub = Text(subtitle, style="dim")
    body = Align.center(Text.assemble(title, "\n", sub), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def format_step(step: StepRecord) -> Text:
    status = Text("ok", style="green") if step.ok else Text("FAILED", style="bold red")
    line = Text.assemble(status, " ", (step.name, "bold"))
    if step.detail:
        line.append(f"  {step.detail}", style="dim")
    return line


def build_steps_table(report: PublishReport) -> Table:
    table = Table(title=f"{report.mode.value} -> {report.remote}/{report.branch}")
    table.add_column("Step", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Command", style="dim")
    for step in report.steps:
        table.add_row(
            step.name,
            "[green]ok[/green]" if step.ok else "[red]failed[/red]",
            " ".join(step.command),
        )
    return table


def build_report_panel(report: PublishReport) -> Panel:
    body = Text()
    body.append(f"Build dir: {report.build_dir}\n")
    body.append(f"Commit: {report.commit_message}\n")
    if report.branch_created:
        body.append(f"Branch {report.branch} was created\n", style="yellow")
    if report.dry_run:
        body.append("Dry run: no command was executed\n", style="yellow")
    body.append("Pushed" if report.pushed else "Not pushed", style="green" if report.pushed else "yellow")
    return Panel(body, title=Text("Summary", style="bold"), border_style="green")


def format_download(result: DownloadResult) -> Text:
    if result.downloaded:
        return Text.assemble(
            ("downloaded ", "green"),
            f"{result.url} -> {result.path} ({result.bytes_written} bytes)",
        )
    return Text.assemble(("not modified ", "yellow"), str(result.path))
