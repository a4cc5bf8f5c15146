"""Scan command: run one analysis and render it."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..api import analyze
from ..exceptions import ArcheologistError
from ..logging_config import get_logger
from ..models import ArcheologistAnalysis, Category, Severity
from ..pipeline import ScanStage
from . import app
from ._common import console, err_console, severity_label

logger = get_logger(__name__)

_STAGE_LABELS = {
    ScanStage.COLLECTING: "Collecting source files",
    ScanStage.READING: "Reading source files",
    ScanStage.DETECTING: "Running anti-pattern detectors",
    ScanStage.GRAPH_ANALYSIS: "Checking include graph for cycles",
    ScanStage.CHURN_ANALYSIS: "Reading git history",
    ScanStage.SYNTHESIZING: "Ranking refactoring backlog",
    ScanStage.DONE: "Done",
}


@app.command()
def main(
    path: Path = typer.Argument(
        Path("."),
        help="Project root containing the Source/ directory",
        file_okay=False,
        dir_okay=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the report as JSON",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "-o",
        "--output",
        help="Also write the JSON report to this file",
        dir_okay=False,
    ),
    top: int = typer.Option(
        10,
        "--top",
        help="Backlog rows to show",
        min=1,
        max=50,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Scan an Unreal project's Source/ tree for engineering debt.

    Runs the anti-pattern detectors and include-cycle check, reads git churn
    when available, and ranks files by [bold]hits x churn[/bold].

    [bold cyan]Examples:[/bold cyan]

      codebase-archeologist /path/to/MyGame

      codebase-archeologist /path/to/MyGame --json -o report.json
    """
    if version:
        from .. import __version__

        console.print(
            f"[bold cyan]Codebase Archeologist[/bold cyan] version [green]{__version__}[/green]"
        )
        raise typer.Exit(0)

    try:
        with err_console.status(_STAGE_LABELS[ScanStage.COLLECTING]) as status:
            report = analyze(
                path,
                config_file=config,
                on_stage=lambda stage: status.update(_STAGE_LABELS[stage]),
                verbose=verbose,
                quiet=quiet,
            )

        if output is not None:
            output.write_text(report.to_json(), encoding="utf-8")

        if json_output:
            typer.echo(report.to_json())
        else:
            _output_rich(report, top=top)
            if output is not None:
                console.print(f"[dim]Report written to {output}[/dim]")

    except ArcheologistError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        err_console.print("\n[yellow]Scan interrupted[/yellow]")
        raise typer.Exit(130)


def _output_rich(report: ArcheologistAnalysis, top: int) -> None:
    console.print(
        f"[bold]Scanned {report.total_files} files[/bold] in {report.scan_duration_ms}ms: "
        f"[bold]{report.total_anti_patterns}[/bold] anti-patterns"
    )

    counts = Table(title="Findings", show_header=True, header_style="bold")
    counts.add_column("Severity")
    counts.add_column("Count", justify="right")
    for severity in Severity:
        counts.add_row(severity_label(severity), str(report.by_severity[severity]))
    console.print(counts)

    categories = Table(show_header=True, header_style="bold")
    categories.add_column("Category")
    categories.add_column("Count", justify="right")
    for category in Category:
        categories.add_row(category.value, str(report.by_category[category]))
    console.print(categories)

    if report.refactoring_backlog:
        backlog = Table(title="Refactoring backlog", show_header=True, header_style="bold")
        backlog.add_column("#", justify="right")
        backlog.add_column("File")
        backlog.add_column("Score", justify="right")
        backlog.add_column("Hits", justify="right")
        backlog.add_column("Churn", justify="right")
        backlog.add_column("Worst")
        for rank, item in enumerate(report.refactoring_backlog[:top], 1):
            backlog.add_row(
                str(rank),
                escape(item.file),
                str(item.score),
                str(item.anti_patterns),
                str(item.churn),
                f"{severity_label(item.top_severity)} {item.top_category.value}",
            )
        console.print(backlog)

    if report.shotgun_surgeries:
        surgeries = Table(title="Shotgun surgery commits", show_header=True, header_style="bold")
        surgeries.add_column("Commit")
        surgeries.add_column("Files", justify="right")
        surgeries.add_column("Date")
        surgeries.add_column("Message")
        for s in report.shotgun_surgeries:
            surgeries.add_row(s.commit, str(s.files_changed), s.date, escape(s.message))
        console.print(surgeries)
    elif not report.churn:
        console.print("[dim]No git history available; backlog ranks by hit count only.[/dim]")
