"""appcheck CLI - Main entry point."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from appcheck import __version__
from appcheck.core.config import LoggingSettings, ProberSettings, Settings
from appcheck.core.exceptions import AppCheckError
from appcheck.core.logging import configure_logging, get_logger
from appcheck.core.models import ProbeReport
from appcheck.core.targets import read_targets
from appcheck.prober.heuristics import PLATFORM_SIGNATURES
from appcheck.prober.scanner import ProberEngine
from appcheck.reports.text import write_report

app = typer.Typer(
    name="appcheck",
    help="Check which hosted applications still serve real content",
    add_completion=False,
    no_args_is_help=True,
)

# The report goes to stdout; everything else goes here.
console = Console(stderr=True)

logger = get_logger("appcheck.cli")


class ReportFormat(str, Enum):
    text = "text"
    json = "json"


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        console.print(f"appcheck v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """appcheck - Probe hosted applications and classify what they serve."""
    pass


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def _print_summary(report: ProbeReport) -> None:
    console.print(f"[green]✓ Probed {report.total} applications[/green]")
    console.print(f"  • Accessible: {report.reachable_count}")
    console.print(f"  • Not accessible: {report.unreachable_count}")


@app.command()
def check(
    targets_file: Path = typer.Argument(..., help="Text file with one application name per line"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the report to this file instead of stdout"),
    report_format: Optional[ReportFormat] = typer.Option(None, "--format", "-f", help="Report format"),
    config: Optional[Path] = typer.Option(None, help="Path to configuration file"),
    base_domain: Optional[str] = typer.Option(None, help="Domain appended to each application name"),
    timeout: Optional[float] = typer.Option(None, min=0.001, help="Per-request timeout in seconds (default: none)"),
    concurrency: Optional[int] = typer.Option(None, min=1, help="Maximum in-flight requests (default: unlimited)"),
    log_level: Optional[str] = typer.Option(None, help="Log level (DEBUG, INFO, WARNING, ERROR)"),
    json_logs: bool = typer.Option(False, "--json-logs/--no-json-logs", help="Emit JSON log lines"),
) -> None:
    """
    Probe every application in TARGETS_FILE and print a report.

    Each line names one application; it is fetched at
    http://<name>.<base-domain> and the response is classified as a live
    page or a platform error/welcome page.
    """
    try:
        settings = Settings.from_file_or_default(config)

        overrides = {
            key: value
            for key, value in {
                "base_domain": base_domain,
                "timeout": timeout,
                "concurrency": concurrency,
            }.items()
            if value is not None
        }
        if overrides:
            settings.prober = ProberSettings.model_validate(
                {**settings.prober.model_dump(), **overrides}
            )
        if log_level is not None:
            settings.logging = LoggingSettings.model_validate(
                {**settings.logging.model_dump(), "level": log_level}
            )
    except AppCheckError as e:
        _fail(str(e))
    except ValidationError as e:
        _fail(f"Invalid option: {e}")

    if json_logs:
        settings.logging.json_format = True
    if report_format is not None:
        settings.output.format = report_format.value
    if output is not None:
        settings.output.path = output

    configure_logging(
        level=settings.logging.level,
        json_format=settings.logging.json_format,
        log_file=settings.logging.log_file,
    )
    logger.info("start_processing", targets_file=str(targets_file))

    try:
        targets = read_targets(targets_file)
    except AppCheckError as e:
        logger.error("target_list_unreadable", error=str(e))
        _fail(str(e))

    engine = ProberEngine(settings)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"Probing {len(targets)} applications...", total=None)
        report = engine.probe_targets_sync(targets)

    try:
        content = write_report(report, settings.output.format, settings.output.path)
    except AppCheckError as e:
        _fail(str(e))

    if settings.output.path is None:
        typer.echo(content, nl=False)
    else:
        console.print(f"[green]✓ Report written to {settings.output.path}[/green]")

    _print_summary(report)
    logger.info("complete_processing")


@app.command()
def signatures() -> None:
    """List the built-in placeholder page signatures."""
    table = Table(title="Placeholder page signatures")
    table.add_column("Signature", style="cyan", no_wrap=True)
    table.add_column("Markers")

    for signature in PLATFORM_SIGNATURES:
        table.add_row(signature.name, "\n".join(signature.markers))

    Console().print(table)


if __name__ == "__main__":
    app()
