"""
wavetext CLI
=============
Command-line interface for the wavetext library.

Commands:
    validate    Check a waveform file against the grammar and document rules
    inspect     Summarise the document in a waveform file
    show        Draw the waveforms in the terminal
    format      Rewrite a file in canonical text or JSON form
    version     Show version information

Usage::

    wavetext validate timing.wave
    wavetext inspect timing.wave --format json
    wavetext show timing.wave --step-chars 3
    wavetext format timing.wave --to json -o timing.json
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .. import __version__
from ..models.document import FORMAT_VERSION, WaveformDocument
from ..render.console import build_waveform_table
from ..storage.reader import WaveformFormat, WaveformReader
from ..storage.writer import WaveformWriter
from ..validator.diagnostics import Severity

console = Console()
logger = logging.getLogger(__name__)


def _open(path: Path) -> WaveformReader:
    try:
        return WaveformReader(path)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Cannot read {escape(str(path))}: {escape(str(e))}[/red]")
        sys.exit(2)


def _load(reader: WaveformReader) -> WaveformDocument:
    try:
        doc = reader.document()
    except ValidationError as e:
        console.print(f"[red]Invalid JSON document {escape(str(reader.path))}:[/red]\n{escape(str(e))}")
        sys.exit(2)
    logger.debug("Loaded %r from %s", doc, reader.path)
    return doc


@click.group()
@click.version_option(version=__version__, prog_name="wavetext")
@click.option("-v", "--verbose", is_flag=True, help="Log parser decisions (DEBUG level)")
def cli(verbose: bool) -> None:
    """
    wavetext – text-defined digital timing diagrams.

    Parse, validate, convert and preview waveform text files.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strict", is_flag=True, help="Exit with code 1 if any warnings")
@click.option("--json-output", is_flag=True, help="Output results as JSON")
def validate(path: Path, strict: bool, json_output: bool) -> None:
    """Validate a waveform file."""
    reader = _open(path)
    try:
        result = reader.validate()
    except ValidationError as e:
        console.print(f"[red]Invalid JSON document {escape(str(path))}:[/red]\n{escape(str(e))}")
        sys.exit(2)

    if json_output:
        click.echo(json.dumps({"file": str(path), **result.to_dict()}, indent=2))
    else:
        status_str = "[bold green]VALID[/bold green]" if result.valid else "[bold red]INVALID[/bold red]"
        console.print(Panel(
            f"[bold]{escape(path.name)}[/bold]\n"
            f"Status: {status_str}  |  "
            f"Errors: {len(result.errors)}  |  Warnings: {len(result.warnings)}",
            title="wavetext Validation",
            border_style="blue",
        ))

        if result.issues:
            t = Table(box=box.SIMPLE)
            t.add_column("Line", justify="right", style="dim")
            t.add_column("Col", justify="right", style="dim")
            t.add_column("Severity")
            t.add_column("Code")
            t.add_column("Message")
            for issue in result.issues:
                color = "red" if issue.severity == Severity.ERROR else "yellow"
                t.add_row(
                    str(issue.line),
                    str(issue.column) if issue.column is not None else "—",
                    f"[{color}]{issue.severity.value}[/{color}]",
                    issue.code.value,
                    escape(issue.message),
                )
            console.print(t)

    exit_code = 0
    if not result.valid:
        exit_code = 1
    elif strict and result.warnings:
        exit_code = 1
    sys.exit(exit_code)


# ---------------------------------------------------------------------------
# inspect
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "output_format", type=click.Choice(["rich", "json"]), default="rich")
def inspect(path: Path, output_format: str) -> None:
    """Inspect the document in a waveform file."""
    reader = _open(path)
    doc = _load(reader)
    summary = reader.summary()

    if output_format == "json":
        click.echo(json.dumps(summary, indent=2))
        return

    console.print(Panel(
        f"[bold]{escape(doc.metadata.title)}[/bold]\n"
        f"Signals: [cyan]{summary['signal_count']}[/cyan]  |  "
        f"Steps: [cyan]{summary['total_steps']}[/cyan]  |  "
        f"Unit: [cyan]{escape(summary['unit'] or '—')}[/cyan]  |  "
        f"Markers: [cyan]{summary['marker_count']}[/cyan]",
        title=escape(path.name),
        border_style="cyan",
    ))

    if doc.signals:
        t = Table(title="Signals", box=box.ROUNDED)
        t.add_column("#")
        t.add_column("Name")
        t.add_column("Steps", justify="right")
        t.add_column("Runs", justify="right")
        t.add_column("States")
        t.add_column("Description")
        for i, signal in enumerate(doc.signals, 1):
            t.add_row(
                str(i),
                f"[cyan]{escape(signal.name)}[/cyan]",
                str(signal.length()),
                str(len(signal.states)),
                signal.state_text()[:40],
                escape(signal.description or "—"),
            )
        console.print(t)

    if not summary["uniform_lengths"]:
        console.print("[yellow]Signals have different lengths.[/yellow]")


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--step-chars", type=click.IntRange(min=1, max=8), default=2,
              help="Characters per time step")
def show(path: Path, step_chars: int) -> None:
    """Draw the waveforms of a file in the terminal."""
    doc = _load(_open(path))
    if not doc.signals:
        console.print("[yellow]No signals found.[/yellow]")
        console.print("Signal lines look like [bold]CLK: 01010101 \"System Clock\"[/bold]")
        return
    console.print(build_waveform_table(doc, step_chars=step_chars))


# ---------------------------------------------------------------------------
# format
# ---------------------------------------------------------------------------


@cli.command("format")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--to", "target", type=click.Choice(["text", "json"]), default=None,
              help="Output format (default: same as the output file suffix)")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Output path (default: print to stdout)")
def format_file(path: Path, target: str | None, output: Path | None) -> None:
    """Rewrite a waveform file in canonical form."""
    doc = _load(_open(path))

    if target is not None:
        fmt = WaveformFormat(target)
    elif output is not None:
        fmt = WaveformFormat.for_path(output)
    else:
        fmt = WaveformFormat.TEXT

    writer = WaveformWriter(doc)
    if output is None:
        click.echo(writer.render(fmt), nl=False)
        return

    writer.save(output, format=fmt)
    console.print(f"[green]✓[/green] Wrote [bold]{escape(str(output))}[/bold] ({fmt.value})")


# ---------------------------------------------------------------------------
# version info
# ---------------------------------------------------------------------------


@cli.command("version")
def show_version() -> None:
    """Show detailed version information."""
    console.print(Panel(
        f"[bold cyan]wavetext[/bold cyan] v{__version__}\n\n"
        "Text-defined digital timing diagrams\n"
        f"Document format version: {FORMAT_VERSION}\n"
        "States: 0 (low), 1 (high), X (unknown), Z (high impedance)\n"
        "Directives: @title, @description, @unit, @marker",
        title="wavetext",
        border_style="cyan",
    ))
