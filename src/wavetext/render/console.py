"""
Console Renderer
=================
Draws a WaveformDocument as box-drawing traces in the terminal using rich.

Each time step is ``step_chars`` characters wide:

    HIGH            ▔▔
    LOW             ▁▁
    UNKNOWN         ╳╳
    HIGH_IMPEDANCE  ──

A low/high edge replaces the first character of the new step with ``│``.
"""

from __future__ import annotations

from rich import box
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..models.document import Signal, WaveformDocument
from ..models.runs import SignalValue

GLYPHS = {
    SignalValue.HIGH: "▔",
    SignalValue.LOW: "▁",
    SignalValue.UNKNOWN: "╳",
    SignalValue.HIGH_IMPEDANCE: "─",
}

COLORS = {
    SignalValue.HIGH: "#4ade80",
    SignalValue.LOW: "#60a5fa",
    SignalValue.UNKNOWN: "#fbbf24",
    SignalValue.HIGH_IMPEDANCE: "#a78bfa",
}

EDGE = "│"
_LEVELS = (SignalValue.LOW, SignalValue.HIGH)


def _cells(signal: Signal, step_chars: int) -> list[tuple[str, SignalValue]]:
    cells: list[tuple[str, SignalValue]] = []
    previous: SignalValue | None = None
    for value in signal.values():
        glyphs = GLYPHS[value] * step_chars
        if previous in _LEVELS and value in _LEVELS and previous != value:
            glyphs = EDGE + glyphs[1:]
        cells.append((glyphs, value))
        previous = value
    return cells


def waveform_trace(signal: Signal, total_steps: int | None = None, step_chars: int = 2) -> str:
    """Plain-text trace, padded with spaces up to ``total_steps``."""
    if step_chars < 1:
        raise ValueError("step_chars must be >= 1")
    trace = "".join(glyphs for glyphs, _ in _cells(signal, step_chars))
    width = (total_steps or 0) * step_chars
    return trace.ljust(width)


def styled_trace(signal: Signal, total_steps: int | None = None, step_chars: int = 2) -> Text:
    """Same as ``waveform_trace`` with one color per logic level."""
    text = Text()
    for glyphs, value in _cells(signal, step_chars):
        text.append(glyphs, style=COLORS[value])
    width = (total_steps or 0) * step_chars
    if len(text) < width:
        text.append(" " * (width - len(text)))
    return text


def time_axis(total_steps: int, step_chars: int = 2) -> str:
    """Step indices, thinned out so that labels never overlap."""
    cells = [" "] * (total_steps * step_chars)
    widest = len(str(max(total_steps - 1, 0))) + 1
    every = max(1, -(-widest // step_chars))
    for step in range(0, total_steps, every):
        start = step * step_chars
        for offset, char in enumerate(str(step)):
            if start + offset < len(cells):
                cells[start + offset] = char
    return "".join(cells).rstrip()


def marker_line(doc: WaveformDocument, step_chars: int = 2) -> str:
    """``▲`` under each in-range marker position."""
    total = doc.time_config.total_steps
    cells = [" "] * (total * step_chars)
    for marker in doc.time_config.markers:
        if marker.position < total:
            cells[marker.position * step_chars] = "▲"
    return "".join(cells).rstrip()


def build_waveform_table(doc: WaveformDocument, step_chars: int = 2) -> Table:
    """Rich table with one row per signal, ready for ``Console.print``."""
    total = doc.time_config.total_steps
    unit = f" ({escape(doc.time_config.unit)})" if doc.time_config.unit else ""

    table = Table(title=escape(doc.metadata.title), box=box.SIMPLE, show_lines=doc.time_config.show_grid)
    table.add_column("Signal", style="bold", justify="right")
    table.add_column(f"t{unit}\n{time_axis(total, step_chars)}", no_wrap=True)
    table.add_column("Description", style="dim")

    for signal in doc.signals:
        table.add_row(
            escape(signal.name),
            styled_trace(signal, total, step_chars),
            escape(signal.description or ""),
        )

    if doc.time_config.markers:
        table.add_row("", Text(marker_line(doc, step_chars), style="magenta"), "")
        table.caption = "Markers: " + ", ".join(
            f"{m.position} {escape(m.label)}" for m in doc.time_config.markers
        )
    return table
