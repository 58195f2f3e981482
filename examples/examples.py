"""
Examples for wavetext
=====================
Three complete examples: a memory read cycle written as text, a bus
diagram assembled in code and edited, and a round trip through files.

Run:
    python examples/examples.py
"""

from __future__ import annotations

import sys
import tempfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rich.console import Console

from wavetext import (
    WaveformBuilder,
    WaveformReader,
    WaveformWriter,
    add_signal,
    create_signal,
    parse,
    remove_signal,
    serialize,
    update_signal,
    update_time_config,
    validate,
)
from wavetext.render.console import build_waveform_table

console = Console()


MEMORY_READ = """\
# Example: Simple CPU Timing Diagram
# This demonstrates a basic memory read cycle

@title: Memory Read Cycle
@unit: ns
@marker: 2 "Address valid"
@marker: 6 "Data latched"

CLK: 01010101 "System Clock"
ADDR: XX111111 "Address Bus"
RD: 11000011 "Read Enable"
DATA: ZZZZ0110 "Data Bus"
READY: 11110000 "Device Ready"
"""


# ---------------------------------------------------------------------------
# Example 1: Text to document
# ---------------------------------------------------------------------------


def example_memory_read() -> None:
    """
    Example 1: Validating and parsing a hand-written diagram.

    The validator reports problems with line numbers; the parser always
    produces a document, skipping whatever it cannot read.
    """
    print("\n" + "="*60)
    print("EXAMPLE 1: Memory Read Cycle")
    print("="*60)

    result = validate(MEMORY_READ)
    print(f"  Validation: {result}")

    doc = parse(MEMORY_READ)
    print(f"  Document: {doc!r}")
    print(f"  Signals: {', '.join(doc.signal_names())}")
    print(f"  Markers: {[(m.position, m.label) for m in doc.time_config.markers]}")

    clk = doc.get_signal("CLK")
    print(f"  CLK runs: {clk.states}")

    console.print(build_waveform_table(doc))

    # A broken copy: the parser still renders, the validator explains why
    broken = MEMORY_READ.replace("RD: 11000011", "RD: 11002011").replace("CLK:", "CLK")
    print(f"  Broken copy parses to: {parse(broken).signal_names()}")
    for issue in validate(broken).errors:
        print(f"    line {issue.line} [{issue.code.value}] {issue.message}")
    print("  ✓ Example 1 complete")


# ---------------------------------------------------------------------------
# Example 2: Building and editing
# ---------------------------------------------------------------------------


def example_bus_edit() -> None:
    """
    Example 2: Building a document in code and editing it.

    Every helper returns a new document; the original is left as it was.
    """
    print("\n" + "="*60)
    print("EXAMPLE 2: Bus Write, Built and Edited")
    print("="*60)

    doc = (
        WaveformBuilder("Bus Write")
        .with_unit("cycles")
        .with_marker(1, "Strobe")
        .signal("CLK", "0101", description="Bus Clock")
        .signal("WE_n", "1001")
        .build()
    )
    print(f"  Built: {doc!r}")

    data = create_signal("DATA", "ZZ01ZZ", description="Data Bus")
    edited = add_signal(doc, data)
    print(f"  After add: steps={edited.time_config.total_steps}, "
          f"uniform={edited.has_uniform_lengths()}")

    edited = update_signal(edited, doc.signals[0].id, states="010101")
    edited = update_signal(edited, doc.signals[1].id, states="110011")
    edited = update_time_config(edited, unit="ns")
    print(f"  After update: uniform={edited.has_uniform_lengths()}, "
          f"unit={edited.time_config.unit}")

    try:
        add_signal(edited, create_signal("CLK", "1"))
    except ValueError as e:
        print(f"  Duplicate rejected: {e}")

    trimmed = remove_signal(edited, data.id)
    print(f"  After remove: {trimmed.signal_names()}, steps={trimmed.time_config.total_steps}")
    print(f"  Original untouched: {doc.signal_names()}, steps={doc.time_config.total_steps}")

    print("\n" + serialize(edited))
    print("  ✓ Example 2 complete")


# ---------------------------------------------------------------------------
# Example 3: Files
# ---------------------------------------------------------------------------


def example_files() -> None:
    """
    Example 3: Saving as text and JSON, then reading both back.

    Text keeps what the format can express; JSON keeps everything,
    including ids and timestamps.
    """
    print("\n" + "="*60)
    print("EXAMPLE 3: Text and JSON Files")
    print("="*60)

    doc = parse(MEMORY_READ)

    with tempfile.TemporaryDirectory() as tmp:
        text_path = WaveformWriter(doc).save(Path(tmp) / "memory_read.wave")
        json_path = WaveformWriter(doc).save(Path(tmp) / "memory_read.json")

        text_doc = WaveformReader(text_path).document()
        json_doc = WaveformReader(json_path).document()

        print(f"  Text file: {text_path.stat().st_size} bytes")
        print(f"  JSON file: {json_path.stat().st_size} bytes")
        print(f"  Same id via text: {text_doc.id == doc.id}")
        print(f"  Same id via JSON: {json_doc.id == doc.id}")
        print(f"  Same signals: {text_doc.signal_names() == json_doc.signal_names()}")

        summary = WaveformReader(json_path).summary()
        print(f"  Summary: {summary['signal_count']} signals, "
              f"{summary['total_steps']} steps, values={summary['value_breakdown']}")
    print("  ✓ Example 3 complete")


# ---------------------------------------------------------------------------
# Run all examples
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    example_memory_read()
    example_bus_edit()
    example_files()

    print("\n" + "="*60)
    print("All examples completed successfully.")
    print("="*60 + "\n")
