"""
wavetext – Text-Defined Digital Timing Diagrams
================================================
A small line-oriented text format for timing diagrams, the document model
it maps to, a strict validator and a full-fidelity JSON channel.

Format::

    # comments start with '#'
    @title: Memory Read
    @unit: ns
    @marker: 2 "Address valid"

    CLK:  01010101 "System Clock"
    ADDR: XX111111 "Address Bus"
    DATA: ZZZZ0110

Quick Start::

    from wavetext import parse, serialize, validate

    result = validate(text)
    if result.valid:
        doc = parse(text)
        print(doc.time_config.total_steps, doc.signal_names())
        assert parse(serialize(doc)).signal_names() == doc.signal_names()

The parser is lenient and never raises on input text; the validator is the
authority on correctness.
"""

__version__ = "0.1.0"

# Core models
from .models.runs import (
    SignalValue,
    SignalState,
    encode,
    decode,
)
from .models.document import (
    DEFAULT_TITLE,
    FORMAT_VERSION,
    DocumentMetadata,
    Signal,
    SignalStyle,
    TimeConfiguration,
    TimeMarker,
    WaveformDocument,
    add_signal,
    calculate_total_steps,
    create_document,
    create_signal,
    parse_signal_states,
    remove_signal,
    serialize_signal_states,
    update_metadata,
    update_signal,
    update_time_config,
    validate_signal_lengths,
)

# Builder
from .builder.document_builder import WaveformBuilder

# Text format
from .parser.text_parser import WaveformParser, parse
from .serializer.text_serializer import WaveformSerializer, from_json, serialize, to_json

# Validator
from .validator.diagnostics import (
    DiagnosticCode,
    Severity,
    ValidationIssue,
    ValidationResult,
    WaveformValidator,
    validate,
)

# File I/O
from .storage.reader import WaveformFormat, WaveformReader
from .storage.writer import WaveformWriter

__all__ = [
    # Models
    "SignalValue",
    "SignalState",
    "encode",
    "decode",
    "DEFAULT_TITLE",
    "FORMAT_VERSION",
    "DocumentMetadata",
    "Signal",
    "SignalStyle",
    "TimeConfiguration",
    "TimeMarker",
    "WaveformDocument",
    # Document helpers
    "add_signal",
    "calculate_total_steps",
    "create_document",
    "create_signal",
    "parse_signal_states",
    "remove_signal",
    "serialize_signal_states",
    "update_metadata",
    "update_signal",
    "update_time_config",
    "validate_signal_lengths",
    # Builder
    "WaveformBuilder",
    # Text format
    "WaveformParser",
    "WaveformSerializer",
    "parse",
    "serialize",
    "to_json",
    "from_json",
    # Validator
    "DiagnosticCode",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "WaveformValidator",
    "validate",
    # File I/O
    "WaveformFormat",
    "WaveformReader",
    "WaveformWriter",
]
