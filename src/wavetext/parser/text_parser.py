"""
Waveform Parser
================
Converts waveform text into a WaveformDocument.

The parser is deliberately lenient: it never raises on input text. Lines
it cannot make sense of are skipped (and logged at DEBUG), so a live editor
always gets a renderable document even while one line is half-typed. Use
``wavetext.validator`` for diagnostics.

Example::

    from wavetext.parser.text_parser import parse

    doc = parse('''
    @title: Demo
    @unit: ns
    @marker: 1 "Mid"

    CLK: 0011 "Clock"
    ''')
    doc.time_config.total_steps  # 4
"""

from __future__ import annotations

import logging

from ..builder.document_builder import WaveformBuilder
from ..grammar.lexer import (
    LineKind,
    match_directive,
    match_marker,
    match_signal,
    split_lines,
)
from ..models.document import Signal, WaveformDocument, create_signal

logger = logging.getLogger(__name__)


class WaveformParser:
    """
    Line-by-line parser for the waveform text format.

    Directive handling:
    - ``@title`` / ``@description`` / ``@unit``  last occurrence wins
    - ``@marker: <step> "<label>"``               appended in order, duplicates kept
    - any other ``@name: value``                  ignored

    Signals are appended in order of appearance. Repeated names are kept
    (both signals appear); the validator reports them as DUPLICATE_NAME.
    """

    def parse(self, text: str) -> WaveformDocument:
        builder = WaveformBuilder()

        for line in split_lines(text):
            if line.kind in (LineKind.BLANK, LineKind.COMMENT):
                continue
            try:
                if line.kind == LineKind.DIRECTIVE:
                    self._apply_directive(builder, line.text, line.number)
                else:
                    self._apply_signal(builder, line.text, line.number)
            except ValueError as e:
                logger.debug("Line %d skipped: %s", line.number, e)

        return builder.build()

    def parse_signal(self, line: str) -> Signal | None:
        """Parse a single signal line, or return None if it does not match."""
        matched = match_signal(line.strip())
        if matched is None:
            return None
        return create_signal(
            matched.name, matched.states, description=matched.description
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _apply_directive(self, builder: WaveformBuilder, text: str, number: int) -> None:
        directive = match_directive(text)
        if directive is None:
            logger.debug("Line %d skipped: malformed directive %r", number, text)
            return

        if directive.name == "title":
            builder.titled(directive.value)
        elif directive.name == "description":
            builder.describe(directive.value)
        elif directive.name == "unit":
            builder.with_unit(directive.value)
        elif directive.name == "marker":
            marker = match_marker(directive.value)
            if marker is None:
                logger.debug("Line %d skipped: malformed marker %r", number, directive.value)
                return
            builder.with_marker(*marker)
        else:
            logger.debug("Line %d: ignoring unknown directive @%s", number, directive.name)

    def _apply_signal(self, builder: WaveformBuilder, text: str, number: int) -> None:
        signal = self.parse_signal(text)
        if signal is None:
            logger.debug("Line %d skipped: not a signal line %r", number, text)
            return
        if signal.name in builder.signal_names:
            logger.warning("Line %d: duplicate signal name %r kept", number, signal.name)
        builder.add(signal)


def parse(text: str) -> WaveformDocument:
    """Parse waveform text with a default ``WaveformParser``."""
    return WaveformParser().parse(text)
