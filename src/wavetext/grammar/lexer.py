"""
Line Grammar
=============
Line classification and token extraction for the waveform text format.

Both the parser and the validator are built on these rules; neither calls
the other. Grammar summary::

    document    = { line, newline } ;
    line        = comment | directive | signal | blank ;
    comment     = "#", { any-char } ;
    directive   = "@", name, ":", [ ws ], value ;
    signal      = signal-name, ":", [ ws ], states, [ ws, '"', text, '"' ] ;
    signal-name = (letter | "_"), { letter | digit | "_" } ;
    states      = state, { state } ;
    state       = "0" | "1" | "X" | "Z" ;

A trailing ``#`` comment is removed from every line unless the ``#`` sits
inside a double-quoted description or label.

State characters are read case-insensitively (``x`` is ``X``, ``z`` is
``Z``); serialization always writes them in uppercase. Directive names are
case-sensitive.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


STATE_CHARS = "01XZ"
RECOGNIZED_DIRECTIVES = frozenset({"title", "description", "unit", "marker"})

DIRECTIVE_RE = re.compile(r"^@(?P<name>\w+):\s*(?P<value>.+)$", re.ASCII)
MARKER_RE = re.compile(r'^(?P<position>[0-9]+)\s+"(?P<label>[^"]+)"$')
NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
SIGNAL_RE = re.compile(
    r'^(?P<name>[A-Za-z_][A-Za-z0-9_]*)\s*:\s*(?P<states>[01XZxz]+)'
    r'(?:\s+"(?P<description>[^"]*)")?$'
)
# Anything that looks like "name: states [\"text\"]", whatever the characters.
SIGNAL_SHAPE_RE = re.compile(
    r'^(?P<name>[^\s:"]+)\s*:\s*(?P<states>[^\s"]+)'
    r'(?:\s+"(?P<description>[^"]*)")?$'
)


class LineKind(str, Enum):
    BLANK = "blank"
    COMMENT = "comment"
    DIRECTIVE = "directive"
    SIGNAL = "signal"


@dataclass(frozen=True)
class Line:
    """One physical line: 1-based number, raw text and comment-free content."""
    number: int
    raw: str
    text: str
    kind: LineKind


@dataclass(frozen=True)
class Directive:
    name: str
    value: str

    @property
    def recognized(self) -> bool:
        return self.name in RECOGNIZED_DIRECTIVES


@dataclass(frozen=True)
class SignalLine:
    name: str
    states: str
    description: str | None = None
    states_offset: int = 0


def strip_comment(line: str) -> str:
    """Drop a ``#`` comment that starts outside double quotes."""
    in_quotes = False
    for index, char in enumerate(line):
        if char == '"':
            in_quotes = not in_quotes
        elif char == "#" and not in_quotes:
            return line[:index]
    return line


def classify(raw: str) -> tuple[LineKind, str]:
    """Return the kind of ``raw`` and its comment-free, trimmed content."""
    stripped = raw.strip()
    if stripped.startswith("#"):
        return LineKind.COMMENT, ""
    text = strip_comment(stripped).strip()
    if not text:
        return LineKind.BLANK, ""
    if text.startswith("@"):
        return LineKind.DIRECTIVE, text
    return LineKind.SIGNAL, text


def split_lines(text: str) -> Iterator[Line]:
    """Classify every line of ``text``. Any Unicode line boundary ends a line."""
    for number, raw in enumerate(text.splitlines(), start=1):
        kind, content = classify(raw)
        yield Line(number=number, raw=raw, text=content, kind=kind)


def match_directive(text: str) -> Directive | None:
    match = DIRECTIVE_RE.match(text)
    if not match:
        return None
    return Directive(name=match["name"], value=match["value"].strip())


def match_marker(value: str) -> tuple[int, str] | None:
    """``'3 "Sample"'`` -> ``(3, "Sample")``."""
    match = MARKER_RE.match(value.strip())
    if not match:
        return None
    try:
        position = int(match["position"])
    except ValueError:
        # past the interpreter's int-string digit limit
        return None
    return position, match["label"]


def _signal_line(match: re.Match[str]) -> SignalLine:
    # "" means no description
    return SignalLine(
        name=match["name"],
        states=match["states"],
        description=match["description"] or None,
        states_offset=match.start("states"),
    )


def match_signal(text: str) -> SignalLine | None:
    """Strict signal match: valid name and valid state characters."""
    match = SIGNAL_RE.match(text)
    return _signal_line(match) if match else None


def match_signal_shape(text: str) -> SignalLine | None:
    """Loose match used to report what exactly is wrong with a signal line."""
    match = SIGNAL_SHAPE_RE.match(text)
    return _signal_line(match) if match else None


def is_valid_name(name: str) -> bool:
    return NAME_RE.match(name) is not None


def invalid_state_chars(states: str) -> list[tuple[int, str]]:
    """``(offset, char)`` for every character outside ``0 1 X Z`` (any case)."""
    return [
        (offset, char)
        for offset, char in enumerate(states)
        if char.upper() not in STATE_CHARS
    ]
