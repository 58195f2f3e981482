"""
Waveform Validator
===================
Strict line-by-line checking of waveform text.

Unlike the parser, the validator reports every problem it finds as a
structured issue with a 1-based line number and a stable code. It never
builds a document and never raises on input text.

Example::

    from wavetext.validator.diagnostics import WaveformValidator

    result = WaveformValidator().validate(text)
    if not result.valid:
        for issue in result.errors:
            print(f"line {issue.line} [{issue.code}] {issue.message}")
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..grammar.lexer import (
    LineKind,
    RECOGNIZED_DIRECTIVES,
    invalid_state_chars,
    is_valid_name,
    match_directive,
    match_marker,
    match_signal_shape,
    split_lines,
)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


class Severity(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"


class DiagnosticCode(str, Enum):
    # syntax errors
    INVALID_DIRECTIVE = "INVALID_DIRECTIVE"
    INVALID_SIGNAL = "INVALID_SIGNAL"
    INVALID_STATE = "INVALID_STATE"
    INVALID_NAME = "INVALID_NAME"
    # semantic errors
    DUPLICATE_NAME = "DUPLICATE_NAME"
    # advisory warnings
    LONG_NAME = "LONG_NAME"
    INCONSISTENT_LENGTHS = "INCONSISTENT_LENGTHS"
    UNKNOWN_DIRECTIVE = "UNKNOWN_DIRECTIVE"


@dataclass
class ValidationIssue:
    line: int
    code: DiagnosticCode
    message: str
    severity: Severity = Severity.ERROR
    column: int | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "line": self.line,
            "code": self.code.value,
            "message": self.message,
        }
        if self.column is not None:
            d["column"] = self.column
        return d


@dataclass
class ValidationResult:
    """Outcome of validating one text. Warnings never affect ``valid``."""
    valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def issues(self) -> list[ValidationIssue]:
        """Errors and warnings ordered by line."""
        return sorted(self.errors + self.warnings, key=lambda i: i.line)

    def codes(self) -> list[str]:
        return [i.code.value for i in self.issues]

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [i.to_dict() for i in self.errors],
            "warnings": [i.to_dict() for i in self.warnings],
        }

    def __str__(self) -> str:
        status = "VALID" if self.valid else "INVALID"
        return f"[{status}] {len(self.errors)} error(s), {len(self.warnings)} warning(s)"


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------


class WaveformValidator:
    """
    Validates waveform text against the grammar and document rules.

    Errors:
    - INVALID_DIRECTIVE  ``@`` line not shaped ``@name: value``, or a
                         ``@marker`` whose value is not ``<step> "<label>"``
    - INVALID_SIGNAL     line shaped like nothing in the grammar
    - INVALID_NAME       signal name does not start with a letter or ``_``
                         or contains other than letters, digits and ``_``
    - INVALID_STATE      state characters outside ``0 1 X Z`` (any case)
    - DUPLICATE_NAME     signal name already used on an earlier line

    Warnings:
    - LONG_NAME             signal name longer than LONG_NAME_LIMIT
    - INCONSISTENT_LENGTHS  signals differ in length (reported at line 0)
    - UNKNOWN_DIRECTIVE     well-formed directive the parser will ignore
    """

    LONG_NAME_LIMIT = 32

    def validate(self, text: str) -> ValidationResult:
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []
        first_seen: dict[str, int] = {}
        lengths: list[int] = []

        def error(line: int, code: DiagnosticCode, msg: str, column: int | None = None) -> None:
            errors.append(ValidationIssue(line, code, msg, Severity.ERROR, column))

        def warn(line: int, code: DiagnosticCode, msg: str) -> None:
            warnings.append(ValidationIssue(line, code, msg, Severity.WARNING))

        for line in split_lines(text):
            if line.kind in (LineKind.BLANK, LineKind.COMMENT):
                continue

            # --- Directives ---
            if line.kind == LineKind.DIRECTIVE:
                directive = match_directive(line.text)
                if directive is None:
                    error(
                        line.number,
                        DiagnosticCode.INVALID_DIRECTIVE,
                        "Invalid directive syntax. Expected format: @name: value",
                    )
                elif directive.name == "marker" and match_marker(directive.value) is None:
                    error(
                        line.number,
                        DiagnosticCode.INVALID_DIRECTIVE,
                        'Invalid marker. Expected format: @marker: <step> "<label>"',
                    )
                elif directive.name not in RECOGNIZED_DIRECTIVES:
                    warn(
                        line.number,
                        DiagnosticCode.UNKNOWN_DIRECTIVE,
                        f"Unknown directive @{directive.name} is ignored",
                    )
                continue

            # --- Signals ---
            shape = match_signal_shape(line.text)
            if shape is None:
                error(
                    line.number,
                    DiagnosticCode.INVALID_SIGNAL,
                    "Invalid signal syntax. Expected format: NAME: 01010101",
                )
                continue

            indent = len(line.raw) - len(line.raw.lstrip())
            well_formed = True

            if not is_valid_name(shape.name):
                well_formed = False
                error(
                    line.number,
                    DiagnosticCode.INVALID_NAME,
                    f"Invalid signal name {shape.name!r}: names must start with a "
                    "letter or underscore and contain only letters, digits and underscores",
                    column=indent + 1,
                )

            bad_chars = invalid_state_chars(shape.states)
            if bad_chars:
                well_formed = False
                offset, _ = bad_chars[0]
                listed = ", ".join(repr(c) for c in dict.fromkeys(c for _, c in bad_chars))
                error(
                    line.number,
                    DiagnosticCode.INVALID_STATE,
                    f"Invalid state character(s) {listed}: "
                    "signal states must only contain 0, 1, X, or Z",
                    column=indent + shape.states_offset + offset + 1,
                )

            if shape.name in first_seen:
                error(
                    line.number,
                    DiagnosticCode.DUPLICATE_NAME,
                    f"Signal {shape.name!r} is already defined on line {first_seen[shape.name]}",
                )
            else:
                first_seen[shape.name] = line.number

            if len(shape.name) > self.LONG_NAME_LIMIT:
                warn(
                    line.number,
                    DiagnosticCode.LONG_NAME,
                    f"Signal name is very long (>{self.LONG_NAME_LIMIT} characters)",
                )

            if well_formed:
                lengths.append(len(shape.states))

        if lengths and min(lengths) != max(lengths):
            warn(
                0,
                DiagnosticCode.INCONSISTENT_LENGTHS,
                f"Signal lengths are inconsistent ({min(lengths)} to {max(lengths)} steps)",
            )

        return ValidationResult(valid=not errors, errors=errors, warnings=warnings)

    def validate_batch(self, texts: Iterable[str]) -> list[ValidationResult]:
        """Validate several texts and return all results."""
        return [self.validate(t) for t in texts]


def validate(text: str) -> ValidationResult:
    """Validate waveform text with a default ``WaveformValidator``."""
    return WaveformValidator().validate(text)
