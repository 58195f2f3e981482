"""
Waveform Serializer
====================
Converts a WaveformDocument back into canonical waveform text, and provides
the full-fidelity JSON channel.

Text output order::

    @title: ...          (omitted for the default title)
    @description: ...    (omitted when absent)
    @unit: ...           (omitted when absent)
    @marker: 3 "label"   (one line per marker, in order)
                         (blank separator, only if any line above was written)
    NAME: 0011XZ "description"

The text form only carries what the grammar can express (title,
description, unit, markers, signal names/states/descriptions). The JSON
form round-trips every field, timestamps and ids included.
"""

from __future__ import annotations

from ..models.document import (
    DEFAULT_TITLE,
    Signal,
    WaveformDocument,
    serialize_signal_states,
)


class WaveformSerializer:
    """Text and JSON serializer for WaveformDocument objects."""

    def serialize(self, doc: WaveformDocument) -> str:
        """Canonical text. Lines are joined with ``\\n``, no trailing newline."""
        lines: list[str] = []

        if doc.metadata.title and doc.metadata.title != DEFAULT_TITLE:
            lines.append(f"@title: {doc.metadata.title}")
        if doc.metadata.description:
            lines.append(f"@description: {doc.metadata.description}")
        if doc.time_config.unit:
            lines.append(f"@unit: {doc.time_config.unit}")
        for marker in doc.time_config.markers:
            lines.append(f'@marker: {marker.position} "{marker.label}"')

        if lines:
            lines.append("")

        lines.extend(self.serialize_signal(signal) for signal in doc.signals)
        return "\n".join(lines)

    def serialize_signal(self, signal: Signal) -> str:
        line = f"{signal.name}: {serialize_signal_states(signal.states)}"
        if signal.description:
            line += f' "{signal.description}"'
        return line

    def serialize_json(self, doc: WaveformDocument, *, indent: int | None = 2) -> str:
        """Full-fidelity JSON with camelCase keys."""
        return doc.model_dump_json(by_alias=True, indent=indent)

    def deserialize_json(self, data: str | bytes) -> WaveformDocument:
        """
        Strict inverse of ``serialize_json``.

        Raises ``pydantic.ValidationError`` on malformed JSON or on any
        document that violates the model's constraints. No partial recovery.
        """
        return WaveformDocument.model_validate_json(data)


def serialize(doc: WaveformDocument) -> str:
    return WaveformSerializer().serialize(doc)


def to_json(doc: WaveformDocument) -> str:
    return WaveformSerializer().serialize_json(doc)


def from_json(data: str | bytes) -> WaveformDocument:
    return WaveformSerializer().deserialize_json(data)
