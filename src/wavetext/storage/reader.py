"""
File Reader
============
Loads waveform documents from disk in either the text or the JSON format.

The format is chosen from the file suffix: ``.json`` files use the
full-fidelity JSON channel, anything else (``.wave``, ``.txt``, ...) is read
as waveform text.

Example::

    from wavetext.storage.reader import WaveformReader

    reader = WaveformReader("timing.wave")
    result = reader.validate()
    doc = reader.document()
    print(reader.summary())
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any

from ..models.document import WaveformDocument
from ..parser.text_parser import WaveformParser
from ..serializer.text_serializer import WaveformSerializer
from ..validator.diagnostics import ValidationResult, WaveformValidator

logger = logging.getLogger(__name__)


class WaveformFormat(str, Enum):
    """On-disk representation of a document."""
    TEXT = "text"
    JSON = "json"

    @classmethod
    def for_path(cls, path: str | Path) -> "WaveformFormat":
        return cls.JSON if Path(path).suffix.lower() == ".json" else cls.TEXT


class WaveformReader:
    """
    Reads one waveform file.

    The file is read once, on construction, and a leading UTF-8 byte order
    mark is dropped. ``OSError`` and
    ``UnicodeDecodeError`` propagate to the caller.
    """

    def __init__(
        self,
        source: str | Path,
        format: WaveformFormat | None = None,
    ) -> None:
        self._path = Path(source)
        self._format = format or WaveformFormat.for_path(self._path)
        self._text = self._path.read_text(encoding="utf-8-sig")
        logger.debug("Read %d characters from %s (%s)", len(self._text), self._path, self._format.value)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def format(self) -> WaveformFormat:
        return self._format

    @property
    def text(self) -> str:
        return self._text

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def document(self) -> WaveformDocument:
        """
        Load the document.

        Text sources are parsed leniently and never fail; JSON sources are
        strict and raise ``pydantic.ValidationError`` when malformed.
        """
        if self._format == WaveformFormat.JSON:
            return WaveformSerializer().deserialize_json(self._text)
        return WaveformParser().parse(self._text)

    def validate(self) -> ValidationResult:
        """
        Run the text validator. JSON sources are loaded and their canonical
        text form is validated, which checks the document-level rules
        (duplicate names, lengths) the JSON schema cannot express.
        """
        if self._format == WaveformFormat.JSON:
            text = WaveformSerializer().serialize(self.document())
        else:
            text = self._text
        return WaveformValidator().validate(text)

    def summary(self) -> dict[str, Any]:
        """High-level statistics about the document in this file."""
        doc = self.document()
        value_counts: dict[str, int] = {}
        for signal in doc.signals:
            for run in signal.states:
                key = run.value.name
                value_counts[key] = value_counts.get(key, 0) + run.duration

        return {
            "file": str(self._path),
            "format": self._format.value,
            "title": doc.metadata.title,
            "signal_count": len(doc.signals),
            "total_steps": doc.time_config.total_steps,
            "unit": doc.time_config.unit,
            "marker_count": len(doc.time_config.markers),
            "uniform_lengths": doc.has_uniform_lengths(),
            "value_breakdown": value_counts,
        }
