"""
File Writer
============
Saves waveform documents as canonical text or full-fidelity JSON.

Example::

    from wavetext.storage.writer import WaveformWriter

    WaveformWriter(doc).save("timing.wave")
    WaveformWriter(doc).save("timing.json")   # JSON, chosen by suffix
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..models.document import WaveformDocument
from ..serializer.text_serializer import WaveformSerializer
from .reader import WaveformFormat

logger = logging.getLogger(__name__)


class WaveformWriter:
    """Writes one document to disk."""

    def __init__(self, document: WaveformDocument) -> None:
        self._document = document
        self._serializer = WaveformSerializer()

    def render(self, format: WaveformFormat = WaveformFormat.TEXT) -> str:
        """File contents for ``format``, always ending with a newline."""
        if format == WaveformFormat.JSON:
            content = self._serializer.serialize_json(self._document)
        else:
            content = self._serializer.serialize(self._document)
        return content + "\n"

    def save(
        self,
        output: str | Path,
        *,
        format: WaveformFormat | None = None,
    ) -> Path:
        """
        Write the document to ``output``.

        Parameters
        ----------
        output:
            Destination path. Parent directories must exist.
        format:
            Output format. Default: derived from the suffix of ``output``.
        """
        path = Path(output)
        fmt = format or WaveformFormat.for_path(path)
        path.write_text(self.render(fmt), encoding="utf-8")
        logger.debug("Wrote %s (%s)", path, fmt.value)
        return path

    @property
    def document(self) -> WaveformDocument:
        return self._document
