"""
Waveform Builder
=================
Fluent builder API for constructing WaveformDocument objects.

Example::

    from wavetext.builder.document_builder import WaveformBuilder

    doc = (
        WaveformBuilder("Memory Read")
        .with_unit("ns")
        .with_marker(2, "Address valid")
        .signal("CLK", "01010101", description="System Clock")
        .signal("RD", "11000011")
        .build()
    )
"""

from __future__ import annotations

from datetime import datetime

from ..models.document import (
    DEFAULT_STEP_WIDTH,
    DEFAULT_TITLE,
    DocumentMetadata,
    Signal,
    TimeConfiguration,
    TimeMarker,
    WaveformDocument,
    parse_signal_states,
    utc_now,
)


class WaveformBuilder:
    """
    Fluent builder for WaveformDocument objects.

    Repeated ``titled``/``describe``/``with_unit`` calls overwrite the
    earlier value; markers and signals accumulate in call order.
    """

    def __init__(self, title: str = DEFAULT_TITLE) -> None:
        self._title = title
        self._description: str | None = None
        self._author: str | None = None
        self._tags: list[str] = []
        self._unit: str | None = None
        self._step_width: float = DEFAULT_STEP_WIDTH
        self._show_grid: bool = True
        self._markers: list[TimeMarker] = []
        self._signals: list[Signal] = []

    # --- Metadata ---

    def titled(self, title: str) -> "WaveformBuilder":
        self._title = title
        return self

    def describe(self, description: str) -> "WaveformBuilder":
        self._description = description
        return self

    def by(self, author: str) -> "WaveformBuilder":
        self._author = author
        return self

    def tagged(self, *tags: str) -> "WaveformBuilder":
        self._tags.extend(tags)
        return self

    # --- Time axis ---

    def with_unit(self, unit: str) -> "WaveformBuilder":
        """Time unit label (ns, us, ms, ...)."""
        self._unit = unit
        return self

    def with_marker(
        self, position: int, label: str, color: str | None = None
    ) -> "WaveformBuilder":
        """Pin a label to a time step. Positions past the last step are allowed."""
        self._markers.append(TimeMarker(position=position, label=label, color=color))
        return self

    def with_step_width(self, step_width: float) -> "WaveformBuilder":
        self._step_width = step_width
        return self

    def with_grid(self, show: bool = True) -> "WaveformBuilder":
        self._show_grid = show
        return self

    # --- Signals ---

    def signal(
        self,
        name: str,
        states: str,
        description: str | None = None,
    ) -> "WaveformBuilder":
        """
        Append a signal given its state string (``"0011XZ"``).

        Names are not checked for uniqueness here; that is a validation rule.
        """
        self._signals.append(
            Signal(name=name, states=parse_signal_states(states), description=description)
        )
        return self

    def add(self, signal: Signal) -> "WaveformBuilder":
        self._signals.append(signal)
        return self

    @property
    def signal_names(self) -> list[str]:
        return [s.name for s in self._signals]

    # --- Build ---

    def build(self, now: datetime | None = None) -> WaveformDocument:
        """
        Construct the document. ``created`` and ``modified`` are both set to
        ``now`` (default: current UTC time); ``total_steps`` is the longest
        signal length.
        """
        stamp = now or utc_now()
        return WaveformDocument(
            metadata=DocumentMetadata(
                title=self._title,
                description=self._description,
                author=self._author,
                tags=list(self._tags),
                created=stamp,
                modified=stamp,
            ),
            signals=list(self._signals),
            time_config=TimeConfiguration(
                total_steps=max((s.length() for s in self._signals), default=0),
                step_width=self._step_width,
                unit=self._unit,
                markers=list(self._markers),
                show_grid=self._show_grid,
            ),
        )
