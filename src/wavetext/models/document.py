"""
Waveform Document – Core Model
===============================
Pydantic models for a timing-diagram document and the pure helpers that
derive new documents from old ones.

A ``WaveformDocument`` owns its metadata, an ordered list of ``Signal``
objects and a ``TimeConfiguration``. All models are frozen: the helpers in
this module (``add_signal``, ``update_signal``, ...) return a new document
and bump ``metadata.modified``, they never mutate their argument.

The JSON channel uses camelCase keys (``timeConfig``, ``totalSteps``,
``stepWidth``, ``showGrid``) through field aliases.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .runs import SignalState, SignalValue, compress, decode, from_text, run_length, to_text


DEFAULT_TITLE = "Untitled Waveform"
DEFAULT_STEP_WIDTH = 40
FORMAT_VERSION = "1.0.0"
NAME_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"


def new_id() -> str:
    """Opaque unique identifier for documents and signals."""
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def _single_line(value: str | None, field_name: str) -> str | None:
    if value is not None and ("\n" in value or "\r" in value):
        raise ValueError(f"{field_name} must fit on a single line")
    return value


def _directive_value(value: str | None, field_name: str) -> str | None:
    # written unquoted after "@name:", where '#' would start a comment
    _single_line(value, field_name)
    if value is not None and "#" in value:
        raise ValueError(f"{field_name} cannot contain '#'")
    return value


def _quotable(value: str | None, field_name: str) -> str | None:
    _single_line(value, field_name)
    if value is not None and '"' in value:
        raise ValueError(f'{field_name} cannot contain a double quote (")')
    return value


# ---------------------------------------------------------------------------
# Signals
# ---------------------------------------------------------------------------

class SignalStyle(BaseModel):
    """Rendering hints for a signal. Carried through unchanged by the core."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    color: str | None = Field(None, description="CSS color of the trace")
    height: int | None = Field(None, ge=1, description="Trace height in pixels")
    show_transitions: bool | None = Field(None, alias="showTransitions")
    line_width: float | None = Field(None, gt=0, alias="lineWidth")


class Signal(BaseModel):
    """
    A named sequence of logic states over discrete time steps.

    ``states`` is canonicalised on construction: adjacent runs with the same
    value are merged, so the run list is always maximally compressed.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_id, description="Opaque, never changes")
    name: str = Field(..., pattern=NAME_PATTERN)
    states: list[SignalState] = Field(default_factory=list)
    description: str | None = None
    style: SignalStyle | None = None

    @field_validator("states")
    @classmethod
    def compress_states(cls, v: list[SignalState]) -> list[SignalState]:
        return compress(v)

    @field_validator("description")
    @classmethod
    def check_description(cls, v: str | None) -> str | None:
        return _quotable(v, "description")

    def length(self) -> int:
        """Total number of time steps (sum of run durations)."""
        return run_length(self.states)

    def values(self) -> list[SignalValue]:
        """One value per time step."""
        return decode(self.states)

    def state_text(self) -> str:
        return to_text(self.states)

    def __repr__(self) -> str:
        return f"Signal(name={self.name!r}, states={self.state_text()!r})"


# ---------------------------------------------------------------------------
# Time axis
# ---------------------------------------------------------------------------

class TimeMarker(BaseModel):
    """Labelled annotation pinned to a time-step index (0-based)."""
    model_config = ConfigDict(frozen=True)

    position: int = Field(..., ge=0)
    label: str = Field(..., min_length=1)
    color: str | None = None

    @field_validator("label")
    @classmethod
    def check_label(cls, v: str) -> str:
        return _quotable(v, "label")


class TimeConfiguration(BaseModel):
    """Time axis settings. ``total_steps`` is derived from the signals."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_steps: int = Field(0, ge=0, alias="totalSteps")
    step_width: float = Field(DEFAULT_STEP_WIDTH, gt=0, alias="stepWidth")
    unit: str | None = Field(None, description="ns, us, ms, cycles, ...")
    markers: list[TimeMarker] = Field(default_factory=list)
    show_grid: bool = Field(True, alias="showGrid")

    @field_validator("unit")
    @classmethod
    def check_unit(cls, v: str | None) -> str | None:
        return _directive_value(v, "unit")


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

class DocumentMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = DEFAULT_TITLE
    description: str | None = None
    author: str | None = None
    created: datetime = Field(default_factory=utc_now)
    modified: datetime = Field(default_factory=utc_now)
    tags: list[str] = Field(default_factory=list)

    @field_validator("created", "modified")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_validator("title", "description")
    @classmethod
    def check_single_line(cls, v: str | None) -> str | None:
        return _directive_value(v, "title/description")

    @model_validator(mode="after")
    def validate_timestamps(self) -> "DocumentMetadata":
        if self.modified < self.created:
            raise ValueError("modified timestamp cannot be earlier than created")
        return self


class WaveformDocument(BaseModel):
    """
    Complete timing-diagram document.

    Signal order is significant: it is the serialization and rendering order.
    ``time_config.total_steps`` is recomputed from the signals on validation,
    whatever value was supplied.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_id)
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    signals: list[Signal] = Field(default_factory=list)
    time_config: TimeConfiguration = Field(
        default_factory=TimeConfiguration, alias="timeConfig"
    )
    version: str = FORMAT_VERSION

    @model_validator(mode="after")
    def derive_total_steps(self) -> "WaveformDocument":
        total = _max_length(self.signals)
        if self.time_config.total_steps != total:
            # frozen model: set the derived value in place during validation
            object.__setattr__(
                self,
                "time_config",
                self.time_config.model_copy(update={"total_steps": total}),
            )
        return self

    def signal_names(self) -> list[str]:
        return [s.name for s in self.signals]

    def get_signal(self, name: str) -> Signal | None:
        """First signal called ``name``, or None."""
        for signal in self.signals:
            if signal.name == name:
                return signal
        return None

    def has_uniform_lengths(self) -> bool:
        return validate_signal_lengths(self)

    def __repr__(self) -> str:
        return (
            f"WaveformDocument(title={self.metadata.title!r}, "
            f"signals={len(self.signals)}, steps={self.time_config.total_steps})"
        )


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def create_document(title: str = DEFAULT_TITLE) -> WaveformDocument:
    """New empty document; ``created`` and ``modified`` are both "now"."""
    now = utc_now()
    return WaveformDocument(
        metadata=DocumentMetadata(title=title, created=now, modified=now),
    )


def create_signal(
    name: str,
    states: str | None = None,
    *,
    description: str | None = None,
) -> Signal:
    """
    Build a signal from a state string such as ``"00111"``.

    Raises ``ValueError`` for an invalid name or state character.
    """
    runs = parse_signal_states(states) if states else []
    return Signal(name=name, states=runs, description=description)


def parse_signal_states(text: str) -> list[SignalState]:
    """``"00111"`` -> ``[(LOW, 2), (HIGH, 3)]``."""
    return from_text(text)


def serialize_signal_states(states: list[SignalState]) -> str:
    """``[(LOW, 2), (HIGH, 3)]`` -> ``"00111"``."""
    return to_text(states)


# ---------------------------------------------------------------------------
# Derived values
# ---------------------------------------------------------------------------

def _max_length(signals: list[Signal]) -> int:
    return max((s.length() for s in signals), default=0)


def calculate_total_steps(doc: WaveformDocument) -> int:
    """Longest signal length, 0 for a document without signals."""
    return _max_length(doc.signals)


def validate_signal_lengths(doc: WaveformDocument) -> bool:
    """True when every signal spans the same number of steps."""
    return len({s.length() for s in doc.signals}) <= 1


# ---------------------------------------------------------------------------
# Mutation helpers (return new documents)
# ---------------------------------------------------------------------------

def _touch(metadata: DocumentMetadata) -> DocumentMetadata:
    # never move backwards, even if the wall clock does
    return metadata.model_copy(update={"modified": max(utc_now(), metadata.modified)})


def _with_signals(doc: WaveformDocument, signals: list[Signal]) -> WaveformDocument:
    time_config = doc.time_config.model_copy(update={"total_steps": _max_length(signals)})
    return doc.model_copy(update={
        "signals": signals,
        "time_config": time_config,
        "metadata": _touch(doc.metadata),
    })


def add_signal(doc: WaveformDocument, signal: Signal) -> WaveformDocument:
    """Append ``signal``. Raises ``ValueError`` if its name is already used."""
    if signal.name in doc.signal_names():
        raise ValueError(f"Signal name {signal.name!r} already exists in the document")
    return _with_signals(doc, [*doc.signals, signal])


def update_signal(doc: WaveformDocument, signal_id: str, **updates: Any) -> WaveformDocument:
    """
    Replace fields of the signal with id ``signal_id``.

    ``states`` may be given as a run list or a state string. The updated
    signal is revalidated, so its runs are recompressed. An unknown id leaves
    the signals untouched.
    """
    if "id" in updates:
        raise ValueError("Signal id is immutable")
    if isinstance(updates.get("states"), str):
        updates["states"] = parse_signal_states(updates["states"])

    new_name = updates.get("name")
    if new_name is not None:
        taken = {s.name for s in doc.signals if s.id != signal_id}
        if new_name in taken:
            raise ValueError(f"Signal name {new_name!r} already exists in the document")

    signals = [
        Signal.model_validate({**s.model_dump(), **updates}) if s.id == signal_id else s
        for s in doc.signals
    ]
    return _with_signals(doc, signals)


def remove_signal(doc: WaveformDocument, signal_id: str) -> WaveformDocument:
    return _with_signals(doc, [s for s in doc.signals if s.id != signal_id])


def update_metadata(doc: WaveformDocument, **updates: Any) -> WaveformDocument:
    """Merge ``updates`` into the metadata. ``created``/``modified`` are managed here."""
    for key in ("created", "modified"):
        if key in updates:
            raise ValueError(f"{key} timestamp cannot be set through update_metadata")
    metadata = DocumentMetadata.model_validate({**doc.metadata.model_dump(), **updates})
    return doc.model_copy(update={"metadata": _touch(metadata)})


def update_time_config(doc: WaveformDocument, **updates: Any) -> WaveformDocument:
    """Merge ``updates`` into the time configuration. ``total_steps`` is derived."""
    if "total_steps" in updates or "totalSteps" in updates:
        raise ValueError("total_steps is derived from the signals and cannot be set")
    time_config = TimeConfiguration.model_validate(
        {**doc.time_config.model_dump(), **updates}
    )
    return doc.model_copy(update={
        "time_config": time_config,
        "metadata": _touch(doc.metadata),
    })
