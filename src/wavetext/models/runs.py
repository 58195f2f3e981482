"""
Signal States – Run-Length Codec
=================================
Logic-level symbols and their run-length representation.

A signal is stored as an ordered list of ``SignalState`` runs, each a
``(value, duration)`` pair. The list is always maximally compressed: two
adjacent runs never share a value. ``encode`` and ``compress`` are the only
places that produce run lists, so every consumer can rely on it.

Example::

    from wavetext.models.runs import SignalValue, encode, decode

    runs = encode([SignalValue.LOW, SignalValue.LOW, SignalValue.HIGH])
    # [SignalState(value='0', duration=2), SignalState(value='1', duration=1)]
    assert decode(runs) == [SignalValue.LOW, SignalValue.LOW, SignalValue.HIGH]
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SignalValue(str, Enum):
    """
    Logic level of a signal during one time step.

    LOW            – logic 0
    HIGH           – logic 1
    UNKNOWN        – undefined / don't care
    HIGH_IMPEDANCE – tri-stated, not driven
    """
    LOW = "0"
    HIGH = "1"
    UNKNOWN = "X"
    HIGH_IMPEDANCE = "Z"

    @classmethod
    def from_char(cls, char: str) -> "SignalValue":
        """Map a state character to its value. ``x``/``z`` are read as ``X``/``Z``."""
        try:
            return cls(char.upper())
        except ValueError:
            raise ValueError(f"Invalid signal state character: {char!r}") from None

    def __str__(self) -> str:
        return self.value


class SignalState(BaseModel):
    """A run of identical values: ``value`` held for ``duration`` time steps."""
    model_config = ConfigDict(frozen=True)

    value: SignalValue
    duration: int = Field(..., ge=1, description="Number of time steps, never zero")

    def __repr__(self) -> str:
        return f"SignalState(value={self.value.value!r}, duration={self.duration})"


def encode(values: Iterable[SignalValue]) -> list[SignalState]:
    """Run-length encode a flat sequence of values. Empty input gives ``[]``."""
    runs: list[SignalState] = []
    current: SignalValue | None = None
    count = 0

    for value in values:
        if value == current:
            count += 1
            continue
        if current is not None:
            runs.append(SignalState(value=current, duration=count))
        current = value
        count = 1

    if current is not None:
        runs.append(SignalState(value=current, duration=count))
    return runs


def decode(runs: Iterable[SignalState]) -> list[SignalValue]:
    """Expand a run list back into one value per time step."""
    values: list[SignalValue] = []
    for run in runs:
        values.extend([run.value] * run.duration)
    return values


def compress(runs: Iterable[SignalState]) -> list[SignalState]:
    """Merge adjacent runs that share a value into a single run."""
    merged: list[SignalState] = []
    for run in runs:
        if merged and merged[-1].value == run.value:
            merged[-1] = SignalState(
                value=run.value,
                duration=merged[-1].duration + run.duration,
            )
        else:
            merged.append(run)
    return merged


def run_length(runs: Iterable[SignalState]) -> int:
    """Total number of time steps covered by ``runs``."""
    return sum(run.duration for run in runs)


def to_text(runs: Iterable[SignalState]) -> str:
    """Canonical state string for ``runs`` (uppercase ``X``/``Z``)."""
    return "".join(value.value for value in decode(runs))


def from_text(text: str) -> list[SignalState]:
    """Encode a string of state characters. Raises ``ValueError`` on a bad character."""
    return encode(SignalValue.from_char(char) for char in text)
