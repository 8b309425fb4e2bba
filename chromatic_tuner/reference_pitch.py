"""
Adjustable A4 reference pitch.

The reference is the single source of truth for every standard frequency
shown by the tuner. Changing it rebuilds the note table and notifies
observers so any displayed note can be refreshed.
"""

import logging
import numbers
import re
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from .constants import A4_REFERENCE, MAX_OCTAVE, MIN_OCTAVE, NOTE_NAMES, OCTAVE
from .errors import InvalidReference
from .note_mapper import DetectedNote, map_frequency, standard_frequency

logger = logging.getLogger(__name__)

_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class NoteKey:
    """One selectable note on the note strip."""

    note_index: int
    name: str
    octave: int
    frequency: float  # Standard frequency under the current reference

    @property
    def accidental(self) -> str:
        """Sharp sign for sharp notes, empty for natural notes."""
        return self.name[1:]

    @property
    def label(self) -> str:
        """Display label, e.g. "C♯4"."""
        return f"{self.name}{self.octave}"


def _coerce_reference(value) -> int:
    """
    Coerce user input to a positive integer frequency.

    Numbers are truncated, strings are read up to their first non-digit
    ("432.5 Hz" -> 432).

    Raises:
        InvalidReference: If value is not numeric or not positive
    """
    if isinstance(value, bool):
        raise InvalidReference(value)

    if isinstance(value, numbers.Integral):
        hz = int(value)
    elif isinstance(value, numbers.Real):
        if not np.isfinite(value):
            raise InvalidReference(value)
        hz = int(value)
    elif isinstance(value, str):
        match = _LEADING_INTEGER.match(value)
        if not match:
            raise InvalidReference(value)
        hz = int(match.group(1))
    else:
        raise InvalidReference(value)

    if hz <= 0:
        raise InvalidReference(value)
    return hz


class ReferencePitch:
    """
    A4 reference frequency and the note table derived from it.

    Persistence is delegated to a store object providing
    ``load_reference_hz() -> int | None`` and ``save_reference_hz(int)``.
    """

    def __init__(self, frequency: int = A4_REFERENCE):
        """
        Initialize reference pitch.

        Args:
            frequency: Initial A4 frequency in Hz

        Raises:
            InvalidReference: If frequency is not a positive number
        """
        self._frequency = _coerce_reference(frequency)
        self._observers: list[Callable[[int], None]] = []
        self._note_table = self._build_note_table()

    @property
    def frequency(self) -> int:
        """Current A4 frequency in Hz."""
        return self._frequency

    def set_reference(self, value) -> bool:
        """
        Change the A4 reference.

        Args:
            value: New reference; anything coercible to a positive integer

        Returns:
            True if the reference changed, False if value equals the
            current reference

        Raises:
            InvalidReference: If value is zero, negative or non-numeric.
                The current reference is kept.
        """
        hz = _coerce_reference(value)
        if hz == self._frequency:
            return False

        logger.info("Reference changed from %d Hz to %d Hz", self._frequency, hz)
        self._frequency = hz
        self._note_table = self._build_note_table()

        for callback in list(self._observers):
            callback(hz)
        return True

    def standard_frequency(self, note_index: int) -> float:
        """Equal-tempered frequency of a note under the current reference."""
        return standard_frequency(note_index, self._frequency)

    def map_frequency(self, frequency: float) -> DetectedNote:
        """
        Map a frequency to its nearest note under the current reference.

        Raises:
            InvalidFrequency: If frequency is not a finite positive number
        """
        return map_frequency(frequency, self._frequency)

    def note_table(self) -> list[NoteKey]:
        """Notes of octaves MIN_OCTAVE..MAX_OCTAVE with their standard frequencies."""
        return list(self._note_table)

    def subscribe(self, callback: Callable[[int], None]):
        """Register a callback invoked with the new reference after each change."""
        self._observers.append(callback)

    def unsubscribe(self, callback: Callable[[int], None]):
        if callback in self._observers:
            self._observers.remove(callback)

    def load(self, store) -> bool:
        """
        Load the reference from a store.

        A missing or invalid stored value leaves the current reference in
        place.

        Returns:
            True if the reference changed
        """
        stored = store.load_reference_hz()
        if stored is None:
            return False
        try:
            return self.set_reference(stored)
        except InvalidReference:
            logger.warning("Ignoring invalid stored reference %r", stored)
            return False

    def save(self, store):
        """Save the current reference to a store."""
        store.save_reference_hz(self._frequency)

    def _build_note_table(self) -> list[NoteKey]:
        table = []
        for octave in range(MIN_OCTAVE, MAX_OCTAVE + 1):
            for n, name in enumerate(NOTE_NAMES):
                note = OCTAVE * (octave + 1) + n
                table.append(
                    NoteKey(
                        note_index=note,
                        name=name,
                        octave=octave,
                        frequency=self.standard_frequency(note),
                    )
                )
        return table
