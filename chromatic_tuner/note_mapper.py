"""
Frequency to note mapping.

Converts a detected frequency into the nearest equal-tempered note, that
note's standard frequency under a given A4 reference, and the deviation in
cents. Note indices follow the MIDI numbering (A4 = 69, C4 = 60).
"""

import numbers
from dataclasses import dataclass

import numpy as np

from .constants import A4_NOTE, A4_REFERENCE, NOTE_NAMES, OCTAVE
from .errors import InvalidFrequency


@dataclass(frozen=True)
class DetectedNote:
    """A frequency resolved to its nearest note."""

    note_index: int  # MIDI-style note number (A4 = 69)
    name: str  # e.g. "A", "C♯"
    octave: int
    cents: int  # Deviation from the standard frequency, floored
    frequency: float  # Frequency the note was derived from, in Hz


def validate_frequency(frequency) -> float:
    """Return frequency as float, or raise InvalidFrequency."""
    if isinstance(frequency, bool) or not isinstance(frequency, numbers.Real):
        raise InvalidFrequency(frequency)
    value = float(frequency)
    if not np.isfinite(value) or value <= 0:
        raise InvalidFrequency(frequency)
    return value


def _round_half_away(value: float) -> int:
    """Round to nearest integer, ties away from zero."""
    return int(np.sign(value) * np.floor(np.abs(value) + 0.5))


def note_name(note_index: int) -> str:
    return NOTE_NAMES[note_index % OCTAVE]


def note_octave(note_index: int) -> int:
    return note_index // OCTAVE - 1


def standard_frequency(note_index: int, reference: float = A4_REFERENCE) -> float:
    """
    Equal-tempered frequency of a note.

    Args:
        note_index: Note number (A4 = 69)
        reference: Frequency of A4 in Hz

    Returns:
        Frequency in Hz
    """
    return float(reference * 2 ** ((note_index - A4_NOTE) / OCTAVE))


def frequency_to_note_index(frequency: float, reference: float = A4_REFERENCE) -> int:
    """
    Nearest note index for a frequency.

    Raises:
        InvalidFrequency: If frequency is not a finite positive number
    """
    frequency = validate_frequency(frequency)
    with np.errstate(divide="ignore", over="ignore"):
        semitones = 12.0 * np.log2(frequency / reference)
    # Subnormal frequencies underflow against the reference
    if not np.isfinite(semitones):
        raise InvalidFrequency(frequency)
    return _round_half_away(semitones) + A4_NOTE


def cents_offset(frequency: float, note_index: int, reference: float = A4_REFERENCE) -> int:
    """
    Deviation of frequency from a note's standard frequency in cents.

    The result is floored, so a note is reported over -50..+49 cents. Float
    noise below 1e-9 cents is discarded first so exact note centres give 0.

    Raises:
        InvalidFrequency: If frequency is not a finite positive number
    """
    frequency = validate_frequency(frequency)
    with np.errstate(divide="ignore", over="ignore"):
        cents = 1200.0 * (np.log2(frequency) - np.log2(standard_frequency(note_index, reference)))
    if not np.isfinite(cents):
        raise InvalidFrequency(frequency)
    return int(np.floor(np.round(cents, 9)))


def map_frequency(frequency: float, reference: float = A4_REFERENCE) -> DetectedNote:
    """
    Map a frequency to its nearest note.

    Args:
        frequency: Detected frequency in Hz
        reference: Frequency of A4 in Hz

    Returns:
        DetectedNote for the nearest equal-tempered note

    Raises:
        InvalidFrequency: If frequency is zero, negative, NaN or infinite
    """
    value = validate_frequency(frequency)
    note = frequency_to_note_index(value, reference)
    return DetectedNote(
        note_index=note,
        name=note_name(note),
        octave=note_octave(note),
        cents=cents_offset(value, note, reference),
        frequency=value,
    )
