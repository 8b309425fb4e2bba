"""
Projection of notes onto the tuning meter and note strip.

The display is driven either by confirmed detections (auto mode) or by the
user picking a note on the strip (manual mode), which also plays that note
as a reference tone.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .constants import METER_MAX_CENTS, METER_MAX_DEGREES
from .note_mapper import DetectedNote
from .reference_pitch import NoteKey, ReferencePitch

logger = logging.getLogger(__name__)


class TuningMode(Enum):
    """Source of the displayed note."""

    AUTO = "auto"  # Confirmed microphone detections
    MANUAL = "manual"  # Notes picked on the strip


@dataclass(frozen=True)
class Projection:
    """Renderable state for one displayed note."""

    note: DetectedNote
    meter_angle: float  # Pointer rotation in degrees
    active_key: int | None  # Highlighted note index, None if off the strip


def meter_angle(cents: float) -> float:
    """
    Meter pointer angle for a cents deviation.

    +/-50 cents maps to +/-45 degrees. Larger deviations are not clamped;
    the renderer decides how to show them.
    """
    return cents / METER_MAX_CENTS * METER_MAX_DEGREES


def meter_ticks() -> list[tuple[float, bool]]:
    """Meter scale ticks as (angle, strong) pairs, one every 10 cents."""
    return [(i * 9 - METER_MAX_DEGREES, i % 5 == 0) for i in range(11)]


class NoteStrip:
    """Selectable notes keyed by note index, with at most one highlighted."""

    def __init__(self, reference: ReferencePitch):
        self._reference = reference
        self._keys: dict[int, NoteKey] = {}
        self._active: int | None = None
        self.rebuild()

    def rebuild(self):
        """Recreate keys from the reference's note table. Clears the highlight."""
        self._keys = {key.note_index: key for key in self._reference.note_table()}
        self._active = None

    def key(self, note_index: int) -> NoteKey | None:
        return self._keys.get(note_index)

    @property
    def keys(self) -> list[NoteKey]:
        return list(self._keys.values())

    @property
    def active(self) -> int | None:
        """Note index of the highlighted key."""
        return self._active

    def highlight(self, note_index: int) -> bool:
        """
        Highlight a key.

        Returns:
            False if the note is not on the strip; the highlight is unchanged
        """
        if note_index not in self._keys:
            return False
        self._active = note_index
        return True

    def clear_active(self):
        self._active = None

    def __contains__(self, note_index: int) -> bool:
        return note_index in self._keys

    def __len__(self) -> int:
        return len(self._keys)


class DisplayProjection:
    """
    Display state: tuning mode, note strip and renderers.

    Tone playback is delegated to an object providing ``play(frequency)``
    and ``stop()``; ``play`` must retune an already playing tone.
    """

    def __init__(self, reference: ReferencePitch, tone=None, mode: TuningMode = TuningMode.AUTO):
        """
        Initialize display projection.

        Args:
            reference: Reference pitch used for the note strip
            tone: Reference tone player for manual mode (optional)
            mode: Initial tuning mode
        """
        self._reference = reference
        self._tone = tone
        self._mode = mode
        self._strip = NoteStrip(reference)
        self._renderers: list[Callable[[DetectedNote, float], None]] = []
        self._last_projection: Projection | None = None

    @property
    def mode(self) -> TuningMode:
        return self._mode

    @property
    def is_auto_mode(self) -> bool:
        return self._mode is TuningMode.AUTO

    @property
    def strip(self) -> NoteStrip:
        return self._strip

    @property
    def last_projection(self) -> Projection | None:
        """Most recently shown projection."""
        return self._last_projection

    def add_renderer(self, callback: Callable[[DetectedNote, float], None]):
        """Register a callback receiving (note, meter_angle) for every shown note."""
        self._renderers.append(callback)

    def remove_renderer(self, callback: Callable[[DetectedNote, float], None]):
        if callback in self._renderers:
            self._renderers.remove(callback)

    def show(self, note: DetectedNote) -> Projection:
        """Project a note regardless of mode and notify renderers."""
        angle = meter_angle(note.cents)
        active_key = note.note_index if self._strip.highlight(note.note_index) else None

        projection = Projection(note=note, meter_angle=angle, active_key=active_key)
        self._last_projection = projection

        for callback in list(self._renderers):
            callback(note, angle)
        return projection

    def show_detection(self, note: DetectedNote) -> Projection | None:
        """Project a confirmed detection. Ignored in manual mode."""
        if not self.is_auto_mode:
            return None
        return self.show(note)

    def select_note(self, note_index: int) -> Projection | None:
        """
        Pick a note on the strip (manual mode only).

        Picking the highlighted note again stops the tone and clears the
        highlight. Any other note is played as a reference tone and shown
        with zero deviation.

        Returns:
            The projection shown, or None if nothing was shown

        Raises:
            ValueError: If the note is not on the strip
        """
        if self.is_auto_mode:
            return None

        key = self._strip.key(note_index)
        if key is None:
            raise ValueError(f"Note {note_index} is not on the note strip")

        if self._strip.active == note_index:
            self._stop_tone()
            self._strip.clear_active()
            return None

        if self._tone is not None:
            self._tone.play(key.frequency)

        note = DetectedNote(
            note_index=key.note_index,
            name=key.name,
            octave=key.octave,
            cents=0,
            frequency=key.frequency,
        )
        return self.show(note)

    def toggle_mode(self) -> TuningMode:
        """
        Switch between auto and manual mode.

        Leaving manual mode silences the reference tone. The highlight is
        cleared on every switch.

        Returns:
            The new mode
        """
        if self._mode is TuningMode.MANUAL:
            self._stop_tone()
        self._strip.clear_active()

        self._mode = TuningMode.AUTO if self._mode is TuningMode.MANUAL else TuningMode.MANUAL
        logger.info("Tuning mode: %s", self._mode.value)
        return self._mode

    def rebuild_strip(self):
        """Rebuild the note strip after a reference change."""
        self._strip.rebuild()

    def _stop_tone(self):
        if self._tone is not None:
            self._tone.stop()
