"""
Tuner session: wires note mapping, stabilization and display together.

One session owns the reference pitch, the note stabilizer and the display
projection. Detection frames flow through it strictly in order:

    frequency -> note mapping -> stabilizer -> display projection
"""

import logging

import numpy as np

from .constants import A4_NOTE
from .display import DisplayProjection, Projection, TuningMode
from .errors import InvalidFrequency, InvalidReference, UnavailableInput
from .note_mapper import DetectedNote, note_name, note_octave
from .note_stabilizer import NoteStabilizer
from .reference_pitch import ReferencePitch

logger = logging.getLogger(__name__)


class TunerSession:
    """
    Tuner state for one run of the application.

    Collaborators are optional so the session can be driven directly with
    frequencies (e.g. in tests):

    - estimator: provides ``estimate(samples) -> float | None``
    - tone: provides ``play(frequency)`` and ``stop()``
    - store: provides ``load_reference_hz()`` and ``save_reference_hz(hz)``
    """

    def __init__(
        self,
        reference: ReferencePitch | None = None,
        estimator=None,
        tone=None,
        store=None,
        mode: TuningMode = TuningMode.AUTO,
    ):
        """
        Initialize tuner session.

        Args:
            reference: Reference pitch (a 440 Hz one is created if omitted)
            estimator: Pitch estimator for raw audio buffers
            tone: Reference tone player for manual mode
            store: Persistence for the reference pitch
            mode: Initial tuning mode
        """
        self.reference = reference if reference is not None else ReferencePitch()
        self._estimator = estimator
        self._store = store

        if store is not None:
            self.reference.load(store)

        self.stabilizer = NoteStabilizer()
        self.display = DisplayProjection(self.reference, tone=tone, mode=mode)

        self.reference.subscribe(self._on_reference_changed)

        self.show_reference_note()

    @property
    def mode(self) -> TuningMode:
        return self.display.mode

    @property
    def last_projection(self) -> Projection | None:
        return self.display.last_projection

    def reference_note(self) -> DetectedNote:
        """A4 at the current reference, in tune."""
        return DetectedNote(
            note_index=A4_NOTE,
            name=note_name(A4_NOTE),
            octave=note_octave(A4_NOTE),
            cents=0,
            frequency=float(self.reference.frequency),
        )

    def show_reference_note(self) -> Projection:
        """Display A4 at the current reference."""
        return self.display.show(self.reference_note())

    def process_frequency(self, frequency: float | None) -> Projection | None:
        """
        Handle one detection frame.

        Invalid frequencies drop the frame without touching any state.

        Args:
            frequency: Estimated frequency in Hz, or None if no pitch was found

        Returns:
            The projection shown if the frame confirmed a note, else None
        """
        if frequency is None:
            return None

        try:
            note = self.reference.map_frequency(frequency)
        except InvalidFrequency:
            logger.debug("Dropping frame with invalid frequency %r", frequency)
            return None

        confirmed = self.stabilizer.update(note)
        if confirmed is None:
            return None
        return self.display.show_detection(confirmed)

    def process_buffer(self, samples: np.ndarray) -> Projection | None:
        """
        Estimate the pitch of an audio buffer and handle it as one frame.

        Raises:
            UnavailableInput: If the session has no pitch estimator
        """
        if self._estimator is None:
            raise UnavailableInput("No pitch estimator configured")
        return self.process_frequency(self._estimator.estimate(samples))

    def set_reference(self, value) -> bool:
        """
        Change the A4 reference from user input.

        Rejected or unchanged values leave the reference untouched.

        Returns:
            True if the reference changed
        """
        try:
            changed = self.reference.set_reference(value)
        except InvalidReference as e:
            logger.warning("%s", e)
            return False

        if changed and self._store is not None:
            self.reference.save(self._store)
        return changed

    def toggle_mode(self) -> TuningMode:
        """Switch between auto and manual mode. The stabilizer keeps its state."""
        return self.display.toggle_mode()

    def select_note(self, note_index: int) -> Projection | None:
        """Pick a note on the strip (manual mode only)."""
        return self.display.select_note(note_index)

    def _on_reference_changed(self, frequency: int):
        self.display.rebuild_strip()
        self.show_reference_note()
