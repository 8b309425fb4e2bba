"""
Frame-to-frame debouncing of detected notes.

A detected note is only confirmed for display when the same note name is seen
on two consecutive detection frames. This keeps single-frame jitter from
reaching the display.
"""

import logging

from .note_mapper import DetectedNote

logger = logging.getLogger(__name__)


class NoteStabilizer:
    """
    Two-frame confirmation of detected notes.

    Only note names are compared: octave and cents are ignored, so A3
    followed by A4 counts as a confirmation. The remembered name persists
    for the lifetime of the stabilizer; frames without a note do not clear
    it.
    """

    def __init__(self):
        self._last_name: str | None = None

    def update(self, note: DetectedNote | None) -> DetectedNote | None:
        """
        Feed one detection frame.

        Args:
            note: Note detected in this frame, or None if the frame had no
                usable pitch

        Returns:
            The note if it is confirmed, otherwise None
        """
        if note is None:
            return None

        if note.name == self._last_name:
            logger.debug("Confirmed %s%d (%+d cents)", note.name, note.octave, note.cents)
            return note

        self._last_name = note.name
        return None

    @property
    def last_name(self) -> str | None:
        """Name of the note seen on the most recent frame."""
        return self._last_name
