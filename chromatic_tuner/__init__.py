"""
chromatic_tuner - Chromatic instrument tuner with adjustable A4 reference
"""

from .constants import A4_NOTE, A4_REFERENCE, BUFFER_SIZE, NOTE_NAMES, SAMPLE_RATE
from .display import DisplayProjection, NoteStrip, Projection, TuningMode, meter_angle
from .errors import InvalidFrequency, InvalidReference, TunerError, UnavailableInput
from .note_mapper import (
    DetectedNote,
    cents_offset,
    frequency_to_note_index,
    map_frequency,
    standard_frequency,
)
from .note_stabilizer import NoteStabilizer
from .reference_pitch import NoteKey, ReferencePitch
from .tuner import TunerSession

__version__ = "0.1.0"
__all__ = [
    "A4_NOTE",
    "A4_REFERENCE",
    "BUFFER_SIZE",
    "NOTE_NAMES",
    "SAMPLE_RATE",
    "DetectedNote",
    "map_frequency",
    "frequency_to_note_index",
    "standard_frequency",
    "cents_offset",
    "NoteStabilizer",
    "ReferencePitch",
    "NoteKey",
    "DisplayProjection",
    "NoteStrip",
    "Projection",
    "TuningMode",
    "meter_angle",
    "TunerSession",
    "TunerError",
    "InvalidFrequency",
    "InvalidReference",
    "UnavailableInput",
]
