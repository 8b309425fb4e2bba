"""
Shared constants for note mapping, audio I/O and display.
"""

A4_REFERENCE = 440  # Default A4 reference in Hz
A4_NOTE = 69  # Note index of A4
OCTAVE = 12

NOTE_NAMES = ("C", "C♯", "D", "D♯", "E", "F", "F♯", "G", "G♯", "A", "A♯", "B")

SAMPLE_RATE = 44100
BUFFER_SIZE = 4096  # Samples per detection frame

# Range of the note strip
MIN_OCTAVE = 1
MAX_OCTAVE = 8

# Meter scale: +/-50 cents maps to +/-45 degrees
METER_MAX_CENTS = 50
METER_MAX_DEGREES = 45
