"""
Exceptions raised by the tuner core and its audio adapters.
"""


class TunerError(Exception):
    """Base class for tuner errors."""


class InvalidFrequency(TunerError, ValueError):
    """A frequency that cannot be mapped to a note (non-positive or non-finite)."""

    def __init__(self, frequency):
        super().__init__(f"Invalid frequency: {frequency!r}")
        self.frequency = frequency


class InvalidReference(TunerError, ValueError):
    """A rejected A4 reference value. The previous reference is kept."""

    def __init__(self, value):
        super().__init__(f"Invalid reference frequency: {value!r}")
        self.value = value


class UnavailableInput(TunerError, RuntimeError):
    """Audio input or pitch estimation is not available on this system."""
