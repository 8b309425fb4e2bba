"""
Reference tone playback.

A single sine oscillator on a sounddevice output stream. Playing a new note
while a tone is sounding retunes the running oscillator instead of opening a
second stream.
"""

import logging

import numpy as np

from .constants import SAMPLE_RATE
from .errors import UnavailableInput
from .note_mapper import validate_frequency

logger = logging.getLogger(__name__)


def _open_output_stream(**kwargs):
    """Open a sounddevice output stream."""
    try:
        import sounddevice as sd
    except (ImportError, OSError) as e:
        raise UnavailableInput(f"Audio output not available: {e}") from e

    try:
        return sd.OutputStream(**kwargs)
    except sd.PortAudioError as e:
        raise UnavailableInput(f"Audio output not available: {e}") from e


class ToneGenerator:
    """Plays one reference tone at a time."""

    def __init__(self, sample_rate: int = SAMPLE_RATE, amplitude: float = 0.2, stream_factory=None):
        """
        Initialize tone generator.

        Args:
            sample_rate: Output sample rate in Hz
            amplitude: Peak amplitude of the sine (0.0 to 1.0)
            stream_factory: Callable returning an output stream; defaults to
                sounddevice.OutputStream
        """
        self.sample_rate = sample_rate
        self.amplitude = amplitude
        self._stream_factory = stream_factory or _open_output_stream
        self._stream = None
        self._frequency = 0.0
        self._phase = 0.0

    @property
    def is_playing(self) -> bool:
        return self._stream is not None

    @property
    def frequency(self) -> float:
        """Frequency of the current tone, 0.0 when silent."""
        return self._frequency if self._stream is not None else 0.0

    def play(self, frequency: float):
        """
        Start a tone, or retune the running one.

        Raises:
            InvalidFrequency: If frequency is not a finite positive number
            UnavailableInput: If no output stream can be opened
        """
        if self._stream is not None:
            self.retune(frequency)
            return

        self._frequency = validate_frequency(frequency)
        self._phase = 0.0
        stream = self._stream_factory(
            samplerate=self.sample_rate,
            channels=1,
            dtype="float32",
            callback=self._callback,
        )
        stream.start()
        self._stream = stream
        logger.info("Playing reference tone at %.2f Hz", self._frequency)

    def retune(self, frequency: float):
        """Change the frequency of the tone without restarting it."""
        self._frequency = validate_frequency(frequency)
        logger.debug("Reference tone retuned to %.2f Hz", self._frequency)

    def stop(self):
        """Stop the tone. Does nothing if no tone is playing."""
        if self._stream is None:
            return
        self._stream.stop()
        self._stream.close()
        self._stream = None
        logger.info("Reference tone stopped")

    def render(self, frames: int) -> np.ndarray:
        """Next block of samples, continuing the oscillator phase."""
        step = 2.0 * np.pi * self._frequency / self.sample_rate
        samples = self.amplitude * np.sin(self._phase + step * np.arange(frames))
        self._phase = (self._phase + step * frames) % (2.0 * np.pi)
        return samples.astype(np.float32)

    def _callback(self, outdata, frames, time, status):
        """Output stream callback."""
        if status:
            logger.warning("Output status: %s", status)
        outdata[:, 0] = self.render(frames)

