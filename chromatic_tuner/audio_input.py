"""
Microphone capture.

Delivers fixed-size mono buffers from a sounddevice input stream to a frame
callback. The callback runs on the audio thread and should only hand the
buffer (or its pitch estimate) over to the caller's own thread.
"""

import logging
from collections.abc import Callable

import numpy as np

from .constants import BUFFER_SIZE, SAMPLE_RATE
from .errors import UnavailableInput

logger = logging.getLogger(__name__)


def _open_input_stream(**kwargs):
    """Open a sounddevice input stream."""
    try:
        import sounddevice as sd
    except (ImportError, OSError) as e:
        raise UnavailableInput(f"Audio input not available: {e}") from e

    try:
        return sd.InputStream(**kwargs)
    except sd.PortAudioError as e:
        raise UnavailableInput(f"Audio input not available: {e}") from e


class MicrophoneInput:
    """Default microphone as a stream of (samples, sample_rate) frames."""

    def __init__(
        self,
        on_frame: Callable[[np.ndarray, int], None],
        sample_rate: int = SAMPLE_RATE,
        buffer_size: int = BUFFER_SIZE,
        stream_factory=None,
    ):
        """
        Initialize microphone input.

        Args:
            on_frame: Called with each buffer and the sample rate
            sample_rate: Capture sample rate in Hz
            buffer_size: Samples per frame
            stream_factory: Callable returning an input stream; defaults to
                sounddevice.InputStream
        """
        self.sample_rate = sample_rate
        self.buffer_size = buffer_size
        self._on_frame = on_frame
        self._stream_factory = stream_factory or _open_input_stream
        self._stream = None

    @property
    def is_running(self) -> bool:
        return self._stream is not None

    def start(self):
        """
        Start capturing.

        Raises:
            UnavailableInput: If the microphone cannot be opened
        """
        if self._stream is not None:
            return

        stream = self._stream_factory(
            samplerate=self.sample_rate,
            blocksize=self.buffer_size,
            channels=1,
            dtype=np.float32,
            callback=self._callback,
        )
        try:
            stream.start()
        except Exception as e:
            stream.close()
            raise UnavailableInput(f"Could not start audio input: {e}") from e

        self._stream = stream
        logger.info(
            "Listening at %d Hz, %d samples per frame", self.sample_rate, self.buffer_size
        )

    def stop(self):
        """Stop capturing. No further frames are delivered."""
        if self._stream is None:
            return
        self._stream.stop()
        self._stream.close()
        self._stream = None
        logger.info("Audio input stopped")

    def _callback(self, indata, frames, time, status):
        """Input stream callback."""
        if status:
            logger.warning("Input status: %s", status)
        self._on_frame(indata[:, 0].copy(), self.sample_rate)
