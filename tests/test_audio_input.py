"""Tests for microphone capture."""

import numpy as np
import pytest

from chromatic_tuner import BUFFER_SIZE
from chromatic_tuner.audio_input import MicrophoneInput
from chromatic_tuner.errors import UnavailableInput


class FailingStream:
    def __init__(self, **kwargs):
        self.close_calls = 0

    def start(self):
        raise OSError("device busy")

    def close(self):
        self.close_calls += 1


class TestMicrophoneInput:
    """Tests for stream handling and frame delivery."""

    def test_start_opens_stream(self, stream_factory, streams):
        """Starting opens one mono stream of BUFFER_SIZE frames."""
        microphone = MicrophoneInput(on_frame=lambda samples, rate: None, stream_factory=stream_factory)
        microphone.start()
        assert microphone.is_running
        assert streams[0].started
        assert streams[0].kwargs["blocksize"] == BUFFER_SIZE
        assert streams[0].kwargs["channels"] == 1

    def test_start_twice_opens_once(self, stream_factory, streams):
        """A second start does not open another stream."""
        microphone = MicrophoneInput(on_frame=lambda samples, rate: None, stream_factory=stream_factory)
        microphone.start()
        microphone.start()
        assert len(streams) == 1

    def test_stop(self, stream_factory, streams):
        """Stopping twice closes the stream once."""
        microphone = MicrophoneInput(on_frame=lambda samples, rate: None, stream_factory=stream_factory)
        microphone.start()
        microphone.stop()
        microphone.stop()
        assert not microphone.is_running
        assert streams[0].stop_calls == 1
        assert streams[0].close_calls == 1

    def test_frames_delivered(self, stream_factory, streams):
        """The callback forwards the first channel and the sample rate."""
        frames = []
        microphone = MicrophoneInput(
            on_frame=lambda samples, rate: frames.append((samples, rate)),
            sample_rate=48000,
            stream_factory=stream_factory,
        )
        microphone.start()

        indata = np.arange(8, dtype=np.float32).reshape(4, 2)
        streams[0].kwargs["callback"](indata, 4, None, None)

        samples, rate = frames[0]
        np.testing.assert_array_equal(samples, [0.0, 2.0, 4.0, 6.0])
        assert rate == 48000

        # Delivered buffers are copies
        indata[:] = 0
        assert samples[1] == 2.0

    def test_start_failure_raises_unavailable(self):
        """A stream that fails to start is closed and reported as unavailable."""
        opened = []

        def factory(**kwargs):
            stream = FailingStream(**kwargs)
            opened.append(stream)
            return stream

        microphone = MicrophoneInput(on_frame=lambda samples, rate: None, stream_factory=factory)
        with pytest.raises(UnavailableInput):
            microphone.start()
        assert not microphone.is_running
        assert opened[0].close_calls == 1
