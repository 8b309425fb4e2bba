"""
Tests for PitchEstimator using synthetic signals.

These tests generate sine waves at known frequencies and verify that the
estimator finds them and that the tuner maps them to the right notes.
"""

import numpy as np
import pytest

from chromatic_tuner import BUFFER_SIZE, SAMPLE_RATE
from chromatic_tuner.note_mapper import standard_frequency
from chromatic_tuner.pitch_estimator import PitchEstimator
from chromatic_tuner.tuner import TunerSession


def generate_sine_wave(
    frequency: float,
    duration_samples: int = BUFFER_SIZE,
    sample_rate: int = SAMPLE_RATE,
    amplitude: float = 0.5,
) -> np.ndarray:
    """Generate a sine wave at the given frequency."""
    t = np.arange(duration_samples) / sample_rate
    return (amplitude * np.sin(2 * np.pi * frequency * t)).astype(np.float32)


def cents_error(estimate: float, frequency: float) -> float:
    return 1200 * np.log2(estimate / frequency)


class TestPitchEstimator:
    """Pitch estimation on single buffers."""

    def setup_method(self):
        """Create a fresh estimator for each test."""
        self.estimator = PitchEstimator()

    @pytest.mark.parametrize("frequency", [55.0, 110.0, 196.0, 261.63, 440.0, 880.0, 1760.0])
    def test_pure_tone(self, frequency):
        """Pure tones across the range are found."""
        estimate = self.estimator.estimate(generate_sine_wave(frequency))
        assert estimate is not None
        assert estimate == pytest.approx(frequency, rel=0.005)

    @pytest.mark.parametrize("note_index", [40, 45, 50, 55, 59, 64])
    def test_guitar_strings_within_a_cent(self, note_index):
        """In-tune guitar strings read within one cent, low E included."""
        frequency = standard_frequency(note_index)
        estimate = self.estimator.estimate(generate_sine_wave(frequency))
        assert estimate is not None
        assert abs(cents_error(estimate, frequency)) < 1.0

    def test_detuned_low_e(self):
        """A low E ten cents flat reads ten cents flat."""
        frequency = standard_frequency(40) * 2 ** (-10 / 1200)
        estimate = self.estimator.estimate(generate_sine_wave(frequency))
        assert cents_error(estimate, standard_frequency(40)) == pytest.approx(-10.0, abs=1.0)

    def test_dc_offset_removed(self):
        """A DC offset does not disturb the estimate."""
        signal = generate_sine_wave(329.63) + 0.3
        estimate = self.estimator.estimate(signal)
        assert estimate == pytest.approx(329.63, rel=0.005)

    def test_silence(self):
        """Silence yields no estimate."""
        assert self.estimator.estimate(np.zeros(BUFFER_SIZE, dtype=np.float32)) is None

    def test_quiet_signal_gated(self):
        """Buffers below the level gate yield no estimate."""
        assert self.estimator.estimate(generate_sine_wave(440.0, amplitude=0.001)) is None

    def test_min_rms_adjustable(self):
        """Lowering the gate lets quiet buffers through."""
        self.estimator.set_min_rms(0.0001)
        estimate = self.estimator.estimate(generate_sine_wave(440.0, amplitude=0.001))
        assert estimate == pytest.approx(440.0, rel=0.005)

    def test_short_buffer(self):
        """Buffers shorter than the analysis frame are skipped."""
        assert self.estimator.estimate(generate_sine_wave(440.0, duration_samples=1000)) is None

    def test_multichannel_rejected(self):
        """Only mono buffers are analysed."""
        stereo = np.stack([generate_sine_wave(440.0)] * 2, axis=1)
        assert self.estimator.estimate(stereo) is None

    def test_nan_buffer_skipped(self):
        """A buffer of NaN samples yields no estimate."""
        assert self.estimator.estimate(np.full(BUFFER_SIZE, np.nan)) is None

    def test_single_infinite_sample_skipped(self):
        """One infinite sample is enough to skip the buffer."""
        signal = generate_sine_wave(440.0)
        signal[100] = np.inf
        assert self.estimator.estimate(signal) is None


class TestEstimatorInSession:
    """Buffers through estimation, mapping and stabilization."""

    def test_a4_confirmed_on_second_buffer(self):
        """A4 is confirmed on the second identical buffer."""
        session = TunerSession(estimator=PitchEstimator())
        buffer = generate_sine_wave(440.0)

        assert session.process_buffer(buffer) is None
        projection = session.process_buffer(buffer)

        assert projection is not None
        assert projection.note.name == "A"
        assert projection.note.octave == 4
        assert projection.note.cents in (-1, 0)

    def test_low_e_in_tune(self):
        """An in-tune low E string confirms as E2 within a cent."""
        session = TunerSession(estimator=PitchEstimator())
        buffer = generate_sine_wave(standard_frequency(40))

        session.process_buffer(buffer)
        projection = session.process_buffer(buffer)

        assert (projection.note.name, projection.note.octave) == ("E", 2)
        assert projection.note.cents in (-1, 0)

    def test_silence_never_confirms(self):
        """Silence never confirms a note."""
        session = TunerSession(estimator=PitchEstimator())
        silence = np.zeros(BUFFER_SIZE, dtype=np.float32)
        assert session.process_buffer(silence) is None
        assert session.process_buffer(silence) is None
        assert session.stabilizer.last_name is None

    def test_corrupt_buffer_skipped(self):
        """A buffer with non-finite samples is dropped like silence."""
        session = TunerSession(estimator=PitchEstimator())
        assert session.process_buffer(np.full(BUFFER_SIZE, np.inf)) is None
        assert session.stabilizer.last_name is None
