"""
Pitch estimation for microphone buffers.

librosa's YIN finds the fundamental. Its period estimate runs sharp at low
pitches, so the result is then refined to the interpolated peak of a
zero-padded spectrum within a semitone of the YIN estimate.
"""

import logging

import librosa
import numpy as np
from scipy.signal import butter, sosfiltfilt

from .constants import BUFFER_SIZE, SAMPLE_RATE

logger = logging.getLogger(__name__)

SEMITONE = 2 ** (1 / 12)


class PitchEstimator:
    """
    Estimates the dominant pitch of a mono audio buffer.

    Buffers quieter than ``min_rms``, shorter than ``frame_length`` or
    containing non-finite samples yield no estimate.
    """

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        frame_length: int = BUFFER_SIZE,
        fmin: float = 50.0,
        fmax: float = 2000.0,
        min_rms: float = 0.01,
        highpass_hz: float = 40.0,
        zero_padding: int = 16,
    ):
        """
        Initialize estimator.

        Args:
            sample_rate: Audio sample rate in Hz
            frame_length: YIN analysis frame length in samples
            fmin: Lowest detectable frequency in Hz
            fmax: Highest detectable frequency in Hz
            min_rms: Minimum RMS level (after filtering) to attempt estimation
            highpass_hz: Cutoff of the high-pass filter removing DC and rumble
            zero_padding: FFT length as a multiple of the buffer length for
                the refinement step
        """
        self.sample_rate = sample_rate
        self.frame_length = frame_length
        self.fmin = fmin
        self.fmax = fmax
        self.min_rms = min_rms
        self.zero_padding = zero_padding

        self._sos = butter(4, highpass_hz, btype="highpass", fs=sample_rate, output="sos")

    def set_min_rms(self, min_rms: float):
        self.min_rms = max(0.0, min_rms)

    def estimate(self, samples: np.ndarray) -> float | None:
        """
        Estimate the pitch of a buffer.

        Args:
            samples: Mono audio samples

        Returns:
            Frequency in Hz, or None if no pitch was found
        """
        samples = np.asarray(samples, dtype=np.float64)
        if samples.ndim != 1 or len(samples) < self.frame_length:
            return None
        if not np.all(np.isfinite(samples)):
            logger.debug("Skipping buffer with non-finite samples")
            return None

        filtered = sosfiltfilt(self._sos, samples)

        rms = float(np.sqrt(np.mean(filtered**2)))
        if rms < self.min_rms:
            return None

        f0 = librosa.yin(
            filtered,
            fmin=self.fmin,
            fmax=self.fmax,
            sr=self.sample_rate,
            frame_length=self.frame_length,
            center=False,
        )
        f0 = f0[np.isfinite(f0)]
        if len(f0) == 0:
            return None

        coarse = float(np.median(f0))
        frequency = self._refine(filtered, coarse)
        logger.debug("Estimated %.2f Hz (yin %.2f Hz, rms %.4f)", frequency, coarse, rms)
        return frequency

    def _refine(self, samples: np.ndarray, frequency: float) -> float:
        """Move an estimate to the nearest spectral peak within a semitone."""
        n_fft = len(samples) * self.zero_padding
        mags = np.abs(np.fft.rfft(samples * np.hanning(len(samples)), n=n_fft))
        freqs = np.fft.rfftfreq(n_fft, 1.0 / self.sample_rate)

        lo, hi = np.searchsorted(freqs, [frequency / SEMITONE, frequency * SEMITONE])
        if hi - lo < 3:
            return frequency

        peak = lo + int(np.argmax(mags[lo:hi]))
        # A maximum on the edge of the search range is not a peak
        if peak <= lo or peak >= hi - 1:
            return frequency

        # Parabolic interpolation on log magnitude
        y1, y2, y3 = np.log(mags[peak - 1 : peak + 2] + 1e-12)
        denom = y1 - 2 * y2 + y3
        if abs(denom) < 1e-10:
            return float(freqs[peak])
        delta = 0.5 * (y1 - y3) / denom
        return float(freqs[peak] + delta * (freqs[1] - freqs[0]))
