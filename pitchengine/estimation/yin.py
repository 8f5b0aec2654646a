"""YIN autocorrelation estimator.

Operates on time-domain frames:

1. Difference function d(tau) over lags 0..N/2, plus one lag past the end
   that only serves as an interpolation neighbor (FFT cross-correlation)
2. Cumulative mean normalized difference d'(tau)
3. First local minimum under an absolute threshold, or the global minimum
4. Parabolic interpolation of d(tau) around the chosen lag
"""

import numpy as np

from .base import Estimator
from ..core import Buffer, EmptyBufferError, UnresolvablePeakError
from ..core.constants import DEFAULT_YIN_THRESHOLD
from ..transform import Transformer, PassthroughTransformer


class YINEstimator(Estimator):
    """Lag-based fundamental frequency estimator (de Cheveigné & Kawahara)."""

    MIN_FRAME_LENGTH = 4

    def __init__(self, threshold: float = DEFAULT_YIN_THRESHOLD):
        """
        Initialize YINEstimator.

        Args:
            threshold: Absolute threshold on d'(tau) (0.1-0.2 typical)
        """
        if not 0.0 < threshold < 1.0:
            raise ValueError(f"threshold must be in (0, 1), got {threshold}")
        self.threshold = threshold

    @property
    def transformer(self) -> Transformer:
        return PassthroughTransformer()

    def estimate(self, sample_rate: float, buffer: Buffer) -> float:
        if buffer.is_empty:
            raise EmptyBufferError()

        samples = buffer.elements

        if len(samples) < self.MIN_FRAME_LENGTH:
            raise UnresolvablePeakError(
                f"Frame of {len(samples)} samples is too short for lag analysis"
            )
        if not np.all(np.isfinite(samples)):
            raise UnresolvablePeakError("Frame contains non-finite samples")
        if not np.any(samples):
            raise UnresolvablePeakError("Frame is silent")

        max_lag = self.max_lag(len(samples))
        diff = self.difference(samples)
        cmndf = self.normalize(diff)

        lag = self.absolute_threshold(cmndf, max_lag)
        lag = self._settle(diff, lag, max_lag)
        refined = self.parabolic_interpolation(diff, lag)

        if not refined > 0:
            raise UnresolvablePeakError(f"Invalid lag: {refined}")

        return float(sample_rate) / refined

    @staticmethod
    def max_lag(frame_length: int) -> int:
        """Largest lag searched for a period."""
        return frame_length // 2

    @classmethod
    def difference(cls, samples: np.ndarray) -> np.ndarray:
        """
        Difference function d(tau) for tau in [0, N/2 + 1].

        d(tau) = sum_j (x[j] - x[j + tau])^2 over a window of W = N - N/2 - 1
        samples, so every lag including the trailing neighbor stays in the
        frame. Expanded as energy(0) + energy(tau) - 2 * r(tau).
        """
        lags = cls.max_lag(len(samples)) + 2
        window = len(samples) - lags + 1

        # Linear (not circular) correlation needs at least N + W - 1 points
        size = 1 << (len(samples) + window - 2).bit_length()
        spectrum = np.fft.rfft(samples, size)
        kernel = np.fft.rfft(samples[:window][::-1], size)
        correlation = np.fft.irfft(spectrum * kernel, size)[window - 1 : window - 1 + lags]

        energy = np.concatenate(([0.0], np.cumsum(samples * samples)))
        energy_start = energy[window] - energy[0]
        energy_lagged = energy[window : window + lags] - energy[:lags]

        diff = energy_start + energy_lagged - 2.0 * correlation
        diff[0] = 0.0

        # FFT round-off can leave tiny negatives
        return np.maximum(diff, 0.0)

    @staticmethod
    def normalize(diff: np.ndarray) -> np.ndarray:
        """d'(0) = 1, d'(tau) = d(tau) * tau / sum_{j=1..tau} d(j)."""
        cmndf = np.ones_like(diff)
        running = np.cumsum(diff[1:])
        lags = np.arange(1, len(diff))

        with np.errstate(divide="ignore", invalid="ignore"):
            normalized = diff[1:] * lags / running
        cmndf[1:] = np.where(running > 0, normalized, 1.0)

        return cmndf

    @classmethod
    def cumulative_mean_normalized_difference(cls, samples: np.ndarray) -> np.ndarray:
        return cls.normalize(cls.difference(samples))

    def absolute_threshold(self, cmndf: np.ndarray, max_lag: int) -> int:
        """Lag of the first dip under the threshold, else the global minimum."""
        search = cmndf[: max_lag + 1]
        if len(search) < 2:
            raise UnresolvablePeakError("No lags to search")

        below = np.flatnonzero(search[1:] < self.threshold) + 1

        if len(below) == 0:
            return int(np.argmin(search[1:])) + 1

        # Walk down to the bottom of the dip
        lag = int(below[0])
        while lag < max_lag and search[lag + 1] < search[lag]:
            lag += 1

        return lag

    @staticmethod
    def _settle(diff: np.ndarray, lag: int, max_lag: int) -> int:
        # The normalized and raw dips can bottom out one lag apart
        while lag > 1 and diff[lag - 1] < diff[lag]:
            lag -= 1
        while lag < max_lag and diff[lag + 1] < diff[lag]:
            lag += 1
        return lag

    @staticmethod
    def parabolic_interpolation(values: np.ndarray, lag: int) -> float:
        """Refine ``lag`` with a parabola through it and its neighbors."""
        if lag < 1 or lag + 1 >= len(values):
            return float(lag)

        s0, s1, s2 = values[lag - 1], values[lag], values[lag + 1]
        denominator = s0 + s2 - 2.0 * s1
        if denominator == 0:
            return float(lag)

        shift = (s0 - s2) / (2.0 * denominator)
        if abs(shift) > 1.0:
            return float(lag)

        return lag + float(shift)
