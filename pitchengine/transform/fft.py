"""Spectral transform using a Hann-windowed real FFT."""

import numpy as np
import librosa

from .base import Transformer
from ..core import Buffer


class FFTTransformer(Transformer):
    """Magnitude spectrum of the largest power-of-two prefix of a frame."""

    def __init__(self, retain_components: bool = False):
        """
        Initialize FFTTransformer.

        Args:
            retain_components: Also keep the real/imaginary spectrum of the
                unwindowed frame (needed by Quinn's estimators)
        """
        self.retain_components = retain_components
        self._windows = {}

    def transform(self, frame: np.ndarray) -> Buffer:
        """
        Compute the normalized magnitude spectrum of a frame.

        Args:
            frame: Mono samples

        Returns:
            Buffer with N/2 magnitudes, N the largest power of two <= frame length
        """
        samples = self._samples(frame, minimum=2)

        n = self.window_size(len(samples))
        windowed = samples[:n] * self._window(n)

        # Nyquist bin dropped, N/2 bins remain
        spectrum = np.fft.rfft(windowed)[: n // 2]
        magnitudes = np.abs(spectrum) * (2.0 / n)

        if self.retain_components:
            # Quinn's ratios assume a rectangular window
            raw = np.fft.rfft(samples[:n])[: n // 2]
            return Buffer(
                elements=magnitudes,
                real_elements=raw.real,
                imag_elements=raw.imag,
            )

        return Buffer(elements=magnitudes)

    @staticmethod
    def window_size(frame_length: int) -> int:
        """Largest power of two not exceeding the frame length."""
        return 1 << (int(frame_length).bit_length() - 1)

    def _window(self, n: int) -> np.ndarray:
        window = self._windows.get(n)
        if window is None:
            window = librosa.filters.get_window("hann", n, fftbins=True)
            self._windows[n] = window
        return window
