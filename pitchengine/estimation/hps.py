"""Harmonic Product Spectrum estimator."""

import numpy as np

from .base import LocationEstimator
from ..core import Buffer, UnresolvablePeakError
from ..core.constants import DEFAULT_HPS_HARMONICS


class HPSEstimator(LocationEstimator):
    """Multiply decimated copies of the spectrum so harmonics reinforce the fundamental."""

    def __init__(self, harmonics: int = DEFAULT_HPS_HARMONICS):
        """
        Initialize HPSEstimator.

        Args:
            harmonics: Highest downsample factor K; factors 2..K are applied
        """
        if harmonics < 2:
            raise ValueError(f"harmonics must be >= 2, got {harmonics}")
        self.harmonics = harmonics

    def estimate_location(self, buffer: Buffer) -> float:
        spectrum = buffer.elements
        self.max_buffer_index(spectrum)

        product = self.product_spectrum(spectrum)
        location = int(np.argmax(product))

        if not product[location] > 0:
            raise UnresolvablePeakError("Harmonic product spectrum has no peak")

        return float(location)

    def product_spectrum(self, spectrum: np.ndarray) -> np.ndarray:
        """
        Element-wise product of the spectrum and its decimated copies.

        Only the range shared by every copy is kept, i.e. the first
        ceil(len / K) bins.
        """
        length = -(-len(spectrum) // self.harmonics)
        product = np.array(spectrum[:length], dtype=np.float64)

        for factor in range(2, self.harmonics + 1):
            product *= spectrum[::factor][:length]

        return product
