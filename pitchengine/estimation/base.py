"""Base classes for frequency estimation."""

from abc import ABC, abstractmethod
import numpy as np

from ..core import Buffer, EmptyBufferError, UnresolvablePeakError
from ..transform import Transformer, FFTTransformer


class Estimator(ABC):
    """Abstract base class for fundamental frequency estimators."""

    @property
    def transformer(self) -> Transformer:
        """Transformer producing the buffers this estimator expects."""
        return FFTTransformer()

    @abstractmethod
    def estimate(self, sample_rate: float, buffer: Buffer) -> float:
        """
        Estimate the fundamental frequency of a buffer.

        Args:
            sample_rate: Sample rate of the source frame in Hz
            buffer: Transformed frame

        Returns:
            Frequency in Hz

        Raises:
            EmptyBufferError: If the buffer has no elements
            UnresolvablePeakError: If no peak can be located
        """
        pass

    @staticmethod
    def frequency_for_location(
        sample_rate: float, location: float, buffer_count: int
    ) -> float:
        """Map a (possibly fractional) spectrum bin to Hz."""
        return float(location) * float(sample_rate) / (buffer_count * 2)

    @staticmethod
    def max_buffer_index(elements: np.ndarray) -> int:
        """Index of the largest element."""
        if len(elements) == 0:
            raise EmptyBufferError()

        if not np.all(np.isfinite(elements)):
            raise UnresolvablePeakError("Buffer contains non-finite values")

        return int(np.argmax(elements))

    @staticmethod
    def sanitize(location: float, reserve_location: int, elements: np.ndarray) -> float:
        """Keep ``location`` if it lies in ``[0, len(elements))``, else fall back."""
        if np.isfinite(location) and 0 <= location < len(elements):
            return float(location)
        return float(reserve_location)


class LocationEstimator(Estimator):
    """Spectral estimator that refines the arg-max bin of the magnitudes."""

    def estimate(self, sample_rate: float, buffer: Buffer) -> float:
        if buffer.is_empty:
            raise EmptyBufferError()

        location = self.estimate_location(buffer)
        return self.frequency_for_location(sample_rate, location, buffer.count)

    @abstractmethod
    def estimate_location(self, buffer: Buffer) -> float:
        """Bin location of the fundamental, fractional where refined."""
        pass
