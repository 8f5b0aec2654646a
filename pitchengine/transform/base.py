"""Base class for frame transformers."""

from abc import ABC, abstractmethod
from typing import Optional
import numpy as np

from ..core import Buffer, TransformError


class Transformer(ABC):
    """Abstract base class for frame-to-buffer transforms."""

    @abstractmethod
    def transform(self, frame: np.ndarray) -> Buffer:
        """
        Transform one raw audio frame into a Buffer.

        Args:
            frame: Mono samples of a single frame

        Returns:
            Buffer ready for estimation

        Raises:
            TransformError: If the frame carries no sample data
        """
        pass

    @staticmethod
    def _samples(frame: Optional[np.ndarray], minimum: int = 1) -> np.ndarray:
        """Validate a raw frame and return it as a flat float64 array."""
        if frame is None:
            raise TransformError("Frame has no sample data")

        samples = np.asarray(frame, dtype=np.float64).ravel()
        if len(samples) < minimum:
            raise TransformError(
                f"Frame has {len(samples)} samples, need at least {minimum}"
            )

        return samples
