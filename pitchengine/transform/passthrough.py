"""Pass-through transform for time-domain estimators."""

import numpy as np

from .base import Transformer
from ..core import Buffer


class PassthroughTransformer(Transformer):
    """Returns the raw samples unchanged."""

    def transform(self, frame: np.ndarray) -> Buffer:
        return Buffer(elements=self._samples(frame))
