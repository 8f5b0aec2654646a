"""Buffer - the immutable numeric container passed between pipeline stages."""

from dataclasses import dataclass
from typing import Optional
import numpy as np


def _frozen(values) -> np.ndarray:
    array = np.array(values, dtype=np.float64).ravel()
    array.flags.writeable = False
    return array


@dataclass(frozen=True, eq=False)
class Buffer:
    """Samples (or spectrum magnitudes) for one frame.

    ``real_elements``/``imag_elements`` are only present when the transform
    kept the split complex spectrum.
    """

    elements: np.ndarray
    real_elements: Optional[np.ndarray] = None
    imag_elements: Optional[np.ndarray] = None

    def __post_init__(self):
        object.__setattr__(self, "elements", _frozen(self.elements))

        if (self.real_elements is None) != (self.imag_elements is None):
            raise ValueError("real_elements and imag_elements must be given together")

        if self.real_elements is not None:
            real = _frozen(self.real_elements)
            imag = _frozen(self.imag_elements)
            if len(real) != len(self.elements) or len(imag) != len(self.elements):
                raise ValueError(
                    f"Component length mismatch: {len(real)}/{len(imag)} "
                    f"vs {len(self.elements)} elements"
                )
            object.__setattr__(self, "real_elements", real)
            object.__setattr__(self, "imag_elements", imag)

    @property
    def count(self) -> int:
        """Number of elements."""
        return len(self.elements)

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    @property
    def has_components(self) -> bool:
        """True when split real/imaginary spectra are available."""
        return self.real_elements is not None

    def __len__(self) -> int:
        return self.count
