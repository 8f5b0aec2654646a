"""Signal level measurement for threshold gating."""

import numpy as np

from ..core.constants import SILENCE_LEVEL


def rms(samples: np.ndarray) -> float:
    """Root mean square amplitude."""
    if len(samples) == 0:
        return 0.0
    samples = np.asarray(samples, dtype=np.float64)
    return float(np.sqrt(np.mean(samples**2)))


def level_db(samples: np.ndarray) -> float:
    """RMS level in dBFS, -inf for silence."""
    value = rms(samples)
    if value <= 0 or not np.isfinite(value):
        return SILENCE_LEVEL
    return float(20.0 * np.log10(value))
