"""Transform layer - Raw audio frames to analysis buffers.

- FFT transform (Hann-windowed magnitude spectrum) for spectral estimators
- Pass-through transform (time-domain samples) for lag-based estimators
"""

from .base import Transformer
from .fft import FFTTransformer
from .passthrough import PassthroughTransformer

__all__ = [
    "Transformer",
    "FFTTransformer",
    "PassthroughTransformer",
]
