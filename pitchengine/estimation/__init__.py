"""Estimation layer - Buffers to fundamental frequency.

Spectral estimators locate the peak bin of a magnitude spectrum:
- Max-value, quadratic, barycentric, Jain's (magnitude interpolation)
- Quinn's first and second (complex spectrum ratios)
- Harmonic product spectrum

Time-domain estimators:
- YIN (cumulative mean normalized difference)
"""

from .base import Estimator, LocationEstimator
from .location import (
    MaxValueEstimator,
    QuadraticEstimator,
    BarycentricEstimator,
    QuinnsFirstEstimator,
    QuinnsSecondEstimator,
    JainsEstimator,
)
from .hps import HPSEstimator
from .yin import YINEstimator
from .strategy import EstimationStrategy

__all__ = [
    "Estimator",
    "LocationEstimator",
    "MaxValueEstimator",
    "QuadraticEstimator",
    "BarycentricEstimator",
    "QuinnsFirstEstimator",
    "QuinnsSecondEstimator",
    "JainsEstimator",
    "HPSEstimator",
    "YINEstimator",
    "EstimationStrategy",
]
