"""Closed set of estimation strategies."""

from enum import Enum

from .base import Estimator
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


class EstimationStrategy(Enum):
    """The eight available estimators, named by their CLI identifiers."""

    MAX_VALUE = "max-value"
    QUADRATIC = "quadratic"
    BARYCENTRIC = "barycentric"
    QUINNS_FIRST = "quinns-first"
    QUINNS_SECOND = "quinns-second"
    JAINS = "jains"
    HPS = "hps"
    YIN = "yin"

    @property
    def estimator(self) -> Estimator:
        """A fresh estimator instance for this strategy."""
        return _ESTIMATORS[self]()

    @property
    def is_spectral(self) -> bool:
        """True for strategies working on the FFT magnitude spectrum."""
        return self is not EstimationStrategy.YIN

    @classmethod
    def from_name(cls, name: str) -> "EstimationStrategy":
        """
        Parse a strategy name.

        Accepts the enum value ("quinns-first"), the member name
        ("QUINNS_FIRST") and spelling variants with underscores or spaces.

        Raises:
            ValueError: If the name matches no strategy
        """
        key = name.strip().lower().replace("_", "-").replace(" ", "-")
        for strategy in cls:
            if strategy.value == key:
                return strategy

        valid = ", ".join(s.value for s in cls)
        raise ValueError(f"Unknown estimation strategy '{name}'. Valid: {valid}")


_ESTIMATORS = {
    EstimationStrategy.MAX_VALUE: MaxValueEstimator,
    EstimationStrategy.QUADRATIC: QuadraticEstimator,
    EstimationStrategy.BARYCENTRIC: BarycentricEstimator,
    EstimationStrategy.QUINNS_FIRST: QuinnsFirstEstimator,
    EstimationStrategy.QUINNS_SECOND: QuinnsSecondEstimator,
    EstimationStrategy.JAINS: JainsEstimator,
    EstimationStrategy.HPS: HPSEstimator,
    EstimationStrategy.YIN: YINEstimator,
}
