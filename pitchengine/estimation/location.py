"""Peak-location estimators: arg-max bin plus sub-bin interpolation.

Each estimator finds the largest magnitude bin ``k`` and refines it with an
offset ``p`` computed from the bins around it. A refinement that cannot be
computed (edge bin, zero denominator) or that lands outside the spectrum is
discarded in favor of the raw bin.
"""

import math
from abc import abstractmethod
import numpy as np

from .base import LocationEstimator
from ..core import Buffer, UnresolvablePeakError
from ..transform import Transformer, FFTTransformer


def _neighbors(elements: np.ndarray, index: int):
    """Return (a[-1], a[0], a[+1]) around ``index`` or None at the edges."""
    if index < 1 or index + 1 >= len(elements):
        return None
    return elements[index - 1], elements[index], elements[index + 1]


class MaxValueEstimator(LocationEstimator):
    """Raw arg-max bin, no refinement."""

    def estimate_location(self, buffer: Buffer) -> float:
        return float(self.max_buffer_index(buffer.elements))


class QuadraticEstimator(LocationEstimator):
    """Parabola through the peak and its two neighbors."""

    def estimate_location(self, buffer: Buffer) -> float:
        elements = buffer.elements
        index = self.max_buffer_index(elements)

        points = _neighbors(elements, index)
        if points is None:
            return float(index)

        y1, y2, y3 = points
        denominator = y1 - 2.0 * y2 + y3
        if denominator == 0:
            return float(index)

        offset = 0.5 * (y1 - y3) / denominator
        return self.sanitize(index + offset, index, elements)


class BarycentricEstimator(LocationEstimator):
    """Center of mass of the peak and its two neighbors."""

    def estimate_location(self, buffer: Buffer) -> float:
        elements = buffer.elements
        index = self.max_buffer_index(elements)

        points = _neighbors(elements, index)
        if points is None:
            return float(index)

        y1, y2, y3 = points
        denominator = y1 + y2 + y3
        if denominator == 0:
            return float(index)

        offset = (y3 - y1) / denominator
        return self.sanitize(index + offset, index, elements)


class JainsEstimator(LocationEstimator):
    """Jain's method: interpolate toward the larger neighbor."""

    def estimate_location(self, buffer: Buffer) -> float:
        elements = buffer.elements
        index = self.max_buffer_index(elements)

        points = _neighbors(elements, index)
        if points is None:
            return float(index)

        y1, y2, y3 = (abs(value) for value in points)

        if y1 > y3:
            denominator = y2 + y1
            offset = -y1 / denominator if denominator else 0.0
        else:
            denominator = y2 + y3
            offset = y3 / denominator if denominator else 0.0

        return self.sanitize(index + offset, index, elements)


class _QuinnsEstimator(LocationEstimator):
    """Shared ratio computation for Quinn's estimators."""

    @property
    def transformer(self) -> Transformer:
        return FFTTransformer(retain_components=True)

    def estimate_location(self, buffer: Buffer) -> float:
        elements = buffer.elements
        index = self.max_buffer_index(elements)

        if not buffer.has_components:
            raise UnresolvablePeakError(
                f"{type(self).__name__} needs real/imaginary spectrum components"
            )

        if index < 1 or index + 1 >= len(elements):
            return float(index)

        real = buffer.real_elements
        imag = buffer.imag_elements

        divider = real[index] ** 2 + imag[index] ** 2
        if divider == 0:
            return float(index)

        # Re(X[k+1] / X[k]) and Re(X[k-1] / X[k])
        ap = (real[index + 1] * real[index] + imag[index + 1] * imag[index]) / divider
        am = (real[index - 1] * real[index] + imag[index - 1] * imag[index]) / divider

        if ap == 1.0 or am == 1.0:
            return float(index)

        dp = -ap / (1.0 - ap)
        dm = am / (1.0 - am)

        offset = self._offset(dp, dm)
        return self.sanitize(index + offset, index, elements)

    @abstractmethod
    def _offset(self, dp: float, dm: float) -> float:
        """Bin offset from the two neighbor ratios."""
        pass


class QuinnsFirstEstimator(_QuinnsEstimator):
    """Quinn's first estimator."""

    def _offset(self, dp: float, dm: float) -> float:
        return dp if dp > 0 and dm > 0 else dm


class QuinnsSecondEstimator(_QuinnsEstimator):
    """Quinn's second estimator."""

    def _offset(self, dp: float, dm: float) -> float:
        return (dp + dm) / 2.0 + self._tau(dp * dp) - self._tau(dm * dm)

    @staticmethod
    def _tau(x: float) -> float:
        root = math.sqrt(2.0 / 3.0)
        inner = 3.0 * x * x + 6.0 * x + 1.0
        ratio = (x + 1.0 - root) / (x + 1.0 + root)
        if inner <= 0 or ratio <= 0:
            return float("nan")
        return 0.25 * math.log(inner) - math.sqrt(6.0) / 24.0 * math.log(ratio)
