"""Acoustic wave conversions between frequency, wavelength and period."""

from dataclasses import dataclass
from typing import List, Tuple, TYPE_CHECKING

from .validator import FrequencyValidator
from ..core import PitchRangeError, WavelengthRangeError, PeriodRangeError
from ..core.constants import SPEED_OF_SOUND

if TYPE_CHECKING:
    from .pitch import Pitch


class WaveCalculator:
    """Conversions bounded by the supported frequency range."""

    @classmethod
    def wavelength_bounds(cls) -> Tuple[float, float]:
        """(minimum, maximum) wavelength in meters."""
        return (
            cls.wavelength_for_frequency(FrequencyValidator.maximum_frequency),
            cls.wavelength_for_frequency(FrequencyValidator.minimum_frequency),
        )

    @classmethod
    def period_bounds(cls) -> Tuple[float, float]:
        """(minimum, maximum) period in seconds."""
        minimum, maximum = cls.wavelength_bounds()
        return (
            cls.period_for_wavelength(minimum),
            cls.period_for_wavelength(maximum),
        )

    # Validators

    @classmethod
    def is_valid_wavelength(cls, wavelength: float) -> bool:
        minimum, maximum = cls.wavelength_bounds()
        return wavelength > 0.0 and minimum <= wavelength <= maximum

    @classmethod
    def validate_wavelength(cls, wavelength: float) -> None:
        if not cls.is_valid_wavelength(wavelength):
            raise WavelengthRangeError(wavelength)

    @classmethod
    def is_valid_period(cls, period: float) -> bool:
        minimum, maximum = cls.period_bounds()
        return period > 0.0 and minimum <= period <= maximum

    @classmethod
    def validate_period(cls, period: float) -> None:
        if not cls.is_valid_period(period):
            raise PeriodRangeError(period)

    # Conversions

    @classmethod
    def frequency_for_wavelength(cls, wavelength: float) -> float:
        cls.validate_wavelength(wavelength)
        return SPEED_OF_SOUND / wavelength

    @staticmethod
    def wavelength_for_frequency(frequency: float) -> float:
        FrequencyValidator.validate(frequency)
        return SPEED_OF_SOUND / frequency

    @classmethod
    def wavelength_for_period(cls, period: float) -> float:
        cls.validate_period(period)
        return period * SPEED_OF_SOUND

    @classmethod
    def period_for_wavelength(cls, wavelength: float) -> float:
        # Bounds are derived from this conversion, so only positivity is checked here
        if not wavelength > 0.0:
            raise WavelengthRangeError(wavelength)
        return wavelength / SPEED_OF_SOUND


@dataclass(frozen=True)
class AcousticWave:
    """A sound wave described by frequency, wavelength and period."""

    frequency: float  # Hz
    wavelength: float  # m
    period: float  # s

    MAX_HARMONICS = 16

    @classmethod
    def from_frequency(cls, frequency: float) -> "AcousticWave":
        FrequencyValidator.validate(frequency)
        wavelength = WaveCalculator.wavelength_for_frequency(frequency)
        return cls(
            frequency=frequency,
            wavelength=wavelength,
            period=WaveCalculator.period_for_wavelength(wavelength),
        )

    @classmethod
    def from_wavelength(cls, wavelength: float) -> "AcousticWave":
        WaveCalculator.validate_wavelength(wavelength)
        return cls(
            frequency=WaveCalculator.frequency_for_wavelength(wavelength),
            wavelength=wavelength,
            period=WaveCalculator.period_for_wavelength(wavelength),
        )

    @classmethod
    def from_period(cls, period: float) -> "AcousticWave":
        wavelength = WaveCalculator.wavelength_for_period(period)
        return cls(
            frequency=WaveCalculator.frequency_for_wavelength(wavelength),
            wavelength=wavelength,
            period=period,
        )

    @property
    def harmonics(self) -> List["Pitch"]:
        """Pitches of the first harmonics, stopping at the top of the range."""
        from .pitch import Pitch

        pitches = []
        for multiple in range(1, self.MAX_HARMONICS + 1):
            try:
                pitches.append(Pitch.from_frequency(multiple * self.frequency))
            except PitchRangeError:
                break
        return pitches
