"""Frequency range validation."""

from ..core import FrequencyRangeError, MINIMUM_FREQUENCY, MAXIMUM_FREQUENCY


class FrequencyValidator:
    """Checks frequencies against the supported musical range."""

    minimum_frequency = MINIMUM_FREQUENCY
    maximum_frequency = MAXIMUM_FREQUENCY

    @classmethod
    def is_valid(cls, frequency: float) -> bool:
        return frequency > 0.0 and cls.minimum_frequency <= frequency <= cls.maximum_frequency

    @classmethod
    def validate(cls, frequency: float) -> None:
        """Raise FrequencyRangeError if the frequency is out of range."""
        if not cls.is_valid(frequency):
            raise FrequencyRangeError(frequency)
