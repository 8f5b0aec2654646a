"""Exception hierarchy for Pitch Engine.

Three families of failure can reach a consumer:

- ``SourceError``: the signal source could not start or broke down. Halts
  the engine and is reported once.
- ``InvalidBufferError``: a single frame could not be transformed or
  estimated. Reported for that frame only.
- ``PitchRangeError``: an estimate fell outside the supported musical range
  (or a note/wave conversion did). Reported for that frame only.
"""


class PitchEngineError(Exception):
    """Base class for all Pitch Engine errors."""


# Source errors


class SourceError(PitchEngineError):
    """Signal source is unavailable or failed while running."""


class SourceUnavailableError(SourceError):
    """Device, stream or file could not be opened."""


class PermissionDeniedError(SourceError):
    """Permission check refused access to the source."""


# Per-frame buffer errors


class InvalidBufferError(PitchEngineError):
    """A frame could not be turned into an estimate."""


class EmptyBufferError(InvalidBufferError):
    """Buffer has no elements."""

    def __init__(self, message: str = "Buffer is empty"):
        super().__init__(message)


class UnresolvablePeakError(InvalidBufferError):
    """No peak location could be determined from the buffer."""


class TransformError(InvalidBufferError):
    """Raw frame carries no usable sample data."""


# Range errors


class PitchRangeError(PitchEngineError, ValueError):
    """A value is outside the supported musical range."""


class FrequencyRangeError(PitchRangeError):
    """Frequency outside the supported band."""

    def __init__(self, frequency: float):
        self.frequency = frequency
        super().__init__(f"Invalid frequency: {frequency:.3f} Hz")


class WavelengthRangeError(PitchRangeError):
    """Wavelength outside the bounds implied by the frequency range."""

    def __init__(self, wavelength: float):
        self.wavelength = wavelength
        super().__init__(f"Invalid wavelength: {wavelength:.5f} m")


class PeriodRangeError(PitchRangeError):
    """Period outside the bounds implied by the frequency range."""

    def __init__(self, period: float):
        self.period = period
        super().__init__(f"Invalid period: {period:.6f} s")


class NoteIndexError(PitchRangeError):
    """Note index outside the supported range."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Invalid note index: {index}")


class OctaveRangeError(PitchRangeError):
    """Octave outside the supported range."""

    def __init__(self, octave: int):
        self.octave = octave
        super().__init__(f"Invalid octave: {octave}")


# Warnings


class PitchEngineWarning(UserWarning):
    """Base class for non-fatal runtime conditions."""


class BacklogWarning(PitchEngineWarning):
    """Frames are arriving faster than the worker can analyze them."""


class InputOverflowWarning(PitchEngineWarning):
    """The capture device dropped input samples."""


class ConsumerWarning(PitchEngineWarning):
    """A consumer callback raised while handling a notification."""
