"""Core types, errors and constants for Pitch Engine."""

from .buffer import Buffer
from .constants import (
    DEFAULT_FRAME_SIZE,
    MINIMUM_FREQUENCY,
    MAXIMUM_FREQUENCY,
    PITCH_NAMES,
)
from .errors import (
    PitchEngineError,
    SourceError,
    SourceUnavailableError,
    PermissionDeniedError,
    InvalidBufferError,
    EmptyBufferError,
    UnresolvablePeakError,
    TransformError,
    PitchRangeError,
    FrequencyRangeError,
    WavelengthRangeError,
    PeriodRangeError,
    NoteIndexError,
    OctaveRangeError,
    PitchEngineWarning,
    BacklogWarning,
    InputOverflowWarning,
    ConsumerWarning,
)

__all__ = [
    "Buffer",
    "DEFAULT_FRAME_SIZE",
    "MINIMUM_FREQUENCY",
    "MAXIMUM_FREQUENCY",
    "PITCH_NAMES",
    "PitchEngineError",
    "SourceError",
    "SourceUnavailableError",
    "PermissionDeniedError",
    "InvalidBufferError",
    "EmptyBufferError",
    "UnresolvablePeakError",
    "TransformError",
    "PitchRangeError",
    "FrequencyRangeError",
    "WavelengthRangeError",
    "PeriodRangeError",
    "NoteIndexError",
    "OctaveRangeError",
    "PitchEngineWarning",
    "BacklogWarning",
    "InputOverflowWarning",
    "ConsumerWarning",
]
