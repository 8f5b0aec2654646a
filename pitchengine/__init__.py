"""Pitch Engine - Real-time fundamental frequency estimation.

Architecture Layers:
    1. core/       - Buffer, errors and constants
    2. input/      - Signal sources (array, file, microphone)
    3. transform/  - Frame to buffer transforms (FFT, pass-through)
    4. estimation/ - Eight interchangeable frequency estimators
    5. pitch/      - Frequency to note, offsets and wave mapping
    6. engine/     - Capture → analyze → deliver pipeline
"""

__version__ = "0.1.0"

# Core types
from .core import Buffer

# Input layer
from .input import (
    SignalSource,
    SourceMode,
    Frame,
    AudioLoader,
    ArraySource,
    FileSource,
    MicrophoneSource,
)

# Transform layer
from .transform import Transformer, FFTTransformer, PassthroughTransformer

# Estimation layer
from .estimation import Estimator, EstimationStrategy

# Pitch layer
from .pitch import Pitch, Note, NoteLetter, AcousticWave, FrequencyValidator

# Engine layer
from .engine import (
    EngineConfig,
    PitchEngine,
    PitchEngineDelegate,
    Notification,
    NotificationKind,
)

__all__ = [
    # Core
    "Buffer",
    # Input
    "SignalSource",
    "SourceMode",
    "Frame",
    "AudioLoader",
    "ArraySource",
    "FileSource",
    "MicrophoneSource",
    # Transform
    "Transformer",
    "FFTTransformer",
    "PassthroughTransformer",
    # Estimation
    "Estimator",
    "EstimationStrategy",
    # Pitch
    "Pitch",
    "Note",
    "NoteLetter",
    "AcousticWave",
    "FrequencyValidator",
    # Engine
    "EngineConfig",
    "PitchEngine",
    "PitchEngineDelegate",
    "Notification",
    "NotificationKind",
]
