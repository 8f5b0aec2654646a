"""Input layer - Signal sources delivering raw frames.

- In-memory playback (numpy arrays)
- File playback (decoded with librosa)
- Live capture (sounddevice, optional dependency)
"""

from .base import SignalSource, SourceMode, Frame
from .loader import AudioLoader
from .array import ArraySource
from .file import FileSource
from .microphone import MicrophoneSource

__all__ = [
    "SignalSource",
    "SourceMode",
    "Frame",
    "AudioLoader",
    "ArraySource",
    "FileSource",
    "MicrophoneSource",
]
